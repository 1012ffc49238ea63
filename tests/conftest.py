"""Shared pytest fixtures for incsearch tests."""

import pytest

from incsearch.ui.search.search_controller import SearchController
from incsearch.ui.testing import RecordingObserver, ScriptedSearchService, VirtualScheduler
from search_fixtures import DEBOUNCE


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep logs and settings out of the real ~/.config/incsearch."""
    config_dir = tmp_path / "incsearch"
    monkeypatch.setenv("INCSEARCH_CONFIG_DIR", str(config_dir))
    for name in ("INCSEARCH_DEBOUNCE_MS", "INCSEARCH_PAGE_SIZE", "INCSEARCH_GH_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def scheduler():
    return VirtualScheduler()


@pytest.fixture
def service():
    return ScriptedSearchService()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def controller(service, observer, scheduler):
    return SearchController(service, observer, debounce_seconds=DEBOUNCE, scheduler=scheduler)

