"""Configuration for incsearch."""

from .settings import SearchSettings, get_config_dir, load_settings

__all__ = ["SearchSettings", "get_config_dir", "load_settings"]
