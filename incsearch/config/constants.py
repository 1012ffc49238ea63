"""
Centralized constants for incsearch.

Every tunable default lives here so the controller, the services and the
CLI agree on the same values. Environment overrides are described in
ENV_VAR_DEFINITIONS and read through incsearch.config.settings.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

INCSEARCH_CONFIG_DIR = Path.home() / ".config" / "incsearch"

# =============================================================================
# SEARCH BEHAVIOUR
# =============================================================================

# Quiescence interval before a typed query is committed (milliseconds)
DEFAULT_DEBOUNCE_MS = 300

# Records requested per page from the search service
DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100  # GitHub search API ceiling for per_page

# GitHub search only ever exposes the first 1000 matches
GITHUB_SEARCH_RESULT_LIMIT = 1000

# =============================================================================
# TIMEOUTS (seconds)
# =============================================================================

GH_COMMAND_TIMEOUT_SECONDS = 30

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_NAME = "incsearch.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "INCSEARCH_DEBOUNCE_MS": {
        "description": "Milliseconds of typing silence before a query is sent",
        "default": str(DEFAULT_DEBOUNCE_MS),
        "valid_values": None,
        "type": "int",
    },
    "INCSEARCH_PAGE_SIZE": {
        "description": f"Users fetched per page (1-{MAX_PAGE_SIZE})",
        "default": str(DEFAULT_PAGE_SIZE),
        "valid_values": None,
        "type": "int",
    },
    "INCSEARCH_GH_TIMEOUT": {
        "description": "Timeout in seconds for a single gh CLI call",
        "default": str(GH_COMMAND_TIMEOUT_SECONDS),
        "valid_values": None,
        "type": "int",
    },
    "INCSEARCH_CONFIG_DIR": {
        "description": "Directory for incsearch logs and settings",
        "default": None,
        "valid_values": None,
    },
    "INCSEARCH_LOG_LEVEL": {
        "description": "Log level for the incsearch log file",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
    "GH_TOKEN": {
        "description": "GitHub token picked up by the gh CLI",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
}
