"""Configuration utilities for incsearch."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import INCSEARCH_CONFIG_DIR, MAX_PAGE_SIZE, ENV_VAR_DEFINITIONS


@dataclass(frozen=True)
class SearchSettings:
    """Resolved runtime settings for a search session."""

    debounce_ms: int
    page_size: int
    gh_timeout: int
    config_dir: Path

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def get_config_dir() -> Path:
    """Get the config directory, respecting INCSEARCH_CONFIG_DIR."""
    override = os.environ.get("INCSEARCH_CONFIG_DIR")
    config_dir = Path(override) if override else INCSEARCH_CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    if value is None:
        return True, None

    definition = ENV_VAR_DEFINITIONS[name]

    if definition.get("type") == "int":
        try:
            number = int(value)
        except ValueError:
            return False, f"Invalid value '{value}' for {name}. Expected an integer"
        if number < 0:
            return False, f"Invalid value '{value}' for {name}. Must not be negative"
        return True, None

    valid_values = definition.get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all incsearch environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error or "Invalid setting", setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def _get_int(name: str) -> int:
    value = get_env_var(name)
    if value is None:
        raise ConfigurationError(f"{name} has no value", setting=name)
    return int(value)


def load_settings() -> SearchSettings:
    """Resolve settings from the environment, falling back to defaults."""
    page_size = _get_int("INCSEARCH_PAGE_SIZE")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ConfigurationError(
            f"Page size must be between 1 and {MAX_PAGE_SIZE}",
            setting="INCSEARCH_PAGE_SIZE",
            value=page_size,
        )

    return SearchSettings(
        debounce_ms=_get_int("INCSEARCH_DEBOUNCE_MS"),
        page_size=page_size,
        gh_timeout=_get_int("INCSEARCH_GH_TIMEOUT"),
        config_dir=get_config_dir(),
    )


def get_env_info() -> Dict[str, Dict]:
    """Get information about all incsearch environment variables.

    Sensitive values are masked.
    """
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)

        display_value = value
        if value and definition.get("sensitive"):
            display_value = value[:4] + "..." if len(value) > 4 else "***"

        info[name] = {
            "description": definition.get("description", ""),
            "value": display_value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
            "sensitive": definition.get("sensitive", False),
        }
    return info
