"""Configuration file management for budgetbook."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from budgetbook.domain.models import DEFAULT_CATEGORIES
from budgetbook.store.storage import ANONYMOUS


@dataclass(frozen=True)
class Settings:
    """Effective settings after applying defaults."""

    user: str = ANONYMOUS
    currency: str = "$"
    categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Config file location: $XDG_CONFIG_HOME/budgetbook/config.toml."""
    return get_xdg_config_home() / "budgetbook" / "config.toml"


def default_config() -> dict[str, Any]:
    defaults = Settings()
    return {
        "user": defaults.user,
        "currency": defaults.currency,
        "categories": defaults.categories,
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Write the default settings, replacing any existing file."""
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the raw TOML table, without applying defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Parsed TOML as a dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write the TOML table, readable by the owner only.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults for a missing file or missing keys.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings instance.

    Raises:
        tomllib.TOMLDecodeError: If the file exists but is not valid TOML.
        ValueError: If a setting has the wrong type.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()

    defaults = Settings()
    user = config.get("user", defaults.user)
    currency = config.get("currency", defaults.currency)
    categories = config.get("categories", defaults.categories)

    if not isinstance(user, str) or not user.strip():
        raise ValueError("'user' must be a non-empty string")
    if not isinstance(currency, str):
        raise ValueError("'currency' must be a string")
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ValueError("'categories' must be a list of strings")

    return Settings(user=user.strip(), currency=currency, categories=categories)


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set one top-level setting, creating the config file if needed.

    Args:
        key: Setting name.
        value: New value.
        config_path: Path to config file. If None, uses default location.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = default_config()

    config[key] = value
    save_config(config, config_path)
