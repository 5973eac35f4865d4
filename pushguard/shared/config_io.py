"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of PushguardConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from pushguard.domain.config import PushguardConfig

LOCAL_CONFIG_NAME = ".pushguard.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/pushguard/config.toml or ~/.config/pushguard/config.toml
    - Windows: %APPDATA%/pushguard/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "pushguard" / "config.toml"
        return Path.home() / ".config" / "pushguard" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "pushguard" / "config.toml"
        return Path.home() / ".config" / "pushguard" / "config.toml"


def get_local_config_path(repo_root: Path) -> Path:
    """Get the path to the repository-local config file."""
    return repo_root / LOCAL_CONFIG_NAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to the config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def load_config(path: Path) -> PushguardConfig:
    """Load configuration from a single TOML file over the defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or fails validation
    """
    data = load_config_data(path)
    return PushguardConfig.from_partial(PushguardConfig.default(), data)


def config_to_data(config: PushguardConfig) -> dict[str, Any]:
    """Convert a PushguardConfig to a TOML-serializable dictionary."""
    return {
        "repository": {
            "default_old_ref": config.repository.default_old_ref,
            "default_new_ref": config.repository.default_new_ref,
            "scope": config.repository.scope,
        },
        "detection": {
            "patterns": list(config.detection.patterns),
            "ignore": list(config.detection.ignore),
        },
    }


def save_config(config: PushguardConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: PushguardConfig to save
        path: Destination path for the config file
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)
