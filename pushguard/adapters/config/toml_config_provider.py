"""TOML-based configuration provider.

Loads configuration from .pushguard.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: <repo>/.pushguard.toml (repo-specific)
2. Global: ~/.config/pushguard/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from pushguard.domain.config import PushguardConfig
from pushguard.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load local config if present
    3. Local values override global values (key-level merge per section)
    4. Missing values fall back to built-in defaults

    By default missing or invalid configs are handled with warnings. In strict
    mode an invalid file raises ValueError instead.
    """

    def __init__(self, global_path: Path | None = None, strict: bool = False) -> None:
        """Initialize the provider.

        Args:
            global_path: Override for the global config location (used in tests).
            strict: Raise ValueError on an invalid config file instead of
                ignoring it.
        """
        self._global_path = global_path
        self._strict = strict

    def load(self, repo_root: Path) -> PushguardConfig:
        """Load configuration with global fallback.

        Args:
            repo_root: Repository root containing .pushguard.toml

        Returns:
            PushguardConfig instance with merged global/local values or defaults

        Raises:
            ValueError: In strict mode, if a config file cannot be parsed or
                holds invalid values.
        """
        local_path = get_local_config_path(repo_root)
        global_path = self._global_path or get_global_config_path()

        config = PushguardConfig.default()

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config = PushguardConfig.from_partial(config, global_data)
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                if self._strict:
                    raise ValueError(f"{global_path}: {e}") from e
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if local_path.exists():
            try:
                local_data = load_config_data(local_path)
                config = PushguardConfig.from_partial(config, local_data)
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                if self._strict:
                    raise ValueError(f"{local_path}: {e}") from e
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    local_path.name,
                    e,
                )

        return config
