"""Config domain models for pushguard.

Configuration is stored in .pushguard.toml at the repository root and
represents the refs to compare by default and the patterns that mark a
pushed file as sensitive. This module defines the domain models that
represent validated configuration state.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from pushguard.domain.value_objects import PathPattern

DEFAULT_OLD_REF = "origin/master"
DEFAULT_NEW_REF = "master"


@dataclass(frozen=True)
class RepositoryConfig:
    """Configuration for the commit range to inspect.

    Attributes:
        default_old_ref: Ref used as the range start when none is supplied
        default_new_ref: Ref used as the range end when none is supplied
        scope: Sub-path the diff is restricted to ("." for the whole tree)

    Raises:
        ValueError: If any value is empty.
    """

    default_old_ref: str = DEFAULT_OLD_REF
    default_new_ref: str = DEFAULT_NEW_REF
    scope: str = "."

    def __post_init__(self) -> None:
        """Validate repository config after initialization."""
        if not self.default_old_ref:
            raise ValueError("default_old_ref cannot be empty")
        if not self.default_new_ref:
            raise ValueError("default_new_ref cannot be empty")
        if not self.scope:
            raise ValueError("scope cannot be empty")


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for sensitive file detection.

    Attributes:
        patterns: Path patterns whose matches are reported as sensitive
        ignore: Path patterns exempt from detection

    Raises:
        ValueError: If any pattern is empty or an invalid glob.
    """

    patterns: list[str] = field(
        default_factory=lambda: [
            "*.pem",
            "*.key",
            "*.p12",
            "*.pfx",
            "*.kdbx",
            "id_rsa",
            "id_dsa",
            "id_ecdsa",
            "id_ed25519",
            ".env",
            "secrets/",
        ]
    )
    ignore: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate that every pattern parses."""
        for name, value in (("patterns", self.patterns), ("ignore", self.ignore)):
            if not isinstance(value, list):
                raise ValueError(f"{name} must be a list of strings")
        for pattern in [*self.patterns, *self.ignore]:
            if not isinstance(pattern, str):
                raise ValueError(f"pattern must be a string, got {pattern!r}")
            PathPattern.parse(pattern)

    def detection_patterns(self) -> list[PathPattern]:
        """Return the detection patterns, parsed."""
        return [PathPattern.parse(p) for p in self.patterns]

    def ignore_patterns(self) -> list[PathPattern]:
        """Return the ignore patterns, parsed."""
        return [PathPattern.parse(p) for p in self.ignore]


def _from_partial(base: Any, partial: dict[str, Any]) -> Any:
    """Return a copy of a config section with known keys overridden."""
    if not isinstance(partial, dict):
        raise ValueError(f"config section must be a table, got {type(partial).__name__}")
    known = {f.name for f in fields(base)}
    overrides = {k: v for k, v in partial.items() if k in known}
    return replace(base, **overrides)


@dataclass(frozen=True)
class PushguardConfig:
    """Complete pushguard configuration.

    Attributes:
        repository: Commit range configuration
        detection: Sensitive file detection configuration
    """

    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)

    @staticmethod
    def default() -> "PushguardConfig":
        """Create a config with all default values."""
        return PushguardConfig(
            repository=RepositoryConfig(),
            detection=DetectionConfig(),
        )

    @staticmethod
    def from_partial(base: "PushguardConfig", data: dict[str, Any]) -> "PushguardConfig":
        """Merge raw config data over a base config.

        Sections and keys missing from data keep the base values. Unknown
        keys are ignored. The merged sections are validated again.

        Args:
            base: Config to start from.
            data: Parsed TOML data, keyed by section name.

        Returns:
            New PushguardConfig with overrides applied.

        Raises:
            ValueError: If a merged section fails validation.
        """
        return PushguardConfig(
            repository=_from_partial(base.repository, data.get("repository", {})),
            detection=_from_partial(base.detection, data.get("detection", {})),
        )
