"""Domain value objects with validation.

Value objects that provide validation at construction time,
ensuring invalid states are unrepresentable.
"""

import posixpath
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import NewType

from pushguard.domain.exceptions import InvalidPatternError

# Path relative to the repository root, as printed by git (forward slashes)
FilePath = NewType("FilePath", str)

# Last segment of a FilePath
FileName = NewType("FileName", str)

PATH_SEPARATOR = "/"

# Characters that must be escaped inside a regex character class
_CLASS_SPECIALS = frozenset("\\]^-[")


def file_name_of(path: FilePath | str) -> FileName:
    """Return the base name of a repository-relative path."""
    return FileName(posixpath.basename(path))


class PatternKind(str, Enum):
    """Matching strategy selected from the shape of a pattern.

    - DIRECTORY_PREFIX: pattern ends in '/', matched as a raw path prefix
    - SCOPED_GLOB: pattern contains '/', globbed against the full path
    - BASENAME_GLOB: pattern has no '/', globbed against the base name only
    """

    DIRECTORY_PREFIX = "directory_prefix"
    SCOPED_GLOB = "scoped_glob"
    BASENAME_GLOB = "basename_glob"


def _class_char(c: str) -> str:
    return "\\" + c if c in _CLASS_SPECIALS else c


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a bracket expression starting just after '['.

    Returns:
        Tuple of (regex fragment, index just past the closing ']').

    Raises:
        InvalidPatternError: If the class is empty, unterminated, or has a
            reversed range.
    """
    i = start
    n = len(pattern)
    negate = False
    if i < n and pattern[i] in "^!":
        negate = True
        i += 1

    items: list[str] = []
    while True:
        if i >= n:
            raise InvalidPatternError(pattern, "unterminated character class")
        c = pattern[i]
        if c == "]":
            if not items:
                raise InvalidPatternError(pattern, "empty character class")
            i += 1
            break
        if c == "\\":
            i += 1
            if i >= n:
                raise InvalidPatternError(pattern, "trailing escape in character class")
            c = pattern[i]
        lo = c
        i += 1
        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            i += 1
            hi = pattern[i]
            if hi == "\\":
                i += 1
                if i >= n:
                    raise InvalidPatternError(pattern, "trailing escape in character class")
                hi = pattern[i]
            if hi < lo:
                raise InvalidPatternError(pattern, f"reversed range '{lo}-{hi}'")
            items.append(f"{_class_char(lo)}-{_class_char(hi)}")
            i += 1
        else:
            items.append(_class_char(lo))

    body = "".join(items)
    if negate:
        # Negated classes never cross a path separator
        return f"[^{body}/]", i
    return f"[{body}]", i


def translate_glob(pattern: str) -> str:
    """Translate a single-level glob into an anchored regular expression.

    '*' and '?' never match the path separator. Bracket classes support
    ranges and '^'/'!' negation. A backslash escapes the next character.

    Args:
        pattern: Glob pattern to translate.

    Returns:
        Regex source suitable for re.fullmatch.

    Raises:
        InvalidPatternError: If the pattern is syntactically malformed.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            # Collapse runs of '*'
            while i + 1 < n and pattern[i + 1] == "*":
                i += 1
            parts.append("[^/]*")
            i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise InvalidPatternError(pattern, "trailing escape")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            fragment, i = _translate_class(pattern, i + 1)
            parts.append(fragment)
        else:
            parts.append(re.escape(c))
            i += 1
    return "(?s:" + "".join(parts) + ")"


@dataclass(frozen=True)
class PathPattern:
    """Validated path pattern with its matching strategy fixed at parse time.

    Use PathPattern.parse() rather than the constructor so that the kind is
    derived from the pattern shape. Direct construction with an explicit kind
    is validated the same way.

    Attributes:
        raw: The pattern string as written.
        kind: Matching strategy for this pattern.
    """

    raw: str
    kind: PatternKind
    _regex: re.Pattern[str] | None = field(init=False, default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the pattern and compile globs.

        Raises:
            InvalidPatternError: If the pattern is empty or not a valid glob.
        """
        if not self.raw:
            raise InvalidPatternError(self.raw, "pattern cannot be empty")
        if self.kind is not PatternKind.DIRECTORY_PREFIX:
            object.__setattr__(self, "_regex", re.compile(translate_glob(self.raw)))

    @classmethod
    def parse(cls, raw: str) -> "PathPattern":
        """Parse a pattern string and select its matching strategy.

        Args:
            raw: Pattern string. Must be non-empty.

        Returns:
            PathPattern instance.

        Raises:
            InvalidPatternError: If the pattern is empty or not a valid glob.
        """
        if raw.endswith(PATH_SEPARATOR):
            kind = PatternKind.DIRECTORY_PREFIX
        elif PATH_SEPARATOR in raw:
            kind = PatternKind.SCOPED_GLOB
        else:
            kind = PatternKind.BASENAME_GLOB
        return cls(raw=raw, kind=kind)

    def matches(self, path: FilePath | str, name: FileName | str | None = None) -> bool:
        """Check whether a repository-relative path is selected by this pattern.

        Args:
            path: Full path relative to the repository root.
            name: Base name of the path. Derived from path when omitted.

        Returns:
            True if the path is selected.
        """
        if self._regex is None:
            return path.startswith(self.raw)

        if self.kind is PatternKind.SCOPED_GLOB:
            return self._regex.fullmatch(path) is not None

        if name is None:
            name = file_name_of(path)
        return self._regex.fullmatch(name) is not None

    def __str__(self) -> str:
        """Return the raw pattern string."""
        return self.raw
