"""Pre-push scanning.

Reads the refs git hands to a pre-push hook, computes the outgoing
additions, and reports the ones whose paths look sensitive.
"""

import logging
from dataclasses import dataclass, field
from typing import TextIO

from pushguard.core.repository import GitRepo
from pushguard.domain.config import PushguardConfig
from pushguard.domain.entities import Addition, ChangeSet, FileReadError
from pushguard.domain.value_objects import PathPattern

logger = logging.getLogger(__name__)

# Sentinel git uses for a ref that does not exist on one side of the push
EMPTY_SHA = "0" * 40

EXIT_CLEAN = 0
EXIT_DETECTIONS = 1
EXIT_ERROR = 2


@dataclass(frozen=True)
class PushRefs:
    """Refs and SHAs read from the first line of pre-push input."""

    old_ref: str = EMPTY_SHA
    new_ref: str = EMPTY_SHA
    old_sha: str = EMPTY_SHA
    new_sha: str = EMPTY_SHA

    @property
    def is_empty(self) -> bool:
        """True if no usable range was supplied."""
        return self.old_ref == EMPTY_SHA and self.new_ref == EMPTY_SHA


def parse_refs_and_shas(line: str) -> PushRefs:
    """Parse '<old ref> <new ref> <old sha> <new sha>'.

    Lines with fewer than four whitespace-separated tokens yield all sentinels.
    """
    tokens = line.split()
    if len(tokens) < 4:
        return PushRefs()
    return PushRefs(*tokens[:4])


def read_refs_and_shas(stream: TextIO) -> PushRefs:
    """Read and parse the first line of a pre-push input stream."""
    line = stream.readline()
    logger.debug("Read pre-push input line=%r", line)
    return parse_refs_and_shas(line)


@dataclass(frozen=True)
class Detection:
    """An outgoing addition selected by a detection pattern."""

    addition: Addition
    pattern: PathPattern


@dataclass
class ScanReport:
    """Outcome of scanning one push.

    Attributes:
        change_set: Outgoing additions that were checked.
        detections: Additions that matched a detection pattern and no ignore pattern.
    """

    change_set: ChangeSet
    detections: list[Detection] = field(default_factory=list)

    @property
    def read_errors(self) -> tuple[FileReadError, ...]:
        return self.change_set.read_errors

    @property
    def exit_code(self) -> int:
        return EXIT_DETECTIONS if self.detections else EXIT_CLEAN


class PrePushRunner:
    """Runs a detection pass over the additions of one push."""

    def __init__(
        self,
        repo: GitRepo,
        config: PushguardConfig,
        log: logging.Logger | None = None,
    ) -> None:
        self._repo = repo
        self._config = config
        self._log = log or logger
        self._patterns = config.detection.detection_patterns()
        self._ignored = config.detection.ignore_patterns()

    def _change_set(self, refs: PushRefs) -> ChangeSet:
        scope = self._config.repository.scope
        if refs.is_empty:
            return self._repo.compute_default_additions(scope)
        return self._repo.compute_additions(refs.old_ref, refs.new_ref, scope)

    def _detect(self, addition: Addition) -> Detection | None:
        if any(addition.matches(p, self._log) for p in self._ignored):
            return None
        for pattern in self._patterns:
            if addition.matches(pattern, self._log):
                return Detection(addition=addition, pattern=pattern)
        return None

    def scan(self, refs: PushRefs) -> ScanReport:
        """Compute the outgoing additions and classify each one.

        Raises:
            GitCommandError: If the additions cannot be listed.
        """
        change_set = self._change_set(refs)
        report = ScanReport(change_set=change_set)
        for addition in change_set:
            detection = self._detect(addition)
            if detection is not None:
                report.detections.append(detection)

        self._log.info(
            "Scanned outgoing additions range=%s additions=%d detections=%d",
            change_set.range,
            len(change_set),
            len(report.detections),
        )
        return report

    def run(self, refs: PushRefs) -> int:
        """Scan a push and return its exit code."""
        return self.scan(refs).exit_code
