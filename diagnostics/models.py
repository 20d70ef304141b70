"""Models for probe self-check results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.models import Verdict


class DiagnosticStatus(str, Enum):
    """Status for self-check probes."""

    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"

    @property
    def verdict(self) -> Verdict:
        return _VERDICTS[self]


_VERDICTS = {
    DiagnosticStatus.PASS: Verdict.OK,
    DiagnosticStatus.WARN: Verdict.WARNING,
    DiagnosticStatus.FAIL: Verdict.CRITICAL,
}


@dataclass(frozen=True)
class DiagnosticResult:
    """Result for a single self-check."""

    name: str
    status: DiagnosticStatus
    details: str
