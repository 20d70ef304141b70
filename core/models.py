"""Models for cluster status snapshots and check verdicts."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

MIN_NODES = 1
MAX_NODES = 128


class Verdict(str, Enum):
    """Severity reported to the monitoring scheduler."""

    OK = "OK"
    WARNING = "Warning"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    Verdict.OK: 0,
    Verdict.WARNING: 1,
    Verdict.CRITICAL: 2,
    Verdict.UNKNOWN: 3,
}


@dataclass(frozen=True)
class CheckResult:
    """Verdict plus the one-line message printed for the scheduler."""

    verdict: Verdict
    message: str

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code


@dataclass(frozen=True)
class StatusSnapshot:
    """Read-only view of the status variables collected from one node."""

    variables: Mapping[str, str | float | int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.variables, MappingProxyType):
            object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[str, str | float | int]]) -> "StatusSnapshot":
        """Build a snapshot from ``(Variable_name, Value)`` rows."""

        collected: dict[str, str | float | int] = {}
        for name, value in rows:
            collected[str(name)] = value
        return cls(MappingProxyType(collected))

    def __contains__(self, name: object) -> bool:
        return name in self.variables

    def get(self, name: str, default: str | float | int | None = None) -> str | float | int | None:
        return self.variables.get(name, default)


@dataclass(frozen=True)
class Thresholds:
    """Cluster size floors that trigger a warning or a critical verdict."""

    warn_floor: int = 2
    crit_floor: int = 1

    def out_of_range(self) -> list[int]:
        """Return the floors that fall outside the supported node range."""

        return [
            value
            for value in (self.warn_floor, self.crit_floor)
            if value < MIN_NODES or value > MAX_NODES
        ]

    @property
    def crit_shadowed(self) -> bool:
        """True when the warn check hides the crit check for small clusters."""

        return self.crit_floor > self.warn_floor
