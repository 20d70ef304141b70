"""Error types raised while collecting cluster status."""

from __future__ import annotations

from core.models import CheckResult, Verdict


class ProbeError(Exception):
    """Base error for failures that stop a probe run.

    Every failure to observe cluster state means health cannot be certified,
    so the default verdict is critical.
    """

    verdict: Verdict = Verdict.CRITICAL
    prefix: str = "Error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def message(self) -> str:
        return f"{self.prefix}: {self.detail}"

    def to_result(self) -> CheckResult:
        return CheckResult(verdict=self.verdict, message=self.message)


class ConfigurationError(ProbeError):
    """Command-line settings are missing or out of range."""

    @property
    def message(self) -> str:
        return self.detail


class ClusterConnectionError(ProbeError):
    """The database server could not be reached."""

    prefix = "Error during connection"


class AccessDeniedError(ProbeError):
    """The server rejected the supplied credentials."""

    prefix = "User does not have access privileges to database"


class StatusQueryError(ProbeError):
    """The status query could not be prepared or executed."""

    prefix = "Error in executing query"


class StatusDataError(ProbeError):
    """Rows could not be fetched from an executed status query."""

    prefix = "Error in fetching data"
