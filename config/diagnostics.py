"""Diagnostics routines for probe settings."""

from __future__ import annotations

from config.settings import ProbeSettings
from core.errors import ConfigurationError
from diagnostics.models import DiagnosticResult, DiagnosticStatus


def probe(settings: ProbeSettings) -> DiagnosticResult:
    """Validate settings without connecting to the database.

    Args:
        settings: Settings parsed from the command line.

    Returns:
        Diagnostic result indicating whether a live run would start.
    """

    name = "settings"
    try:
        settings.validate()
    except ConfigurationError as exc:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=exc.message,
        )

    if settings.thresholds.crit_shadowed:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.WARN,
            details=(
                f"nodes-crit ({settings.nodes_crit}) above nodes-warn "
                f"({settings.nodes_warn}); small clusters report Warning"
            ),
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details=(
            f"{settings.user}@{settings.host}:{settings.port}, "
            f"warn<={settings.nodes_warn}, crit<={settings.nodes_crit}"
        ),
    )
