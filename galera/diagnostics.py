"""Diagnostics routines for the database driver stack."""

from __future__ import annotations

import importlib.util

from diagnostics.models import DiagnosticResult, DiagnosticStatus

REQUIRED_MODULES = ("sqlalchemy", "pymysql")


def probe(available_modules: set[str] | None = None) -> DiagnosticResult:
    """Check that the SQL toolkit and MySQL driver can be imported.

    Args:
        available_modules: Optional override set for offline testing.

    Returns:
        Diagnostic result indicating driver readiness.
    """

    name = "driver"
    missing: list[str] = []
    for module_name in REQUIRED_MODULES:
        if available_modules is not None:
            is_available = module_name in available_modules
        else:
            is_available = importlib.util.find_spec(module_name) is not None
        if not is_available:
            missing.append(module_name)

    if missing:
        return DiagnosticResult(
            name=name,
            status=DiagnosticStatus.FAIL,
            details=f"Missing driver deps: {', '.join(missing)}",
        )

    return DiagnosticResult(
        name=name,
        status=DiagnosticStatus.PASS,
        details="SQLAlchemy with PyMySQL available",
    )
