"""Command-line entry point for the Galera cluster status probe."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Callable, NoReturn

from config.settings import (
    DEFAULT_CONNECT_TIMEOUT_S,
    DEFAULT_HOST,
    DEFAULT_NODES_CRIT,
    DEFAULT_NODES_WARN,
    DEFAULT_PORT,
    ProbeSettings,
)
from core.errors import ConfigurationError, ProbeError
from core.logging import enable_file_logging, log_error, logger, set_verbosity
from core.models import CheckResult, Verdict
from diagnostics.models import DiagnosticResult
from galera.evaluator import evaluate
from galera.status_source import StatusSource

SCRIPT_NAME = Path(sys.argv[0]).name or "check_galera_status"

USAGE = f"""
DESCRIPTION

  Nagios check for a MySQL/MariaDB Galera Cluster node.
  The check needs a database user, preferably one with only USAGE rights:

  GRANT USAGE ON *.* TO 'myuser'@'myhost' IDENTIFIED BY 'mypassword';

OPTIONS

  --help, -?             Display this help.
  --host=name, -h        Hostname or IP of database server (default {DEFAULT_HOST}).
  --password=name, -p    Password of user to use when connecting to database server.
  --port=#               Port number where database listens to (default {DEFAULT_PORT}).
  --user=name, -u        Check user for connecting to the database server.
  --nodes-warn=#         Turn warning when number of nodes hits this (default {DEFAULT_NODES_WARN}).
  --nodes-crit=#         Turn critical when number of nodes hits this (default {DEFAULT_NODES_CRIT}).
  --connect-timeout=#    Seconds to wait for the connection (default {DEFAULT_CONNECT_TIMEOUT_S}).
  --verbose, -v          Log progress to stderr; repeat for debug output.
  --log-file=path        Also write logs to this file.
  --diagnostics          Run offline self-checks instead of querying the node.

EXIT CODES

  0 OK, 1 Warning, 2 Critical, 3 Unknown

EXAMPLE

  When you have 3 nodes and want a warning when 1 fails and a critical when 2 fail:

  {SCRIPT_NAME} --user=myuser --password=mypassword --host=db01.local --port=3306 --nodes-warn=2 --nodes-crit=1
"""


class ProbeArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports bad flags as a critical check result."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def _parameter_summary(argv: list[str]) -> str:
    """Describe the connection flags for a parse error, never the password."""

    lenient = ProbeArgumentParser(add_help=False, allow_abbrev=False)
    lenient.add_argument("--user", "-u", default="")
    lenient.add_argument("--host", "-h", default=DEFAULT_HOST)
    lenient.add_argument("--port", default=str(DEFAULT_PORT))
    try:
        known, _ = lenient.parse_known_args(argv)
        user, host, port = known.user, known.host, known.port
    except ConfigurationError:
        user, host, port = "", DEFAULT_HOST, str(DEFAULT_PORT)
    return (
        f"Error in parameters. User = {user}, Password=hidden, "
        f"Host = {host}, Port = {port}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = ProbeArgumentParser(
        prog=SCRIPT_NAME,
        description="Check if a MySQL/MariaDB Galera Cluster node is fully operational.",
        add_help=False,
    )
    parser.add_argument("--help", "-?", action="store_true", dest="show_help")
    parser.add_argument("--user", "-u", type=str, default="")
    parser.add_argument("--password", "-p", type=str, default="")
    parser.add_argument("--host", "-h", type=str, default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--nodes-warn", type=int, default=DEFAULT_NODES_WARN)
    parser.add_argument("--nodes-crit", type=int, default=DEFAULT_NODES_CRIT)
    parser.add_argument("--connect-timeout", type=int, default=DEFAULT_CONNECT_TIMEOUT_S)
    parser.add_argument("--verbose", "-v", action="count", default=0)
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--diagnostics", action="store_true")
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Raw command-line arguments.

    Returns:
        Parsed arguments namespace.

    Raises:
        ConfigurationError: When the arguments cannot be parsed.
    """

    try:
        return build_parser().parse_args(argv)
    except ConfigurationError as exc:
        logger.debug("Argument parsing failed: %s", exc.detail)
        raise ConfigurationError(_parameter_summary(argv)) from exc


def check(
    settings: ProbeSettings,
    source_factory: Callable[[ProbeSettings], StatusSource] | None = None,
) -> CheckResult:
    """Validate settings, query the node and evaluate its status."""

    try:
        settings.validate()
        snapshot = (source_factory or StatusSource)(settings).fetch()
    except ProbeError as exc:
        logger.info("Probe stopped before evaluation: %s", type(exc).__name__)
        return exc.to_result()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected probe failure", exc_info=True)
        return CheckResult(
            verdict=Verdict.CRITICAL,
            message=f"Error: unexpected failure while checking {settings.host}: {exc}",
        )

    thresholds = settings.thresholds
    return evaluate(snapshot, thresholds.warn_floor, thresholds.crit_floor)


def run_self_check(settings: ProbeSettings) -> int:
    """Run offline self-checks and return an exit code."""

    from config.diagnostics import probe as settings_probe
    from core.diagnostics import probe as core_probe
    from diagnostics.runner import format_results, overall_verdict, run_diagnostics
    from galera.diagnostics import probe as driver_probe

    def settings_probe_live() -> DiagnosticResult:
        return settings_probe(settings)

    results = run_diagnostics([core_probe, driver_probe, settings_probe_live])
    print(format_results(results))
    return overall_verdict(results).exit_code


def report(result: CheckResult) -> int:
    """Print the check result as a single line and return its exit code."""

    message = " ".join(result.message.splitlines())
    print(message)
    if result.verdict is not Verdict.OK:
        logger.info("Verdict %s (exit %d)", result.verdict.value, result.exit_code)
    return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Probe entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Process exit code for the monitoring scheduler.
    """

    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except ConfigurationError as exc:
        return report(exc.to_result())

    if args.show_help:
        print(USAGE)
        return Verdict.OK.exit_code

    set_verbosity(args.verbose)
    if args.log_file is not None:
        try:
            enable_file_logging(args.log_file)
        except Exception as exc:  # noqa: BLE001
            log_error(f"File logging disabled: {exc}")

    settings = ProbeSettings.from_namespace(args)
    if args.diagnostics:
        return run_self_check(settings)

    return report(check(settings))


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
