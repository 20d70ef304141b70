"""Collect ``wsrep`` status variables from a single database node."""

from __future__ import annotations

from typing import Callable

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import DBAPIError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from config.settings import ProbeSettings
from core.errors import (
    AccessDeniedError,
    ClusterConnectionError,
    ProbeError,
    StatusDataError,
    StatusQueryError,
)
from core.logging import logger as LOGGER
from core.models import StatusSnapshot
from galera.evaluator import STATUS_VARIABLES

DRIVER_NAME = "mysql+pymysql"

# MySQL server error codes for rejected logins.
_ACCESS_DENIED_CODES = {1044, 1045, 1698}

STATUS_QUERY = text(
    "SHOW GLOBAL STATUS WHERE variable_name IN ({names})".format(
        names=", ".join(f"'{name}'" for name in STATUS_VARIABLES)
    )
)

EngineFactory = Callable[..., Engine]


def build_url(settings: ProbeSettings) -> URL:
    """Return the SQLAlchemy URL for the configured node."""

    return URL.create(
        DRIVER_NAME,
        username=settings.user,
        password=settings.password,
        host=settings.host,
        port=settings.port,
    )


def _error_code(exc: DBAPIError) -> int | None:
    args = getattr(exc.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _error_text(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    if orig is not None:
        args = getattr(orig, "args", ())
        if len(args) >= 2 and isinstance(args[1], str):
            return args[1]
        return str(orig)
    return str(exc).splitlines()[0]


def classify_connect_error(exc: SQLAlchemyError) -> ProbeError:
    """Map a failure raised while opening the connection to a probe error."""

    detail = _error_text(exc)
    code = _error_code(exc) if isinstance(exc, DBAPIError) else None
    if code in _ACCESS_DENIED_CODES or "Access denied for user" in detail:
        return AccessDeniedError(detail)
    return ClusterConnectionError(detail)


class StatusSource:
    """Open one connection, run the status query and return a snapshot."""

    def __init__(
        self,
        settings: ProbeSettings,
        *,
        engine_factory: EngineFactory = create_engine,
    ) -> None:
        self._settings = settings
        self._engine_factory = engine_factory

    def _create_engine(self) -> Engine:
        try:
            return self._engine_factory(
                build_url(self._settings),
                poolclass=NullPool,
                connect_args={"connect_timeout": self._settings.connect_timeout_s},
            )
        except NoSuchModuleError as exc:
            raise ClusterConnectionError(f"MySQL driver unavailable ({exc})") from exc
        except (ImportError, SQLAlchemyError) as exc:
            raise ClusterConnectionError(str(exc)) from exc

    def fetch(self) -> StatusSnapshot:
        """Query the node and return its status variables.

        Raises:
            ClusterConnectionError: The server could not be reached.
            AccessDeniedError: The server rejected the credentials.
            StatusQueryError: The status query failed to execute.
            StatusDataError: Result rows could not be read.
        """

        settings = self._settings
        LOGGER.info(
            "Connecting to %s:%s as %s (timeout %ss)",
            settings.host,
            settings.port,
            settings.user,
            settings.connect_timeout_s,
        )
        engine = self._create_engine()
        try:
            try:
                connection = engine.connect()
            except SQLAlchemyError as exc:
                error = classify_connect_error(exc)
                LOGGER.debug("Connection to %s failed: %s", settings.host, exc)
                raise error from exc

            with connection:
                try:
                    result = connection.execute(STATUS_QUERY)
                except SQLAlchemyError as exc:
                    LOGGER.debug("Status query failed: %s", exc)
                    raise StatusQueryError(_error_text(exc)) from exc

                try:
                    rows = [(row[0], row[1]) for row in result]
                except SQLAlchemyError as exc:
                    LOGGER.debug("Fetching status rows failed: %s", exc)
                    raise StatusDataError(_error_text(exc)) from exc
                except (IndexError, TypeError) as exc:
                    raise StatusDataError(f"unexpected row shape ({exc})") from exc
        finally:
            engine.dispose()

        snapshot = StatusSnapshot.from_rows(rows)
        LOGGER.debug("Collected status variables: %s", dict(snapshot.variables))
        return snapshot
