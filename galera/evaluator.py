"""Decide the health verdict for one Galera node from its status variables."""

from __future__ import annotations

import math

from core.models import CheckResult, StatusSnapshot, Verdict

CLUSTER_SIZE = "wsrep_cluster_size"
CLUSTER_STATUS = "wsrep_cluster_status"
READY = "wsrep_ready"
CONNECTED = "wsrep_connected"
LOCAL_STATE = "wsrep_local_state_comment"
RECV_QUEUE_AVG = "wsrep_local_recv_queue_avg"

STATUS_VARIABLES = (
    CLUSTER_SIZE,
    CLUSTER_STATUS,
    READY,
    CONNECTED,
    LOCAL_STATE,
    RECV_QUEUE_AVG,
)

RECV_QUEUE_AVG_LIMIT = 0.5


def _text(value: str | float | int | None) -> str | None:
    if value is None:
        return None
    return str(value).strip()


def _as_int(value: str | float | int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def _as_float(value: str | float | int | None) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number


def _critical(message: str) -> CheckResult:
    return CheckResult(verdict=Verdict.CRITICAL, message=f"Critical: {message}")


def _warning(message: str) -> CheckResult:
    return CheckResult(verdict=Verdict.WARNING, message=f"Warning: {message}")


def evaluate(snapshot: StatusSnapshot, warn_floor: int, crit_floor: int) -> CheckResult:
    """Apply the ordered health checks and return the first failing verdict.

    Checks run from "is this a cluster at all" through node identity,
    readiness, connectivity and sync state, then cluster size, then receive
    queue load. A variable that is absent or unreadable fails the check that
    uses it.

    Args:
        snapshot: Status variables collected from the node.
        warn_floor: Cluster size at or below which the node reports a warning.
        crit_floor: Cluster size at or below which the node reports critical.

    Returns:
        The verdict and the one-line message for the scheduler.
    """

    if CLUSTER_STATUS not in snapshot:
        return CheckResult(
            verdict=Verdict.UNKNOWN,
            message=(
                "Unknown: It looks like this is not a MySQL/MariaDB Galera cluster. "
                f"The variable {CLUSTER_STATUS} is not defined."
            ),
        )

    cluster_status = _text(snapshot.get(CLUSTER_STATUS))
    if cluster_status != "Primary":
        return _critical(f"Node is not Primary: {cluster_status}")

    ready = _text(snapshot.get(READY))
    if ready != "ON":
        if ready is None:
            return _critical(f"Node is not ready: {READY} not reported, cluster_status: {cluster_status}")
        return _critical(f"Node is not ready: {ready}, cluster_status: {cluster_status}")

    connected = _text(snapshot.get(CONNECTED))
    if connected != "ON":
        if connected is None:
            return _critical(
                f"Node is not connected: {CONNECTED} not reported, cluster_status: {cluster_status}"
            )
        return _critical(f"Node is not connected: {connected}, cluster_status: {cluster_status}")

    local_state = _text(snapshot.get(LOCAL_STATE))
    if local_state != "Synced":
        if local_state is None:
            local_state = f"{LOCAL_STATE} not reported"
        return _critical(f"Node is not synced: {cluster_status} - {local_state}")

    raw_size = snapshot.get(CLUSTER_SIZE)
    cluster_size = _as_int(raw_size)
    if cluster_size is None:
        return _critical(f"{CLUSTER_SIZE} is missing or not an integer: {raw_size}")

    size_line = f"cluster_size: {cluster_size}, cluster_status: {cluster_status}"
    # The plain crit check below is shadowed by the warn check unless
    # crit_floor > warn_floor, so the expected ordering needs its own branch.
    if cluster_size <= crit_floor <= warn_floor:
        return _critical(size_line)
    if cluster_size <= warn_floor:
        return _warning(size_line)
    if cluster_size <= crit_floor:
        return _critical(size_line)

    raw_queue = snapshot.get(RECV_QUEUE_AVG)
    recv_queue_avg = _as_float(raw_queue)
    if recv_queue_avg is None:
        return _critical(f"{RECV_QUEUE_AVG} is missing or not numeric: {raw_queue}")
    if recv_queue_avg > RECV_QUEUE_AVG_LIMIT:
        return _warning(
            f"recv_queue_avg is higher than {RECV_QUEUE_AVG_LIMIT}: {raw_queue}, "
            f"cluster_status: {cluster_status}"
        )

    return CheckResult(
        verdict=Verdict.OK,
        message=f"OK {size_line}, local_state: {local_state}",
    )
