"""Tests for the Galera status evaluator."""

from __future__ import annotations

import pytest

from core.models import StatusSnapshot, Verdict
from galera.evaluator import (
    CLUSTER_SIZE,
    CLUSTER_STATUS,
    CONNECTED,
    LOCAL_STATE,
    READY,
    RECV_QUEUE_AVG,
    evaluate,
)


def _healthy(**overrides: str | float | int | None) -> StatusSnapshot:
    variables: dict[str, str | float | int] = {
        CLUSTER_STATUS: "Primary",
        READY: "ON",
        CONNECTED: "ON",
        LOCAL_STATE: "Synced",
        CLUSTER_SIZE: "3",
        RECV_QUEUE_AVG: "0.1",
    }
    for key, value in overrides.items():
        if value is None:
            variables.pop(key, None)
        else:
            variables[key] = value
    return StatusSnapshot(variables)


_SEVERITY = {Verdict.OK: 0, Verdict.WARNING: 1, Verdict.CRITICAL: 2}


def test_healthy_three_node_cluster_is_ok() -> None:
    """Scenario A: a synced node in a three node cluster reports OK."""

    result = evaluate(_healthy(), warn_floor=2, crit_floor=1)

    assert result.verdict is Verdict.OK
    assert result.exit_code == 0
    assert result.message == "OK cluster_size: 3, cluster_status: Primary, local_state: Synced"


def test_cluster_size_at_warn_floor_warns() -> None:
    """Scenario B: two remaining nodes trip the warning floor."""

    result = evaluate(_healthy(wsrep_cluster_size="2"), warn_floor=2, crit_floor=1)

    assert result.verdict is Verdict.WARNING
    assert result.message == "Warning: cluster_size: 2, cluster_status: Primary"


@pytest.mark.parametrize("warn_floor, crit_floor", [(2, 1), (1, 1), (5, 3), (1, 128)])
def test_desynced_donor_is_critical(warn_floor: int, crit_floor: int) -> None:
    """Scenario C: a donor node is never healthy, whatever the thresholds."""

    result = evaluate(_healthy(wsrep_local_state_comment="Donor/Desync"), warn_floor, crit_floor)

    assert result.verdict is Verdict.CRITICAL
    assert "Primary" in result.message
    assert "Donor/Desync" in result.message


def test_missing_cluster_status_is_unknown() -> None:
    """Scenario D: a server without wsrep variables is not a Galera node."""

    result = evaluate(StatusSnapshot({}), warn_floor=2, crit_floor=1)

    assert result.verdict is Verdict.UNKNOWN
    assert result.exit_code == 3
    assert "wsrep_cluster_status is not defined" in result.message


def test_missing_cluster_status_wins_over_other_failures() -> None:
    snapshot = _healthy(
        wsrep_cluster_status=None,
        wsrep_ready="OFF",
        wsrep_connected="OFF",
        wsrep_cluster_size="0",
    )

    assert evaluate(snapshot, 2, 1).verdict is Verdict.UNKNOWN


def test_high_receive_queue_warns_on_large_cluster() -> None:
    """Scenario E: queue pressure warns even when the cluster is large."""

    result = evaluate(
        _healthy(wsrep_cluster_size="10", wsrep_local_recv_queue_avg="0.8"),
        warn_floor=2,
        crit_floor=1,
    )

    assert result.verdict is Verdict.WARNING
    assert "recv_queue_avg is higher than 0.5: 0.8" in result.message


def test_receive_queue_at_limit_is_ok() -> None:
    result = evaluate(_healthy(wsrep_local_recv_queue_avg="0.5"), 2, 1)

    assert result.verdict is Verdict.OK


@pytest.mark.parametrize("status", ["non-Primary", "Disconnected", "primary", ""])
def test_non_primary_node_is_critical(status: str) -> None:
    result = evaluate(_healthy(wsrep_cluster_status=status), warn_floor=2, crit_floor=1)

    assert result.verdict is Verdict.CRITICAL
    assert result.message == f"Critical: Node is not Primary: {status}"


def test_non_primary_is_critical_even_with_otherwise_failing_variables() -> None:
    snapshot = _healthy(
        wsrep_cluster_status="non-Primary",
        wsrep_ready=None,
        wsrep_cluster_size=None,
        wsrep_local_recv_queue_avg="9.0",
    )

    result = evaluate(snapshot, 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert "not Primary" in result.message


def test_node_not_ready_is_critical() -> None:
    result = evaluate(_healthy(wsrep_ready="OFF"), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert result.message.startswith("Critical: Node is not ready: OFF")


def test_node_not_connected_is_critical() -> None:
    result = evaluate(_healthy(wsrep_connected="OFF"), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert result.message.startswith("Critical: Node is not connected: OFF")


@pytest.mark.parametrize("state", ["Joining", "Joined", "Donor/Desync", "Initialized"])
def test_unsynced_states_are_critical(state: str) -> None:
    result = evaluate(_healthy(wsrep_local_state_comment=state), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert result.message == f"Critical: Node is not synced: Primary - {state}"


def test_readiness_checked_before_connectivity() -> None:
    result = evaluate(_healthy(wsrep_ready="OFF", wsrep_connected="OFF"), 2, 1)

    assert "not ready" in result.message


def test_sync_state_checked_before_cluster_size() -> None:
    result = evaluate(_healthy(wsrep_local_state_comment="Joined", wsrep_cluster_size="1"), 2, 1)

    assert "not synced" in result.message


def test_cluster_size_checked_before_receive_queue() -> None:
    result = evaluate(_healthy(wsrep_cluster_size="2", wsrep_local_recv_queue_avg="3.0"), 2, 1)

    assert result.message == "Warning: cluster_size: 2, cluster_status: Primary"


def test_cluster_size_at_crit_floor_is_critical() -> None:
    result = evaluate(_healthy(wsrep_cluster_size="1"), warn_floor=2, crit_floor=1)

    assert result.verdict is Verdict.CRITICAL
    assert result.message == "Critical: cluster_size: 1, cluster_status: Primary"


def test_equal_floors_report_critical_at_the_floor() -> None:
    assert evaluate(_healthy(wsrep_cluster_size="2"), 2, 2).verdict is Verdict.CRITICAL
    assert evaluate(_healthy(wsrep_cluster_size="3"), 2, 2).verdict is Verdict.OK


def test_crit_floor_above_warn_floor_keeps_warn_first() -> None:
    """A misconfigured crit floor never turns a small cluster critical."""

    assert evaluate(_healthy(wsrep_cluster_size="1"), warn_floor=2, crit_floor=4).verdict is Verdict.WARNING
    assert evaluate(_healthy(wsrep_cluster_size="2"), warn_floor=2, crit_floor=4).verdict is Verdict.WARNING
    assert evaluate(_healthy(wsrep_cluster_size="4"), warn_floor=2, crit_floor=4).verdict is Verdict.CRITICAL
    assert evaluate(_healthy(wsrep_cluster_size="5"), warn_floor=2, crit_floor=4).verdict is Verdict.OK


@pytest.mark.parametrize("warn_floor, crit_floor", [(2, 1), (3, 1), (5, 5), (8, 3)])
def test_shrinking_cluster_never_improves_verdict(warn_floor: int, crit_floor: int) -> None:
    previous = 0
    for size in range(12, 0, -1):
        verdict = evaluate(_healthy(wsrep_cluster_size=str(size)), warn_floor, crit_floor).verdict
        assert _SEVERITY[verdict] >= previous
        previous = _SEVERITY[verdict]
    assert previous == _SEVERITY[Verdict.CRITICAL]


def test_numeric_values_are_accepted() -> None:
    snapshot = _healthy(wsrep_cluster_size=3, wsrep_local_recv_queue_avg=0.25)

    assert evaluate(snapshot, 2, 1).verdict is Verdict.OK


def test_snapshot_built_from_rows() -> None:
    snapshot = StatusSnapshot.from_rows(
        [
            ("wsrep_cluster_size", "4"),
            ("wsrep_cluster_status", "Primary"),
            ("wsrep_connected", "ON"),
            ("wsrep_local_recv_queue_avg", "0.000000"),
            ("wsrep_local_state_comment", "Synced"),
            ("wsrep_ready", "ON"),
        ]
    )

    result = evaluate(snapshot, 2, 1)

    assert result.verdict is Verdict.OK
    assert "cluster_size: 4" in result.message


def test_snapshot_is_read_only() -> None:
    snapshot = _healthy()

    with pytest.raises(TypeError):
        snapshot.variables[CLUSTER_STATUS] = "non-Primary"  # type: ignore[index]


@pytest.mark.parametrize("key, fragment", [(READY, "not ready"), (CONNECTED, "not connected"), (LOCAL_STATE, "not synced")])
def test_absent_state_variables_fail_their_check(key: str, fragment: str) -> None:
    result = evaluate(_healthy(**{key: None}), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert fragment in result.message
    assert "not reported" in result.message


@pytest.mark.parametrize("value", [None, "", "three", "2.5"])
def test_unreadable_cluster_size_is_critical(value: str | None) -> None:
    result = evaluate(_healthy(wsrep_cluster_size=value), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert CLUSTER_SIZE in result.message


@pytest.mark.parametrize("value", [None, "", "n/a", "nan"])
def test_unreadable_receive_queue_is_critical(value: str | None) -> None:
    result = evaluate(_healthy(wsrep_local_recv_queue_avg=value), 2, 1)

    assert result.verdict is Verdict.CRITICAL
    assert RECV_QUEUE_AVG in result.message


def test_small_cluster_reported_before_missing_queue_average() -> None:
    result = evaluate(_healthy(wsrep_cluster_size="2", wsrep_local_recv_queue_avg=None), 2, 1)

    assert result.verdict is Verdict.WARNING
