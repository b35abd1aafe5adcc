"""Policy selection functions."""

import pytest

from core.process import Process, ProcessSpec
from schedulers.policies import (PolicyKind, get_candidates, parse_policy,
                                 select_next_process)


def _make(*rows):
    return [
        Process.from_spec(ProcessSpec(id=pid, arrival_time=arrival, burst_time=burst,
                                      priority=priority))
        for pid, arrival, burst, priority in rows
    ]


def test_no_candidates_is_idle():
    processes = _make(("A", 5, 3, 1))
    for policy in (PolicyKind.FCFS, PolicyKind.SJF, PolicyKind.PRIORITY, PolicyKind.ROUND_ROBIN):
        assert select_next_process(processes, 4, policy) is None


def test_candidates_keep_list_order_and_skip_finished():
    processes = _make(("A", 0, 3, 1), ("B", 2, 1, 1), ("C", 1, 2, 1))
    finished = processes[2].execute(1).execute(2)
    processes[2] = finished
    assert [p.pid for p in get_candidates(processes, 2)] == ["A", "B"]


def test_fcfs_smallest_arrival():
    processes = _make(("A", 2, 3, 1), ("B", 0, 5, 1), ("C", 1, 1, 1))
    assert select_next_process(processes, 2, PolicyKind.FCFS).pid == "B"


def test_fcfs_tie_uses_list_order():
    processes = _make(("A", 1, 3, 1), ("B", 1, 1, 1))
    assert select_next_process(processes, 1, PolicyKind.FCFS).pid == "A"


def test_sjf_smallest_remaining():
    processes = _make(("A", 0, 8, 1), ("B", 1, 4, 1))
    processes[0] = processes[0].execute(0)
    assert select_next_process(processes, 1, PolicyKind.SJF).pid == "B"


def test_sjf_tie_uses_list_order():
    processes = _make(("A", 0, 4, 1), ("B", 0, 4, 1))
    assert select_next_process(processes, 0, PolicyKind.SJF).pid == "A"


def test_priority_lowest_number_wins():
    processes = _make(("A", 0, 4, 3), ("B", 0, 4, 1), ("C", 0, 4, 1))
    assert select_next_process(processes, 0, PolicyKind.PRIORITY).pid == "B"


def test_round_robin_first_in_list_order():
    processes = _make(("A", 2, 4, 9), ("B", 0, 1, 1))
    assert select_next_process(processes, 1, PolicyKind.ROUND_ROBIN).pid == "B"
    assert select_next_process(processes, 2, PolicyKind.ROUND_ROBIN).pid == "A"


def test_arrival_equal_to_time_is_eligible():
    processes = _make(("A", 3, 1, 1))
    assert select_next_process(processes, 3, PolicyKind.FCFS).pid == "A"


def test_quantum_policy_needs_engine():
    with pytest.raises(ValueError):
        select_next_process(_make(("A", 0, 1, 1)), 0, PolicyKind.ROUND_ROBIN_QUANTUM)


@pytest.mark.parametrize("value, expected", [
    ("fcfs", PolicyKind.FCFS),
    ("SJF", PolicyKind.SJF),
    ("priority", PolicyKind.PRIORITY),
    ("rr", PolicyKind.ROUND_ROBIN),
    ("ROUND_ROBIN_QUANTUM", PolicyKind.ROUND_ROBIN_QUANTUM),
    (PolicyKind.PRIORITY, PolicyKind.PRIORITY),
])
def test_parse_policy(value, expected):
    assert parse_policy(value) is expected


def test_parse_policy_unknown():
    with pytest.raises(ValueError):
        parse_policy("lottery")
