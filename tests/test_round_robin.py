"""Ready queue handling for the quantum round-robin policy."""

import pytest

from core.process import Process, ProcessSpec
from core.snapshot import RoundRobinState
from schedulers import round_robin


def _make(*rows):
    return [
        Process.from_spec(ProcessSpec(id=pid, arrival_time=arrival, burst_time=burst, priority=1))
        for pid, arrival, burst in rows
    ]


def test_arrivals_enqueue_in_list_order():
    processes = _make(("A", 0, 3), ("B", 0, 3), ("C", 5, 3))
    selected, state = round_robin.dispatch(processes, 0, RoundRobinState(), time_quantum=2)
    assert selected.pid == "A"
    assert state == RoundRobinState(ready_queue=("B",), current="A", quantum_used=0)


def test_expired_quantum_goes_to_tail():
    processes = _make(("A", 0, 5), ("B", 0, 5))
    state = RoundRobinState(ready_queue=("B",), current="A", quantum_used=2)
    selected, state = round_robin.dispatch(processes, 2, state, time_quantum=2)
    assert selected.pid == "B"
    assert state.ready_queue == ("A",)
    assert state.quantum_used == 0


def test_single_process_keeps_cpu_after_expiry():
    processes = _make(("A", 0, 5))
    state = RoundRobinState(ready_queue=(), current="A", quantum_used=2)
    selected, state = round_robin.dispatch(processes, 2, state, time_quantum=2)
    assert selected.pid == "A"
    assert state.ready_queue == ()


def test_empty_queue_is_idle():
    processes = _make(("A", 4, 1))
    selected, state = round_robin.dispatch(processes, 0, RoundRobinState(), time_quantum=2)
    assert selected is None
    assert state == RoundRobinState()


def test_after_execute_counts_and_releases():
    process = _make(("A", 0, 2))[0]
    state = RoundRobinState(current="A")

    partial = process.execute(0)
    state = round_robin.after_execute(state, partial)
    assert state.quantum_used == 1

    done = partial.execute(1)
    state = round_robin.after_execute(state, done)
    assert state.current is None
    assert state.quantum_used == 0


def test_non_positive_quantum_rejected():
    with pytest.raises(ValueError):
        round_robin.dispatch(_make(("A", 0, 1)), 0, RoundRobinState(), time_quantum=0)


def test_completed_entries_dropped_from_queue():
    a, b = _make(("A", 0, 5), ("B", 0, 1))
    b = b.execute(0)
    state = RoundRobinState(ready_queue=("B",), current="B", quantum_used=1)
    selected, state = round_robin.dispatch([a, b], 1, state, time_quantum=2)
    assert selected.pid == "A"
    assert state == RoundRobinState(ready_queue=(), current="A", quantum_used=0)
