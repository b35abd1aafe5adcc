"""Simulation driver: stepping, pause/reset and the async ticker."""

import asyncio

import pytest

from core.driver import SimulationDriver
from core.errors import ProcessValidationError, SimulationError
from core.process import ProcessState
from schedulers.policies import PolicyKind


def _run_until_stopped(driver):
    driver.start()
    while driver.is_running:
        driver.step()


def test_invalid_specs_prevent_start():
    with pytest.raises(ProcessValidationError):
        SimulationDriver([{"id": "A", "arrival_time": 0, "burst_time": 0, "priority": 1}])


def test_step_replaces_snapshot(sample_specs):
    driver = SimulationDriver(sample_specs)
    before = driver.snapshot
    after = driver.step()
    assert driver.snapshot is after
    assert before.current_time == 0
    assert after.current_time == 1


def test_run_to_finish_stops_itself(sample_specs):
    driver = SimulationDriver(sample_specs, PolicyKind.FCFS)
    _run_until_stopped(driver)
    assert driver.is_finished()
    assert not driver.is_running
    assert driver.current_time == 26

    # 완료 후 step은 시간을 진행하지 않음
    driver.step()
    assert driver.current_time == 26
    assert driver.start() is False


def test_event_log(sample_specs):
    driver = SimulationDriver(sample_specs, PolicyKind.SJF)
    driver.start()
    driver.step()
    driver.step()
    assert driver.event_log == [
        "[T=  0] ===== SJF (Shortest Remaining Time First) Scheduling Started =====",
        "[T=  0] P1 arrived",
        "[T=  0] P1 → Running",
        "[T=  1] P2 arrived",
        "[T=  1] P1 preempted → Waiting",
        "[T=  1] P2 → Running",
    ]


def test_completion_and_idle_logged():
    driver = SimulationDriver([{"id": "A", "arrival_time": 1, "burst_time": 1, "priority": 1}])
    _run_until_stopped(driver)
    assert "[T=  0] CPU idle" in driver.event_log
    assert "[T=  2] A → Completed (WT=0, TT=1)" in driver.event_log


def test_reset_mid_run(sample_specs):
    driver = SimulationDriver(sample_specs)
    driver.start()
    for _ in range(10):
        driver.step()

    assert driver.reset() is True
    assert not driver.is_running
    assert driver.current_time == 0
    assert driver.gantt_chart == []
    assert driver.event_log == ["[T=  0] Simulation reset"]
    for p in driver.snapshot.processes:
        assert p.state == ProcessState.WAITING
        assert p.remaining_time == p.burst_time
        assert p.completion_time is None

    assert driver.reset() is False


def test_pause(sample_specs):
    driver = SimulationDriver(sample_specs)
    assert driver.pause() is False
    driver.start()
    assert driver.pause() is True
    assert not driver.is_running


def test_policy_locked_while_running(sample_specs):
    driver = SimulationDriver(sample_specs)
    driver.start()
    with pytest.raises(SimulationError):
        driver.set_policy(PolicyKind.SJF)
    driver.pause()
    driver.set_policy("priority")
    assert driver.policy is PolicyKind.PRIORITY


def test_results(sample_specs):
    driver = SimulationDriver(sample_specs, PolicyKind.FCFS)
    _run_until_stopped(driver)
    result = driver.get_results()
    assert result['policy'] == "FCFS"
    assert result['statistics']['avg_turnaround_time'] == pytest.approx(15.25)
    assert [e.pid for e in result['gantt_chart']] == ["P1", "P2", "P3", "P4"]


def test_async_run_completes(sample_specs):
    driver = SimulationDriver(sample_specs, PolicyKind.PRIORITY, tick_interval=0)
    ticks = []
    final = asyncio.run(driver.run(on_tick=lambda s: ticks.append(s.current_time)))
    assert driver.is_finished()
    assert final.current_time == 26
    assert ticks == list(range(1, 27))


def test_async_run_stops_on_reset(sample_specs):
    driver = SimulationDriver(sample_specs)

    async def on_tick(snapshot):
        if snapshot.current_time == 3:
            driver.reset()

    final = asyncio.run(driver.run(on_tick=on_tick, interval=0))
    assert final.current_time == 0
    assert not driver.is_running


def test_async_run_rejects_second_loop(sample_specs):
    driver = SimulationDriver(sample_specs)
    driver.start()
    with pytest.raises(SimulationError):
        asyncio.run(driver.run(interval=0))


def test_non_positive_quantum_rejected(sample_specs):
    with pytest.raises(ValueError):
        SimulationDriver(sample_specs, PolicyKind.ROUND_ROBIN_QUANTUM, time_quantum=0)


def test_failed_run_releases_driver(sample_specs):
    driver = SimulationDriver(sample_specs, tick_interval=0)

    def on_tick(snapshot):
        if snapshot.current_time == 2:
            raise RuntimeError("send failed")

    with pytest.raises(RuntimeError):
        asyncio.run(driver.run(on_tick=on_tick))
    assert not driver.is_running
    assert driver.current_time == 2

    # 실패 후에도 정책 변경과 재실행 가능
    driver.set_policy(PolicyKind.SJF)
    final = asyncio.run(driver.run())
    assert driver.is_finished()
    assert final.current_time == 26
