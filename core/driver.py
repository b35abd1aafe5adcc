"""
시뮬레이션 드라이버
하나의 살아있는 스냅샷을 보관하고 고정 간격으로 tick()을 호출한다
"""

import asyncio
import inspect
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from . import engine
from .config import DEFAULT_TICK_INTERVAL, DEFAULT_TIME_QUANTUM, MAX_SIMULATION_TIME
from .engine import GanttEntry
from .errors import SimulationError
from .metrics import SimulationMetrics
from .process import ProcessSpec, ProcessState
from .snapshot import Snapshot
from schedulers.policies import POLICY_INFO, PolicyKind, parse_policy


class SimulationDriver:
    """
    틱 드라이버
    - 한 번에 하나의 틱만 실행 (스냅샷을 통째로 교체)
    - pause/reset은 다음 틱 호출만 멈추며 진행 중인 틱을 중단하지 않음
    """

    def __init__(self, specs: Sequence[Union[ProcessSpec, Mapping]],
                 policy: Union[PolicyKind, str] = PolicyKind.FCFS,
                 time_quantum: int = DEFAULT_TIME_QUANTUM,
                 tick_interval: float = DEFAULT_TICK_INTERVAL,
                 max_time: int = MAX_SIMULATION_TIME):
        if time_quantum <= 0:
            raise ValueError(f"time_quantum must be positive: {time_quantum}")

        self.snapshot: Snapshot = engine.reset(specs)
        self.initial_specs: List[ProcessSpec] = [p.to_spec() for p in self.snapshot.processes]
        self.policy = parse_policy(policy)
        self.time_quantum = time_quantum
        self.tick_interval = tick_interval
        self.max_time = max_time

        self.is_running = False
        self._generation = 0  # pause/reset 시 증가, 이전 run 루프 종료용

        # Gantt Chart 데이터
        self.gantt_chart: List[GanttEntry] = []

        # 이벤트 로그
        self.event_log: List[str] = []

    @property
    def current_time(self) -> int:
        return self.snapshot.current_time

    @property
    def name(self) -> str:
        return POLICY_INFO[self.policy]['name']

    def log_event(self, message: str, time: Optional[int] = None):
        """이벤트 로그 기록 (time이 없으면 현재 시간)"""
        if time is None:
            time = self.current_time
        log_entry = f"[T={time:3d}] {message}"
        self.event_log.append(log_entry)

    def set_policy(self, policy: Union[PolicyKind, str]):
        """정책 변경 (실행 중에는 불가)"""
        if self.is_running:
            raise SimulationError("Cannot change policy while the simulation is running")
        self.policy = parse_policy(policy)

    def is_finished(self) -> bool:
        return engine.is_finished(self.snapshot)

    def metrics(self) -> SimulationMetrics:
        return engine.metrics(self.snapshot)

    def start(self) -> bool:
        """
        자동 실행 시작 표시

        Returns:
            실행 상태가 되었는지 여부 (이미 완료된 경우 False)
        """
        if self.is_finished():
            return False
        if not self.is_running:
            self.is_running = True
            self.log_event(f"===== {self.name} Scheduling Started =====")
        return True

    def pause(self) -> bool:
        """자동 실행 중지, 실행 중이었는지 반환"""
        was_running = self.is_running
        self.is_running = False
        self._generation += 1
        if was_running:
            self.log_event("Simulation paused")
        return was_running

    def reset(self) -> bool:
        """
        초기 프로세스 집합으로 복원하고 시간을 0으로 되돌림

        Returns:
            리셋 전에 실행 중이었는지 여부 (실행은 항상 중지됨)
        """
        was_running = self.is_running
        self.is_running = False
        self._generation += 1
        self.snapshot = engine.reset(self.initial_specs)
        self.gantt_chart = []
        self.event_log = []
        self.log_event("Simulation reset")
        return was_running

    def step(self) -> Snapshot:
        """한 시간 단위 실행 후 새 스냅샷 반환"""
        if self.is_finished():
            self.is_running = False
            return self.snapshot

        # 무한 루프 방지
        if self.current_time >= self.max_time:
            self.log_event("WARNING: Simulation timeout")
            self.is_running = False
            return self.snapshot

        previous = self.snapshot
        for process in previous.processes:
            if process.arrival_time == previous.current_time:
                self.log_event(f"{process.pid} arrived")

        snapshot = engine.tick(previous, self.policy, self.time_quantum)
        self.snapshot = snapshot
        engine.add_to_gantt_chart(self.gantt_chart, snapshot.running_id, previous.current_time)
        self._log_transitions(previous, snapshot)

        if self.is_finished():
            self.is_running = False
            self.log_event(f"===== {self.name} Scheduling Completed =====")

        return snapshot

    def _log_transitions(self, previous: Snapshot, snapshot: Snapshot):
        started_at = previous.current_time
        if snapshot.running_id is None:
            self.log_event("CPU idle", started_at)
            return

        if previous.running_id != snapshot.running_id:
            before = snapshot.get(previous.running_id) if previous.running_id else None
            if before is not None and before.state == ProcessState.WAITING:
                self.log_event(f"{before.pid} preempted → Waiting", started_at)
            self.log_event(f"{snapshot.running_id} → Running", started_at)

        current = snapshot.running
        if current.state == ProcessState.COMPLETED:
            self.log_event(f"{current.pid} → Completed "
                           f"(WT={current.waiting_time}, TT={current.turnaround_time})")

    async def run(self, on_tick: Optional[Callable] = None,
                  interval: Optional[float] = None) -> Snapshot:
        """
        완료되거나 pause/reset 될 때까지 고정 간격으로 step() 반복

        Args:
            on_tick: 매 틱 후 스냅샷을 받아 호출할 콜백 (코루틴 가능)
            interval: 틱 간격 (초), None이면 tick_interval 사용
        """
        if self.is_running:
            raise SimulationError("Simulation is already running")
        if not self.start():
            return self.snapshot

        delay = self.tick_interval if interval is None else interval
        generation = self._generation

        try:
            while self.is_running and generation == self._generation:
                snapshot = self.step()
                if on_tick is not None:
                    result = on_tick(snapshot)
                    if inspect.isawaitable(result):
                        await result
                if not self.is_running or generation != self._generation:
                    break
                await asyncio.sleep(delay)
        finally:
            # 예외, 취소 포함 루프 종료 시 실행 상태 해제
            if generation == self._generation:
                self.is_running = False

        return self.snapshot

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (통계, Gantt Chart, 로그 등)
        """
        return {
            'algorithm': self.name,
            'policy': self.policy.value,
            'statistics': self.metrics().as_dict(),
            'gantt_chart': list(self.gantt_chart),
            'event_log': list(self.event_log),
            'processes': list(self.snapshot.processes),
        }
