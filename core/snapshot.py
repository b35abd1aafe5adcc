"""
시뮬레이션 상태 스냅샷
드라이버가 단 하나의 스냅샷만 보관하고 매 틱마다 통째로 교체한다
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .process import Process, ProcessState


@dataclass(frozen=True)
class RoundRobinState:
    """Round Robin (quantum) 준비 큐 상태"""
    ready_queue: Tuple[str, ...] = ()
    current: Optional[str] = None  # 타임 슬라이스를 점유 중인 프로세스
    quantum_used: int = 0


@dataclass(frozen=True)
class Snapshot:
    """프로세스 집합 + 현재 시간 + 이번 틱에 CPU를 점유한 프로세스"""
    processes: Tuple[Process, ...]
    current_time: int = 0
    running_id: Optional[str] = None
    rr_state: RoundRobinState = field(default_factory=RoundRobinState)

    def get(self, pid: str) -> Optional[Process]:
        """ID로 프로세스 조회"""
        for process in self.processes:
            if process.pid == pid:
                return process
        return None

    @property
    def running(self) -> Optional[Process]:
        if self.running_id is None:
            return None
        return self.get(self.running_id)

    def by_state(self, state: ProcessState) -> Tuple[Process, ...]:
        return tuple(p for p in self.processes if p.state == state)

    def to_dict(self) -> Dict:
        """현재 상태 딕셔너리 (웹/실시간 뷰어용)"""
        return {
            'time': self.current_time,
            'running': self.running_id,
            'processes': [
                {
                    'id': p.pid,
                    'name': p.name,
                    'arrival_time': p.arrival_time,
                    'burst_time': p.burst_time,
                    'priority': p.priority,
                    'remaining_time': p.remaining_time,
                    'state': p.state.value,
                    'start_time': p.start_time,
                    'completion_time': p.completion_time,
                    'turnaround_time': p.turnaround_time,
                    'waiting_time': p.waiting_time,
                }
                for p in self.processes
            ],
            'ready_queue': list(self.rr_state.ready_queue),
        }
