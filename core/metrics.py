"""
스케줄링 통계
스냅샷에서 매번 새로 계산한다 (누적 카운터를 두지 않음)
"""

from dataclasses import dataclass
from typing import Dict

from .snapshot import Snapshot


@dataclass(frozen=True)
class SimulationMetrics:
    """스케줄링 통계"""
    avg_turnaround: float
    avg_waiting: float
    completed: int
    total: int
    avg_response: float = 0.0
    cpu_busy_time: int = 0
    total_simulation_time: int = 0

    @property
    def completion_ratio(self) -> float:
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @property
    def cpu_utilization(self) -> float:
        if self.total_simulation_time == 0:
            return 0.0
        return self.cpu_busy_time / self.total_simulation_time * 100

    def as_dict(self) -> Dict:
        return {
            'avg_waiting_time': self.avg_waiting,
            'avg_turnaround_time': self.avg_turnaround,
            'avg_response_time': self.avg_response,
            'cpu_utilization': self.cpu_utilization,
            'completed': self.completed,
            'total': self.total,
            'completion_ratio': self.completion_ratio,
        }


def compute_metrics(snapshot: Snapshot) -> SimulationMetrics:
    """
    완료된 프로세스 기준 평균 반환/대기 시간 계산
    완료된 프로세스가 없으면 평균은 0
    """
    completed = [p for p in snapshot.processes if p.completion_time is not None]
    started = [p for p in snapshot.processes if p.start_time is not None]

    avg_turnaround = 0.0
    avg_waiting = 0.0
    if completed:
        avg_turnaround = sum(p.turnaround_time for p in completed) / len(completed)
        avg_waiting = sum(p.waiting_time for p in completed) / len(completed)

    avg_response = 0.0
    if started:
        avg_response = sum(p.response_time for p in started) / len(started)

    return SimulationMetrics(
        avg_turnaround=avg_turnaround,
        avg_waiting=avg_waiting,
        completed=len(completed),
        total=len(snapshot.processes),
        avg_response=avg_response,
        cpu_busy_time=sum(p.burst_time - p.remaining_time for p in snapshot.processes),
        total_simulation_time=snapshot.current_time,
    )
