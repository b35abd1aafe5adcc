"""
스케줄링 정책 선택 함수
- FCFS (First-Come, First-Served)
- SJF (Shortest Remaining Time, 매 틱 재평가되므로 선점형)
- Priority (낮은 숫자가 높은 우선순위)
- Round Robin (단순화: 목록 순서상 첫 후보)

모든 선택 함수는 부작용 없는 순수 함수이며,
동점일 경우 원래 목록 순서를 유지한다 (min()은 첫 최소값을 반환).
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from core.process import Process


class PolicyKind(Enum):
    """스케줄링 정책"""
    FCFS = "FCFS"
    SJF = "SJF"
    PRIORITY = "PRIORITY"
    ROUND_ROBIN = "ROUND_ROBIN"
    ROUND_ROBIN_QUANTUM = "ROUND_ROBIN_QUANTUM"


POLICY_INFO = {
    PolicyKind.FCFS: {'name': 'FCFS (First-Come, First-Served)', 'preemptive': False},
    PolicyKind.SJF: {'name': 'SJF (Shortest Remaining Time First)', 'preemptive': True},
    PolicyKind.PRIORITY: {'name': 'Priority (Static)', 'preemptive': True},
    PolicyKind.ROUND_ROBIN: {'name': 'Round Robin (first eligible)', 'preemptive': False},
    PolicyKind.ROUND_ROBIN_QUANTUM: {'name': 'Round Robin (time quantum)', 'preemptive': True},
}

# 사용자 입력용 별칭
_ALIASES = {
    'fcfs': PolicyKind.FCFS,
    'sjf': PolicyKind.SJF,
    'srtf': PolicyKind.SJF,
    'priority': PolicyKind.PRIORITY,
    'rr': PolicyKind.ROUND_ROBIN,
    'roundrobin': PolicyKind.ROUND_ROBIN,
    'round_robin': PolicyKind.ROUND_ROBIN,
    'rrq': PolicyKind.ROUND_ROBIN_QUANTUM,
    'rr_quantum': PolicyKind.ROUND_ROBIN_QUANTUM,
    'round_robin_quantum': PolicyKind.ROUND_ROBIN_QUANTUM,
}


def parse_policy(value) -> PolicyKind:
    """문자열 또는 PolicyKind를 PolicyKind로 변환"""
    if isinstance(value, PolicyKind):
        return value
    key = str(value).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    raise ValueError(f"Unknown policy: {value}")


def get_candidates(processes: Sequence[Process], current_time: int) -> List[Process]:
    """도착했고 남은 시간이 있는 프로세스 (원래 순서 유지)"""
    return [p for p in processes if p.is_candidate(current_time)]


def select_fcfs(candidates: List[Process]) -> Process:
    """도착 시간이 가장 빠른 프로세스 선택"""
    return min(candidates, key=lambda p: p.arrival_time)


def select_sjf(candidates: List[Process]) -> Process:
    """남은 CPU 시간이 가장 짧은 프로세스 선택"""
    return min(candidates, key=lambda p: p.remaining_time)


def select_priority(candidates: List[Process]) -> Process:
    """우선순위가 가장 높은 프로세스 (숫자가 낮을수록 높은 우선순위)"""
    return min(candidates, key=lambda p: p.priority)


def select_round_robin(candidates: List[Process]) -> Process:
    # 타임 슬라이스 없이 목록 순서상 첫 후보
    return candidates[0]


POLICY_SELECTORS: Dict[PolicyKind, Callable[[List[Process]], Process]] = {
    PolicyKind.FCFS: select_fcfs,
    PolicyKind.SJF: select_sjf,
    PolicyKind.PRIORITY: select_priority,
    PolicyKind.ROUND_ROBIN: select_round_robin,
}


def select_next_process(processes: Sequence[Process], current_time: int,
                        policy: PolicyKind) -> Optional[Process]:
    """
    다음 틱에 CPU를 점유할 프로세스 선택

    Args:
        processes: 전체 프로세스 (원래 순서)
        current_time: 현재 시뮬레이션 시간
        policy: 스케줄링 정책

    Returns:
        선택된 프로세스 또는 None (CPU 유휴)
    """
    selector = POLICY_SELECTORS.get(policy)
    if selector is None:
        raise ValueError(f"Policy {policy} needs ready queue state; use the engine tick")

    candidates = get_candidates(processes, current_time)
    if not candidates:
        return None
    return selector(candidates)
