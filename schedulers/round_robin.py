"""
Round Robin (time quantum) 스케줄링
FIFO 준비 큐 + 타임 슬라이스: 슬라이스를 다 쓴 프로세스는 큐의 끝으로 재진입
"""

from collections import deque
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from core.process import Process
from core.snapshot import RoundRobinState
from .policies import get_candidates


def _find(processes: Sequence[Process], pid: Optional[str]) -> Optional[Process]:
    if pid is None:
        return None
    for process in processes:
        if process.pid == pid:
            return process
    return None


def dispatch(processes: Sequence[Process], current_time: int, state: RoundRobinState,
             time_quantum: int) -> Tuple[Optional[Process], RoundRobinState]:
    """
    이번 틱에 실행할 프로세스 선택

    1. 새로 도착한 프로세스를 목록 순서대로 큐 끝에 추가
    2. 타임 슬라이스가 만료된 프로세스를 큐 끝에 재진입
    3. 슬롯이 비어 있으면 큐의 맨 앞 프로세스를 꺼냄

    Returns:
        (선택된 프로세스 또는 None, 실행 전 준비 큐 상태)
    """
    if time_quantum <= 0:
        raise ValueError(f"time_quantum must be positive: {time_quantum}")

    candidates = get_candidates(processes, current_time)
    eligible = {process.pid for process in candidates}

    # 다른 정책으로 실행되는 동안 완료된 프로세스는 큐에서 제거
    ready_queue = deque(pid for pid in state.ready_queue if pid in eligible)
    current = state.current
    quantum_used = state.quantum_used

    if current not in eligible:
        current = None
        quantum_used = 0

    for process in candidates:
        if process.pid != current and process.pid not in ready_queue:
            ready_queue.append(process.pid)

    if current is not None and quantum_used >= time_quantum:
        ready_queue.append(current)
        current = None
        quantum_used = 0

    if current is None and ready_queue:
        current = ready_queue.popleft()
        quantum_used = 0

    new_state = RoundRobinState(tuple(ready_queue), current, quantum_used)
    return _find(processes, current), new_state


def after_execute(state: RoundRobinState, executed: Process) -> RoundRobinState:
    """실행 후 타임 슬라이스 사용량 갱신 (완료 시 슬롯 반환)"""
    if executed.is_completed():
        return RoundRobinState(state.ready_queue, None, 0)
    return replace(state, quantum_used=state.quantum_used + 1)
