"""
스케줄러 엔진: 스냅샷 -> 스냅샷 순수 스텝 함수

reset()으로 초기 스냅샷을 만들고, 드라이버가 tick()을 반복 호출한다.
tick()은 이전 스냅샷을 변경하지 않고 항상 새 스냅샷을 반환한다.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .config import DEFAULT_TIME_QUANTUM, MAX_SIMULATION_TIME
from .errors import ProcessValidationError, SimulationError
from .metrics import SimulationMetrics, compute_metrics
from .process import Process, ProcessSpec, ProcessState
from .snapshot import Snapshot
from schedulers import round_robin
from schedulers.policies import PolicyKind, parse_policy, select_next_process


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리 (pid가 None이면 CPU 유휴)"""
    pid: Optional[str]
    start_time: int
    end_time: int
    state: ProcessState


def _validate_spec(index: int, spec: Union[ProcessSpec, Mapping]) -> ProcessSpec:
    if isinstance(spec, ProcessSpec):
        return spec
    pid = spec.get('id') if isinstance(spec, Mapping) else None
    try:
        return ProcessSpec.model_validate(spec)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'spec'}: {err['msg']}"
            for err in e.errors()
        )
        raise ProcessValidationError(f"Invalid process spec: {details}",
                                     index=index, pid=pid) from e


def reset(initial_specs: Sequence[Union[ProcessSpec, Mapping]]) -> Snapshot:
    """
    시뮬레이션 초기화

    Args:
        initial_specs: 프로세스 명세 목록 (ProcessSpec 또는 dict)

    Returns:
        시간 0의 초기 스냅샷

    Raises:
        ProcessValidationError: 잘못된 명세 또는 중복 ID
    """
    specs = [_validate_spec(i, spec) for i, spec in enumerate(initial_specs)]

    seen = set()
    for i, spec in enumerate(specs):
        if spec.id in seen:
            raise ProcessValidationError("Duplicate process id", index=i, pid=spec.id)
        seen.add(spec.id)

    return Snapshot(processes=tuple(Process.from_spec(spec) for spec in specs))


def tick(snapshot: Snapshot, policy: PolicyKind,
         time_quantum: int = DEFAULT_TIME_QUANTUM) -> Snapshot:
    """
    시뮬레이션 시간을 정확히 1 단위 진행

    1. 정책에 따라 프로세스 S 선택 (없으면 CPU 유휴)
    2. S의 남은 시간 1 감소, 0이 되면 완료 처리
    3. S가 아닌 running 프로세스는 waiting으로 변경
    4. 현재 시간 + 1
    """
    policy = parse_policy(policy)
    current_time = snapshot.current_time
    rr_state = snapshot.rr_state

    if policy is PolicyKind.ROUND_ROBIN_QUANTUM:
        selected, rr_state = round_robin.dispatch(snapshot.processes, current_time,
                                                  rr_state, time_quantum)
    else:
        selected = select_next_process(snapshot.processes, current_time, policy)

    processes: List[Process] = []
    executed = None
    for process in snapshot.processes:
        if selected is not None and process.pid == selected.pid:
            executed = process.execute(current_time)
            processes.append(executed)
        else:
            processes.append(process.preempt())

    if executed is not None and policy is PolicyKind.ROUND_ROBIN_QUANTUM:
        rr_state = round_robin.after_execute(rr_state, executed)

    return Snapshot(
        processes=tuple(processes),
        current_time=current_time + 1,
        running_id=selected.pid if selected is not None else None,
        rr_state=rr_state,
    )


def is_finished(snapshot: Snapshot) -> bool:
    """모든 프로세스의 남은 시간이 0이면 완료"""
    return all(p.remaining_time == 0 for p in snapshot.processes)


def metrics(snapshot: Snapshot) -> SimulationMetrics:
    return compute_metrics(snapshot)


def add_to_gantt_chart(gantt_chart: List[GanttEntry], pid: Optional[str], start: int):
    """한 틱 구간을 Gantt Chart에 추가 (같은 프로세스가 연속이면 구간 확장)"""
    state = ProcessState.RUNNING if pid is not None else ProcessState.WAITING
    if gantt_chart:
        last = gantt_chart[-1]
        if last.pid == pid and last.end_time == start:
            last.end_time = start + 1
            return
    gantt_chart.append(GanttEntry(pid, start, start + 1, state))


def run_to_completion(snapshot: Snapshot, policy: PolicyKind,
                      time_quantum: int = DEFAULT_TIME_QUANTUM,
                      max_time: int = MAX_SIMULATION_TIME) -> Tuple[Snapshot, List[GanttEntry]]:
    """
    모든 프로세스가 완료될 때까지 tick 반복

    Returns:
        (최종 스냅샷, Gantt Chart)

    Raises:
        SimulationError: max_time 초과
    """
    gantt_chart: List[GanttEntry] = []
    while not is_finished(snapshot):
        if snapshot.current_time >= max_time:
            raise SimulationError(f"Simulation timeout at T={snapshot.current_time}")
        start = snapshot.current_time
        snapshot = tick(snapshot, policy, time_quantum)
        add_to_gantt_chart(gantt_chart, snapshot.running_id, start)
    return snapshot, gantt_chart
