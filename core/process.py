"""
프로세스 및 PCB (Process Control Block) 관리 모듈
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProcessState(Enum):
    """프로세스 상태"""
    WAITING = "waiting"
    RUNNING = "running"
    COMPLETED = "completed"


class ProcessSpec(BaseModel):
    """
    프로세스 생성 명세 (정적 속성)
    reset 시 검증되며 잘못된 값은 시뮬레이션 시작 전에 거부됨
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    arrival_time: int = Field(ge=0)
    burst_time: int = Field(gt=0)
    priority: int

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data):
        # 이름이 없으면 ID로 표시 이름 생성
        if isinstance(data, dict) and not data.get("name"):
            data = dict(data)
            data["name"] = f"Process {data.get('id')}"
        return data


@dataclass(frozen=True)
class Process:
    """
    프로세스 제어 블록 (PCB)
    불변 레코드: 엔진은 매 틱마다 replace()로 새 레코드를 만든다
    """
    pid: str
    name: str
    arrival_time: int
    burst_time: int
    priority: int

    # 실행 상태 추적
    remaining_time: int = 0
    state: ProcessState = ProcessState.WAITING

    # 통계 정보 (완료 시 한 번만 기록)
    start_time: Optional[int] = None  # 첫 실행 시간
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None

    @classmethod
    def from_spec(cls, spec: ProcessSpec) -> "Process":
        """명세로부터 초기 상태 프로세스 생성"""
        return cls(
            pid=spec.id,
            name=spec.name,
            arrival_time=spec.arrival_time,
            burst_time=spec.burst_time,
            priority=spec.priority,
            remaining_time=spec.burst_time,
        )

    def to_spec(self) -> ProcessSpec:
        """정적 속성만으로 명세 복원"""
        return ProcessSpec(
            id=self.pid,
            name=self.name,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )

    @property
    def response_time(self) -> Optional[int]:
        """응답 시간 = 첫 실행 시간 - 도착 시간"""
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time

    def is_completed(self) -> bool:
        """프로세스가 완료되었는지 확인"""
        return self.remaining_time == 0

    def is_candidate(self, current_time: int) -> bool:
        """현재 시간에 CPU를 할당받을 수 있는지 확인"""
        return self.arrival_time <= current_time and self.remaining_time > 0

    def execute(self, current_time: int) -> "Process":
        """
        한 시간 단위 실행

        Args:
            current_time: 이번 틱이 시작된 시간

        Returns:
            실행 후의 새 프로세스 레코드
        """
        if self.is_completed():
            return self

        remaining = max(0, self.remaining_time - 1)
        start_time = self.start_time if self.start_time is not None else current_time

        if remaining == 0:
            # 완료 시점에 완료/반환/대기 시간을 한 번에 기록
            completion_time = current_time + 1
            turnaround_time = completion_time - self.arrival_time
            return replace(
                self,
                remaining_time=0,
                state=ProcessState.COMPLETED,
                start_time=start_time,
                completion_time=completion_time,
                turnaround_time=turnaround_time,
                waiting_time=turnaround_time - self.burst_time,
            )

        return replace(self, remaining_time=remaining, state=ProcessState.RUNNING,
                       start_time=start_time)

    def preempt(self) -> "Process":
        """CPU를 잃은 프로세스의 라벨만 waiting으로 변경"""
        if self.state == ProcessState.RUNNING:
            return replace(self, state=ProcessState.WAITING)
        return self

    def __repr__(self):
        return f"{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Priority={self.priority}, " \
               f"Remaining={self.remaining_time}"
