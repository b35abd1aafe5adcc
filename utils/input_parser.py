"""
입력 데이터 파서 및 프로세스 명세 생성 모듈
"""

import csv
import random
from typing import Iterable, List

from pydantic import ValidationError

from core.errors import ProcessValidationError
from core.process import ProcessSpec


class InputParser:
    """입력 파일 파서"""

    HEADER = "# Format: ID,Name,ArrivalTime,BurstTime,Priority"

    @staticmethod
    def parse_file(filename: str) -> List[ProcessSpec]:
        """
        CSV 파일에서 프로세스 명세 읽기

        파일 형식: ID,이름,도착시간,버스트시간,우선순위
        예: P1,Process 1,0,8,3
        이름을 생략한 4개 필드 형식(ID,도착시간,버스트시간,우선순위)도 허용

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 명세 리스트

        Raises:
            ProcessValidationError: 잘못된 라인이 하나라도 있으면 전체 거부
        """
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            specs = InputParser.parse_lines(f)

        print(f"{filename}에서 {len(specs)}개의 프로세스를 성공적으로 로드했습니다")
        return specs

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> List[ProcessSpec]:
        """CSV 라인 파싱 (주석 및 빈 줄 제거)"""
        specs = []
        seen = set()

        for line_no, row in enumerate(csv.reader(lines), start=1):
            if not row or not ''.join(row).strip():
                continue
            if row[0].strip().startswith('#'):
                continue

            spec = InputParser._create_spec_from_parts([part.strip() for part in row], line_no)
            if spec.id in seen:
                raise ProcessValidationError(f"line {line_no}: duplicate process id", pid=spec.id)
            seen.add(spec.id)
            specs.append(spec)

        return specs

    @staticmethod
    def _create_spec_from_parts(parts: List[str], line_no: int) -> ProcessSpec:
        """파싱된 부분에서 프로세스 명세 생성"""
        if len(parts) == 5:
            pid, name, arrival_time, burst_time, priority = parts
        elif len(parts) == 4:
            pid, arrival_time, burst_time, priority = parts
            name = ""
        else:
            raise ProcessValidationError(
                f"line {line_no}: expected 4 or 5 fields, got {len(parts)}")

        try:
            return ProcessSpec(
                id=pid,
                name=name,
                arrival_time=arrival_time,
                burst_time=burst_time,
                priority=priority,
            )
        except ValidationError as e:
            fields = ", ".join(str(err['loc'][0]) for err in e.errors() if err['loc'])
            raise ProcessValidationError(f"line {line_no}: invalid field(s) {fields}",
                                         pid=pid) from e

    @staticmethod
    def generate_random_specs(num_processes: int = 5,
                              max_arrival: int = 10,
                              max_burst: int = 10,
                              max_priority: int = 5,
                              seed: int = None) -> List[ProcessSpec]:
        """
        랜덤 프로세스 명세 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 CPU 버스트 시간
            max_priority: 최대 우선순위 값
            seed: 랜덤 시드
        """
        rng = random.Random(seed)

        specs = [
            ProcessSpec(
                id=f"P{i}",
                name=f"Process {i}",
                arrival_time=rng.randint(0, max_arrival),
                burst_time=rng.randint(1, max_burst),
                priority=rng.randint(1, max_priority),
            )
            for i in range(1, num_processes + 1)
        ]

        print(f"{num_processes}개의 랜덤 프로세스를 생성했습니다")
        return specs

    @staticmethod
    def save_specs_to_file(specs: List[ProcessSpec], filename: str):
        """
        프로세스 명세를 파일로 저장

        Args:
            specs: 저장할 명세 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8', newline='') as f:
            f.write("# Scheduler Simulator Input Data\n")
            f.write(InputParser.HEADER + "\n\n")

            writer = csv.writer(f, lineterminator='\n')
            for spec in specs:
                writer.writerow([spec.id, spec.name, spec.arrival_time,
                                 spec.burst_time, spec.priority])

        print(f"{len(specs)}개의 프로세스를 {filename}에 성공적으로 저장했습니다")

    @staticmethod
    def print_process_summary(specs: List[ProcessSpec]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*70)
        print("프로세스 요약")
        print("="*70)
        print(f"{'ID':<6} {'이름':<16} {'도착시간':>8} {'버스트':>8} {'우선순위':>8}")
        print("-"*70)

        for spec in specs:
            print(f"{spec.id:<6} {spec.name:<16} {spec.arrival_time:>8} "
                  f"{spec.burst_time:>8} {spec.priority:>8}")

        print("="*70)
        print(f"전체 프로세스: {len(specs)}개")
        print(f"  - 총 버스트 시간: {sum(s.burst_time for s in specs)}")
        print()
