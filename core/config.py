"""
시뮬레이터 기본 설정값
"""

# Round Robin (quantum) 기본 타임 슬라이스
DEFAULT_TIME_QUANTUM = 4

# 드라이버 틱 간격 (초), 엔진 자체는 실제 시간과 무관
DEFAULT_TICK_INTERVAL = 1.0

# 무한 루프 방지
MAX_SIMULATION_TIME = 10000

# 기본 샘플 프로세스 (id, name, arrival_time, burst_time, priority)
SAMPLE_PROCESSES = [
    {"id": "P1", "name": "Process 1", "arrival_time": 0, "burst_time": 8, "priority": 3},
    {"id": "P2", "name": "Process 2", "arrival_time": 1, "burst_time": 4, "priority": 1},
    {"id": "P3", "name": "Process 3", "arrival_time": 2, "burst_time": 9, "priority": 4},
    {"id": "P4", "name": "Process 4", "arrival_time": 3, "burst_time": 5, "priority": 2},
]
