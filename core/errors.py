"""
시뮬레이터 예외 정의
"""


class SimulationError(Exception):
    """시뮬레이터 기본 예외"""


class ProcessValidationError(SimulationError, ValueError):
    """
    잘못된 프로세스 명세 (음수 도착 시간, 0 이하 버스트, 중복 ID 등)
    reset 시점에 발생하며 시뮬레이션은 시작되지 않음
    """

    def __init__(self, message: str, index: int = None, pid: str = None):
        self.index = index
        self.pid = pid
        location = []
        if index is not None:
            location.append(f"index={index}")
        if pid is not None:
            location.append(f"id={pid}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)
