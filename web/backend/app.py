"""
CPU 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional, Dict, Any
import asyncio
import json

from core.config import DEFAULT_TICK_INTERVAL, DEFAULT_TIME_QUANTUM, SAMPLE_PROCESSES
from core.driver import SimulationDriver
from core.errors import SimulationError
from schedulers.policies import POLICY_INFO, PolicyKind, parse_policy

app = FastAPI(
    title="CPU Scheduler Simulator",
    description="틱 기반 CPU 스케줄링 정책 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델 (검증은 engine.reset에서 수행, 실패 시 400)
class ProcessInput(BaseModel):
    id: str
    name: str = ""
    arrival_time: int
    burst_time: int
    priority: int


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    policies: List[str]
    time_quantum: int = DEFAULT_TIME_QUANTUM


class GanttEntryModel(BaseModel):
    pid: Optional[str]
    start_time: int
    end_time: int
    state: str


class ProcessResult(BaseModel):
    id: str
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    completion_time: Optional[int]
    turnaround_time: Optional[int]
    waiting_time: Optional[int]
    response_time: Optional[int]


class SimulationResult(BaseModel):
    algorithm: str
    policy: str
    gantt_chart: List[GanttEntryModel]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    event_log: List[str]


def gantt_to_dicts(gantt_chart) -> List[Dict]:
    return [
        {
            'pid': entry.pid,
            'start_time': entry.start_time,
            'end_time': entry.end_time,
            'state': entry.state.value
        }
        for entry in gantt_chart
    ]


def run_policy(processes: List[ProcessInput], policy: str,
               time_quantum: int = DEFAULT_TIME_QUANTUM) -> SimulationResult:
    """정책 하나를 완료될 때까지 실행하고 결과 반환"""
    driver = SimulationDriver([p.model_dump() for p in processes], parse_policy(policy),
                              time_quantum=time_quantum)
    driver.start()
    while driver.is_running:
        driver.step()

    if not driver.is_finished():
        raise SimulationError("Simulation timeout")

    result = driver.get_results()
    return SimulationResult(
        algorithm=result['algorithm'],
        policy=result['policy'],
        gantt_chart=gantt_to_dicts(result['gantt_chart']),
        processes=[
            ProcessResult(
                id=p.pid,
                name=p.name,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                priority=p.priority,
                completion_time=p.completion_time,
                turnaround_time=p.turnaround_time,
                waiting_time=p.waiting_time,
                response_time=p.response_time,
            )
            for p in result['processes']
        ],
        statistics=result['statistics'],
        event_log=result['event_log'],
    )


@app.get("/")
async def root():
    return {"message": "CPU Scheduler Simulator API", "version": "1.0.0"}


@app.get("/policies")
async def get_policies():
    """사용 가능한 정책 목록 반환"""
    return {
        "policies": [
            {"id": policy.value, "name": info['name'], "preemptive": info['preemptive']}
            for policy, info in POLICY_INFO.items()
        ]
    }


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {"processes": SAMPLE_PROCESSES}


@app.post("/simulate")
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행"""
    try:
        results = [run_policy(request.processes, policy, request.time_quantum)
                   for policy in request.policies]
    except (SimulationError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "results": results}


@app.post("/simulate/compare")
async def compare_policies(request: SimulationRequest):
    """여러 정책 비교 시뮬레이션"""
    try:
        results = [run_policy(request.processes, policy, request.time_quantum)
                   for policy in request.policies]
    except (SimulationError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    comparison = {
        'policies': [r.policy for r in results],
        'avg_waiting_time': [r.statistics['avg_waiting_time'] for r in results],
        'avg_turnaround_time': [r.statistics['avg_turnaround_time'] for r in results],
        'avg_response_time': [r.statistics['avg_response_time'] for r in results],
        'cpu_utilization': [r.statistics['cpu_utilization'] for r in results],
    }

    return {"success": True, "results": results, "comparison": comparison}


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSession:
    """WebSocket 연결 하나에 대응하는 드라이버 래퍼"""

    def __init__(self, driver: SimulationDriver):
        self.driver = driver
        self.last_log_index = 0
        self.run_task: Optional[asyncio.Task] = None

    def state(self) -> Dict[str, Any]:
        """현재 상태 + 새 로그"""
        new_logs = self.driver.event_log[self.last_log_index:]
        self.last_log_index = len(self.driver.event_log)

        stats = self.driver.metrics().as_dict()
        stats['current_time'] = self.driver.current_time

        return {
            'complete': self.driver.is_finished(),
            'running': self.driver.is_running,
            'snapshot': self.driver.snapshot.to_dict(),
            'gantt_chart': gantt_to_dicts(self.driver.gantt_chart),
            'new_logs': new_logs,
            'stats': stats
        }

    def stop(self):
        self.driver.pause()
        if self.run_task is not None and not self.run_task.done():
            self.run_task.cancel()
        self.run_task = None


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    session: Optional[RealtimeSession] = None

    async def send_step(snapshot):
        await websocket.send_json({'type': 'step_result', **session.state()})

    async def run_session(interval):
        try:
            await session.driver.run(on_tick=send_step, interval=interval)
        except (SimulationError, ValueError) as e:
            await websocket.send_json({'type': 'error', 'message': str(e)})

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
                action = message.get('action')

                if action == 'init':
                    if session is not None:
                        session.stop()
                    driver = SimulationDriver(
                        message.get('processes', SAMPLE_PROCESSES),
                        parse_policy(message.get('policy', PolicyKind.FCFS.value)),
                        time_quantum=message.get('time_quantum', DEFAULT_TIME_QUANTUM),
                    )
                    session = RealtimeSession(driver)
                    await websocket.send_json({
                        'type': 'initialized',
                        'policy': driver.policy.value,
                        'process_count': len(driver.snapshot.processes)
                    })

                elif session is None:
                    raise SimulationError("Simulation not initialized")

                elif action == 'step':
                    if not session.driver.is_running:
                        session.driver.step()
                    await send_step(session.driver.snapshot)

                elif action == 'run':
                    # 자동 실행 (속도 조절 가능)
                    speed = float(message.get('speed', 1.0))
                    if speed <= 0:
                        raise ValueError(f"speed must be positive: {speed}")
                    if session.run_task is None or session.run_task.done():
                        session.run_task = asyncio.create_task(
                            run_session(DEFAULT_TICK_INTERVAL / speed))

                elif action == 'pause':
                    session.stop()
                    await websocket.send_json({'type': 'paused', **session.state()})

                elif action == 'reset':
                    was_running = session.driver.reset()
                    session.stop()
                    session.last_log_index = 0
                    await websocket.send_json({'type': 'reset', 'was_running': was_running,
                                               **session.state()})

                elif action == 'set_policy':
                    session.driver.set_policy(message['policy'])
                    await websocket.send_json({'type': 'policy_changed',
                                               'policy': session.driver.policy.value})

                else:
                    raise ValueError(f"Unknown action: {action}")

            except (SimulationError, ValueError, KeyError) as e:
                await websocket.send_json({'type': 'error', 'message': str(e)})

    except WebSocketDisconnect:
        if session is not None:
            session.stop()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
