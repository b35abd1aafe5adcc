"""FastAPI endpoints and the real-time WebSocket driver."""

import pytest
from fastapi.testclient import TestClient

from core.config import SAMPLE_PROCESSES
from web.backend.app import app

client = TestClient(app)


def test_policies():
    response = client.get("/policies")
    assert response.status_code == 200
    ids = [p['id'] for p in response.json()['policies']]
    assert ids == ["FCFS", "SJF", "PRIORITY", "ROUND_ROBIN", "ROUND_ROBIN_QUANTUM"]


def test_sample_processes():
    response = client.get("/sample-processes")
    assert response.json()['processes'] == SAMPLE_PROCESSES


def test_simulate_fcfs():
    response = client.post("/simulate", json={
        "processes": SAMPLE_PROCESSES,
        "policies": ["FCFS"],
    })
    assert response.status_code == 200
    result = response.json()['results'][0]
    assert result['policy'] == "FCFS"
    assert result['statistics']['avg_turnaround_time'] == pytest.approx(15.25)
    assert result['statistics']['avg_waiting_time'] == pytest.approx(8.75)
    assert [p['completion_time'] for p in result['processes']] == [8, 12, 21, 26]
    assert result['gantt_chart'][0] == {'pid': "P1", 'start_time': 0, 'end_time': 8,
                                        'state': "running"}


def test_compare():
    response = client.post("/simulate/compare", json={
        "processes": SAMPLE_PROCESSES,
        "policies": ["fcfs", "sjf"],
    })
    comparison = response.json()['comparison']
    assert comparison['policies'] == ["FCFS", "SJF"]
    assert comparison['avg_waiting_time'] == pytest.approx([8.75, 6.5])


@pytest.mark.parametrize("processes", [
    [{"id": "A", "arrival_time": 0, "burst_time": 0, "priority": 1}],
    [{"id": "A", "arrival_time": -2, "burst_time": 3, "priority": 1}],
    [{"id": "A", "arrival_time": 0, "burst_time": 3, "priority": 1},
     {"id": "A", "arrival_time": 1, "burst_time": 3, "priority": 1}],
])
def test_simulate_rejects_invalid_processes(processes):
    response = client.post("/simulate", json={"processes": processes, "policies": ["FCFS"]})
    assert response.status_code == 400


def test_simulate_rejects_unknown_policy():
    response = client.post("/simulate", json={"processes": SAMPLE_PROCESSES,
                                              "policies": ["lottery"]})
    assert response.status_code == 400
    assert "lottery" in response.json()['detail']


def test_websocket_step_and_reset():
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "step"})
        assert ws.receive_json()['type'] == "error"

        ws.send_json({"action": "init", "processes": SAMPLE_PROCESSES, "policy": "SJF"})
        assert ws.receive_json() == {'type': 'initialized', 'policy': "SJF", 'process_count': 4}

        ws.send_json({"action": "step"})
        ws.receive_json()
        ws.send_json({"action": "step"})
        message = ws.receive_json()
        assert message['type'] == "step_result"
        assert message['snapshot']['time'] == 2
        assert message['snapshot']['running'] == "P2"
        assert message['stats']['current_time'] == 2

        ws.send_json({"action": "reset"})
        message = ws.receive_json()
        assert message['type'] == "reset"
        assert message['snapshot']['time'] == 0
        assert all(p['state'] == "waiting" for p in message['snapshot']['processes'])


def test_websocket_run_to_completion():
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": SAMPLE_PROCESSES, "policy": "FCFS"})
        ws.receive_json()

        ws.send_json({"action": "run", "speed": 1000})
        message = ws.receive_json()
        while not message['complete']:
            message = ws.receive_json()

        assert message['snapshot']['time'] == 26
        assert message['stats']['avg_turnaround_time'] == pytest.approx(15.25)


def test_websocket_invalid_init():
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": [
            {"id": "A", "arrival_time": 0, "burst_time": -1, "priority": 1}]})
        message = ws.receive_json()
        assert message['type'] == "error"
        assert "burst_time" in message['message']


def test_websocket_rejects_zero_quantum():
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": SAMPLE_PROCESSES,
                      "policy": "ROUND_ROBIN_QUANTUM", "time_quantum": 0})
        message = ws.receive_json()
        assert message['type'] == "error"
        assert "time_quantum" in message['message']
