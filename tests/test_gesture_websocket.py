from soul_relay.api.websocket import manager
from soul_relay.models.gesture import Landmark


def open_hand():
    points = [{"x": 0.5, "y": 0.8} for _ in range(21)]
    points[0] = {"x": 0.5, "y": 0.9}
    points[9] = {"x": 0.5, "y": 0.7}
    for i in (8, 12, 16, 20, 4):
        points[i] = {"x": 0.5, "y": 0.5}
    return points


def fist():
    points = open_hand()
    for i in (8, 12, 16, 20, 4):
        points[i] = {"x": 0.5, "y": 0.85}
    return points


def test_landmark_frames_switch_mode(client):
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_json({"type": "landmarks", "hands": [open_hand()]})
        data = ws.receive_json()
        assert data["type"] == "mode"
        assert data["mode"] == "scatter"
        assert data["signal"] == "open"
        assert data["openness"] > 1.02

        ws.send_json({"type": "landmarks", "hands": [fist()]})
        data = ws.receive_json()
        assert data["mode"] == "collapse"
        assert data["signal"] == "closed"
        assert data["is_scattered"] is False
        assert data["is_collapsing"] is True


def test_click_fallback_toggle(client):
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_json({"type": "toggle"})
        assert ws.receive_json()["mode"] == "collapse"
        ws.send_json({"type": "toggle"})
        assert ws.receive_json()["mode"] == "home"


def test_malformed_frame_keeps_connection_open(client):
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_text("not json")
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "landmarks", "hands": [[Landmark(x=0, y=0).model_dump()]]})
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "reset"})
        assert ws.receive_json()["mode"] == "home"


def test_each_connection_has_its_own_state(client):
    with client.websocket_connect("/ws/gesture") as first:
        first.send_json({"type": "landmarks", "hands": [open_hand()]})
        assert first.receive_json()["mode"] == "scatter"

        with client.websocket_connect("/ws/gesture") as second:
            second.send_json({"type": "landmarks", "hands": []})
            assert second.receive_json()["mode"] == "home"


def test_disconnect_releases_state(client):
    before = len(manager.states)
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_json({"type": "toggle"})
        ws.receive_json()
        assert len(manager.states) == before + 1
    assert len(manager.states) == before


def test_binary_frame_gets_error_and_keeps_connection(client):
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_bytes(b"\x00")
        data = ws.receive_json()
        assert data["type"] == "error"

        ws.send_json({"type": "toggle"})
        assert ws.receive_json()["mode"] == "collapse"


def test_state_released_after_binary_frame(client):
    before = len(manager.states)
    with client.websocket_connect("/ws/gesture") as ws:
        ws.send_bytes(b"\x00")
        ws.receive_json()
        assert len(manager.states) == before + 1
    assert len(manager.states) == before
