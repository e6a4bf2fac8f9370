"""Tests for the Flask JSON API.

Verifies:
1.  Polling before any workspace exists returns 404.
2.  Structures can be generated from caller-supplied values.
3.  A run's structure is committed only when its playback completes.
4.  Cancelling a run keeps the previously committed structure.
5.  Validation failures (malformed bodies included) come back as 400
    {"error", "field"}.
6.  Graph edits go through the validating graph mutators.
7.  Read-only requests create no workspace; the workspace map is capped.
8.  Concurrent polls of one workspace hand out every event exactly once.
"""

import threading

import pytest

import main
from engine import EngineConfig


@pytest.fixture
def client(clock):
    main.WORKSPACES.clear()
    old_clock = main.app.config["CLOCK"]
    main.app.config.update(TESTING=True, CLOCK=clock)
    with main.app.test_client() as c:
        yield c
    main.app.config["CLOCK"] = old_clock
    main.app.config.pop("MAX_WORKSPACES", None)
    main.WORKSPACES.clear()


def poll_until_done(client, clock, limit=200):
    seen = []
    for _ in range(limit):
        state = client.get("/api/state").get_json()
        seen.extend(ev["sequence"] for ev in state["events"])
        if state["state"] == "finished":
            return state, seen
        clock.advance(1)
    raise AssertionError("playback never finished")


# ---------------------------------------------------------------------------
# Sessions & structures
# ---------------------------------------------------------------------------
def test_state_without_session_is_404(client):
    resp = client.get("/api/state")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "No active session"


def test_generate_from_values(client):
    resp = client.post("/api/array/generate", json={"values": [5, 3, 8, 1]})
    assert resp.status_code == 200
    assert resp.get_json()["structure"]["values"] == [5, 3, 8, 1]
    assert client.get("/api/array").get_json()["structure"]["values"] == [5, 3, 8, 1]


def test_generate_random_with_seed_is_repeatable(client):
    a = client.post("/api/list/generate", json={"seed": 4}).get_json()
    b = client.post("/api/list/generate", json={"seed": 4}).get_json()
    assert [n["value"] for n in a["structure"]["nodes"]] == [n["value"] for n in b["structure"]["nodes"]]


def test_tree_snapshot_has_layout(client):
    data = client.post("/api/tree/generate", json={"values": [2, 5, 7, 10, 13, 15, 20]}).get_json()
    assert len(data["layout"]) == 7
    assert data["structure"]["root"] in data["layout"]


def test_unknown_kind_is_404(client):
    assert client.post("/api/widgets/generate", json={}).status_code == 404
    assert client.get("/api/widgets").status_code == 404


def test_operations_listing(client):
    data = client.get("/api/operations?structure=tree").get_json()
    keys = [op["key"] for op in data["operations"]]
    assert keys == ["tree.insert", "tree.delete", "tree.search", "tree.traverse"]


# ---------------------------------------------------------------------------
# Runs & playback
# ---------------------------------------------------------------------------
def test_run_commits_on_completion(client, clock):
    client.post("/api/array/generate", json={"values": [5, 3, 8, 1]})
    resp = client.post("/api/run", json={"operation": "array.insertion_sort", "speed": 100})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["summary"] == "Sorting complete"

    first = client.get("/api/state").get_json()
    assert [ev["sequence"] for ev in first["events"]] == [0]
    assert client.get("/api/array").get_json()["structure"]["values"] == [5, 3, 8, 1]

    clock.advance(1)
    state, seen = poll_until_done(client, clock)
    assert [0] + seen == list(range(body["total_events"]))
    assert state["summary"] == "Sorting complete"
    assert client.get("/api/array").get_json()["structure"]["values"] == [1, 3, 5, 8]


def test_cancel_keeps_committed_structure(client, clock):
    client.post("/api/array/generate", json={"values": [2, 1]})
    client.post("/api/run", json={"operation": "array.bubble_sort", "speed": 100})
    client.get("/api/state")

    resp = client.post("/api/playback/cancel")
    assert resp.get_json()["state"] == "cancelled"

    clock.advance(5)
    assert client.get("/api/state").get_json()["events"] == []
    assert client.get("/api/array").get_json()["structure"]["values"] == [2, 1]


def test_pause_resume_and_skip(client, clock):
    client.post("/api/array/generate", json={"values": [3, 2, 1]})
    client.post("/api/run", json={"operation": "array.selection_sort", "speed": 10})
    client.get("/api/state")

    assert client.post("/api/playback/pause").get_json()["state"] == "paused"
    clock.advance(10)
    assert client.get("/api/state").get_json()["events"] == []
    assert client.post("/api/playback/resume").get_json()["state"] == "playing"

    assert client.post("/api/playback/skip").get_json()["state"] == "finished"
    assert client.get("/api/array").get_json()["structure"]["values"] == [1, 2, 3]


def test_speed_change(client):
    client.post("/api/array/generate", json={"values": [1]})
    client.post("/api/run", json={"operation": "array.search", "params": {"value": 1}})
    assert client.post("/api/playback/speed", json={"speed": 90}).get_json()["speed"] == 90
    resp = client.post("/api/playback/speed", json={"speed": 1})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "speed"


def test_not_found_outcome_is_not_an_error(client):
    client.post("/api/tree/generate", json={"values": [2, 5, 7, 10, 13, 15, 20]})
    resp = client.post("/api/run", json={"operation": "tree.search", "params": {"value": 25}})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "not_found"
    assert resp.get_json()["summary"] == "Value 25 not found in the tree"


@pytest.mark.parametrize("payload, field", [
    ({"operation": "array.insert", "params": {"value": "abc"}}, "value"),
    ({"operation": "array.remove", "params": {"index": 99}}, "index"),
    ({"operation": "array.nope"}, "operation"),
    ({}, "operation"),
    ({"operation": "array.bubble_sort", "speed": 500}, "speed"),
])
def test_run_validation_errors(client, payload, field):
    client.post("/api/array/generate", json={"values": [1, 2]})
    resp = client.post("/api/run", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["field"] == field
    assert client.get("/api/array").get_json()["structure"]["values"] == [1, 2]


# ---------------------------------------------------------------------------
# Graph editing
# ---------------------------------------------------------------------------
def test_graph_editing(client):
    client.post("/api/graph/generate", json={"text": "A: B\nB: C"})

    resp = client.post("/api/graph/edge", json={"source": "A", "target": "A"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Self-loops are not allowed"

    data = client.post("/api/graph/node", json={}).get_json()
    assert [n["id"] for n in data["structure"]["nodes"]] == ["A", "B", "C", "D"]

    data = client.post("/api/graph/edge", json={"source": "C", "target": "D", "weight": 4}).get_json()
    assert {"id": "C-D", "source": "C", "target": "D", "weight": 4} in data["structure"]["edges"]

    data = client.delete("/api/graph/node/A").get_json()
    assert [e["id"] for e in data["structure"]["edges"]] == ["B-C", "C-D"]

    data = client.delete("/api/graph/edge", json={"source": "D", "target": "C"}).get_json()
    assert [e["id"] for e in data["structure"]["edges"]] == ["B-C"]


def test_graph_run_end_to_end(client, clock):
    client.post("/api/graph/generate", json={"text": "A: B(1) E(1)\nB: C(1)\nC: D(1)\nD: E(1)"})
    body = client.post("/api/run", json={
        "operation": "graph.dijkstra", "params": {"start": "A", "target": "C"}, "speed": 100,
    }).get_json()
    assert body["summary"] == "Shortest path A→C: A→B→C (distance 2)"

    state, _ = poll_until_done(client, clock)
    assert state["frame"]["path"] == ["A", "B", "C"]


def test_node_coordinates_validated(client):
    client.post("/api/graph/generate", json={"text": "A: B"})
    resp = client.post("/api/graph/node", json={"id": "C", "x": None})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "x"

    data = client.post("/api/graph/node", json={"id": "C", "x": "80", "y": 30}).get_json()
    node = [n for n in data["structure"]["nodes"] if n["id"] == "C"][0]
    assert (node["x"], node["y"]) == (80.0, 30.0)


def test_hyphenated_node_label_rejected(client):
    client.post("/api/graph/generate", json={"text": "A: B"})
    resp = client.post("/api/graph/node", json={"id": "B-C"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "node"


# ---------------------------------------------------------------------------
# Malformed requests
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("method, url", [
    ("post", "/api/run"),
    ("post", "/api/array/generate"),
    ("post", "/api/graph/node"),
    ("post", "/api/graph/edge"),
    ("delete", "/api/graph/edge"),
])
def test_non_object_body_is_400(client, method, url):
    resp = getattr(client, method)(url, json=[1, 2])
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object", "field": "body"}


def test_non_object_speed_body_is_400(client):
    client.post("/api/array/generate", json={"values": [2, 1]})
    client.post("/api/run", json={"operation": "array.bubble_sort"})
    resp = client.post("/api/playback/speed", json="fast")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "body"


def test_graph_text_must_be_string(client):
    resp = client.post("/api/graph/generate", json={"text": 5})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "text"


def test_operation_must_be_string(client):
    resp = client.post("/api/run", json={"operation": ["array.search"]})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "operation"


# ---------------------------------------------------------------------------
# Workspace lifetime & concurrency
# ---------------------------------------------------------------------------
def test_reads_do_not_create_workspaces(client):
    for _ in range(20):
        assert client.get("/api/array").status_code == 200
    assert len(main.WORKSPACES) == 0


def test_workspaces_are_capped(clock):
    main.WORKSPACES.clear()
    main.app.config.update(TESTING=True, CLOCK=clock, MAX_WORKSPACES=3)
    try:
        for _ in range(5):
            main.app.test_client().post("/api/array/generate", json={"values": [1]})
        assert len(main.WORKSPACES) == 3
    finally:
        main.app.config.pop("MAX_WORKSPACES", None)
        main.WORKSPACES.clear()


def test_evicted_workspace_is_404(clock):
    main.WORKSPACES.clear()
    main.app.config.update(TESTING=True, CLOCK=clock, MAX_WORKSPACES=1)
    try:
        first, second = main.app.test_client(), main.app.test_client()
        first.post("/api/array/generate", json={"values": [1]})
        second.post("/api/array/generate", json={"values": [2]})
        assert first.get("/api/state").status_code == 404
        assert second.get("/api/state").status_code == 200
    finally:
        main.app.config.pop("MAX_WORKSPACES", None)
        main.WORKSPACES.clear()


class SteppingClock:
    """Moves one second forward on every read, so every tick is due."""

    def __init__(self):
        self.now = 0.0
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            self.now += 1.0
            return self.now


def test_concurrent_polls_deliver_each_event_once():
    ws = main.Workspace(EngineConfig(), clock=SteppingClock())
    run = ws.start("array.bubble_sort", {}, 100)
    seen = []
    seen_lock = threading.Lock()

    def poller():
        for _ in range(len(run.events)):
            with ws.lock:
                fresh = ws.poll()
            with seen_lock:
                seen.extend(ev.sequence for ev in fresh)

    threads = [threading.Thread(target=poller) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(seen) == list(range(len(run.events)))
    assert ws.controller.is_finished


def test_toggle_flips_play_and_pause(client):
    client.post("/api/array/generate", json={"values": [3, 2, 1]})
    client.post("/api/run", json={"operation": "array.bubble_sort"})
    assert client.post("/api/playback/toggle").get_json()["state"] == "paused"
    assert client.post("/api/playback/toggle").get_json()["state"] == "playing"
