"""
main.py — Data-Structure Visualizer Flask API
===============================================
The JSON boundary a browser renderer talks to.  It owns no drawing code:
it generates structures, starts runs and is polled for the events the
playback controller has delivered since the last poll.

Routes:
  POST   /api/<kind>/generate      – random (or caller-supplied) array / list / tree / graph
  GET    /api/<kind>               – committed structure snapshot
  GET    /api/operations           – operation registry
  POST   /api/run                  – run an operation, start its playback
  GET    /api/state                – tick playback; newly delivered events + frame
  POST   /api/playback/<action>    – pause / resume / toggle / cancel / speed / skip
  POST   /api/graph/node           – add a node (next free letter unless "id" given)
  DELETE /api/graph/node/<id>      – remove a node and its edges
  POST   /api/graph/edge           – add an edge
  DELETE /api/graph/edge           – remove an edge

State management:
  Structures can't live in the cookie session (a playback controller is
  not serialisable), so the Flask session only carries a workspace id.
  WORKSPACES maps that id to an in-memory Workspace holding:
    • the committed array / list / tree / graph
    • a Recorder and a PlaybackController
    • the structure a running operation will commit once playback finishes
  Only mutating routes create a workspace; read-only routes fall back to
  the seeded defaults.  At most MAX_WORKSPACES are kept, least recently
  used evicted first, and each route holds the workspace's lock.
"""

import logging
import os
import secrets
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from flask import Flask, abort, current_app, jsonify, request, session

from algorithms import STRUCTURES, algorithms_for, list_algorithms
from engine import EngineConfig, PlaybackController, Recorder, Run
from graph import Graph
from structures import ArrayModel, BinarySearchTree, LinkedList, ValidationError, require_int

logger = logging.getLogger(__name__)


def load_config() -> EngineConfig:
    path = os.environ.get("DSVIZ_CONFIG")
    if not path:
        return EngineConfig()
    logger.info("loading engine config from %s", path)
    return EngineConfig.load_from_file(path)


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config["ENGINE_CONFIG"] = load_config()
app.config["CLOCK"]         = time.monotonic


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
MAX_WORKSPACES = 256

DEFAULT_STRUCTURES = {
    "array": ArrayModel.generate_random,
    "list":  LinkedList.generate_random,
    "tree":  BinarySearchTree.generate_random,
    "graph": Graph.generate_random,
}


class Workspace:
    """
    One visitor's structures plus the playback of their latest run.

    A run's resulting structure is only committed when its playback
    completes; cancelling (or superseding) a run leaves the previously
    committed structure in place.  Routes hold `lock` for every read or
    write of the structures, the controller and the cursor.
    """

    def __init__(self, config: EngineConfig, clock=time.monotonic, seed: Optional[int] = 42):
        self.structures: Dict[str, Any] = {kind: make(seed=seed) for kind, make in DEFAULT_STRUCTURES.items()}
        self.recorder   = Recorder()
        self.controller = PlaybackController(on_complete=self._commit, clock=clock, config=config)
        self.lock       = threading.RLock()
        self.run:     Optional[Run]                  = None
        self.pending: Optional[Tuple[int, str, Any]] = None   # (session, kind, structure)
        self.cursor:  int                            = 0      # events already handed out

    def start(self, key: str, params: Dict[str, Any], speed=None) -> Run:
        if speed is not None:
            self.controller.config.validate_speed(speed)
        kind = key.split(".", 1)[0]
        if kind not in self.structures:
            raise ValidationError(f"Unknown operation: {key}", "operation")

        run = self.recorder.run(key, self.structures[kind], **params)
        session_id   = self.controller.start(run.events, speed)
        self.run     = run
        self.pending = (session_id, run.info.structure, run.structure)
        self.cursor  = 0
        return run

    def poll(self):
        self.controller.tick()
        fresh = self.controller.delivered[self.cursor:]
        self.cursor = self.controller.position
        return fresh

    def cancel(self) -> bool:
        self.pending = None
        return self.controller.cancel()

    def _commit(self, session_id: int) -> None:
        if self.pending is None or self.pending[0] != session_id:
            return
        _, kind, structure = self.pending
        self.structures[kind] = structure
        self.pending = None
        logger.debug("committed %s after playback session %d", kind, session_id)


# Least recently used first; the oldest workspace is evicted past MAX_WORKSPACES.
WORKSPACES: "OrderedDict[str, Workspace]" = OrderedDict()
WORKSPACES_LOCK = threading.Lock()


def find_workspace() -> Optional[Workspace]:
    with WORKSPACES_LOCK:
        wid = session.get("workspace_id")
        ws  = WORKSPACES.get(wid)
        if ws is not None:
            WORKSPACES.move_to_end(wid)
        return ws


def get_workspace() -> Workspace:
    """The caller's workspace, created on first use.  Only mutating routes call this."""
    with WORKSPACES_LOCK:
        wid = session.get("workspace_id")
        if wid in WORKSPACES:
            WORKSPACES.move_to_end(wid)
            return WORKSPACES[wid]

        wid = secrets.token_hex(8)
        WORKSPACES[wid] = Workspace(current_app.config["ENGINE_CONFIG"], current_app.config["CLOCK"])
        session["workspace_id"] = wid
        limit = current_app.config.get("MAX_WORKSPACES", MAX_WORKSPACES)
        while len(WORKSPACES) > limit:
            evicted, _ = WORKSPACES.popitem(last=False)
            logger.info("evicted idle workspace %s", evicted)
        return WORKSPACES[wid]


def require_workspace() -> Workspace:
    ws = find_workspace()
    if ws is None:
        abort(404, description="No active session")
    return ws


def require_kind(kind: str) -> str:
    if kind not in STRUCTURES:
        abort(404, description=f"Unknown structure kind: {kind}")
    return kind


def json_body() -> dict:
    """The request's JSON object; an absent body counts as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object", "body")
    return data


def snapshot(kind: str, structure: Any) -> dict:
    data = {"kind": kind, "structure": structure.to_dict()}
    if kind == "tree":
        data["layout"] = {nid: list(xy) for nid, xy in structure.layout().items()}
    return data


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    return jsonify(exc.to_dict()), 400


@app.errorhandler(404)
def handle_not_found(exc):
    return jsonify({"error": exc.description}), 404


# ---------------------------------------------------------------------------
# API: Structures
# ---------------------------------------------------------------------------
@app.route("/api/<kind>/generate", methods=["POST"])
def api_generate(kind):
    kind = require_kind(kind)
    data = json_body()
    seed = require_int(data["seed"], "seed") if data.get("seed") is not None else None

    if kind == "graph":
        text = data.get("text")
        if text is not None and not isinstance(text, str):
            raise ValidationError("'text' must be an adjacency-list string", "text")
        structure: Any = Graph.from_adjacency_list(text) if text else Graph.generate_random(seed=seed)
    elif data.get("values") is not None:
        values = data["values"]
        if not isinstance(values, list):
            raise ValidationError("'values' must be a list of numbers", "values")
        if kind == "array":
            structure = ArrayModel(values)
        elif kind == "list":
            structure = LinkedList.from_values(values)
        else:
            structure = BinarySearchTree.build_balanced(values)
    else:
        structure = DEFAULT_STRUCTURES[kind](seed=seed)

    ws = get_workspace()
    with ws.lock:
        if ws.pending and ws.pending[1] == kind:
            ws.cancel()
        ws.structures[kind] = structure
        return jsonify(snapshot(kind, structure))


@app.route("/api/<kind>", methods=["GET"])
def api_structure(kind):
    kind = require_kind(kind)
    ws   = find_workspace()
    if ws is None:
        return jsonify(snapshot(kind, DEFAULT_STRUCTURES[kind](seed=42)))
    with ws.lock:
        return jsonify(snapshot(kind, ws.structures[kind]))


@app.route("/api/operations", methods=["GET"])
def api_operations():
    structure = request.args.get("structure")
    infos = algorithms_for(require_kind(structure)) if structure else list_algorithms()
    return jsonify({"operations": [a.to_dict() for a in infos]})


# ---------------------------------------------------------------------------
# API: Run & Playback
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data   = json_body()
    key    = data.get("operation")
    params = data.get("params") or {}
    if not key:
        raise ValidationError("Please choose an operation", "operation")
    if not isinstance(key, str):
        raise ValidationError("'operation' must be a string", "operation")
    if not isinstance(params, dict):
        raise ValidationError("'params' must be an object", "params")

    ws = get_workspace()
    with ws.lock:
        run = ws.start(key, params, data.get("speed"))
    return jsonify({
        "operation":    run.info.key,
        "status":       run.outcome.status.value,
        "summary":      run.outcome.summary,
        "total_events": len(run.events),
        "metrics":      run.metrics.to_dict(),
        "pseudocode":   list(run.info.pseudocode),
    })


@app.route("/api/state", methods=["GET"])
def api_state():
    ws = require_workspace()
    with ws.lock:
        fresh = ws.poll()
        state = ws.controller.to_dict()
        state["events"] = [ev.to_dict() for ev in fresh]
        if ws.run is not None:
            state["operation"] = ws.run.info.key
            state["summary"]   = ws.run.outcome.summary if ws.controller.is_finished else None
    return jsonify(state)


@app.route("/api/playback/<action>", methods=["POST"])
def api_playback(action):
    ws = require_workspace()
    c  = ws.controller

    with ws.lock:
        if action == "pause":
            c.pause()
        elif action == "resume":
            c.resume()
        elif action == "toggle":
            c.toggle_play()
        elif action == "cancel":
            ws.cancel()
        elif action == "skip":
            c.jump_to_end()
        elif action == "speed":
            c.set_speed(json_body().get("speed"))
        else:
            abort(404, description=f"Unknown playback action: {action}")
        return jsonify(c.to_dict())


# ---------------------------------------------------------------------------
# API: Graph editing
# ---------------------------------------------------------------------------
def _editable_graph(ws: Workspace) -> Graph:
    if ws.pending and ws.pending[1] == "graph":
        ws.cancel()
    return ws.structures["graph"]


@app.route("/api/graph/node", methods=["POST"])
def api_add_node():
    data = json_body()
    ws   = get_workspace()
    with ws.lock:
        g = _editable_graph(ws)
        if data.get("id"):
            g.add_node(data["id"], x=data.get("x", 200), y=data.get("y", 150))
        else:
            g.add_next_node()
        return jsonify(snapshot("graph", g))


@app.route("/api/graph/node/<node_id>", methods=["DELETE"])
def api_remove_node(node_id):
    ws = get_workspace()
    with ws.lock:
        g = _editable_graph(ws)
        g.remove_node(node_id)
        return jsonify(snapshot("graph", g))


@app.route("/api/graph/edge", methods=["POST"])
def api_add_edge():
    data = json_body()
    ws   = get_workspace()
    with ws.lock:
        g = _editable_graph(ws)
        g.add_edge(data.get("source"), data.get("target"), data.get("weight", 1))
        return jsonify(snapshot("graph", g))


@app.route("/api/graph/edge", methods=["DELETE"])
def api_remove_edge():
    data = json_body()
    ws   = get_workspace()
    with ws.lock:
        g = _editable_graph(ws)
        g.remove_edge(data.get("source"), data.get("target"))
        return jsonify(snapshot("graph", g))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = app.config["ENGINE_CONFIG"]
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Data-Structure Visualizer starting on http://localhost:5000")
    app.run(debug=True, port=5000)
