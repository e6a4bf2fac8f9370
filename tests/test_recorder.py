import json
import logging

import pytest

from algorithms.step import OutcomeStatus
from engine import Recorder, compare
from graph import Graph
from structures import ArrayModel, BinarySearchTree, ValidationError


@pytest.fixture
def rec():
    return Recorder()


def test_run_produces_events_and_metrics(rec):
    run = rec.run("array.insertion_sort", ArrayModel([5, 3, 8, 1]))

    assert run.outcome.status is OutcomeStatus.COMPLETED
    assert run.structure.values == [1, 3, 5, 8]
    assert len(run.events) == len(run.steps) == run.metrics.total_events
    assert run.metrics.shifts == 4
    assert run.metrics.comparisons == 5
    assert run.metrics.swaps == 0
    assert rec.last is run


def test_dijkstra_metrics(rec, cycle_graph):
    run = rec.run("graph.dijkstra", cycle_graph, start="A", target="C")
    assert run.metrics.relaxations > 0
    assert run.metrics.visits == len(run.outcome.data["order"])


@pytest.mark.parametrize("key, structure, params, field", [
    ("array.quick_sort", ArrayModel([1]), {}, "operation"),
    ("array.bubble_sort", BinarySearchTree(), {}, "structure"),
    ("array.search", ArrayModel([1]), {}, "value"),
    ("array.search", ArrayModel([1]), {"value": 1, "colour": "red"}, "colour"),
    ("graph.bfs", Graph(), {"start": ""}, "start"),
])
def test_validation(rec, key, structure, params, field):
    with pytest.raises(ValidationError) as info:
        rec.run(key, structure, **params)
    assert info.value.field == field
    assert rec.history == []


def test_run_is_logged(rec, caplog):
    with caplog.at_level(logging.INFO, logger="engine.recorder"):
        rec.run("array.search", ArrayModel([4, 2]), value=2)
    assert "array.search" in caplog.text
    assert "found" in caplog.text


def test_export_is_serialisable(rec, cycle_graph):
    run = rec.run("graph.bfs", cycle_graph, start="A")
    data = run.export()
    json.dumps(data)
    assert data["operation"] == "graph.bfs"
    assert data["events"][0]["sequence"] == 0


def test_compare_prefers_fewer_comparisons(rec):
    values = ArrayModel([1, 2, 3, 4, 5, 6])
    insertion = rec.run("array.insertion_sort", values)
    selection = rec.run("array.selection_sort", values)

    result = compare(insertion, selection)
    assert result.winner_comparisons == "Insertion Sort"
    assert result.left.comparisons == 5
    assert result.right.comparisons == 15


def test_compare_tie(rec):
    values = ArrayModel([3, 1, 2])
    a = rec.run("array.bubble_sort", values)
    b = rec.run("array.selection_sort", values)
    assert compare(a, b).winner_comparisons == "tie"
