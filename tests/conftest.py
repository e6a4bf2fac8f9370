import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from algorithms.step import drain
from graph import Graph


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def run():
    """Drain an algorithm generator: run(fn, structure, **params) -> (steps, outcome)."""

    def _run(fn, structure, **params):
        return drain(fn(structure, **params))

    return _run


@pytest.fixture
def cycle_graph() -> Graph:
    """A..E in a ring, every weight 1."""
    g = Graph()
    for label in "ABCDE":
        g.add_node(label)
    for a, b in [("A", "B"), ("B", "C"), ("C", "D"), ("D", "E"), ("E", "A")]:
        g.add_edge(a, b, 1)
    return g
