from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

# Ensure the src directory is importable when graphrx isn't installed
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from graphrx import Graph, GraphRx  # noqa: E402
from graphrx.config import load_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("GRAPHRX_DISABLED_EVENTS", raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def graph() -> Graph:
    """Provides a clean Graph instance for each test."""
    return Graph()


@pytest.fixture
def graph_rx(graph: Graph) -> Iterator[GraphRx]:
    rx = GraphRx(graph)
    yield rx
    if not rx.is_closed:
        rx.shutdown()


class Recorder:
    """Collects every notification a stream delivers."""

    def __init__(self) -> None:
        self.values: list = []
        self.errors: list[BaseException] = []
        self.completed = 0

    def on_next(self, value: object) -> None:
        self.values.append(value)

    def on_error(self, error: BaseException) -> None:
        self.errors.append(error)

    def on_completed(self) -> None:
        self.completed += 1

    def subscribe(self, observable):
        return observable.subscribe(self.on_next, self.on_error, self.on_completed)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_recorder() -> type[Recorder]:
    return Recorder
