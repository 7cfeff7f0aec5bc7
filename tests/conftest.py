from __future__ import annotations

import pytest

from adjgraph.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; every test starts from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _build_weighted_scenario(graph):
    """Five vertices 1..5 and eleven weighted arcs; re-adding 4 -> 1 must fail."""
    for key in range(1, 6):
        assert graph.add_vertex(key)

    assert graph.add_arc(2, 1, 1.4)
    assert graph.add_arc(1, 2, 1.5)
    assert graph.add_arc(3, 5, 0.7)
    assert graph.add_arc(4, 1, 0.3)
    assert not graph.add_arc(4, 1, 1.2)
    assert graph.add_arc(3, 4, 2.0)
    assert graph.add_arc(2, 5, 0.5)
    assert graph.add_arc(1, 5, 1.3)
    assert graph.add_arc(5, 3, 0.8)
    assert graph.add_arc(5, 4, 0.1)
    assert graph.add_arc(4, 3, 0.8)
    assert graph.add_arc(1, 3, 0.6)
    return graph


@pytest.fixture
def build_weighted_scenario():
    return _build_weighted_scenario
