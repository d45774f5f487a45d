"""
Tests for strategy presets and the Manhattan heuristic.
"""

import math

import pytest

from errors import InvalidConfig, OutOfRange
from heuristics import manhattan_distance, manhattan_to
from paths import reconstruct_path
from search_engine import PriorityFirstSearchEngine
from search_types import SearchStatus, new_record_table
from square_grid import SquareGrid
from strategies import SearchStrategy, make_config


def _run(grid, strategy, start, goal=None, with_heuristic=True):
    heuristic = manhattan_to(grid, goal) if (goal is not None and with_heuristic) else None
    config = make_config(strategy, [start], heuristic=heuristic, goal=goal)
    records = new_record_table(grid.node_count)
    state = PriorityFirstSearchEngine().search(grid, config, records)
    return state, records


def test_manhattan_distance():
    g = SquareGrid(5, 5)

    assert manhattan_distance(g, g.to_id(0, 0), g.to_id(3, 4)) == 7
    assert manhattan_distance(g, g.to_id(2, 2), g.to_id(2, 2)) == 0
    assert manhattan_to(g, g.to_id(4, 0))(g.to_id(0, 0)) == 4


def test_manhattan_to_rejects_bad_goal():
    g = SquareGrid(2, 2)

    with pytest.raises(OutOfRange):
        manhattan_to(g, 9)


def test_heuristic_strategies_require_a_heuristic():
    with pytest.raises(InvalidConfig):
        make_config(SearchStrategy.A_STAR, [0])
    with pytest.raises(InvalidConfig):
        make_config(SearchStrategy.GREEDY_BEST_FIRST, [0], goal=3)


def test_reopen_flags_per_strategy():
    h = lambda node: 0
    assert make_config(SearchStrategy.DIJKSTRA, [0]).allow_reopen is True
    assert make_config(SearchStrategy.A_STAR, [0], heuristic=h).allow_reopen is True
    assert make_config(SearchStrategy.BREADTH_FIRST, [0]).allow_reopen is False
    assert make_config(SearchStrategy.GREEDY_BEST_FIRST, [0], heuristic=h).allow_reopen is False


def test_breadth_first_depth_is_hop_count_despite_weights():
    g = SquareGrid(4, 3)
    g.set_weight(g.to_id(1, 0), 5)
    g.set_weight(g.to_id(1, 1), 5)
    start = g.to_id(0, 0)
    state, records = _run(g, SearchStrategy.BREADTH_FIRST, start)

    assert state.status is SearchStatus.EXHAUSTED
    for node in g.nodes():
        assert records[node].depth == manhattan_distance(g, start, node)


def test_goal_stops_search_early():
    g = SquareGrid(6, 6)
    goal = g.to_id(2, 0)
    state, records = _run(g, SearchStrategy.DIJKSTRA, g.to_id(0, 0), goal=goal)

    assert state.status is SearchStatus.STOPPED_EARLY
    assert state.current == goal
    assert records[goal].cost_so_far == 2
    assert not all(r.visited for r in records)


def test_astar_finds_dijkstra_cost_with_fewer_steps():
    g = SquareGrid(10, 10)
    start, goal = g.to_id(1, 4), g.to_id(8, 5)

    dj_state, dj_records = _run(g, SearchStrategy.DIJKSTRA, start, goal=goal)
    as_state, as_records = _run(g, SearchStrategy.A_STAR, start, goal=goal)

    assert as_records[goal].cost_so_far == dj_records[goal].cost_so_far == 8
    assert as_state.step_count < dj_state.step_count


def test_astar_matches_dijkstra_on_weighted_terrain():
    g = SquareGrid(10, 10)
    for x in range(3, 8):
        for y in range(1, 9):
            g.set_weight(g.to_id(x, y), 5)
    for x, y in ((1, 7), (2, 7), (3, 7)):
        g.set_weight(g.to_id(x, y), math.inf)
    start, goal = g.to_id(1, 4), g.to_id(8, 5)

    _, dj_records = _run(g, SearchStrategy.DIJKSTRA, start, goal=goal)
    _, as_records = _run(g, SearchStrategy.A_STAR, start, goal=goal)

    assert as_records[goal].cost_so_far == dj_records[goal].cost_so_far


def test_heuristic_presets_fill_record_heuristic():
    g = SquareGrid(5, 5)
    goal = g.to_id(4, 4)
    _, records = _run(g, SearchStrategy.A_STAR, g.to_id(0, 0), goal=goal)

    visited = [n for n in g.nodes() if records[n].visited]
    for node in visited:
        rec = records[node]
        assert rec.heuristic == manhattan_distance(g, goal, node)
        assert rec.priority == pytest.approx(rec.cost_so_far + 1.01 * rec.heuristic)


def test_greedy_heads_straight_for_goal_on_open_grid():
    g = SquareGrid(8, 8)
    start, goal = g.to_id(0, 0), g.to_id(5, 3)
    state, records = _run(g, SearchStrategy.GREEDY_BEST_FIRST, start, goal=goal)

    assert state.current == goal
    assert len(reconstruct_path(records, goal)) - 1 == 8
    # Greedy only ever expands tiles on its way down the heuristic
    assert state.step_count == 9
