"""
Tests for stepwise replay and scrubbing.
"""

import math

from replay import SearchReplay, run_to_step
from search_engine import PriorityFirstSearchEngine
from search_types import SearchConfig, SearchStatus, new_record_table
from weighted_graph import WeightedGraph
from square_grid import SquareGrid


def _grid():
    g = SquareGrid(5, 4)
    g.set_weight(g.to_id(2, 1), math.inf)
    g.set_weight(g.to_id(2, 2), math.inf)
    g.set_weight(g.to_id(3, 3), 3)
    return g


def test_run_to_step_is_repeatable():
    g = _grid()
    config = SearchConfig([g.to_id(0, 1)])

    for k in range(0, 25):
        assert run_to_step(g, config, k) == run_to_step(g, config, k)


def test_run_to_step_matches_live_iteration():
    g = _grid()
    config = SearchConfig([g.to_id(0, 1)])
    records = new_record_table(g.node_count)
    live = PriorityFirstSearchEngine().iter_states(g, config, records)

    for k, live_state in enumerate(live):
        replayed_state, replayed_records = run_to_step(g, config, k)
        assert replayed_state == live_state
        assert replayed_records == records


def test_position_zero_is_initial_state():
    g = _grid()
    start = g.to_id(0, 1)
    state, records = run_to_step(g, SearchConfig([start]), 0)

    assert state.step_count == 0
    assert state.current is None
    assert state.frontier == frozenset({start})
    assert [n for n in g.nodes() if records[n].visited] == [start]


def test_seek_clamps_position():
    g = _grid()
    replay = SearchReplay(g, SearchConfig([0]))

    # 18 open tiles, each expanded exactly once
    assert replay.max_position == 18
    replay.seek(-4)
    assert replay.position == 0
    replay.step_back()
    assert replay.position == 0
    replay.seek(10_000)
    assert replay.position == replay.max_position
    assert replay.at_end()


def test_scrubbing_back_and_forth_reproduces_states():
    g = _grid()
    replay = SearchReplay(g, SearchConfig([0]))

    forward = replay.seek(7)
    replay.step_forward()
    replay.step_forward()
    replay.step_back()
    replay.step_back()

    assert replay.position == 7
    assert replay.current() == forward


def test_states_cover_every_position_and_settle():
    g = _grid()
    replay = SearchReplay(g, SearchConfig([0]))
    states = list(replay.states())

    assert len(states) == replay.max_position + 1
    assert [s.step_count for s in states[:3]] == [0, 1, 2]
    # The last position is the first exhausted one
    assert states[-1].status is SearchStatus.EXHAUSTED
    assert states[-2].status is SearchStatus.RUNNING


def test_replay_respects_early_exit():
    g = _grid()
    goal = g.to_id(4, 0)
    config = SearchConfig([0], should_stop=lambda s: s.current == goal)
    replay = SearchReplay(g, config)

    state, _ = replay.seek(replay.max_position)

    assert state.status is SearchStatus.STOPPED_EARLY
    assert state.current == goal


def test_explicit_bound_past_the_end_repeats_terminal_state():
    g = _grid()
    replay = SearchReplay(g, SearchConfig([0]), max_position=g.node_count)
    states = list(replay.states())

    assert states[-1].status is SearchStatus.EXHAUSTED
    assert states[-1] == states[-2]


def test_default_bound_reaches_end_of_a_reopening_search():
    """Reopening takes more steps than there are nodes; the scrubber must still reach the end."""
    # 0 -> 4 (weight 5) -> 1 and 0 -> 2 (weight 1) -> 1; 1 -> 3
    g = WeightedGraph(5, [[4, 2], [3], [1], [], [1]], weights=[1, 1, 1, 1, 5])
    priority = {0: 0, 1: 0, 2: 9, 3: 0, 4: 0}
    config = SearchConfig([0], priority=lambda node, record: priority[node])
    replay = SearchReplay(g, config)

    assert replay.max_position == 7
    state, records = replay.seek(10**6)

    assert state.step_count == 7
    assert state.status is SearchStatus.EXHAUSTED
    assert records[1].parent == 2
    assert replay.at_end()

    replay.seek(5)
    assert not replay.at_end()
