"""Tests for the stepwise search session and the searcher contract."""

import logging

import numpy as np
import pytest

from grid_pathfinder.core.data_models import SearchStatus
from grid_pathfinder.search import (
    AStarClosedSet, BreadthFirstSearch, SearchEvent, create_searcher
)

ORIGIN = (0.0, 0.0, 0.0)
FAR_AWAY = (40.0, 0.0, 40.0)


def always_valid(position, direction):
    return True


class CountingOracle:
    """Always-true oracle that records its calls."""

    def __init__(self):
        self.calls = 0

    def __call__(self, position, direction):
        self.calls += 1
        return True


class TestSearchSession:
    """Test SearchSession stepping, running and cancellation."""

    @pytest.fixture
    def searcher(self):
        """BFS searcher on an unbounded open plane."""
        return BreadthFirstSearch(destination=(2, 0, 2), start=ORIGIN, is_valid_move=always_valid)

    def test_session_starts_idle(self):
        """Test search_path does no work before the first step."""
        oracle = CountingOracle()
        searcher = BreadthFirstSearch(destination=(2, 0, 2), start=ORIGIN, is_valid_move=oracle)

        session = searcher.search_path(1.0)

        assert session.status == SearchStatus.IDLE
        assert session.ticks == 0
        assert not session.done
        assert oracle.calls == 0

    def test_step_expands_one_node(self, searcher):
        """Test each step reports one expansion."""
        session = searcher.search_path(1.0)

        first = session.step()
        assert first.tick == 1
        assert first.node.position == ORIGIN
        assert session.status == SearchStatus.RUNNING
        assert session.statistics.nodes_expanded == 1

        second = session.step()
        assert second.tick == 2
        assert session.ticks == 2

    def test_iterate_to_completion(self, searcher):
        """Test iterating a session drives it to the found state."""
        session = searcher.search_path(1.0)
        steps = list(session)

        assert [s.tick for s in steps] == list(range(1, len(steps) + 1))
        assert session.done
        assert session.status == SearchStatus.FOUND
        # The goal expansion ends the routine without yielding
        assert len(steps) == session.result.statistics.nodes_expanded - 1
        assert session.step() is None

    def test_run_returns_result(self, searcher):
        """Test run drives the session and records timing."""
        session = searcher.search_path(1.0)
        result = session.run()

        assert result is session.result
        assert result.success
        assert result.strategy == "bfs"
        assert result.statistics.computation_time >= 0.0

    def test_cancel_between_ticks(self):
        """Test cancel ends the session without a path."""
        searcher = BreadthFirstSearch(destination=FAR_AWAY, start=ORIGIN, is_valid_move=always_valid)
        paths = []
        searcher.on_path_found.add_listener(paths.append)

        session = searcher.search_path(1.0)
        for _ in range(3):
            session.step()
        session.cancel()

        assert session.status == SearchStatus.CANCELLED
        assert not session.result.success
        assert session.result.termination_reason == "cancelled"
        assert session.result.statistics.nodes_expanded == 3
        assert session.step() is None
        assert paths == []

    def test_cancel_before_start(self, searcher):
        """Test a session can be dropped before it expands anything."""
        session = searcher.search_path(1.0)
        session.cancel()

        assert session.status == SearchStatus.CANCELLED
        assert session.result.statistics.nodes_expanded == 0

    def test_cancel_after_finish_is_noop(self, searcher):
        """Test cancel does not overwrite a finished result."""
        session = searcher.search_path(1.0)
        session.run()
        session.cancel()

        assert session.status == SearchStatus.FOUND
        assert session.result.success

    def test_tick_limit(self):
        """Test run(max_ticks) cancels with reason tick_limit."""
        searcher = AStarClosedSet(destination=FAR_AWAY, start=ORIGIN,
                                  is_valid_move=always_valid, heuristic=lambda p, d: 0.0)
        session = searcher.search_path(1.0)
        result = session.run(max_ticks=5)

        assert not result.success
        assert result.termination_reason == "tick_limit"
        assert result.statistics.nodes_expanded == 5
        assert session.status == SearchStatus.CANCELLED

    def test_oracle_error_closes_session(self):
        """Test a raising oracle ends the session so later calls stay safe."""
        calls = []

        def flaky_oracle(position, direction):
            calls.append(position)
            if len(calls) == 3:
                raise OSError("collision query failed")
            return True

        received = []
        searcher = BreadthFirstSearch(destination=FAR_AWAY, start=ORIGIN,
                                      is_valid_move=flaky_oracle,
                                      statistics_sink=lambda name, stats: received.append(name))
        session = searcher.search_path(1.0)

        with pytest.raises(OSError):
            session.run()

        assert session.done
        assert session.status == SearchStatus.CANCELLED
        assert not session.result.success
        assert session.result.termination_reason == "error"
        assert received == ["bfs"]

        assert session.step() is None
        assert session.run() is session.result
        assert received == ["bfs"]

    def test_listener_error_closes_session(self):
        """Test a raising on_path_found listener still finishes the session."""
        searcher = BreadthFirstSearch(destination=(1, 0, 0), start=ORIGIN, is_valid_move=always_valid)

        def broken(path):
            raise RuntimeError("renderer gone")

        searcher.on_path_found.add_listener(broken)
        session = searcher.search_path(1.0)

        with pytest.raises(RuntimeError, match="renderer gone"):
            list(session)

        assert session.status == SearchStatus.CANCELLED
        assert session.step() is None

    def test_sessions_do_not_share_state(self):
        """Test later configuration changes do not leak into a running session."""
        searcher = BreadthFirstSearch(destination=(1, 0, 0), start=ORIGIN, is_valid_move=always_valid)
        first = searcher.search_path(1.0)
        first.step()

        searcher.set_destination((0, 0, 3))
        second = searcher.search_path(1.0)

        assert first.run().positions()[-1] == (1.0, 0.0, 0.0)
        assert second.run().positions()[-1] == (0.0, 0.0, 3.0)

    def test_start_override(self, searcher):
        """Test search_path(start=...) overrides the configured start."""
        result = searcher.search(1.0, start=(1, 0, 1))

        assert result.positions()[0] == (1.0, 0.0, 1.0)
        assert result.steps == 1


class TestSearcherContract:
    """Test the PathSearch host-facing contract."""

    def test_missing_destination(self):
        """Test searching without a destination fails fast."""
        searcher = BreadthFirstSearch(start=ORIGIN, is_valid_move=always_valid)
        with pytest.raises(RuntimeError, match="No destination configured"):
            searcher.search_path(1.0)

    def test_missing_oracle(self):
        """Test searching without a validity oracle fails fast."""
        searcher = BreadthFirstSearch(destination=(1, 0, 1), start=ORIGIN)
        with pytest.raises(RuntimeError, match="No validity oracle configured"):
            searcher.search_path(1.0)

    def test_missing_start(self):
        """Test searching without a start position fails fast."""
        searcher = BreadthFirstSearch(destination=(1, 0, 1), is_valid_move=always_valid)
        with pytest.raises(RuntimeError, match="No start position configured"):
            searcher.search_path(1.0)

    @pytest.mark.parametrize("step", [0, -1.0, True, float('nan'), float('inf'), "1"])
    def test_invalid_step(self, step):
        """Test non-positive, non-finite and non-numeric steps are rejected."""
        searcher = BreadthFirstSearch(destination=(1, 0, 1), start=ORIGIN, is_valid_move=always_valid)
        with pytest.raises(ValueError, match="step_distance"):
            searcher.search_path(step)

    def test_numpy_step(self):
        """Test numpy scalar step distances are accepted."""
        searcher = BreadthFirstSearch(destination=(2, 0, 0), start=ORIGIN, is_valid_move=always_valid)
        result = searcher.search(np.int64(2))

        assert result.success
        assert result.steps == 1

    def test_setters(self):
        """Test setters quantize and store host inputs."""
        searcher = create_searcher('astar')
        searcher.set_destination([1.0000001, -0.0, 2])
        searcher.set_start((0, 0, 0))
        searcher.set_validity_oracle(always_valid)

        assert searcher.destination == (1.0, 0.0, 2.0)
        assert searcher.start == ORIGIN
        assert searcher.is_valid_move is always_valid

    def test_path_found_fires_once(self):
        """Test on_path_found receives the start-to-destination path once."""
        searcher = AStarClosedSet(destination=(2, 0, 1), start=ORIGIN, is_valid_move=always_valid)
        paths = []
        searcher.on_path_found.add_listener(paths.append)

        result = searcher.search(1.0)

        assert len(paths) == 1
        assert paths[0] is result.path
        assert paths[0][0].position == ORIGIN
        assert paths[0][-1].position == (2.0, 0.0, 1.0)

    def test_node_visited_can_attach_marker(self):
        """Test hosts can tag expanded nodes through on_node_visited."""
        searcher = BreadthFirstSearch(destination=(1, 0, 0), start=ORIGIN, is_valid_move=always_valid)

        def mark(node):
            node.marker = f"marker@{node.position}"

        searcher.on_node_visited.add_listener(mark)
        result = searcher.search(1.0)

        assert all(node.marker is not None for node in result.path)

    def test_statistics_sink(self):
        """Test the sink receives strategy name and statistics per session."""
        received = []
        searcher = BreadthFirstSearch(destination=(1, 0, 1), start=ORIGIN,
                                      is_valid_move=always_valid,
                                      statistics_sink=lambda name, stats: received.append((name, stats)))

        result = searcher.search(1.0)
        searcher.search_path(1.0).cancel()

        assert len(received) == 2
        assert received[0] == ("bfs", result.statistics)

    def test_completion_logged(self, caplog):
        """Test a finished search logs node count and time at INFO."""
        searcher = AStarClosedSet(destination=(2, 0, 2), start=ORIGIN, is_valid_move=always_valid)

        with caplog.at_level(logging.INFO, logger="grid_pathfinder.search"):
            result = searcher.search(1.0)

        messages = [r.getMessage() for r in caplog.records]
        expected = f"nodes expanded = {result.statistics.nodes_expanded}"
        assert any("A* (PQ+ClosedSet) search complete" in m and expected in m for m in messages)

    def test_completion_log_demoted(self, caplog):
        """Test log_statistics=False moves the summary to DEBUG."""
        searcher = BreadthFirstSearch(destination=(1, 0, 0), start=ORIGIN,
                                      is_valid_move=always_valid, log_statistics=False)

        with caplog.at_level(logging.INFO, logger="grid_pathfinder.search"):
            searcher.search(1.0)

        assert not any("search complete" in r.getMessage() for r in caplog.records)


class TestSearchEvent:
    """Test SearchEvent listener list."""

    def test_add_remove_invoke(self):
        """Test listeners fire in order and can be removed."""
        event = SearchEvent()
        calls = []
        first = lambda x: calls.append(('first', x))
        second = lambda x: calls.append(('second', x))

        event.add_listener(first)
        event.add_listener(second)
        event.invoke(1)
        event.remove_listener(first)
        event.invoke(2)

        assert calls == [('first', 1), ('second', 1), ('second', 2)]
        assert len(event) == 1
