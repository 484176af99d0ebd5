import unittest
from collections import deque
from unittest.mock import patch

import networkx as nx

from mpm.domain.network import TaskNetwork, START_TASK, END_TASK
from mpm.domain.errors import (
    ComputationError,
    NoPredecessorError,
    NoSuccessorError,
    StalledSweepError,
)
from mpm.services import propagation
from mpm.services.propagation import forward_pass, backward_pass


def create_chain_network():
    return TaskNetwork(["T1", "T2", "T3"], [3, 2, 1], [[], ["T1"], ["T1", "T2"]])


def create_parallel_network():
    return TaskNetwork(["A", "B", "C"], [2, 2, 5], [[], [], ["A", "B"]])


def create_larger_network():
    """A small construction project with one obvious critical chain."""
    return TaskNetwork(
        ["design", "permits", "foundation", "frame", "plumbing", "wiring", "roof", "finish"],
        [5, 10, 7, 8, 4, 3, 6, 2],
        [
            [],
            [],
            ["design", "permits"],
            ["foundation"],
            ["frame"],
            ["frame"],
            ["frame"],
            ["plumbing", "wiring", "roof"],
        ],
    )


class ForwardPassTestCase(unittest.TestCase):
    """Test cases for the earliest dates."""

    def test_chain_example(self):
        earliest = create_chain_network().earliest_dates()
        self.assertEqual(
            dict(earliest),
            {START_TASK: 0, "T1": 0, "T2": 3, "T3": 5, END_TASK: 6},
        )

    def test_parallel_example(self):
        earliest = create_parallel_network().earliest_dates()
        self.assertEqual(
            dict(earliest),
            {START_TASK: 0, "A": 0, "B": 0, "C": 2, END_TASK: 7},
        )

    def test_larger_network(self):
        earliest = create_larger_network().earliest_dates()
        self.assertEqual(earliest["foundation"], 10)
        self.assertEqual(earliest["frame"], 17)
        self.assertEqual(earliest["finish"], 31)
        self.assertEqual(earliest[END_TASK], 33)

    def test_project_duration_matches_longest_path(self):
        for network in (
            create_chain_network(),
            create_parallel_network(),
            create_larger_network(),
        ):
            with self.subTest(network=network):
                self.assertEqual(
                    network.project_duration(),
                    nx.dag_longest_path_length(network.graph()),
                )

    def test_deferred_task(self):
        """A task reached before its predecessors is retried later."""
        network = TaskNetwork(
            ["A", "B", "C", "D"],
            [1, 1, 1, 4],
            [[], ["A"], ["B"], ["A", "C"]],
        )
        self.assertEqual(network.earliest_dates()["D"], 3)
        self.assertEqual(network.project_duration(), 7)

    def test_missing_predecessor(self):
        earliest = {}
        with self.assertRaises(NoPredecessorError):
            forward_pass(
                START_TASK,
                {START_TASK: 0, "A": 1},
                {START_TASK: [], "A": []},
                {START_TASK: ["A"], "A": []},
                earliest,
            )
        self.assertEqual(earliest, {})

    def test_stalled_sweep(self):
        """A cycle slipped past validation ends the sweep instead of looping."""
        earliest = {}
        with self.assertRaises(StalledSweepError) as ctx:
            forward_pass(
                START_TASK,
                {START_TASK: 0, "A": 1, "B": 1},
                {START_TASK: [], "A": [START_TASK, "B"], "B": ["A"]},
                {START_TASK: ["A"], "A": ["B"], "B": ["A"]},
                earliest,
            )
        self.assertEqual(earliest, {})
        self.assertIsInstance(ctx.exception, ComputationError)
        self.assertEqual(ctx.exception.tasks, ["A"])


class BackwardPassTestCase(unittest.TestCase):
    """Test cases for the latest dates and the critical path."""

    def test_chain_example(self):
        network = create_chain_network()
        self.assertEqual(
            dict(network.latest_dates()),
            {END_TASK: 6, "T3": 5, "T2": 3, "T1": 0, START_TASK: 0},
        )
        self.assertEqual(
            network.critical_path(), (START_TASK, "T1", "T2", "T3", END_TASK)
        )

    def test_parallel_example(self):
        network = create_parallel_network()
        path = network.critical_path()

        self.assertEqual(path[0], START_TASK)
        self.assertEqual(path[-1], END_TASK)
        self.assertEqual(set(path), {START_TASK, "A", "B", "C", END_TASK})
        self.assertLess(path.index("A"), path.index("C"))
        self.assertLess(path.index("B"), path.index("C"))
        self.assertEqual(network.latest_dates()["A"], 0)
        self.assertEqual(network.latest_dates()["B"], 0)

    def test_slack(self):
        network = create_larger_network()
        slacks = network.slacks()

        self.assertEqual(slacks["design"], 5)
        self.assertEqual(slacks["permits"], 0)
        self.assertEqual(slacks["plumbing"], 2)
        self.assertEqual(slacks["wiring"], 3)
        self.assertEqual(slacks["roof"], 0)
        self.assertEqual(
            network.critical_path(),
            (START_TASK, "permits", "foundation", "frame", "roof", "finish", END_TASK),
        )

    def test_missing_successor(self):
        latest = {}
        path = deque(["stale"])
        with self.assertRaises(NoSuccessorError):
            backward_pass(
                END_TASK,
                {START_TASK: 0, "A": 1, END_TASK: -1},
                {START_TASK: [], "A": [START_TASK], END_TASK: ["A"]},
                {START_TASK: ["A"], "A": [], END_TASK: []},
                {START_TASK: 0, "A": 0, END_TASK: 1},
                latest,
                path,
            )
        self.assertEqual(latest, {})
        self.assertEqual(len(path), 0)

    def test_critical_path_logged_at_debug(self):
        with self.assertLogs("mpm.services.propagation", level="DEBUG") as logs:
            create_chain_network().critical_path()
        self.assertIn(
            "Critical path: START -> T1 -> T2 -> T3 -> END", "\n".join(logs.output)
        )

    def test_critical_path_not_formatted_without_debug(self):
        network = create_chain_network()
        with patch.object(propagation.logger, "isEnabledFor", return_value=False):
            with patch.object(propagation.logger, "debug") as debug:
                network.critical_path()
        messages = [call.args[0] for call in debug.call_args_list]
        self.assertNotIn("Critical path: %s", messages)


class ScheduleInvariantsTestCase(unittest.TestCase):
    """Properties every well-formed network satisfies."""

    def setUp(self):
        self.networks = [
            create_chain_network(),
            create_parallel_network(),
            create_larger_network(),
        ]

    def test_boundary_dates(self):
        for network in self.networks:
            earliest = network.earliest_dates()
            latest = network.latest_dates()
            self.assertEqual(earliest[START_TASK], 0)
            self.assertEqual(latest[END_TASK], earliest[END_TASK])

    def test_slack_is_non_negative(self):
        for network in self.networks:
            earliest = network.earliest_dates()
            latest = network.latest_dates()
            self.assertEqual(set(earliest), set(latest))
            for task in earliest:
                self.assertLessEqual(earliest[task], latest[task])

    def test_critical_path_members_have_zero_slack(self):
        for network in self.networks:
            slacks = network.slacks()
            path = network.critical_path()
            self.assertEqual(path[0], START_TASK)
            self.assertEqual(path[-1], END_TASK)
            self.assertEqual(set(path), {t for t, s in slacks.items() if s == 0})

    def test_critical_path_is_topological(self):
        for network in self.networks:
            graph = network.graph()
            path = network.critical_path()
            for i, a in enumerate(path):
                for b in path[i + 1:]:
                    self.assertFalse(nx.has_path(graph, b, a))

    def test_single_chain_path_is_connected(self):
        """On a single critical chain consecutive tasks are linked."""
        network = create_chain_network()
        path = network.critical_path()
        successors = network.successors()
        for a, b in zip(path, path[1:]):
            self.assertIn(b, successors[a])

        durations = network.durations()
        total = sum(durations[task] for task in path if task != END_TASK)
        self.assertEqual(total, network.earliest_dates()[END_TASK])


class ResultCacheTestCase(unittest.TestCase):
    """Test cases for lazy computation and forced recomputation."""

    def test_accessors_are_idempotent(self):
        network = create_larger_network()
        self.assertEqual(dict(network.earliest_dates()), dict(network.earliest_dates()))
        self.assertEqual(dict(network.latest_dates()), dict(network.latest_dates()))
        self.assertEqual(network.critical_path(), network.critical_path())

    def test_recompute_matches_fresh_network(self):
        network = create_larger_network()
        network.earliest_dates()
        network.critical_path()

        earliest = dict(network.compute_earliest_dates())
        path = network.compute_critical_path()

        fresh = create_larger_network()
        self.assertEqual(earliest, dict(fresh.earliest_dates()))
        self.assertEqual(path, fresh.critical_path())
        self.assertEqual(dict(network.latest_dates()), dict(fresh.latest_dates()))

    def test_latest_dates_compute_earliest_dates(self):
        network = create_chain_network()
        latest = network.latest_dates()
        self.assertEqual(latest[END_TASK], 6)
        self.assertEqual(network.earliest_dates()[END_TASK], 6)

    def test_compute_critical_path_returns_path(self):
        network = create_chain_network()
        self.assertEqual(
            network.compute_critical_path(),
            (START_TASK, "T1", "T2", "T3", END_TASK),
        )

    def test_cached_earliest_dates_reused(self):
        """compute_critical_path does not recompute cached earliest dates."""
        network = create_chain_network()
        network.earliest_dates()
        with patch("mpm.domain.network.forward_pass") as mocked:
            network.compute_critical_path()
        mocked.assert_not_called()
        self.assertEqual(network.latest_dates()[END_TASK], 6)

    def test_compute_critical_path_fills_missing_earliest_dates(self):
        network = create_chain_network()
        with patch("mpm.domain.network.forward_pass", wraps=forward_pass) as wrapped:
            network.compute_critical_path()
        wrapped.assert_called_once()


if __name__ == "__main__":
    unittest.main()
