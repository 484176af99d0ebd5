import logging
from collections import deque
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import networkx as nx

from .errors import (
    DuplicateDurationError,
    DuplicatePredecessorSetError,
    InvalidDurationError,
    InvalidPredecessorListError,
    LengthMismatchError,
    ReservedTaskNameError,
    UnknownPredecessorError,
)
from ..services.propagation import backward_pass, forward_pass
from ..utils.graph import build_dependency_graph

logger = logging.getLogger(__name__)

START_TASK = "START"
END_TASK = "END"
END_DURATION = -1

_EXHAUSTED = object()


class TaskNetwork:
    """
    A task network scheduled with the Metra Potential Method (MPM).

    Durations live on the tasks and precedence constraints on the edges. Two
    synthetic tasks frame the network: ``START`` precedes every task declared
    without predecessors and ``END`` follows every task nothing depends on.

    The network is immutable once built. Earliest dates, latest dates and the
    critical path are computed lazily on first access and cached; call
    ``compute_earliest_dates`` or ``compute_critical_path`` to force a
    recomputation.
    """

    def __init__(
        self,
        task_names: Iterable[str],
        durations: Iterable[int],
        predecessors: Iterable[Iterable[str]],
    ):
        """
        Build and validate the network.

        Args:
            task_names: Name of each task
            durations: Duration of each task, aligned with ``task_names``
            predecessors: Names of the tasks preceding each task, aligned
                with ``task_names``. An empty list or None links the task to
                START. A bare string is rejected rather than read as a
                sequence of one-character names.

        Raises:
            ConstructionError: If the data does not describe a valid acyclic
                network (see ``mpm.domain.errors`` for the specific errors)
        """
        names = list(task_names)

        self._durations: Dict[str, int] = {START_TASK: 0, END_TASK: END_DURATION}
        self._predecessors: Dict[str, List[str]] = {START_TASK: [], END_TASK: []}
        self._successors: Dict[str, List[str]] = {START_TASK: [], END_TASK: []}
        self._declared = set()

        for name in names:
            if name in (START_TASK, END_TASK):
                raise ReservedTaskNameError(name)
            self._predecessors.setdefault(name, [])
            self._successors.setdefault(name, [])

        self._tasks = tuple(dict.fromkeys(names))
        self._build(names, durations, predecessors)
        self._link_end()

        self._graph = build_dependency_graph(self._durations, self._predecessors)

        # Freeze the adjacency lists now that the graph is complete
        self._predecessors = {k: tuple(v) for k, v in self._predecessors.items()}
        self._successors = {k: tuple(v) for k, v in self._successors.items()}

        self._earliest: Dict[str, int] = {}
        self._latest: Dict[str, int] = {}
        self._critical_path = deque()

        logger.debug(
            "Built task network with %d tasks and %d dependencies",
            len(self._tasks),
            self._graph.number_of_edges(),
        )

    def _build(self, names, durations, predecessors):
        """Consume the three inputs in lockstep, failing on the first mismatch."""
        name_iter = iter(names)
        duration_iter = iter(durations)
        predecessor_iter = iter(predecessors)

        position = 0
        while True:
            name = next(name_iter, _EXHAUSTED)
            duration = next(duration_iter, _EXHAUSTED)
            preds = next(predecessor_iter, _EXHAUSTED)

            exhausted = [item is _EXHAUSTED for item in (name, duration, preds)]
            if all(exhausted):
                return
            if any(exhausted):
                raise LengthMismatchError(position)

            self._add_duration(name, duration)
            self._add_predecessors(name, preds)
            position += 1

    def _add_duration(self, name, duration):
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise InvalidDurationError(name, duration)

        old_duration = self._durations.get(name)
        if old_duration is not None and old_duration != duration:
            raise DuplicateDurationError(name, old_duration, duration)
        self._durations[name] = duration

    def _add_predecessors(self, name, predecessor_list):
        if predecessor_list is None:
            predecessor_list = ()
        elif isinstance(predecessor_list, (str, bytes)):
            raise InvalidPredecessorListError(name, predecessor_list)
        preds = list(dict.fromkeys(predecessor_list))
        if not preds:
            if not self._predecessors[name]:
                self._link(START_TASK, name)
            return

        if name in self._declared:
            raise DuplicatePredecessorSetError(name)

        for pred in preds:
            if pred not in self._successors:
                raise UnknownPredecessorError(name, pred)

        # A later non-empty declaration replaces the implicit link to START
        if self._predecessors[name] == [START_TASK]:
            self._predecessors[name].clear()
            self._successors[START_TASK].remove(name)

        for pred in preds:
            self._link(pred, name)
        self._declared.add(name)

    def _link(self, pred, task):
        self._predecessors[task].append(pred)
        self._successors[pred].append(task)

    def _link_end(self):
        for name in (START_TASK,) + self._tasks:
            if not self._successors[name]:
                self._link(name, END_TASK)

    # Forced recomputation

    def compute_earliest_dates(self) -> Mapping[str, int]:
        """
        Recompute the earliest start date of every task.

        Returns:
            Read-only mapping of task name to earliest start date
        """
        forward_pass(
            START_TASK,
            self._durations,
            self._predecessors,
            self._successors,
            self._earliest,
        )
        return MappingProxyType(self._earliest)

    def compute_critical_path(self) -> Tuple[str, ...]:
        """
        Recompute the latest start dates and the critical path.

        The earliest dates are computed first only if they are not cached.

        Returns:
            The critical path from START to END. Call ``latest_dates`` to get
            the latest start dates computed alongside it.
        """
        if not self._earliest:
            self.compute_earliest_dates()
        backward_pass(
            END_TASK,
            self._durations,
            self._predecessors,
            self._successors,
            self._earliest,
            self._latest,
            self._critical_path,
        )
        return tuple(self._critical_path)

    # Cached accessors

    def earliest_dates(self) -> Mapping[str, int]:
        """Return the cached earliest start dates, computing them if needed."""
        if not self._earliest:
            self.compute_earliest_dates()
        return MappingProxyType(self._earliest)

    def latest_dates(self) -> Mapping[str, int]:
        """Return the cached latest start dates, computing them if needed."""
        if not self._latest:
            self.compute_critical_path()
        return MappingProxyType(self._latest)

    def critical_path(self) -> Tuple[str, ...]:
        """Return the cached critical path, computing it if needed."""
        if not self._critical_path:
            self.compute_critical_path()
        return tuple(self._critical_path)

    def slacks(self) -> Dict[str, int]:
        """Return the total float (latest minus earliest start) of every task."""
        earliest = self.earliest_dates()
        return {task: date - earliest[task] for task, date in self.latest_dates().items()}

    def project_duration(self) -> int:
        return self.earliest_dates()[END_TASK]

    def durations(self) -> Mapping[str, int]:
        return MappingProxyType(self._durations)

    def predecessors(self) -> Mapping[str, Sequence[str]]:
        return MappingProxyType(self._predecessors)

    def successors(self) -> Mapping[str, Sequence[str]]:
        return MappingProxyType(self._successors)

    def tasks(self) -> Tuple[str, ...]:
        """Return the declared task names, START and END excluded."""
        return self._tasks

    def graph(self) -> nx.DiGraph:
        """Return a copy of the dependency graph."""
        return self._graph.copy()

    def __repr__(self):
        return f"TaskNetwork(tasks={list(self._tasks)!r})"
