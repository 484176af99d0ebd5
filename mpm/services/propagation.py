"""
Forward and backward propagation over a task network.

Both sweeps are breadth-first relaxations: a task whose neighbours are not
all resolved yet is put back at the end of the work queue and retried later.
On an acyclic network every deferral is eventually resolved.
"""

import logging
from collections import deque

from ..domain.errors import NoPredecessorError, NoSuccessorError, StalledSweepError

logger = logging.getLogger(__name__)


def _earliest_of(task, predecessors, durations, earliest):
    preds = predecessors[task]
    if not preds:
        raise NoPredecessorError(task)
    if any(pred not in earliest for pred in preds):
        return None
    return max(earliest[pred] + durations[pred] for pred in preds)


def _latest_of(task, successors, durations, latest):
    succs = successors[task]
    if not succs:
        raise NoSuccessorError(task)
    if any(succ not in latest for succ in succs):
        return None
    return min(latest[succ] for succ in succs) - durations[task]


def _sweep(seed, resolve, following):
    """
    Resolve every task reachable from ``seed``.

    Args:
        seed: Tasks to start the sweep from
        resolve: Callable returning the task's value, or None to defer it
        following: Mapping of task name to the tasks to visit next

    Yields:
        (task, value) pairs in the order they are finalised
    """
    queue = deque(seed)
    seen = set()
    stalled = 0

    while queue:
        task = queue.popleft()
        if task in seen:
            continue

        value = resolve(task)
        if value is None:
            logger.debug("Deferring %s, neighbours not resolved yet", task)
            queue.append(task)
            stalled += 1
            if stalled > len(queue):
                raise StalledSweepError(dict.fromkeys(queue))
            continue

        stalled = 0
        seen.add(task)
        yield task, value
        queue.extend(following[task])


def forward_pass(start, durations, predecessors, successors, earliest):
    """
    Calculate the earliest start date of every task.

    ``earliest`` is cleared and refilled in place. If the sweep fails it is
    left empty.

    Raises:
        NoPredecessorError: If a task has no predecessor link
    """
    earliest.clear()
    earliest[start] = 0

    try:
        for task, value in _sweep(
            successors[start],
            lambda t: _earliest_of(t, predecessors, durations, earliest),
            successors,
        ):
            earliest[task] = value
    except Exception:
        earliest.clear()
        raise

    logger.debug("Computed earliest dates for %d tasks", len(earliest))
    return earliest


def backward_pass(end, durations, predecessors, successors, earliest, latest, critical_path):
    """
    Calculate the latest start dates and extract the critical path.

    ``latest`` and ``critical_path`` (a deque) are cleared and refilled in
    place. A task joins the critical path when its earliest and latest dates
    are equal; tasks are prepended as they are finalised so the path reads
    from start to end.

    Raises:
        NoSuccessorError: If a task has no successor link
    """
    latest.clear()
    critical_path.clear()

    latest[end] = earliest[end]
    critical_path.append(end)

    try:
        for task, value in _sweep(
            predecessors[end],
            lambda t: _latest_of(t, successors, durations, latest),
            predecessors,
        ):
            latest[task] = value
            if earliest[task] == value:
                critical_path.appendleft(task)
    except Exception:
        latest.clear()
        critical_path.clear()
        raise

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Critical path: %s", " -> ".join(critical_path))
    return latest, critical_path
