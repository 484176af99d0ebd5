import networkx as nx

from ..domain.errors import CyclicDependencyError


def build_dependency_graph(durations, predecessors):
    """
    Build a directed graph representing task dependencies.

    Args:
        durations: Mapping of task name to duration
        predecessors: Mapping of task name to the names that must finish first

    Returns:
        nx.DiGraph with a ``duration`` attribute on every node and a ``weight``
        on every edge equal to the duration of the edge's source task

    Raises:
        CyclicDependencyError: If the dependencies contain a cycle
    """
    G = nx.DiGraph()

    for task_id, duration in durations.items():
        G.add_node(task_id, duration=duration)

    for task_id, preds in predecessors.items():
        for pred_id in preds:
            G.add_edge(pred_id, task_id, weight=durations[pred_id])

    if not nx.is_directed_acyclic_graph(G):
        cycle = [u for u, _ in nx.find_cycle(G)]
        raise CyclicDependencyError(cycle + cycle[:1])

    return G


def topological_order(graph):
    """Return the graph's nodes in a deterministic topological order."""
    return list(nx.lexicographical_topological_sort(graph, key=str))
