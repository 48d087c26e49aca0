"""
simulation/circuit_graph.py

Builds the undirected component adjacency used by the path finder.
"""

import logging
from collections import Counter

logger = logging.getLogger(__name__)


def build_graph(components, connections) -> dict[str, list[str]]:
    """
    Build an adjacency mapping from a component/connection snapshot.

    Args:
        components: iterable of ComponentData
        connections: iterable of ConnectionData

    Returns:
        dict mapping every component id to the ids directly connected to it.
        Each neighbour appears once, in the order its first connection was
        listed, so the result (and the path search on top of it) is
        deterministic. Components without connections map to [].
    """
    graph: dict[str, list[str]] = {c.component_id: [] for c in components}

    for connection in connections:
        a, b = connection.source_id, connection.target_id
        if a not in graph or b not in graph:
            logger.debug(
                "Skipping connection %s: endpoint not in circuit (%s -- %s)",
                connection.connection_id, a, b,
            )
            continue
        if a == b:
            continue
        if b not in graph[a]:
            graph[a].append(b)
        if a not in graph[b]:
            graph[b].append(a)

    return graph


def count_links(components, connections) -> Counter:
    """Count parallel connections per unordered component pair.

    Returns:
        Counter keyed by frozenset({a, b}). Dangling and self connections
        are not counted.
    """
    known = {c.component_id for c in components}
    counts: Counter = Counter()
    for connection in connections:
        a, b = connection.source_id, connection.target_id
        if a == b or a not in known or b not in known:
            continue
        counts[frozenset((a, b))] += 1
    return counts
