"""
simulation/path_finder.py

Depth-first enumeration of the current loops through a power source.

The search is exponential in the worst case on dense graphs. Hand-drawn
schematics are sparse, and the hop cap bounds the work on anything else.
"""

import logging

from .constants import MAX_PATH_DEPTH

logger = logging.getLogger(__name__)


def source_ids(components) -> list[str]:
    """Return the ids of all power sources, in document order."""
    return [c.component_id for c in components if c.is_source]


def find_circuit_paths(graph, source_id, max_depth=MAX_PATH_DEPTH, link_counts=None):
    """
    Find every simple loop that leaves the source and returns to it.

    Args:
        graph: adjacency mapping from build_graph()
        source_id: id of the battery to start from
        max_depth: hop cap; a loop needs len(path) hops to close, so no
                   accepted loop has more than max_depth members
        link_counts: optional Counter from count_links(). When given, a
                   loop made of the source and a single component only
                   counts if two separate connections join them; otherwise
                   going out and back over one wire is a dead end.

    Returns:
        list of paths in discovery order. Each path starts with source_id
        and lists each member once; the closing hop back to the source is
        implied. An empty list means the source is an open circuit.
    """
    if source_id not in graph:
        return []

    paths: list[list[str]] = []
    path = [source_id]
    on_path = {source_id}
    # One neighbour iterator per path member
    pending = [iter(graph.get(source_id, ()))]

    while pending:
        neighbor = next(pending[-1], None)
        if neighbor is None:
            pending.pop()
            if len(path) > 1:
                on_path.discard(path.pop())
            continue
        if neighbor == source_id:
            if _closes_loop(path, link_counts):
                paths.append(list(path))
            continue
        if neighbor in on_path:
            continue
        if len(path) >= max_depth:
            # Hop cap reached; this branch stops contributing paths.
            continue
        path.append(neighbor)
        on_path.add(neighbor)
        pending.append(iter(graph.get(neighbor, ())))

    logger.debug("Found %d loop(s) through %s", len(paths), source_id)
    return paths


def _closes_loop(path, link_counts):
    if len(path) < 2:
        return False
    if len(path) == 2 and link_counts is not None:
        return link_counts.get(frozenset(path), 0) >= 2
    return True


def path_hops(path) -> list[tuple[str, str]]:
    """Return the consecutive (a, b) hops of a loop, including the closing hop."""
    if len(path) < 2:
        return []
    return [(path[i], path[(i + 1) % len(path)]) for i in range(len(path))]
