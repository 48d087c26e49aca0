"""
simulation/path_activation.py

Decides which enumerated loops are closed: a loop conducts only when
every switch on it is closed.
"""


def is_path_active(path, components_by_id) -> bool:
    """Return False if any switch on the path is open.

    Non-switch components never block, and ids missing from
    components_by_id are ignored.
    """
    for component_id in path:
        component = components_by_id.get(component_id)
        if component is not None and component.is_switch and not component.closed:
            return False
    return True


def filter_active_paths(paths, components_by_id) -> list[list[str]]:
    """Keep the active paths, preserving discovery order."""
    return [path for path in paths if is_path_active(path, components_by_id)]
