"""
Id generators for circuit documents.

Each CircuitModel owns its generator, so two documents never share
counter state. CounterIdGenerator produces readable ids (R1, R2, B1) and
can be persisted with the document; UuidIdGenerator produces ids that are
unique across documents (useful when merging imported circuits).
"""

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def next_id(self, prefix: str) -> str: ...

    def reserve(self, existing_id: str, prefix: str) -> None: ...

    def state(self) -> dict[str, int]: ...

    def restore(self, counters: dict[str, int]) -> None: ...

    def reset(self) -> None: ...


class CounterIdGenerator:
    """Monotonic per-prefix counter: next_id("R") -> "R1", "R2", ..."""

    def __init__(self, counters: dict[str, int] | None = None):
        self._counters: dict[str, int] = dict(counters or {})

    def next_id(self, prefix: str) -> str:
        count = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = count
        return f"{prefix}{count}"

    def reserve(self, existing_id: str, prefix: str) -> None:
        """Advance the prefix counter past an id that already exists.

        Keeps freshly minted ids from colliding with ids loaded from a file
        whose counters were not saved.
        """
        suffix = existing_id[len(prefix):] if existing_id.startswith(prefix) else ""
        if suffix.isdigit():
            self._counters[prefix] = max(self._counters.get(prefix, 0), int(suffix))

    def state(self) -> dict[str, int]:
        """Return a copy of the counters for serialization."""
        return dict(self._counters)

    def restore(self, counters: dict[str, int]) -> None:
        self._counters = dict(counters)

    def reset(self) -> None:
        self._counters.clear()


class UuidIdGenerator:
    """Random ids: next_id("R") -> "R-3f2a..."."""

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"

    def state(self) -> dict[str, int]:
        return {}

    def restore(self, counters: dict[str, int]) -> None:
        pass

    def reserve(self, existing_id: str, prefix: str) -> None:
        pass

    def reset(self) -> None:
        pass
