"""Interface of the key-value store consumed by the resource stores.

Every resource record lives in a flat string hash; ids come from integer
counters, and live record keys are tracked in unordered sets. Any backend
providing these primitives (Redis in production, an in-memory double in
tests) can be injected into a ``ResourceStore``.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Async key-value primitives.

    All methods raise ``StoreError`` when the backend fails.
    """

    async def increment(self, counter_key: str) -> int:
        """Atomically increment a counter starting from 0.

        Returns:
            The post-increment value, so the first call returns 1.
        """
        ...

    async def get_field_map(self, key: str) -> dict[str, str]:
        """Return every field of the hash at ``key``, or ``{}`` if absent."""
        ...

    async def set_fields(self, key: str, fields: Mapping[str, str]) -> None:
        """Create the hash or merge ``fields`` into it."""
        ...

    async def set_field(self, key: str, field: str, value: str) -> None:
        ...

    async def delete_key(self, key: str) -> None:
        ...

    async def add_to_index(self, index_key: str, member: str) -> None:
        ...

    async def remove_from_index(self, index_key: str, member: str) -> None:
        ...

    async def list_index_members(self, index_key: str) -> list[str]:
        """Return the members of the index set. Order is unspecified."""
        ...

    async def scan_keys(self, pattern: str) -> list[str]:
        """Return every key matching a glob ``pattern``. Order is unspecified."""
        ...

    async def get_string(self, key: str) -> Optional[str]:
        ...

    async def set_string(self, key: str, value: str) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...
