"""
Per-slot lock registry

Serializes booking commits for one (doctor, date, time) triple inside this
process. Bookings for different slots never wait on each other.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.domains.clinic_booking.domain.value_objects.time_slot import SlotKey


class SlotLockRegistry:
    """
    One ``asyncio.Lock`` per slot key, discarded once nobody holds or waits on it.

    Example:
        ```python
        locks = SlotLockRegistry()
        async with locks.hold(key):
            ...  # check availability and insert
        ```
    """

    def __init__(self):
        self._locks: dict[SlotKey, asyncio.Lock] = {}
        self._users: dict[SlotKey, int] = {}

    @asynccontextmanager
    async def hold(self, key: SlotKey) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        """Number of slots currently held or awaited."""
        return len(self._locks)
