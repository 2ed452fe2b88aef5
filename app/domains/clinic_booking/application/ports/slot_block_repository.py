"""
Slot Block Repository Port
"""

from datetime import date
from typing import Protocol, runtime_checkable

from app.domains.clinic_booking.domain.value_objects.time_slot import SlotBlock, SlotKey


@runtime_checkable
class ISlotBlockRepository(Protocol):
    """Storage of administrator-defined slot closures."""

    async def find_by_date(self, block_date: date) -> list[SlotBlock]:
        ...

    async def find_by_key(self, key: SlotKey) -> SlotBlock | None:
        ...

    async def add(self, block: SlotBlock) -> SlotBlock:
        """Store a block; re-blocking a slot replaces its reason."""
        ...

    async def remove(self, key: SlotKey) -> bool:
        """
        Remove a block.

        Returns:
            True if a block existed
        """
        ...

    async def add_many(self, blocks: list[SlotBlock]) -> list[SlotBlock]:
        """Store several blocks in one write; same replace semantics as ``add``."""
        ...

    async def remove_by_date(self, block_date: date, doctor_name: str | None = None) -> int:
        """
        Remove every block on a date, optionally only one doctor's.

        Returns:
            Number of blocks removed
        """
        ...
