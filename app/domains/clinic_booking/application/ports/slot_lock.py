"""
Slot Lock Port
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from app.domains.clinic_booking.domain.value_objects.time_slot import SlotKey


@runtime_checkable
class ISlotLockRegistry(Protocol):
    """Mutual exclusion scoped to one (doctor, date, time) triple."""

    def hold(self, key: SlotKey) -> AbstractAsyncContextManager[None]:
        """Context manager that holds the slot's lock while the body runs."""
        ...
