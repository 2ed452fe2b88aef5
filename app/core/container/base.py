"""
Base Container - Shared Singletons.

Single Responsibility: Manage process-wide resources (slot locks, operating
template, in-memory stores).
"""

import logging

from app.config.settings import Settings, get_settings
from app.domains.clinic_booking.domain.services.slot_availability import (
    OperatingTemplate,
    SlotAvailabilityIndex,
)
from app.domains.clinic_booking.infrastructure.locking import SlotLockRegistry
from app.domains.clinic_booking.infrastructure.repositories import (
    InMemoryAppointmentRepository,
    InMemorySlotBlockRepository,
)

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache resources shared by every request.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base container.

        Args:
            settings: Optional settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()

        self._availability_index: SlotAvailabilityIndex | None = None
        self._slot_locks = SlotLockRegistry()
        self._memory_appointments: InMemoryAppointmentRepository | None = None
        self._memory_blocks: InMemorySlotBlockRepository | None = None

        logger.info(f"BaseContainer initialized (storage backend: {self.settings.STORAGE_BACKEND})")

    @property
    def uses_memory_storage(self) -> bool:
        return self.settings.STORAGE_BACKEND == "memory"

    def get_availability_index(self) -> SlotAvailabilityIndex:
        """Availability index over the configured operating template (singleton)."""
        if self._availability_index is None:
            template = OperatingTemplate(
                doctors=tuple(self.settings.CLINIC_DOCTORS),
                times=tuple(self.settings.CLINIC_TIME_LABELS),
                weekdays=frozenset(self.settings.CLINIC_WEEKDAYS),
            )
            logger.info(
                f"Operating template: {len(template.doctors)} doctors x {len(template.times)} times, "
                f"weekdays {sorted(template.weekdays)}"
            )
            self._availability_index = SlotAvailabilityIndex(template)
        return self._availability_index

    def get_slot_locks(self) -> SlotLockRegistry:
        return self._slot_locks

    def get_memory_appointment_repository(self) -> InMemoryAppointmentRepository:
        if self._memory_appointments is None:
            self._memory_appointments = InMemoryAppointmentRepository()
        return self._memory_appointments

    def get_memory_slot_block_repository(self) -> InMemorySlotBlockRepository:
        if self._memory_blocks is None:
            self._memory_blocks = InMemorySlotBlockRepository()
        return self._memory_blocks
