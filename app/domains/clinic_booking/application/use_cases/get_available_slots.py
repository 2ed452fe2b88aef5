"""
Get Available Slots Use Case

Availability queries for the booking workflow. Reads never take slot locks.
"""

import logging
from datetime import date, timedelta

from app.domains.clinic_booking.application.dto import Clock, local_now
from app.domains.clinic_booking.application.ports import IAppointmentRepository, ISlotBlockRepository
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.services.slot_availability import SlotAvailabilityIndex
from app.domains.clinic_booking.domain.value_objects import SlotBlock, TimeSlot

logger = logging.getLogger(__name__)


class GetAvailableSlotsUseCase:
    """
    Use case for slot availability queries.

    Every query evaluates past-ness against the injected clock, so slots that
    already started are never offered.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        slot_block_repository: ISlotBlockRepository,
        availability_index: SlotAvailabilityIndex,
        clock: Clock = local_now,
    ):
        self.appointment_repo = appointment_repository
        self.block_repo = slot_block_repository
        self.index = availability_index
        self.clock = clock

    async def _load(self, day: date) -> tuple[list[Appointment], list[SlotBlock]]:
        appointments = await self.appointment_repo.find_by_date(day)
        blocks = await self.block_repo.find_by_date(day)
        return appointments, blocks

    async def execute(self, day: date, include_unavailable: bool = False) -> list[TimeSlot]:
        """
        Slots for a date.

        Args:
            day: Date to query
            include_unavailable: Return every template slot with its flag
                instead of only the free ones

        Returns:
            Slots ordered by time, then doctor name
        """
        appointments, blocks = await self._load(day)
        now = self.clock()
        if include_unavailable:
            return self.index.slots_for(day, appointments, blocks, now=now)
        return self.index.available_slots(day, appointments, blocks, now=now)

    async def doctors_offering(self, day: date) -> list[str]:
        """Doctors with at least one free slot, sorted by name."""
        appointments, blocks = await self._load(day)
        return sorted(self.index.doctors_offering(day, appointments, blocks, now=self.clock()))

    async def times_for(self, day: date, doctor_name: str) -> list[str]:
        """Free time labels of one doctor, in time order."""
        appointments, blocks = await self._load(day)
        return self.index.times_for(day, doctor_name.strip(), appointments, blocks, now=self.clock())

    async def upcoming(self, days: int = 7) -> list[TimeSlot]:
        """
        Free slots for each of the next ``days`` days, starting tomorrow.

        Returns:
            Slots ordered by date, then time, then doctor name
        """
        today = self.clock().date()
        slots: list[TimeSlot] = []
        for offset in range(1, days + 1):
            slots.extend(await self.execute(today + timedelta(days=offset)))
        logger.debug(f"Found {len(slots)} free slots in the next {days} days")
        return slots
