"""
In-memory repositories

Process-local stores used with ``STORAGE_BACKEND=memory`` and in tests.
They apply the same one-live-appointment-per-slot rule as the SQL index.
"""

import asyncio
import copy
import logging
from datetime import date

from app.core.domain import EntityNotFoundException
from app.domains.clinic_booking.application.ports.appointment_repository import IAppointmentRepository
from app.domains.clinic_booking.application.ports.slot_block_repository import ISlotBlockRepository
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.exceptions import MalformedTimeLabelException, SlotConflictException
from app.domains.clinic_booking.domain.value_objects import SlotBlock, SlotKey

logger = logging.getLogger(__name__)


class InMemoryAppointmentRepository(IAppointmentRepository):
    """
    Dictionary-backed appointment store.

    Entities are copied on the way in and out so callers only observe
    changes they explicitly save.
    """

    def __init__(self, appointments: list[Appointment] | None = None):
        self._items: dict[str, Appointment] = {}
        self._lock = asyncio.Lock()
        for appointment in appointments or []:
            self._items[appointment.id] = copy.deepcopy(appointment)

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        item = self._items.get(appointment_id)
        return copy.deepcopy(item) if item else None

    async def find_by_date(self, appointment_date: date, include_cancelled: bool = False) -> list[Appointment]:
        return [
            copy.deepcopy(a)
            for a in self._items.values()
            if a.appointment_date == appointment_date and (include_cancelled or a.holds_slot)
        ]

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        return self._recent_first(a for a in self._items.values() if a.patient_id == patient_id)

    async def find_all(self) -> list[Appointment]:
        return self._recent_first(self._items.values())

    async def find_active_by_slot(self, key: SlotKey) -> Appointment | None:
        for appointment in self._items.values():
            if self._holds(appointment, key):
                return copy.deepcopy(appointment)
        return None

    async def add(self, appointment: Appointment) -> Appointment:
        async with self._lock:
            key = appointment.slot_key
            if any(self._holds(existing, key) for existing in self._items.values()):
                raise SlotConflictException(key.doctor_name, key.appointment_date.isoformat(), key.appointment_time)
            self._items[appointment.id] = copy.deepcopy(appointment)
        return copy.deepcopy(appointment)

    async def save(self, appointment: Appointment) -> Appointment:
        async with self._lock:
            if appointment.id not in self._items:
                raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment.id)
            self._items[appointment.id] = copy.deepcopy(appointment)
        return copy.deepcopy(appointment)

    def clear(self) -> None:
        self._items.clear()

    @staticmethod
    def _holds(appointment: Appointment, key: SlotKey) -> bool:
        if not appointment.holds_slot or appointment.appointment_date != key.appointment_date:
            return False
        try:
            return appointment.slot_key == key
        except MalformedTimeLabelException:
            logger.error(f"Appointment {appointment.id} has malformed time '{appointment.appointment_time}'")
            return False

    @staticmethod
    def _recent_first(appointments) -> list[Appointment]:
        ordered = sorted(appointments, key=lambda a: a.chronological_key(), reverse=True)
        return [copy.deepcopy(a) for a in ordered]


class InMemorySlotBlockRepository(ISlotBlockRepository):
    """Dictionary-backed slot block store keyed by slot."""

    def __init__(self):
        self._blocks: dict[SlotKey, SlotBlock] = {}

    async def find_by_date(self, block_date: date) -> list[SlotBlock]:
        return [b for k, b in self._blocks.items() if k.appointment_date == block_date]

    async def find_by_key(self, key: SlotKey) -> SlotBlock | None:
        return self._blocks.get(key)

    async def add(self, block: SlotBlock) -> SlotBlock:
        self._blocks[block.key] = block
        return block

    async def remove(self, key: SlotKey) -> bool:
        return self._blocks.pop(key, None) is not None

    async def add_many(self, blocks: list[SlotBlock]) -> list[SlotBlock]:
        for block in blocks:
            self._blocks[block.key] = block
        return list(blocks)

    async def remove_by_date(self, block_date: date, doctor_name: str | None = None) -> int:
        keys = [
            k
            for k in self._blocks
            if k.appointment_date == block_date and (doctor_name is None or k.doctor_name == doctor_name)
        ]
        for key in keys:
            del self._blocks[key]
        return len(keys)

    def clear(self) -> None:
        self._blocks.clear()
