"""
Slot Availability Index

Read-only projection of the clinic's operating template against the
appointments and slot blocks of one date.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from ..entities.appointment import Appointment
from ..exceptions import MalformedTimeLabelException
from ..value_objects.time_label import TimeLabel
from ..value_objects.time_slot import SlotBlock, SlotKey, TimeSlot

logger = logging.getLogger(__name__)


WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass(frozen=True)
class OperatingTemplate:
    """
    Universe of bookable (doctor, time) pairs for an operating day.

    ``weekdays`` holds ``date.weekday()`` numbers (Monday is 0); on any other
    day the clinic is closed and offers nothing. Time labels are parsed once;
    a malformed label fails construction.
    """

    doctors: tuple[str, ...]
    times: tuple[str, ...]
    weekdays: frozenset[int] = frozenset(range(7))
    _parsed: tuple[TimeLabel, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        parsed = tuple(TimeLabel.parse(label) for label in self.times)
        object.__setattr__(self, "doctors", tuple(d.strip() for d in self.doctors if d and d.strip()))
        object.__setattr__(self, "times", tuple(str(label) for label in parsed))
        object.__setattr__(self, "weekdays", frozenset(self.weekdays))
        object.__setattr__(self, "_parsed", parsed)
        if not self.weekdays <= set(range(7)):
            raise ValueError(f"Weekdays must be between 0 and 6, got {sorted(self.weekdays)}")

    def is_open(self, day: date) -> bool:
        return day.weekday() in self.weekdays

    def pairs(self, day: date) -> list[tuple[datetime, str, str]]:
        """(instant, doctor, label) for every template pair, sorted by instant then doctor; empty on closed days."""
        if not self.is_open(day):
            return []
        pairs = [(label.on(day), doctor, str(label)) for label in self._parsed for doctor in self.doctors]
        pairs.sort(key=lambda item: (item[0], item[1]))
        return pairs

    def offers(self, doctor_name: str, label: str, day: date | None = None) -> bool:
        if day is not None and not self.is_open(day):
            return False
        return doctor_name in self.doctors and label in self.times


class SlotAvailabilityIndex:
    """
    Builds TimeSlot views for a date.

    A pair is unavailable when a non-cancelled appointment holds it, when an
    administrator blocked it, or when it starts strictly before ``now``.
    Closed weekdays have no slots at all.

    Example:
        ```python
        index = SlotAvailabilityIndex(OperatingTemplate(doctors, times))
        slots = index.available_slots(day, appointments, blocks, now=datetime.now())
        index.times_for(day, "Dr. Mike Chen", appointments, blocks, now=now)
        ```
    """

    def __init__(self, template: OperatingTemplate):
        self.template = template

    def slots_for(
        self,
        day: date,
        appointments: Iterable[Appointment] = (),
        blocks: Iterable[SlotBlock] = (),
        now: datetime | None = None,
    ) -> list[TimeSlot]:
        """Every template slot for the day with its availability flag."""
        taken = self.occupied_keys(day, appointments) | {b.key for b in blocks if b.key.appointment_date == day}

        slots = []
        for instant, doctor, label in self.template.pairs(day):
            is_past = now is not None and instant < now
            key = SlotKey(doctor, day, label)
            slots.append(
                TimeSlot(
                    date=day,
                    time=label,
                    doctor_name=doctor,
                    is_available=not is_past and key not in taken,
                )
            )
        return slots

    def available_slots(
        self,
        day: date,
        appointments: Iterable[Appointment] = (),
        blocks: Iterable[SlotBlock] = (),
        now: datetime | None = None,
    ) -> list[TimeSlot]:
        """Only the free slots, in the same deterministic order as slots_for."""
        return [slot for slot in self.slots_for(day, appointments, blocks, now) if slot.is_available]

    def doctors_offering(
        self,
        day: date,
        appointments: Iterable[Appointment] = (),
        blocks: Iterable[SlotBlock] = (),
        now: datetime | None = None,
    ) -> set[str]:
        return {slot.doctor_name for slot in self.available_slots(day, appointments, blocks, now)}

    def times_for(
        self,
        day: date,
        doctor_name: str,
        appointments: Iterable[Appointment] = (),
        blocks: Iterable[SlotBlock] = (),
        now: datetime | None = None,
    ) -> list[str]:
        return [
            slot.time
            for slot in self.available_slots(day, appointments, blocks, now)
            if slot.doctor_name == doctor_name
        ]

    def is_available(
        self,
        key: SlotKey,
        appointments: Iterable[Appointment] = (),
        blocks: Iterable[SlotBlock] = (),
        now: datetime | None = None,
    ) -> bool:
        """Whether a single triple is currently bookable."""
        if not self.template.offers(key.doctor_name, key.appointment_time, key.appointment_date):
            return False
        if now is not None and key.start < now:
            return False
        if any(block.key == key for block in blocks):
            return False
        return key not in self.occupied_keys(key.appointment_date, appointments)

    @staticmethod
    def occupied_keys(day: date, appointments: Iterable[Appointment]) -> set[SlotKey]:
        """Slot keys held by non-cancelled appointments on the day."""
        keys: set[SlotKey] = set()
        for appointment in appointments:
            if appointment.appointment_date != day or not appointment.holds_slot:
                continue
            try:
                keys.add(appointment.slot_key)
            except MalformedTimeLabelException as e:
                # Cannot match any template label, so it holds no offered slot
                logger.error(f"Appointment {appointment.id} has malformed time: {e.message}")
        return keys

