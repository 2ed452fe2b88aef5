"""
Slot value objects.

A slot is identified by the (doctor, date, time) triple. The time part is
always kept in canonical label form so "09:00 am" and "9:00 AM" compare equal.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from app.core.domain import ValidationException, ValueObject

from .time_label import TimeLabel, normalize_label


@dataclass(frozen=True)
class SlotKey(ValueObject):
    """Identity of a bookable unit: one doctor at one time on one day."""

    doctor_name: str
    appointment_date: date
    appointment_time: str

    def _validate(self) -> None:
        if not self.doctor_name or not self.doctor_name.strip():
            raise ValidationException("Doctor name is required", field="doctor_name")
        object.__setattr__(self, "doctor_name", self.doctor_name.strip())
        object.__setattr__(self, "appointment_time", normalize_label(self.appointment_time))

    @property
    def start(self) -> datetime:
        return TimeLabel.parse(self.appointment_time).on(self.appointment_date)

    def __str__(self) -> str:
        return f"{self.doctor_name} @ {self.appointment_date.isoformat()} {self.appointment_time}"


@dataclass(frozen=True)
class TimeSlot(ValueObject):
    """
    One bookable unit with its availability flag.

    Generated per query; never stored by the booking core.
    """

    date: date
    time: str
    doctor_name: str
    is_available: bool = True

    @property
    def key(self) -> SlotKey:
        return SlotKey(self.doctor_name, self.date, self.time)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "time": self.time,
            "doctor_name": self.doctor_name,
            "is_available": self.is_available,
        }


@dataclass(frozen=True)
class SlotBlock(ValueObject):
    """An administrator closing one slot (doctor away, equipment down, ...)."""

    key: SlotKey
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "doctor_name": self.key.doctor_name,
            "date": self.key.appointment_date.isoformat(),
            "time": self.key.appointment_time,
            "reason": self.reason,
        }
