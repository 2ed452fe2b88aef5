"""
Appointment Entity for the Clinic Booking Domain

Represents a patient's reservation of one doctor/time slot.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from app.core.domain import AggregateRoot, InvalidOperationException, generate_uuid_str

from ..exceptions import MalformedTimeLabelException
from ..value_objects.appointment_status import AppointmentStatus, TreatmentType
from ..value_objects.time_label import TimeLabel
from ..value_objects.time_slot import SlotKey


@dataclass
class Appointment(AggregateRoot[str]):
    """
    Appointment aggregate root.

    Appointments are never deleted; cancelling releases the slot.
    ``appointment_time`` is kept as the stored label text because records may
    come from external or demo data; use ``start_instant`` to interpret it.

    Example:
        ```python
        appointment = Appointment.book(
            doctor_name="Dr. Mike Chen",
            treatment_type=TreatmentType.CLEANING,
            appointment_date=date(2025, 1, 20),
            appointment_time="10:00 AM",
        )
        appointment.confirm()
        appointment.complete()
        ```
    """

    patient_id: str | None = None
    doctor_name: str = ""
    treatment_type: TreatmentType = TreatmentType.CHECKUP
    appointment_date: date | None = None
    appointment_time: str = ""
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str | None = None

    @property
    def slot_key(self) -> SlotKey:
        """Slot held by this appointment (raises on a malformed stored time)."""
        if self.appointment_date is None:
            raise InvalidOperationException(operation="slot_key", current_state="unscheduled")
        return SlotKey(self.doctor_name, self.appointment_date, self.appointment_time)

    @property
    def start_instant(self) -> datetime:
        """Local start instant (raises MalformedTimeLabelException on bad data)."""
        if self.appointment_date is None:
            raise InvalidOperationException(operation="start_instant", current_state="unscheduled")
        return TimeLabel.parse(self.appointment_time).on(self.appointment_date)

    @property
    def holds_slot(self) -> bool:
        return self.status.holds_slot()

    def chronological_key(self) -> tuple[date, int, datetime]:
        """Sort key by slot start; unparsable times sort first within their day."""
        try:
            label = TimeLabel.parse(self.appointment_time)
            minute_of_day = label.hour_of_day * 60 + label.minute
        except MalformedTimeLabelException:
            minute_of_day = -1
        return (self.appointment_date or date.min, minute_of_day, self.created_at)

    # Status Transitions

    def change_status(self, new_status: AppointmentStatus) -> None:
        """Apply an explicit status change requested by staff."""
        if new_status == self.status:
            return
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                operation=f"change_status:{new_status.value}",
                current_state=self.status.value,
                message=f"Cannot change appointment from '{self.status.value}' to '{new_status.value}'",
            )
        self.status = new_status
        self.increment_version()
        self.touch()

    def confirm(self) -> None:
        self.change_status(AppointmentStatus.CONFIRMED)

    def complete(self) -> None:
        self.change_status(AppointmentStatus.COMPLETED)

    def cancel(self) -> None:
        self.change_status(AppointmentStatus.CANCELLED)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Convert to the outbound appointment record."""
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "doctor_name": self.doctor_name,
            "treatment_type": self.treatment_type.value,
            "appointment_date": self.appointment_date.isoformat() if self.appointment_date else None,
            "appointment_time": self.appointment_time,
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def book(
        cls,
        doctor_name: str,
        treatment_type: TreatmentType,
        appointment_date: date,
        appointment_time: str,
        patient_id: str | None = None,
        notes: str | None = None,
    ) -> "Appointment":
        """Factory for a freshly booked, pending appointment with a new id."""
        now = datetime.now(UTC)
        return cls(
            id=generate_uuid_str(),
            created_at=now,
            updated_at=now,
            patient_id=patient_id,
            doctor_name=doctor_name,
            treatment_type=treatment_type,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            status=AppointmentStatus.PENDING,
            notes=notes,
        )
