"""
Clinic Booking API Schemas

Pydantic schemas for API request/response validation. JSON field names are
camelCase; snake_case is accepted on input as well.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domains.clinic_booking.application.dto import AppointmentView, CleanupResult
from app.domains.clinic_booking.domain.services.calendar_export import CalendarEvent
from app.domains.clinic_booking.domain.value_objects import SlotBlock, TimeSlot


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Requests ====================


class BookAppointmentBody(CamelModel):
    """
    Booking request.

    Every field is optional at the schema level so that a missing field is
    reported by the booking rules (MISSING_FIELD) rather than as a 422.
    """

    doctor_name: str | None = None
    treatment_type: str | None = None
    appointment_date: date | None = None
    appointment_time: str | None = None
    patient_id: str | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("appointment_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class StatusUpdateBody(CamelModel):
    status: str = Field(..., min_length=1)


class CleanupBody(CamelModel):
    appointment_ids: list[str]


class SlotBlockBody(CamelModel):
    doctor_name: str = Field(..., min_length=1)
    date: date
    time: str = Field(..., min_length=1)
    reason: str | None = Field(default=None, max_length=255)


class SlotBlockBulkBody(CamelModel):
    """Omit ``doctorName`` to close every doctor; omit ``times`` to close the whole day."""

    date: date
    doctor_name: str | None = Field(default=None, min_length=1)
    times: list[str] | None = None
    reason: str | None = Field(default=None, max_length=255)


# ==================== Responses ====================


class TimeSlotResponse(CamelModel):
    """Time slot with its availability flag."""

    date: date
    time: str
    doctor_name: str
    is_available: bool

    @classmethod
    def from_slot(cls, slot: TimeSlot) -> "TimeSlotResponse":
        return cls(date=slot.date, time=slot.time, doctor_name=slot.doctor_name, is_available=slot.is_available)


class AppointmentResponse(CamelModel):
    """
    Outbound appointment record.

    ``effectiveStatus`` is recomputed on every read; ``displayStatus`` is its
    uppercased form. ``integrityError`` is set when the stored record cannot be
    interpreted.
    """

    id: str
    patient_id: str | None = None
    doctor_name: str
    treatment_type: str
    appointment_date: date | None = None
    appointment_time: str
    status: str
    notes: str | None = None
    effective_status: str | None = None
    display_status: str | None = None
    integrity_error: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: AppointmentView) -> "AppointmentResponse":
        appointment = view.appointment
        return cls(
            id=appointment.id,
            patient_id=appointment.patient_id,
            doctor_name=appointment.doctor_name,
            treatment_type=appointment.treatment_type.value,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            status=appointment.status.value,
            notes=appointment.notes,
            effective_status=view.effective_status.value if view.effective_status else None,
            display_status=view.display_status,
            integrity_error=view.integrity_error,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class CleanupResponse(CamelModel):
    message: str
    count: int
    cancelled_ids: list[str]
    skipped_ids: list[str]

    @classmethod
    def from_result(cls, result: CleanupResult) -> "CleanupResponse":
        return cls(
            message="Appointments cleaned up successfully",
            count=result.count,
            cancelled_ids=result.cancelled,
            skipped_ids=result.skipped,
        )


class CalendarEventResponse(CamelModel):
    title: str
    start: datetime
    end: datetime
    description: str
    location: str

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "CalendarEventResponse":
        return cls(
            title=event.title,
            start=event.start,
            end=event.end,
            description=event.description,
            location=event.location,
        )


class CalendarUrlResponse(CamelModel):
    url: str


class SlotBlockResponse(CamelModel):
    doctor_name: str
    date: date
    time: str
    reason: str | None = None

    @classmethod
    def from_block(cls, block: SlotBlock) -> "SlotBlockResponse":
        return cls(
            doctor_name=block.key.doctor_name,
            date=block.key.appointment_date,
            time=block.key.appointment_time,
            reason=block.reason,
        )


class SlotBlockCountResponse(CamelModel):
    count: int
