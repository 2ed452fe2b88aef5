"""
Export Calendar Event Use Case
"""

from app.core.domain import EntityNotFoundException
from app.domains.clinic_booking.application.ports import IAppointmentRepository
from app.domains.clinic_booking.domain.services.calendar_export import (
    DEFAULT_LOCATION,
    CalendarEvent,
    to_calendar_event,
)


class ExportCalendarEventUseCase:
    """Load an appointment and project it into a calendar event."""

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        location: str = DEFAULT_LOCATION,
        duration_hours: int = 1,
    ):
        self.appointment_repo = appointment_repository
        self.location = location
        self.duration_hours = duration_hours

    async def execute(self, appointment_id: str) -> CalendarEvent:
        appointment = await self.appointment_repo.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        return to_calendar_event(appointment, location=self.location, duration_hours=self.duration_hours)
