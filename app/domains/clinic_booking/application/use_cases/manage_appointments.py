"""
Appointment Management Use Cases

Reading appointments with their effective status, explicit status changes,
and cancelling missed appointments.
"""

import logging
from datetime import datetime

from app.core.domain import EntityNotFoundException, ValidationException
from app.domains.clinic_booking.application.dto import AppointmentView, CleanupResult, Clock, local_now
from app.domains.clinic_booking.application.ports import IAppointmentRepository
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.exceptions import MalformedTimeLabelException
from app.domains.clinic_booking.domain.services.status_resolver import effective_status
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, DisplayStatus

logger = logging.getLogger(__name__)


def build_view(appointment: Appointment, now: datetime) -> AppointmentView:
    """Resolve the effective status, reporting malformed records instead of coercing them."""
    try:
        return AppointmentView(appointment=appointment, effective_status=effective_status(appointment, now))
    except MalformedTimeLabelException as e:
        logger.error(f"Data integrity fault on appointment {appointment.id}: {e.message}")
        return AppointmentView(appointment=appointment, integrity_error=e.message)


class ListAppointmentsUseCase:
    """List appointments, most recent slot first, with their effective status."""

    def __init__(self, appointment_repository: IAppointmentRepository, clock: Clock = local_now):
        self.appointment_repo = appointment_repository
        self.clock = clock

    async def execute(self, patient_id: str | None = None) -> list[AppointmentView]:
        if patient_id:
            appointments = await self.appointment_repo.find_by_patient(patient_id)
        else:
            appointments = await self.appointment_repo.find_all()
        now = self.clock()
        return [build_view(appointment, now) for appointment in appointments]


class GetAppointmentUseCase:
    """Fetch one appointment with its effective status."""

    def __init__(self, appointment_repository: IAppointmentRepository, clock: Clock = local_now):
        self.appointment_repo = appointment_repository
        self.clock = clock

    async def execute(self, appointment_id: str) -> AppointmentView:
        appointment = await self.appointment_repo.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        return build_view(appointment, self.clock())


class UpdateAppointmentStatusUseCase:
    """
    Explicit status change requested by clinic staff.

    Only the stored statuses are accepted; ``missed`` is derived and cannot be set.
    """

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, appointment_id: str, status: str) -> Appointment:
        """
        Change an appointment's stored status.

        Raises:
            ValidationException: Unknown status value
            EntityNotFoundException: No such appointment
            InvalidOperationException: Transition not allowed from the current status
        """
        if not status or not AppointmentStatus.has_value(status.strip()):
            raise ValidationException(
                f"Invalid status '{status}'. Choose one of: {', '.join(AppointmentStatus.values())}",
                field="status",
            )
        new_status = AppointmentStatus.from_string(status.strip())

        appointment = await self.appointment_repo.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)

        previous = appointment.status
        appointment.change_status(new_status)
        saved = await self.appointment_repo.save(appointment)

        logger.info(f"Appointment {appointment_id} status changed: {previous.value} -> {new_status.value}")
        return saved


class CleanupMissedAppointmentsUseCase:
    """
    Cancel the selected appointments that are currently missed.

    Appointments that are not missed (or not found) are left untouched and
    reported as skipped.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, clock: Clock = local_now):
        self.appointment_repo = appointment_repository
        self.clock = clock

    async def execute(self, appointment_ids: list[str]) -> CleanupResult:
        result = CleanupResult()
        now = self.clock()

        for appointment_id in dict.fromkeys(appointment_ids):
            appointment = await self.appointment_repo.find_by_id(appointment_id)
            if appointment is None:
                result.skipped.append(appointment_id)
                continue

            view = build_view(appointment, now)
            if view.effective_status != DisplayStatus.MISSED:
                result.skipped.append(appointment_id)
                continue

            appointment.cancel()
            await self.appointment_repo.save(appointment)
            result.cancelled.append(appointment_id)

        logger.info(f"Cleaned up {result.count} missed appointments ({len(result.skipped)} skipped)")
        return result
