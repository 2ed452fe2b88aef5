"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository. The partial unique index
on (doctor_name, appointment_date, appointment_time) for non-cancelled rows is
the final guard against double-booking across processes.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import EntityNotFoundException
from app.domains.clinic_booking.application.ports.appointment_repository import IAppointmentRepository
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.exceptions import SlotConflictException
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, SlotKey, TreatmentType
from app.domains.clinic_booking.infrastructure.persistence.sqlalchemy.models import AppointmentModel

logger = logging.getLogger(__name__)

_CANCELLED = AppointmentStatus.CANCELLED.value


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.

    Handles all appointment data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        """Find appointment by ID."""
        result = await self.session.execute(select(AppointmentModel).where(AppointmentModel.id == appointment_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_date(self, appointment_date: date, include_cancelled: bool = False) -> list[Appointment]:
        """Find appointments for a specific date."""
        query = select(AppointmentModel).where(AppointmentModel.appointment_date == appointment_date)

        if not include_cancelled:
            query = query.where(AppointmentModel.status != _CANCELLED)

        query = query.order_by(AppointmentModel.created_at)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        """Find all appointments of a patient, most recent first."""
        result = await self.session.execute(select(AppointmentModel).where(AppointmentModel.patient_id == patient_id))
        return self._recent_first(result.scalars().all())

    async def find_all(self) -> list[Appointment]:
        """Find every appointment, most recent first."""
        result = await self.session.execute(select(AppointmentModel))
        return self._recent_first(result.scalars().all())

    async def find_active_by_slot(self, key: SlotKey) -> Appointment | None:
        """Find the non-cancelled appointment holding a slot."""
        result = await self.session.execute(
            select(AppointmentModel).where(
                AppointmentModel.doctor_name == key.doctor_name,
                AppointmentModel.appointment_date == key.appointment_date,
                AppointmentModel.appointment_time == key.appointment_time,
                AppointmentModel.status != _CANCELLED,
            )
        )
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def add(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment; a unique index violation becomes SlotConflictException."""
        model = self._to_model(appointment)
        self.session.add(model)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                f"Unique slot index rejected appointment for {appointment.doctor_name} "
                f"on {appointment.appointment_date} at {appointment.appointment_time}"
            )
            raise SlotConflictException(
                appointment.doctor_name,
                appointment.appointment_date.isoformat(),
                appointment.appointment_time,
            ) from e

        await self.session.refresh(model)
        return self._to_entity(model)

    async def save(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        result = await self.session.execute(select(AppointmentModel).where(AppointmentModel.id == appointment.id))
        model = result.scalar_one_or_none()
        if model is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment.id)

        self._update_model(model, appointment)
        await self.session.commit()
        await self.session.refresh(model)

        return self._to_entity(model)

    # Mapping methods

    def _recent_first(self, models) -> list[Appointment]:
        appointments = [self._to_entity(m) for m in models]
        return sorted(appointments, key=lambda a: a.chronological_key(), reverse=True)

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert model to entity."""
        appointment = Appointment(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            doctor_name=model.doctor_name,  # type: ignore[arg-type]
            treatment_type=TreatmentType.from_string(model.treatment_type),  # type: ignore[arg-type]
            appointment_date=model.appointment_date,  # type: ignore[arg-type]
            appointment_time=model.appointment_time,  # type: ignore[arg-type]
            status=AppointmentStatus.from_string(model.status or "pending"),  # type: ignore[arg-type]
            notes=model.notes,  # type: ignore[arg-type]
            version=model.version or 0,  # type: ignore[arg-type]
        )

        if model.created_at:
            appointment.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            appointment.updated_at = model.updated_at  # type: ignore[assignment]

        return appointment

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        """Convert entity to model."""
        return AppointmentModel(
            id=appointment.id,
            patient_id=appointment.patient_id,
            doctor_name=appointment.doctor_name,
            treatment_type=appointment.treatment_type.value,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            status=appointment.status.value,
            notes=appointment.notes,
            version=appointment.version,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    def _update_model(self, model: AppointmentModel, appointment: Appointment) -> None:
        """Copy mutable fields onto the model."""
        model.status = appointment.status.value  # type: ignore[assignment]
        model.notes = appointment.notes  # type: ignore[assignment]
        model.version = appointment.version  # type: ignore[assignment]
        model.updated_at = appointment.updated_at  # type: ignore[assignment]
