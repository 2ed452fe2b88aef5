"""
Book Appointment Use Case

Validates a booking request and commits the appointment without allowing
two live appointments on the same doctor/date/time.
"""

import logging
from datetime import datetime

from app.domains.clinic_booking.application.dto import (
    BookAppointmentRequest,
    Clock,
    local_now,
)
from app.domains.clinic_booking.application.ports import (
    IAppointmentRepository,
    ISlotBlockRepository,
    ISlotLockRegistry,
)
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.exceptions import (
    BookingException,
    MissingFieldException,
    SlotConflictException,
    SlotInPastException,
    UnknownTreatmentException,
)
from app.domains.clinic_booking.domain.services.slot_availability import SlotAvailabilityIndex
from app.domains.clinic_booking.domain.value_objects import SlotKey, TimeLabel, TreatmentType

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("doctor_name", "treatment_type", "appointment_date", "appointment_time")


class BookAppointmentUseCase:
    """
    Use case for booking appointments.

    Validation order (first failure wins):
    1. required fields present
    2. known treatment
    3. parsable time label
    4. slot not in the past
    5. slot still available, re-checked while holding the slot's lock

    Example:
        ```python
        use_case = BookAppointmentUseCase(appointment_repo, block_repo, index, locks)
        appointment = await use_case.execute(
            BookAppointmentRequest(
                doctor_name="Dr. Mike Chen",
                treatment_type="cleaning",
                appointment_date=date(2025, 1, 20),
                appointment_time="10:00 AM",
            )
        )
        ```
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        slot_block_repository: ISlotBlockRepository,
        availability_index: SlotAvailabilityIndex,
        slot_locks: ISlotLockRegistry,
        clock: Clock = local_now,
    ):
        """
        Initialize use case with dependencies.

        Args:
            appointment_repository: Repository for appointment data access
            slot_block_repository: Repository for administrator slot blocks
            availability_index: Operating template projection
            slot_locks: Per-slot mutual exclusion
            clock: Source of the booking moment
        """
        self.appointment_repo = appointment_repository
        self.block_repo = slot_block_repository
        self.index = availability_index
        self.slot_locks = slot_locks
        self.clock = clock

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        """
        Execute appointment booking use case.

        Args:
            request: Booking request parameters

        Returns:
            The persisted pending appointment

        Raises:
            BookingException: Exactly one subclass describing the first failed check
        """
        try:
            # 1. Required fields
            for field_name in _REQUIRED_FIELDS:
                value = getattr(request, field_name)
                if value is None or (isinstance(value, str) and not value.strip()):
                    raise MissingFieldException(field_name)

            # 2. Treatment
            # Exact match: "Cleaning" and "CLEANING" are not treatment identifiers
            treatment_value = request.treatment_type.strip()
            if treatment_value not in TreatmentType.values():
                raise UnknownTreatmentException(request.treatment_type, TreatmentType.values())
            treatment = TreatmentType(treatment_value)

            # 3. Time label
            label = TimeLabel.parse(request.appointment_time)

            # 4. Not in the past
            now = self.clock()
            doctor_name = request.doctor_name.strip()
            if label.on(request.appointment_date) < now:
                raise SlotInPastException(doctor_name, request.appointment_date.isoformat(), str(label))

            # 5. Availability, re-checked under the slot lock
            key = SlotKey(doctor_name, request.appointment_date, str(label))
            async with self.slot_locks.hold(key):
                await self._ensure_available(key, now)
                appointment = Appointment.book(
                    doctor_name=key.doctor_name,
                    treatment_type=treatment,
                    appointment_date=key.appointment_date,
                    appointment_time=key.appointment_time,
                    patient_id=request.patient_id,
                    notes=request.notes,
                )
                saved = await self.appointment_repo.add(appointment)

            logger.info(f"Appointment booked: {saved.id} with {key.doctor_name} on {key.appointment_date} at {label}")
            return saved

        except BookingException as e:
            logger.warning(f"Booking rejected [{e.code}]: {e.message}")
            raise

    async def _ensure_available(self, key: SlotKey, now: datetime) -> None:
        date_str = key.appointment_date.isoformat()

        if not self.index.template.is_open(key.appointment_date):
            raise SlotConflictException(
                key.doctor_name,
                date_str,
                key.appointment_time,
                message=f"The clinic is closed on {key.appointment_date.strftime('%A')}s. "
                "Please select a different date.",
            )

        if not self.index.template.offers(key.doctor_name, key.appointment_time):
            raise SlotConflictException(
                key.doctor_name,
                date_str,
                key.appointment_time,
                message=f"{key.doctor_name} has no appointment slot at {key.appointment_time}. "
                "Please select a different time.",
            )

        block = await self.block_repo.find_by_key(key)
        if block is not None:
            raise SlotConflictException(
                key.doctor_name,
                date_str,
                key.appointment_time,
                message="This slot is not available. Please select a different time.",
            )

        holder = await self.appointment_repo.find_active_by_slot(key)
        if not self.index.is_available(key, [holder] if holder else [], now=now):
            raise SlotConflictException(key.doctor_name, date_str, key.appointment_time)
