"""
Appointment Repository Port

Interface for appointment data access following Clean Architecture.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.value_objects.time_slot import SlotKey


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    Implementations must refuse a second non-cancelled appointment for the
    same slot key, whatever the interleaving of callers.

    Example:
        ```python
        class SQLAlchemyAppointmentRepository(IAppointmentRepository):
            async def find_by_id(self, appointment_id: str) -> Appointment | None:
                # SQLAlchemy implementation
                pass
        ```
    """

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        """
        Find appointment by ID.

        Args:
            appointment_id: Unique appointment identifier

        Returns:
            Appointment if found, None otherwise
        """
        ...

    async def find_by_date(self, appointment_date: date, include_cancelled: bool = False) -> list[Appointment]:
        """
        Find appointments for a specific date.

        Args:
            appointment_date: Date to search
            include_cancelled: Include cancelled appointments

        Returns:
            List of appointments on that date
        """
        ...

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        """Find all appointments of a patient, most recent slot first."""
        ...

    async def find_all(self) -> list[Appointment]:
        """Find every appointment, most recent slot first."""
        ...

    async def find_active_by_slot(self, key: SlotKey) -> Appointment | None:
        """Find the non-cancelled appointment holding a slot, if any."""
        ...

    async def add(self, appointment: Appointment) -> Appointment:
        """
        Persist a new appointment.

        Raises:
            SlotConflictException: If a non-cancelled appointment already holds the slot
        """
        ...

    async def save(self, appointment: Appointment) -> Appointment:
        """
        Update an existing appointment.

        Args:
            appointment: Appointment to save

        Returns:
            Saved appointment
        """
        ...
