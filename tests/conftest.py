"""
Shared pytest fixtures for all tests.

This module provides the frozen clock, operating template, in-memory
repositories and appointment factories used across the test suite.
"""

import os
from datetime import UTC, date, datetime

import pytest

# Ensure test environment (before any settings are created)
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"

from app.config.settings import reset_settings  # noqa: E402
from app.core.container import reset_container  # noqa: E402
from app.domains.clinic_booking.domain.entities.appointment import Appointment  # noqa: E402
from app.domains.clinic_booking.domain.services.slot_availability import (  # noqa: E402
    OperatingTemplate,
    SlotAvailabilityIndex,
)
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, TreatmentType  # noqa: E402
from app.domains.clinic_booking.infrastructure.locking import SlotLockRegistry  # noqa: E402
from app.domains.clinic_booking.infrastructure.repositories import (  # noqa: E402
    InMemoryAppointmentRepository,
    InMemorySlotBlockRepository,
)

# ============================================================================
# CLOCK FIXTURES
# ============================================================================

BOOKING_DAY = date(2025, 1, 20)
FROZEN_NOW = datetime(2025, 1, 19, 9, 0)


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Drop cached settings and container between tests."""
    reset_settings()
    reset_container()
    yield
    reset_settings()
    reset_container()


@pytest.fixture
def booking_day() -> date:
    return BOOKING_DAY


@pytest.fixture
def now() -> datetime:
    """The instant every clock-dependent rule is evaluated against."""
    return FROZEN_NOW


@pytest.fixture
def clock(now):
    return lambda: now


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def template() -> OperatingTemplate:
    """Small operating template: two doctors, three start times."""
    return OperatingTemplate(
        doctors=("Dr. Chen", "Dr. Adams"),
        times=("9:00 AM", "10:00 AM", "2:00 PM"),
    )


@pytest.fixture
def index(template) -> SlotAvailabilityIndex:
    return SlotAvailabilityIndex(template)


@pytest.fixture
def make_appointment():
    """Factory for stored appointments with sensible defaults."""

    def _make(
        doctor_name: str = "Dr. Chen",
        appointment_date: date = BOOKING_DAY,
        appointment_time: str = "10:00 AM",
        status: AppointmentStatus = AppointmentStatus.PENDING,
        treatment_type: TreatmentType = TreatmentType.CLEANING,
        patient_id: str | None = "patient-1",
        appointment_id: str | None = None,
    ) -> Appointment:
        appointment = Appointment.book(
            doctor_name=doctor_name,
            treatment_type=treatment_type,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            patient_id=patient_id,
        )
        if appointment_id:
            appointment.id = appointment_id
        appointment.status = status
        appointment.created_at = datetime(2025, 1, 1, tzinfo=UTC)
        appointment.updated_at = appointment.created_at
        return appointment

    return _make


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def appointment_repo() -> InMemoryAppointmentRepository:
    return InMemoryAppointmentRepository()


@pytest.fixture
def block_repo() -> InMemorySlotBlockRepository:
    return InMemorySlotBlockRepository()


@pytest.fixture
def slot_locks() -> SlotLockRegistry:
    return SlotLockRegistry()
