"""
Unit tests for BookAppointmentUseCase.

Tests:
- Successful booking and immediate visibility in availability
- Validation order (first failure wins)
- Blocked, closed-day, off-template and taken slots
- Concurrent bookings of one slot
"""

import asyncio
import copy
from contextlib import asynccontextmanager
from datetime import date, datetime

import pytest

from app.domains.clinic_booking.application.dto import BookAppointmentRequest
from app.domains.clinic_booking.application.use_cases import BookAppointmentUseCase, GetAvailableSlotsUseCase
from app.domains.clinic_booking.domain.exceptions import (
    MalformedTimeLabelException,
    MissingFieldException,
    SlotConflictException,
    SlotInPastException,
    UnknownTreatmentException,
)
from app.domains.clinic_booking.domain.services import OperatingTemplate, SlotAvailabilityIndex
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, SlotBlock, SlotKey
from app.domains.clinic_booking.infrastructure.locking import SlotLockRegistry
from app.domains.clinic_booking.infrastructure.repositories import InMemoryAppointmentRepository

# ============================================================================
# TEST DOUBLES
# ============================================================================


class _SlowCheckAppointmentRepository(InMemoryAppointmentRepository):
    """
    Store that yields to the event loop after the slot lookup and inserts
    without a uniqueness check, like a database without the partial index.
    """

    async def find_active_by_slot(self, key: SlotKey):
        holder = await super().find_active_by_slot(key)
        await asyncio.sleep(0)
        return holder

    async def add(self, appointment):
        self._items[appointment.id] = copy.deepcopy(appointment)
        return copy.deepcopy(appointment)


class _NoLock:
    @asynccontextmanager
    async def hold(self, key: SlotKey):
        yield


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def use_case(appointment_repo, block_repo, index, slot_locks, clock):
    return BookAppointmentUseCase(
        appointment_repository=appointment_repo,
        slot_block_repository=block_repo,
        availability_index=index,
        slot_locks=slot_locks,
        clock=clock,
    )


@pytest.fixture
def chen_request() -> BookAppointmentRequest:
    return BookAppointmentRequest(
        doctor_name="Dr. Chen",
        treatment_type="cleaning",
        appointment_date=date(2025, 1, 20),
        appointment_time="10:00 AM",
        patient_id="patient-1",
    )


# ============================================================================
# Success Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_free_slot_then_rebook_conflicts(use_case, chen_request):
    """Test booking a free slot succeeds and the identical request then conflicts."""
    # Act
    appointment = await use_case.execute(chen_request)

    # Assert
    assert appointment.id
    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.doctor_name == "Dr. Chen"
    assert appointment.appointment_time == "10:00 AM"

    with pytest.raises(SlotConflictException) as exc_info:
        await use_case.execute(chen_request)
    assert exc_info.value.code == "SLOT_CONFLICT"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_booked_slot_disappears_from_next_availability_query(
    use_case, chen_request, appointment_repo, block_repo, index, clock
):
    slots_use_case = GetAvailableSlotsUseCase(appointment_repo, block_repo, index, clock=clock)

    await use_case.execute(chen_request)
    times = await slots_use_case.times_for(date(2025, 1, 20), "Dr. Chen")

    assert "10:00 AM" not in times
    assert times == ["9:00 AM", "2:00 PM"]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_label_is_stored_in_canonical_form(use_case, chen_request):
    chen_request.appointment_time = "10:00 am"
    chen_request.doctor_name = "  Dr. Chen "

    appointment = await use_case.execute(chen_request)

    assert appointment.appointment_time == "10:00 AM"
    assert appointment.doctor_name == "Dr. Chen"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancelled_appointment_frees_slot_for_rebooking(use_case, chen_request, appointment_repo):
    first = await use_case.execute(chen_request)
    first.cancel()
    await appointment_repo.save(first)

    second = await use_case.execute(chen_request)

    assert second.id != first.id


# ============================================================================
# Validation Order Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["doctor_name", "treatment_type", "appointment_date", "appointment_time"])
async def test_missing_field(use_case, chen_request, field):
    setattr(chen_request, field, None)

    with pytest.raises(MissingFieldException) as exc_info:
        await use_case.execute(chen_request)

    assert exc_info.value.field == field


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_blank_string_counts_as_missing(use_case, chen_request):
    chen_request.doctor_name = "   "

    with pytest.raises(MissingFieldException):
        await use_case.execute(chen_request)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_missing_field_wins_over_unknown_treatment(use_case, chen_request):
    chen_request.treatment_type = "whitening"
    chen_request.appointment_time = ""

    with pytest.raises(MissingFieldException):
        await use_case.execute(chen_request)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_unknown_treatment_wins_over_malformed_time(use_case, chen_request):
    chen_request.treatment_type = "whitening"
    chen_request.appointment_time = "10 o'clock"

    with pytest.raises(UnknownTreatmentException) as exc_info:
        await use_case.execute(chen_request)

    assert "cleaning" in exc_info.value.details["allowed"]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
@pytest.mark.parametrize("treatment", ["CLEANING", "Cleaning", "Root-Canal"])
async def test_treatment_must_match_exactly(use_case, chen_request, treatment):
    chen_request.treatment_type = treatment

    with pytest.raises(UnknownTreatmentException):
        await use_case.execute(chen_request)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_treatment_surrounding_whitespace_is_ignored(use_case, chen_request):
    chen_request.treatment_type = " root-canal "

    appointment = await use_case.execute(chen_request)

    assert appointment.treatment_type == "root-canal"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_malformed_time_is_rejected(use_case, chen_request):
    chen_request.appointment_time = "10:00"

    with pytest.raises(MalformedTimeLabelException):
        await use_case.execute(chen_request)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_past_slot_is_rejected_before_availability(use_case, chen_request, appointment_repo):
    """Test a past slot is rejected and nothing is stored."""
    chen_request.appointment_date = date(2025, 1, 18)

    with pytest.raises(SlotInPastException):
        await use_case.execute(chen_request)

    assert await appointment_repo.find_all() == []


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_slot_starting_exactly_now_is_bookable(appointment_repo, block_repo, index, slot_locks, chen_request):
    use_case = BookAppointmentUseCase(
        appointment_repo, block_repo, index, slot_locks, clock=lambda: datetime(2025, 1, 20, 10, 0)
    )

    appointment = await use_case.execute(chen_request)

    assert appointment.status == AppointmentStatus.PENDING


# ============================================================================
# Conflict Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_blocked_slot_conflicts(use_case, chen_request, block_repo):
    await block_repo.add(SlotBlock(key=SlotKey("Dr. Chen", date(2025, 1, 20), "10:00 AM"), reason="Training"))

    with pytest.raises(SlotConflictException) as exc_info:
        await use_case.execute(chen_request)

    assert "not available" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_closed_weekday_conflicts(appointment_repo, block_repo, slot_locks, clock, chen_request):
    weekday_index = SlotAvailabilityIndex(
        OperatingTemplate(
            doctors=("Dr. Chen",), times=("10:00 AM",), weekdays=frozenset({0, 1, 2, 3, 4, 5})
        )
    )
    use_case = BookAppointmentUseCase(appointment_repo, block_repo, weekday_index, slot_locks, clock=clock)
    chen_request.appointment_date = date(2025, 1, 26)

    with pytest.raises(SlotConflictException) as exc_info:
        await use_case.execute(chen_request)

    assert "closed on Sundays" in exc_info.value.message
    assert await appointment_repo.find_all() == []


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_off_template_slot_conflicts(use_case, chen_request):
    chen_request.appointment_time = "11:00 AM"

    with pytest.raises(SlotConflictException) as exc_info:
        await use_case.execute(chen_request)

    assert "no appointment slot" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_concurrent_bookings_for_one_slot_yield_one_success(use_case, chen_request, appointment_repo, slot_locks):
    results = await asyncio.gather(*(use_case.execute(chen_request) for _ in range(5)), return_exceptions=True)

    successes = [r for r in results if not isinstance(r, BaseException)]
    conflicts = [r for r in results if isinstance(r, SlotConflictException)]

    assert len(successes) == 1
    assert len(conflicts) == 4
    assert len(await appointment_repo.find_all()) == 1
    assert len(slot_locks) == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_slot_lock_serializes_check_and_insert(block_repo, index, clock, chen_request):
    """Test the slot lock alone keeps a non-enforcing store to one booking."""
    # Arrange
    repo = _SlowCheckAppointmentRepository()
    locks = SlotLockRegistry()
    use_case = BookAppointmentUseCase(repo, block_repo, index, locks, clock=clock)

    # Act
    results = await asyncio.gather(*(use_case.execute(chen_request) for _ in range(5)), return_exceptions=True)

    # Assert
    successes = [r for r in results if not isinstance(r, BaseException)]
    conflicts = [r for r in results if isinstance(r, SlotConflictException)]
    assert len(successes) == 1
    assert len(conflicts) == 4
    assert len(await repo.find_all()) == 1
    assert len(locks) == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_without_slot_lock_interleaved_bookings_double_book(block_repo, index, clock, chen_request):
    """Test the same interleaving double-books once the lock is removed."""
    repo = _SlowCheckAppointmentRepository()
    use_case = BookAppointmentUseCase(repo, block_repo, index, _NoLock(), clock=clock)

    results = await asyncio.gather(*(use_case.execute(chen_request) for _ in range(5)), return_exceptions=True)

    successes = [r for r in results if not isinstance(r, BaseException)]
    assert len(successes) > 1
    assert len(await repo.find_all()) == len(successes)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_concurrent_bookings_for_different_doctors_all_succeed(use_case, chen_request):
    other = BookAppointmentRequest(
        doctor_name="Dr. Adams",
        treatment_type="checkup",
        appointment_date=chen_request.appointment_date,
        appointment_time=chen_request.appointment_time,
    )

    first, second = await asyncio.gather(use_case.execute(chen_request), use_case.execute(other))

    assert {first.doctor_name, second.doctor_name} == {"Dr. Chen", "Dr. Adams"}
