"""
Unit tests for Clinic Booking Repositories.

Tests the SQLAlchemy data access layer with a mocked session, plus the
in-memory stores used by the memory storage backend.
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import EntityNotFoundException
from app.domains.clinic_booking.domain.exceptions import SlotConflictException
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, SlotBlock, SlotKey, TreatmentType
from app.domains.clinic_booking.infrastructure.repositories import (
    InMemoryAppointmentRepository,
    SQLAlchemyAppointmentRepository,
    SQLAlchemySlotBlockRepository,
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


def appointment_model(**overrides):
    """Sample SQLAlchemy appointment model."""
    model = MagicMock()
    model.id = "apt-1"
    model.patient_id = "patient-1"
    model.doctor_name = "Dr. Chen"
    model.treatment_type = "cleaning"
    model.appointment_date = date(2025, 1, 20)
    model.appointment_time = "10:00 AM"
    model.status = "pending"
    model.notes = None
    model.version = 0
    model.created_at = datetime(2025, 1, 1, tzinfo=UTC)
    model.updated_at = datetime(2025, 1, 1, tzinfo=UTC)
    for name, value in overrides.items():
        setattr(model, name, value)
    return model


def scalars_result(models):
    result = MagicMock()
    result.scalars.return_value.all.return_value = models
    result.scalars.return_value.first.return_value = models[0] if models else None
    result.scalar_one_or_none.return_value = models[0] if models else None
    return result


# ============================================================================
# Appointment Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_id_maps_model_to_entity(mock_async_session):
    # Arrange
    mock_async_session.execute.return_value = scalars_result([appointment_model(status="confirmed")])
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    # Act
    appointment = await repository.find_by_id("apt-1")

    # Assert
    assert appointment is not None
    assert appointment.id == "apt-1"
    assert appointment.treatment_type == TreatmentType.CLEANING
    assert appointment.status == AppointmentStatus.CONFIRMED
    assert appointment.slot_key == SlotKey("Dr. Chen", date(2025, 1, 20), "10:00 AM")
    mock_async_session.execute.assert_called_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_id_not_found(mock_async_session):
    mock_async_session.execute.return_value = scalars_result([])
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    assert await repository.find_by_id("missing") is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_all_orders_most_recent_slot_first(mock_async_session):
    mock_async_session.execute.return_value = scalars_result(
        [
            appointment_model(id="early", appointment_time="9:00 AM"),
            appointment_model(id="late", appointment_time="2:00 PM"),
            appointment_model(id="next-day", appointment_date=date(2025, 1, 21), appointment_time="8:00 AM"),
        ]
    )
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    appointments = await repository.find_all()

    assert [a.id for a in appointments] == ["next-day", "late", "early"]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_add_commits_and_returns_entity(mock_async_session, make_appointment):
    appointment = make_appointment(appointment_id="apt-1")
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    saved = await repository.add(appointment)

    mock_async_session.add.assert_called_once()
    mock_async_session.commit.assert_awaited_once()
    added_model = mock_async_session.add.call_args.args[0]
    assert added_model.status == "pending"
    assert added_model.appointment_time == "10:00 AM"
    assert saved.id == "apt-1"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_add_unique_violation_becomes_slot_conflict(mock_async_session, make_appointment):
    """Test the partial unique index rejection surfaces as a booking conflict."""
    mock_async_session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    with pytest.raises(SlotConflictException) as exc_info:
        await repository.add(make_appointment())

    mock_async_session.rollback.assert_awaited_once()
    assert exc_info.value.details["doctor_name"] == "Dr. Chen"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_updates_status(mock_async_session, make_appointment):
    model = appointment_model()
    mock_async_session.execute.return_value = scalars_result([model])
    repository = SQLAlchemyAppointmentRepository(mock_async_session)
    appointment = make_appointment(appointment_id="apt-1")
    appointment.cancel()

    await repository.save(appointment)

    assert model.status == "cancelled"
    assert model.version == 1
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_missing_appointment(mock_async_session, make_appointment):
    mock_async_session.execute.return_value = scalars_result([])
    repository = SQLAlchemyAppointmentRepository(mock_async_session)

    with pytest.raises(EntityNotFoundException):
        await repository.save(make_appointment())


# ============================================================================
# Slot Block Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_remove_unknown_block_returns_false(mock_async_session):
    mock_async_session.execute.return_value = scalars_result([])
    repository = SQLAlchemySlotBlockRepository(mock_async_session)

    removed = await repository.remove(SlotKey("Dr. Chen", date(2025, 1, 20), "9:00 AM"))

    assert removed is False
    mock_async_session.delete.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_blocks_by_date(mock_async_session):
    model = MagicMock()
    model.doctor_name = "Dr. Chen"
    model.block_date = date(2025, 1, 20)
    model.block_time = "9:00 AM"
    model.reason = "Training"
    mock_async_session.execute.return_value = scalars_result([model])
    repository = SQLAlchemySlotBlockRepository(mock_async_session)

    blocks = await repository.find_by_date(date(2025, 1, 20))

    assert blocks == [SlotBlock(key=SlotKey("Dr. Chen", date(2025, 1, 20), "9:00 AM"), reason="Training")]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_remove_blocks_by_date_reports_rowcount(mock_async_session):
    mock_async_session.execute.return_value = MagicMock(rowcount=3)
    repository = SQLAlchemySlotBlockRepository(mock_async_session)

    removed = await repository.remove_by_date(date(2025, 1, 20), doctor_name="Dr. Chen")

    assert removed == 3
    mock_async_session.execute.assert_awaited_once()
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_add_many_blocks_commits_once(mock_async_session):
    mock_async_session.execute.return_value = scalars_result([])
    repository = SQLAlchemySlotBlockRepository(mock_async_session)
    blocks = [
        SlotBlock(key=SlotKey("Dr. Chen", date(2025, 1, 20), "9:00 AM"), reason="Holiday"),
        SlotBlock(key=SlotKey("Dr. Chen", date(2025, 1, 20), "10:00 AM"), reason="Holiday"),
    ]

    saved = await repository.add_many(blocks)

    assert saved == blocks
    assert mock_async_session.add.call_count == 2
    mock_async_session.commit.assert_awaited_once()


# ============================================================================
# In-Memory Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_in_memory_add_rejects_second_live_appointment(make_appointment):
    repository = InMemoryAppointmentRepository()
    await repository.add(make_appointment())

    with pytest.raises(SlotConflictException):
        await repository.add(make_appointment(appointment_time="10:00 am"))


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_in_memory_returns_copies(make_appointment):
    repository = InMemoryAppointmentRepository([make_appointment(appointment_id="apt-1")])

    loaded = await repository.find_by_id("apt-1")
    loaded.cancel()

    assert (await repository.find_by_id("apt-1")).status == AppointmentStatus.PENDING
    assert await repository.find_active_by_slot(SlotKey("Dr. Chen", date(2025, 1, 20), "10:00 AM")) is not None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_in_memory_remove_blocks_by_date_filters_doctor(block_repo):
    day = date(2025, 1, 20)
    await block_repo.add_many(
        [
            SlotBlock(key=SlotKey("Dr. Chen", day, "9:00 AM")),
            SlotBlock(key=SlotKey("Dr. Adams", day, "9:00 AM")),
            SlotBlock(key=SlotKey("Dr. Chen", date(2025, 1, 21), "9:00 AM")),
        ]
    )

    removed = await block_repo.remove_by_date(day, doctor_name="Dr. Chen")

    assert removed == 1
    assert [b.key.doctor_name for b in await block_repo.find_by_date(day)] == ["Dr. Adams"]
    assert len(await block_repo.find_by_date(date(2025, 1, 21))) == 1
