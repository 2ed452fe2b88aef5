"""
Unit tests for effective status resolution.
"""

from datetime import datetime, timedelta

import pytest

from app.domains.clinic_booking.domain.exceptions import MalformedTimeLabelException
from app.domains.clinic_booking.domain.services.status_resolver import effective_status, is_missed
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, DisplayStatus

SLOT_START = datetime(2025, 1, 20, 10, 0)


@pytest.mark.unit
def test_pending_in_the_past_is_missed(make_appointment):
    appointment = make_appointment()

    status = effective_status(appointment, SLOT_START + timedelta(minutes=1))

    assert status == DisplayStatus.MISSED
    assert status.label == "MISSED"
    assert is_missed(appointment, SLOT_START + timedelta(minutes=1))


@pytest.mark.unit
def test_pending_exactly_at_now_is_not_missed(make_appointment):
    """Test the comparison is strict."""
    appointment = make_appointment()

    assert effective_status(appointment, SLOT_START) == DisplayStatus.PENDING


@pytest.mark.unit
def test_pending_in_the_future_stays_pending(make_appointment):
    appointment = make_appointment()

    assert effective_status(appointment, SLOT_START - timedelta(days=1)) == DisplayStatus.PENDING


@pytest.mark.unit
@pytest.mark.parametrize(
    "stored,expected",
    [
        (AppointmentStatus.CONFIRMED, DisplayStatus.CONFIRMED),
        (AppointmentStatus.COMPLETED, DisplayStatus.COMPLETED),
        (AppointmentStatus.CANCELLED, DisplayStatus.CANCELLED),
    ],
)
def test_non_pending_statuses_pass_through_after_start(make_appointment, stored, expected):
    appointment = make_appointment(status=stored)

    assert effective_status(appointment, SLOT_START + timedelta(days=30)) == expected


@pytest.mark.unit
def test_status_is_recomputed_as_time_advances(make_appointment):
    appointment = make_appointment()

    before = effective_status(appointment, SLOT_START - timedelta(minutes=5))
    after = effective_status(appointment, SLOT_START + timedelta(minutes=5))

    assert (before, after) == (DisplayStatus.PENDING, DisplayStatus.MISSED)
    assert appointment.status == AppointmentStatus.PENDING


@pytest.mark.unit
def test_malformed_pending_time_raises(make_appointment):
    appointment = make_appointment()
    appointment.appointment_time = "25:00"

    with pytest.raises(MalformedTimeLabelException):
        effective_status(appointment, SLOT_START)
