"""
Unit tests for the Appointment aggregate.
"""

from datetime import date

import pytest

from app.core.domain import InvalidOperationException
from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.value_objects import AppointmentStatus, SlotKey, TreatmentType


@pytest.mark.unit
def test_book_creates_pending_appointment_with_fresh_id():
    first = Appointment.book("Dr. Chen", TreatmentType.CLEANING, date(2025, 1, 20), "10:00 AM")
    second = Appointment.book("Dr. Chen", TreatmentType.CLEANING, date(2025, 1, 20), "10:00 AM")

    assert first.status == AppointmentStatus.PENDING
    assert first.id and second.id
    assert first.id != second.id
    assert first.slot_key == SlotKey("Dr. Chen", date(2025, 1, 20), "10:00 AM")


@pytest.mark.unit
@pytest.mark.parametrize(
    "transitions,final",
    [
        (["confirm", "complete"], AppointmentStatus.COMPLETED),
        (["confirm", "cancel"], AppointmentStatus.CANCELLED),
        (["complete"], AppointmentStatus.COMPLETED),
        (["cancel"], AppointmentStatus.CANCELLED),
    ],
)
def test_valid_transitions(make_appointment, transitions, final):
    appointment = make_appointment()

    for name in transitions:
        getattr(appointment, name)()

    assert appointment.status == final
    assert appointment.version == len(transitions)


@pytest.mark.unit
@pytest.mark.parametrize("terminal", [AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED])
def test_terminal_states_reject_changes(make_appointment, terminal):
    appointment = make_appointment(status=terminal)

    with pytest.raises(InvalidOperationException):
        appointment.confirm()


@pytest.mark.unit
def test_confirmed_cannot_go_back_to_pending(make_appointment):
    appointment = make_appointment(status=AppointmentStatus.CONFIRMED)

    with pytest.raises(InvalidOperationException) as exc_info:
        appointment.change_status(AppointmentStatus.PENDING)

    assert "confirmed" in exc_info.value.message


@pytest.mark.unit
def test_same_status_is_a_no_op(make_appointment):
    appointment = make_appointment(status=AppointmentStatus.CONFIRMED)

    appointment.confirm()

    assert appointment.version == 0


@pytest.mark.unit
def test_only_cancelled_releases_the_slot(make_appointment):
    assert make_appointment(status=AppointmentStatus.COMPLETED).holds_slot
    assert not make_appointment(status=AppointmentStatus.CANCELLED).holds_slot


@pytest.mark.unit
def test_chronological_key_orders_by_slot_start(make_appointment):
    morning = make_appointment(appointment_time="9:00 AM")
    afternoon = make_appointment(appointment_time="1:00 PM")
    next_day = make_appointment(appointment_date=date(2025, 1, 21), appointment_time="8:00 AM")

    ordered = sorted([afternoon, next_day, morning], key=lambda a: a.chronological_key())

    assert ordered == [morning, afternoon, next_day]


@pytest.mark.unit
def test_to_dict(make_appointment):
    data = make_appointment(appointment_id="apt-1").to_dict()

    assert data["id"] == "apt-1"
    assert data["appointment_date"] == "2025-01-20"
    assert data["treatment_type"] == "cleaning"
    assert data["status"] == "pending"
