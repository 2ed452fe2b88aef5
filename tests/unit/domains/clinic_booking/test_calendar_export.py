"""
Unit tests for calendar event projection and rendering.

Tests:
- to_calendar_event
- google_calendar_url
- ics_document / ics_filename
"""

from datetime import UTC, date, datetime
from urllib.parse import parse_qs, urlsplit

import pytest

from app.domains.clinic_booking.domain.exceptions import MalformedTimeLabelException
from app.domains.clinic_booking.domain.services.calendar_export import CalendarEvent, to_calendar_event
from app.domains.clinic_booking.domain.value_objects import TreatmentType
from app.domains.clinic_booking.infrastructure.calendar import (
    escape_text,
    google_calendar_url,
    ics_document,
    ics_filename,
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def afternoon_appointment(make_appointment):
    return make_appointment(
        doctor_name="Dr. Chen",
        appointment_date=date(2025, 1, 15),
        appointment_time="2:00 PM",
        treatment_type=TreatmentType.ROOT_CANAL,
        appointment_id="apt-123",
    )


@pytest.fixture
def sample_event() -> CalendarEvent:
    return CalendarEvent(
        title="Dental Appointment - Routine Cleaning",
        start=datetime(2025, 1, 15, 14, 0),
        end=datetime(2025, 1, 15, 15, 0),
        description="Appointment with Dr. Chen for Routine Cleaning",
        location="Dental Clinic, 12 Main St",
    )


# ============================================================================
# Projection Tests
# ============================================================================


@pytest.mark.unit
def test_event_spans_one_hour_from_slot_start(afternoon_appointment):
    event = to_calendar_event(afternoon_appointment)

    assert event.start == datetime(2025, 1, 15, 14, 0, 0)
    assert event.end == datetime(2025, 1, 15, 15, 0, 0)
    assert event.title == "Dental Appointment - Root Canal"
    assert event.description == "Appointment with Dr. Chen for Root Canal"
    assert event.location == "Dental Clinic"


@pytest.mark.unit
def test_event_uses_configured_location_and_duration(afternoon_appointment):
    event = to_calendar_event(afternoon_appointment, location="Smile Center", duration_hours=2)

    assert event.location == "Smile Center"
    assert event.end == datetime(2025, 1, 15, 16, 0)


@pytest.mark.unit
def test_event_for_malformed_stored_time_raises(afternoon_appointment):
    afternoon_appointment.appointment_time = "14:00"

    with pytest.raises(MalformedTimeLabelException):
        to_calendar_event(afternoon_appointment)


# ============================================================================
# Rendering Tests
# ============================================================================


@pytest.mark.unit
def test_google_calendar_url(sample_event):
    url = google_calendar_url(sample_event)
    parts = urlsplit(url)
    query = parse_qs(parts.query)

    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://calendar.google.com/calendar/render"
    assert query["action"] == ["TEMPLATE"]
    assert query["dates"] == ["20250115T140000/20250115T150000"]
    assert query["text"] == ["Dental Appointment - Routine Cleaning"]
    assert query["location"] == ["Dental Clinic, 12 Main St"]
    assert "+" not in parts.query


@pytest.mark.unit
def test_ics_document_structure(sample_event):
    stamp = datetime(2025, 1, 10, 8, 30, tzinfo=UTC)

    document = ics_document(sample_event, uid="apt-123", stamp=stamp)
    lines = document.split("\r\n")

    assert lines[0] == "BEGIN:VCALENDAR"
    assert "UID:apt-123@dental.clinic" in lines
    assert "DTSTAMP:20250110T083000Z" in lines
    assert "DTSTART:20250115T140000" in lines
    assert "DTEND:20250115T150000" in lines
    assert "LOCATION:Dental Clinic\\, 12 Main St" in lines
    assert document.endswith("END:VCALENDAR\r\n")


@pytest.mark.unit
def test_escape_text():
    assert escape_text("a;b,c\\d\ne") == "a\\;b\\,c\\\\d\\ne"


@pytest.mark.unit
def test_ics_filename(sample_event):
    assert ics_filename(sample_event) == "dental-appointment-2025-01-15.ics"
