"""
Calendar renderers

Render a CalendarEvent as a Google Calendar template link or as an
RFC 5545 iCalendar document. Times are floating local times (no zone).
"""

from datetime import UTC, datetime
from urllib.parse import quote, urlencode

from app.domains.clinic_booking.domain.services.calendar_export import CalendarEvent

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
ICS_PRODID = "-//Dental Clinic//Appointment Reminder//EN"
ICS_UID_DOMAIN = "dental.clinic"
ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"

_STAMP_FORMAT = "%Y%m%dT%H%M%S"


def format_stamp(instant: datetime) -> str:
    """``YYYYMMDDTHHMMSS`` form used by both output modes."""
    return instant.strftime(_STAMP_FORMAT)


def google_calendar_url(event: CalendarEvent) -> str:
    """Google Calendar "add event" template URL for the event."""
    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "dates": f"{format_stamp(event.start)}/{format_stamp(event.end)}",
        "details": event.description,
        "location": event.location,
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params, quote_via=quote, safe='/')}"


def escape_text(value: str) -> str:
    """Escape an iCalendar TEXT value."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def ics_document(event: CalendarEvent, uid: str, stamp: datetime | None = None) -> str:
    """
    Single-event VCALENDAR document.

    Args:
        event: Event to render
        uid: Appointment id; suffixed with the clinic domain to form the UID
        stamp: DTSTAMP value, defaults to the current UTC time

    Returns:
        Document text with CRLF line endings
    """
    stamp = stamp or datetime.now(UTC)
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{ICS_PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{uid}@{ICS_UID_DOMAIN}",
        f"DTSTAMP:{stamp.astimezone(UTC).strftime(_STAMP_FORMAT)}Z",
        f"DTSTART:{format_stamp(event.start)}",
        f"DTEND:{format_stamp(event.end)}",
        f"SUMMARY:{escape_text(event.title)}",
        f"DESCRIPTION:{escape_text(event.description)}",
        f"LOCATION:{escape_text(event.location)}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"


def ics_filename(event: CalendarEvent) -> str:
    return f"dental-appointment-{event.start.date().isoformat()}.ics"
