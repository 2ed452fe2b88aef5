from .renderers import ICS_MEDIA_TYPE, escape_text, google_calendar_url, ics_document, ics_filename

__all__ = ["ICS_MEDIA_TYPE", "escape_text", "google_calendar_url", "ics_document", "ics_filename"]
