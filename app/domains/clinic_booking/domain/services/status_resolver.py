"""
Status Resolver

Derives the status shown to users from the stored status and the current
instant. Recomputed on every read, never persisted.
"""

from datetime import datetime

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import AppointmentStatus, DisplayStatus


def effective_status(appointment: Appointment, now: datetime) -> DisplayStatus:
    """
    Effective display status of an appointment at ``now``.

    A pending appointment whose slot started strictly before ``now`` is
    MISSED; every other appointment shows its stored status. An appointment
    exactly at ``now`` is not yet missed.

    Raises:
        MalformedTimeLabelException: If a pending appointment has an
            unparsable stored time
    """
    if appointment.status == AppointmentStatus.PENDING and appointment.start_instant < now:
        return DisplayStatus.MISSED
    return DisplayStatus.from_stored(appointment.status)


def is_missed(appointment: Appointment, now: datetime) -> bool:
    return effective_status(appointment, now) == DisplayStatus.MISSED
