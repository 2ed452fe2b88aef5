"""
Clinic Booking Value Objects

Status enums and the treatment catalogue for the booking domain.
"""

from app.core.domain import StatusEnum


class AppointmentStatus(StatusEnum):
    """
    Stored appointment lifecycle states.

    Valid transitions:
    - PENDING -> CONFIRMED, CANCELLED, COMPLETED
    - CONFIRMED -> COMPLETED, CANCELLED
    - COMPLETED -> (terminal)
    - CANCELLED -> (terminal)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Check if transition to new status is valid."""
        return new_status.value in _STATUS_TRANSITIONS.get(self.value, ())

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self.value in ("completed", "cancelled")

    def holds_slot(self) -> bool:
        """Every status except cancelled keeps the doctor/time slot occupied."""
        return self.value != "cancelled"


_STATUS_TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("confirmed", "cancelled", "completed"),
    "confirmed": ("completed", "cancelled"),
    "completed": (),
    "cancelled": (),
}


class DisplayStatus(StatusEnum):
    """Effective status shown to users; MISSED is derived, never stored."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    MISSED = "missed"

    @property
    def label(self) -> str:
        """Uppercased form used for display."""
        return self.value.upper()

    @classmethod
    def from_stored(cls, status: AppointmentStatus) -> "DisplayStatus":
        return cls(status.value)


class TreatmentType(StatusEnum):
    """Treatments that can be booked online."""

    CLEANING = "cleaning"
    CHECKUP = "checkup"
    FILLING = "filling"
    ROOT_CANAL = "root-canal"
    CROWN = "crown"
    EXTRACTION = "extraction"
    ORTHODONTICS = "orthodontics"

    @property
    def display_name(self) -> str:
        """Human readable treatment name."""
        return _TREATMENT_NAMES[self.value]


_TREATMENT_NAMES: dict[str, str] = {
    "cleaning": "Routine Cleaning",
    "checkup": "General Checkup",
    "filling": "Dental Filling",
    "root-canal": "Root Canal",
    "crown": "Crown Placement",
    "extraction": "Tooth Extraction",
    "orthodontics": "Orthodontic Consultation",
}
