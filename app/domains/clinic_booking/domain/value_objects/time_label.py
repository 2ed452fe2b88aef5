"""
Time Representation

Conversion between 12-hour clock labels ("10:00 AM") and local instants
anchored to a calendar date. Instants are naive local datetimes; the clinic
operates in a single time zone.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from app.core.domain import ValueObject

from ..exceptions import MalformedTimeLabelException

_LABEL_PATTERN = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2}) ?(?P<period>[AaPp][Mm])$", re.ASCII)


@dataclass(frozen=True)
class TimeLabel(ValueObject):
    """
    A 12-hour clock label such as ``1:30 PM``.

    Example:
        ```python
        label = TimeLabel.parse("1:30 pm")
        label.hour_of_day  # 13
        str(label)  # "1:30 PM"
        ```
    """

    hour: int
    minute: int
    period: str

    def _validate(self) -> None:
        if self.period not in ("AM", "PM"):
            raise MalformedTimeLabelException(self._raw(), "missing AM/PM marker")
        if not 1 <= self.hour <= 12:
            raise MalformedTimeLabelException(self._raw(), "hour must be between 1 and 12")
        if not 0 <= self.minute <= 59:
            raise MalformedTimeLabelException(self._raw(), "minutes must be between 00 and 59")

    @classmethod
    def parse(cls, text: str | None) -> "TimeLabel":
        """Parse ``H:MM AM|PM``; raises MalformedTimeLabelException."""
        if text is None or not text.strip():
            raise MalformedTimeLabelException(text, "time is empty")

        candidate = text.strip()
        match = _LABEL_PATTERN.match(candidate)
        if match is None:
            if ":" not in candidate:
                reason = "missing ':' separator"
            elif not candidate.upper().endswith(("AM", "PM")):
                reason = "missing AM/PM marker"
            else:
                reason = "expected the form 'H:MM AM' or 'H:MM PM'"
            raise MalformedTimeLabelException(text, reason)

        return cls(
            hour=int(match.group("hour")),
            minute=int(match.group("minute")),
            period=match.group("period").upper(),
        )

    @property
    def hour_of_day(self) -> int:
        """Hour on the 24-hour clock (12 AM is 0, 12 PM is 12)."""
        if self.period == "AM":
            return 0 if self.hour == 12 else self.hour
        return 12 if self.hour == 12 else self.hour + 12

    def to_time(self) -> time:
        """Wall-clock time of day."""
        return time(self.hour_of_day, self.minute)

    def on(self, day: date) -> datetime:
        """Instant of this label on the given day."""
        return datetime.combine(day, self.to_time())

    def _raw(self) -> str:
        return f"{self.hour}:{self.minute:02d} {self.period}"

    def __str__(self) -> str:
        return self._raw()


def to_instant(day: date, label: str | TimeLabel) -> datetime:
    """
    Anchor a 12-hour label to local midnight of ``day``.

    Args:
        day: Calendar date
        label: Label text or an already parsed TimeLabel

    Returns:
        Naive local datetime with seconds set to zero

    Raises:
        MalformedTimeLabelException: If the label cannot be parsed
    """
    parsed = label if isinstance(label, TimeLabel) else TimeLabel.parse(label)
    return parsed.on(day)


def add_hours(instant: datetime, hours: int) -> datetime:
    """Offset an instant by a whole number of hours."""
    return instant + timedelta(hours=hours)


def normalize_label(label: str) -> str:
    """Canonical text form of a label, e.g. ``"09:00 am"`` becomes ``"9:00 AM"``."""
    return str(TimeLabel.parse(label))
