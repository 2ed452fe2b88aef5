from .models import AppointmentModel, SlotBlockModel

__all__ = ["AppointmentModel", "SlotBlockModel"]
