"""
Clinic Booking SQLAlchemy Models

Database models for booking persistence.
"""

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, String, Text, UniqueConstraint, text

from app.database.base import Base, TimestampMixin

# Non-cancelled rows may not share a slot
ACTIVE_SLOT_PREDICATE = text("status <> 'cancelled'")


class AppointmentModel(Base, TimestampMixin):
    """SQLAlchemy model for Appointment entity."""

    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True)
    patient_id = Column(String(255), nullable=True, index=True)

    doctor_name = Column(String(100), nullable=False)
    treatment_type = Column(String(32), nullable=False)
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(16), nullable=False)

    status = Column(String(16), nullable=False, default="pending", server_default="pending")
    notes = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'confirmed', 'cancelled', 'completed')", name="status"),
        Index(
            "uq_appointments_active_slot",
            "doctor_name",
            "appointment_date",
            "appointment_time",
            unique=True,
            postgresql_where=ACTIVE_SLOT_PREDICATE,
            sqlite_where=ACTIVE_SLOT_PREDICATE,
        ),
    )

    def __repr__(self) -> str:
        return f"<Appointment {self.id} {self.doctor_name} {self.appointment_date} {self.appointment_time} [{self.status}]>"


class SlotBlockModel(Base, TimestampMixin):
    """SQLAlchemy model for administrator slot blocks."""

    __tablename__ = "slot_blocks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_name = Column(String(100), nullable=False)
    block_date = Column(Date, nullable=False, index=True)
    block_time = Column(String(16), nullable=False)
    reason = Column(String(255), nullable=True)

    __table_args__ = (UniqueConstraint("doctor_name", "block_date", "block_time", name="uq_slot_blocks_slot"),)
