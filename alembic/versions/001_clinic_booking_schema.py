"""Create clinic booking tables

Revision ID: 001_clinic_booking
Revises:
Create Date: 2025-01-10

Creates:
- appointments: patient bookings; a partial unique index keeps at most one
  non-cancelled appointment per (doctor_name, appointment_date, appointment_time)
- slot_blocks: administrator closures of single slots
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_clinic_booking"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create appointments and slot_blocks."""

    # =========================================================================
    # appointments
    # =========================================================================
    op.create_table(
        "appointments",
        sa.Column("id", sa.String(36), nullable=False, comment="UUID assigned at booking"),
        sa.Column("patient_id", sa.String(255), nullable=True, comment="Absent for walk-in/demo bookings"),
        sa.Column("doctor_name", sa.String(100), nullable=False),
        sa.Column("treatment_type", sa.String(32), nullable=False),
        sa.Column("appointment_date", sa.Date(), nullable=False),
        sa.Column("appointment_time", sa.String(16), nullable=False, comment="12-hour label, e.g. 10:00 AM"),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_appointments"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'completed')",
            name="ck_appointments_status",
        ),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_appointment_date", "appointments", ["appointment_date"])
    op.create_index(
        "uq_appointments_active_slot",
        "appointments",
        ["doctor_name", "appointment_date", "appointment_time"],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
    )

    # =========================================================================
    # slot_blocks
    # =========================================================================
    op.create_table(
        "slot_blocks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("doctor_name", sa.String(100), nullable=False),
        sa.Column("block_date", sa.Date(), nullable=False),
        sa.Column("block_time", sa.String(16), nullable=False),
        sa.Column("reason", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_slot_blocks"),
        sa.UniqueConstraint("doctor_name", "block_date", "block_time", name="uq_slot_blocks_slot"),
    )
    op.create_index("ix_slot_blocks_block_date", "slot_blocks", ["block_date"])


def downgrade() -> None:
    """Drop clinic booking tables."""
    op.drop_index("ix_slot_blocks_block_date", table_name="slot_blocks")
    op.drop_table("slot_blocks")

    op.drop_index("uq_appointments_active_slot", table_name="appointments")
    op.drop_index("ix_appointments_appointment_date", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")
