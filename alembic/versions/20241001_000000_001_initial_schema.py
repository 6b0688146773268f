"""Initial schema: staff, venues, events, patients and care records.

Revision ID: 001
Revises:
Create Date: 2024-10-01 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""

    # Users table (field staff and administrators)
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, default=True),
        sa.Column("certification_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Venues table
    op.create_table(
        "venues",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(50), nullable=True),
        sa.Column("zip_code", sa.String(20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name="fk_venues_created_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_venues"),
    )

    # Events table
    op.create_table(
        "events",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("venue_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.Column("timezone", sa.String(50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["venue_id"], ["venues.id"], name="fk_events_venue_id_venues"
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name="fk_events_created_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_venue_id", "events", ["venue_id"])
    op.create_index("ix_events_dates", "events", ["start_date", "end_date"])

    # Staff assignments (grant event visibility)
    op.create_table(
        "staff_assignments",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_staff_assignments_user_id_users"
        ),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="fk_staff_assignments_event_id_events"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_staff_assignments"),
        sa.UniqueConstraint("user_id", "event_id", name="uq_staff_assignments_user_event"),
    )
    op.create_index("ix_staff_assignments_user_id", "staff_assignments", ["user_id"])
    op.create_index("ix_staff_assignments_event_id", "staff_assignments", ["event_id"])

    # Patients table
    op.create_table(
        "patients",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("dob", sa.DateTime(timezone=True), nullable=False),
        sa.Column("alcohol_involved", sa.Boolean(), nullable=False, default=False),
        sa.Column("triage_tag", sa.String(50), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("updated_by", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="fk_patients_event_id_events"
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name="fk_patients_created_by_users"
        ),
        sa.ForeignKeyConstraint(
            ["updated_by"], ["users.id"], name="fk_patients_updated_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_patients"),
    )
    op.create_index("ix_patients_event_id", "patients", ["event_id"])

    # Assessments table (one care record per patient)
    op.create_table(
        "assessments",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("patient_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="incomplete"),
        sa.Column("disposition", sa.String(100), nullable=True),
        sa.Column("chief_complaint", sa.Text(), nullable=True),
        sa.Column("narrative", sa.Text(), nullable=True),
        sa.Column("hospital_name", sa.String(255), nullable=True),
        sa.Column("ems_unit", sa.String(100), nullable=True),
        sa.Column("patient_signature", sa.Text(), nullable=True),
        sa.Column("patient_signature_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("emt_signature", sa.Text(), nullable=True),
        sa.Column("emt_signature_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("updated_by", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["patient_id"], ["patients.id"], name="fk_assessments_patient_id_patients"
        ),
        sa.ForeignKeyConstraint(
            ["updated_by"], ["users.id"], name="fk_assessments_updated_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_assessments"),
        sa.CheckConstraint(
            "status IN ('incomplete', 'complete')", name="ck_assessments_status"
        ),
        sa.CheckConstraint(
            "disposition IS NULL OR disposition IN ('transported', 'rma', 'eloped')",
            name="ck_assessments_disposition",
        ),
    )
    op.create_index("ix_assessments_patient_id", "assessments", ["patient_id"], unique=True)
    op.create_index("ix_assessments_status", "assessments", ["status"])

    # Vitals table
    op.create_table(
        "vitals",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("assessment_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("blood_pressure", sa.String(50), nullable=True),
        sa.Column("heart_rate", sa.Integer(), nullable=True),
        sa.Column("respiratory_rate", sa.Integer(), nullable=True),
        sa.Column("oxygen_saturation", sa.Integer(), nullable=True),
        sa.Column("temperature", sa.Numeric(5, 2), nullable=True),
        sa.Column("glucose_level", sa.Integer(), nullable=True),
        sa.Column("pain_scale", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", postgresql.UUID(as_uuid=False), nullable=False),
        sa.ForeignKeyConstraint(
            ["assessment_id"], ["assessments.id"], name="fk_vitals_assessment_id_assessments"
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name="fk_vitals_created_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_vitals"),
    )
    op.create_index("ix_vitals_assessment_id", "vitals", ["assessment_id"])

    # Treatments table
    op.create_table(
        "treatments",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("assessment_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", postgresql.UUID(as_uuid=False), nullable=False),
        sa.ForeignKeyConstraint(
            ["assessment_id"],
            ["assessments.id"],
            name="fk_treatments_assessment_id_assessments",
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name="fk_treatments_created_by_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_treatments"),
    )
    op.create_index("ix_treatments_assessment_id", "treatments", ["assessment_id"])

    # Audit log (append-only)
    op.create_table(
        "audit_logs",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("resource_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(50), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_audit_logs_user_id_users"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_timestamp", "audit_logs", ["timestamp"])
    op.create_index("ix_audit_logs_resource", "audit_logs", ["resource", "resource_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("audit_logs")
    op.drop_table("treatments")
    op.drop_table("vitals")
    op.drop_table("assessments")
    op.drop_table("patients")
    op.drop_table("staff_assignments")
    op.drop_table("events")
    op.drop_table("venues")
    op.drop_table("users")
