"""Add audit_logs immutability trigger.

Revision ID: 002
Revises: 001
Create Date: 2024-10-01 00:00:01.000000

Rejects UPDATE and DELETE on audit_logs at the database level.
"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add immutability trigger to audit_logs table."""
    op.execute("""
        CREATE OR REPLACE FUNCTION prevent_audit_log_modification()
        RETURNS TRIGGER AS $$
        BEGIN
            RAISE EXCEPTION 'Audit log rows are append-only (% on %)', TG_OP, OLD.id;
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.execute("""
        DROP TRIGGER IF EXISTS audit_logs_immutability_trigger ON audit_logs
    """)

    op.execute("""
        CREATE TRIGGER audit_logs_immutability_trigger
        BEFORE UPDATE OR DELETE ON audit_logs
        FOR EACH ROW
        EXECUTE FUNCTION prevent_audit_log_modification()
    """)

    op.execute("""
        COMMENT ON TABLE audit_logs IS
        'Append-only audit log. Protected by audit_logs_immutability_trigger.';
    """)


def downgrade() -> None:
    """Remove immutability trigger."""
    op.execute("""
        DROP TRIGGER IF EXISTS audit_logs_immutability_trigger ON audit_logs;
    """)
    op.execute("""
        DROP FUNCTION IF EXISTS prevent_audit_log_modification();
    """)
    op.execute("""
        COMMENT ON TABLE audit_logs IS NULL;
    """)
