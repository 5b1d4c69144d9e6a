"""Create registrations table.

Revision ID: 001_create_registrations
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_create_registrations"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "registrations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("timezone", sa.Text, nullable=False, server_default="UTC"),
        sa.Column("password", sa.LargeBinary, nullable=False),
        sa.Column("shortbio", sa.Text, nullable=False, server_default=""),
        sa.Column("validated", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_registrations_email", "registrations", ["email"])


def downgrade() -> None:
    op.drop_index("ix_registrations_email", table_name="registrations")
    op.drop_table("registrations")
