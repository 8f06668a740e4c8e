"""widen_meeting_title

Revision ID: 5d2f8e41c6b7
Revises: 3b1e0c7d9a24
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5d2f8e41c6b7"
down_revision = "3b1e0c7d9a24"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Joined events prefix "[Event] " to a title of up to 255 characters
    with op.batch_alter_table("meetings") as batch_op:
        batch_op.alter_column(
            "title",
            existing_type=sa.String(length=255),
            type_=sa.String(length=300),
            existing_nullable=False,
        )


def downgrade() -> None:
    with op.batch_alter_table("meetings") as batch_op:
        batch_op.alter_column(
            "title",
            existing_type=sa.String(length=300),
            type_=sa.String(length=255),
            existing_nullable=False,
        )
