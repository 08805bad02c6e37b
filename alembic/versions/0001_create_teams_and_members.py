"""create teams and members tables

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001a2b3c4d5"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_teams_name", "teams", ["name"])

    op.create_table(
        "members",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    # 검색 조건 컬럼 인덱스 — Indexes on the filterable columns
    op.create_index("ix_members_name", "members", ["name"])
    op.create_index("ix_members_age", "members", ["age"])
    op.create_index("ix_members_team_id", "members", ["team_id"])


def downgrade() -> None:
    op.drop_index("ix_members_team_id", table_name="members")
    op.drop_index("ix_members_age", table_name="members")
    op.drop_index("ix_members_name", table_name="members")
    op.drop_table("members")
    op.drop_index("ix_teams_name", table_name="teams")
    op.drop_table("teams")
