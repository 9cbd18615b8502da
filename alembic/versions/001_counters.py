"""Counters table — one row per physical counter key.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from ctr_engine.config import settings

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_name() -> str:
    if not settings.counters_table:
        raise RuntimeError("env variable 'COUNTERS_TABLE' is mandatory")
    return settings.counters_table


def upgrade() -> None:
    op.create_table(
        _table_name(),
        sa.Column("k", sa.String(512), primary_key=True),
        sa.Column("v", sa.BigInteger, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table(_table_name())
