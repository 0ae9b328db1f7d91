"""004: create promos table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE promos (
            code        VARCHAR(50)     PRIMARY KEY,
            active      BOOLEAN         NOT NULL DEFAULT TRUE,
            quota       INT             NOT NULL DEFAULT 0,
            discount    INT             NOT NULL DEFAULT 0,
            CONSTRAINT ck_promos_quota_gte_0    CHECK (quota >= 0),
            CONSTRAINT ck_promos_discount_gte_0 CHECK (discount >= 0)
        );
    """)
    op.execute("COMMENT ON TABLE promos IS 'Promo codes; quota only ever decremented by one, never below zero';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS promos CASCADE;")
