"""003: create routes table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE routes (
            id              BIGSERIAL       PRIMARY KEY,
            origin          VARCHAR(100)    NOT NULL,
            destination     VARCHAR(100)    NOT NULL,
            operator        VARCHAR(100)    NOT NULL,
            departure_time  VARCHAR(10)     NOT NULL,
            fare            INT             NOT NULL,
            capacity        INT             NOT NULL DEFAULT 10,
            vehicle_type    VARCHAR(50),
            category        VARCHAR(50),
            pickup_point    VARCHAR(200),
            dropoff_point   VARCHAR(200),
            CONSTRAINT ck_routes_fare_gte_0     CHECK (fare >= 0),
            CONSTRAINT ck_routes_capacity_gt_0  CHECK (capacity > 0)
        );
    """)
    op.execute("CREATE INDEX idx_routes_origin_destination ON routes (origin, destination);")
    op.execute("COMMENT ON TABLE routes IS 'Route catalog; snapshotted into orders at purchase time';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS routes CASCADE;")
