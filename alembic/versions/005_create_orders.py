"""005: create orders table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE orders (
            id                  VARCHAR(26)     PRIMARY KEY,
            order_ref           VARCHAR(64)     NOT NULL,
            email               VARCHAR(255)    NOT NULL,
            route_id            BIGINT          NOT NULL,
            route_label         VARCHAR(255)    NOT NULL,
            operator            VARCHAR(100)    NOT NULL,
            departure_time      VARCHAR(20)     NOT NULL,
            travel_date         VARCHAR(32)     NOT NULL,
            seat_number         VARCHAR(10)     NOT NULL,
            original_fare       BIGINT          NOT NULL,
            discount            BIGINT          NOT NULL DEFAULT 0,
            total_amount        BIGINT          NOT NULL,
            passenger_name      VARCHAR(255)    NOT NULL,
            passenger_id_number VARCHAR(32)     NOT NULL,
            pickup_point        VARCHAR(255),
            dropoff_point       VARCHAR(255),
            vehicle_type        VARCHAR(50),
            category            VARCHAR(50),
            status              VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            snap_token          VARCHAR(255),
            redirect_url        VARCHAR(512),
            tx_hash             VARCHAR(128),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_orders_order_ref          UNIQUE (order_ref),
            CONSTRAINT ck_orders_discount_gte_0     CHECK (discount >= 0),
            CONSTRAINT ck_orders_total_gte_0        CHECK (total_amount >= 0),
            CONSTRAINT ck_orders_total_consistency  CHECK (
                total_amount = GREATEST(0, original_fare - discount)
            ),
            CONSTRAINT ck_orders_status             CHECK (
                status IN ('PENDING', 'CHALLENGE', 'LUNAS', 'GAGAL', 'CANCEL',
                           'MINTED', 'LUNAS_MINT_FAILED')
            ),
            CONSTRAINT ck_orders_minted_has_hash    CHECK (
                status NOT IN ('MINTED', 'LUNAS_MINT_FAILED') OR tx_hash IS NOT NULL
            )
        );
    """)
    # One active order per seat key. The purchase path relies on this index:
    # a violation on INSERT is the seat-conflict signal.
    op.execute("""
        CREATE UNIQUE INDEX uq_orders_active_seat
        ON orders (route_label, operator, departure_time, travel_date, seat_number)
        WHERE status NOT IN ('CANCEL', 'GAGAL');
    """)
    op.execute("CREATE INDEX idx_orders_email_created ON orders (email, created_at DESC);")
    op.execute("CREATE INDEX idx_orders_tx_hash ON orders (tx_hash) WHERE tx_hash IS NOT NULL;")
    op.execute("""
        CREATE TRIGGER trg_orders_updated_at
            BEFORE UPDATE ON orders
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE orders IS 'Purchase attempts with route snapshot, price, seat and lifecycle status';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders CASCADE;")
