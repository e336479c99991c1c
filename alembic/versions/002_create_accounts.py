"""002: create accounts table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE accounts (
            iban         VARCHAR(34)    NOT NULL,
            customer_id  VARCHAR(64)    NOT NULL,
            balance      NUMERIC(19, 2) NOT NULL DEFAULT 0,
            created_at   TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            updated_at   TIMESTAMPTZ    NOT NULL DEFAULT NOW(),
            CONSTRAINT pk_accounts                PRIMARY KEY (iban, customer_id),
            CONSTRAINT ck_accounts_balance_gte_0  CHECK (balance >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_accounts_customer_id ON accounts (customer_id);")
    op.execute("""
        CREATE TRIGGER trg_accounts_updated_at
            BEFORE UPDATE ON accounts
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE accounts IS 'Customer accounts, cached per customer in Redis under accounts:<customer_id>';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS accounts CASCADE;")
