"""002: create card_info table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE card_info (
            id                  BIGSERIAL       PRIMARY KEY,
            number              VARCHAR(16)     NOT NULL,
            holder              VARCHAR(100)    NOT NULL,
            expiration_date     DATE,
            user_id             BIGINT          REFERENCES users (id) ON DELETE CASCADE,
            CONSTRAINT ck_card_info_number  CHECK (number ~ '^[0-9]{16}$')
        );
    """)
    op.execute("CREATE INDEX idx_card_info_user_id ON card_info (user_id);")
    op.execute("CREATE INDEX idx_card_info_number ON card_info (number);")
    op.execute("CREATE INDEX idx_card_info_expiration ON card_info (expiration_date);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS card_info CASCADE;")
