"""001: create users table

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              BIGSERIAL       PRIMARY KEY,
            name            VARCHAR(50)     NOT NULL,
            surname         VARCHAR(50)     NOT NULL,
            birth_date      DATE            NOT NULL,
            email           VARCHAR(255)    NOT NULL,
            password        VARCHAR(255)    NOT NULL,
            role            VARCHAR(16)     NOT NULL,
            CONSTRAINT uq_users_email       UNIQUE (email),
            CONSTRAINT ck_users_role        CHECK (role IN ('USER', 'ADMIN'))
        );
    """)
    # find-by-email is case-insensitive
    op.execute("CREATE UNIQUE INDEX idx_users_email_lower ON users (LOWER(email));")
    op.execute("CREATE INDEX idx_users_role ON users (role);")
    op.execute("COMMENT ON TABLE users IS 'User accounts; password holds a bcrypt hash';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
