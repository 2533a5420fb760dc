"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Members table: one row per Telegram user who registered through the bot
CREATE TABLE IF NOT EXISTS members (
    id              SERIAL PRIMARY KEY,
    username        VARCHAR(64) UNIQUE NOT NULL,
    telegram_id     BIGINT UNIQUE NOT NULL,
    first_name      VARCHAR(100),
    balance         NUMERIC(12,2) NOT NULL DEFAULT 0,
    excluded        BOOLEAN NOT NULL DEFAULT FALSE,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Point log: every credit (+) or debit (-) applied to a member balance
CREATE TABLE IF NOT EXISTS point_log (
    id              SERIAL PRIMARY KEY,
    member_id       INT NOT NULL REFERENCES members(id) ON DELETE CASCADE,
    reference       VARCHAR(64) NOT NULL,
    amount          NUMERIC(12,2) NOT NULL,
    entry           TEXT,
    ref_id          BIGINT,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_point_log_member ON point_log(member_id, created_at);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
