import psycopg2
from finpath.config.settings import settings
from finpath.core.errors import ServiceUnavailableError

def is_configured() -> bool:
    return bool(str(settings.pg_dsn or "").strip())

def get_conn():
    dsn = str(settings.pg_dsn or "")
    if not dsn:
        raise ServiceUnavailableError("postgres not configured")
    return psycopg2.connect(
        dsn,
        connect_timeout=settings.pg_connect_timeout_seconds,
        options=f"-c statement_timeout={int(settings.pg_statement_timeout_ms)}",
    )

def ensure_tables():
    conn = get_conn()
    conn.autocommit = True
    with conn.cursor() as cur:
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
              id BIGINT PRIMARY KEY,
              monthly_income DOUBLE PRECISION NOT NULL DEFAULT 0,
              employment_status TEXT NOT NULL DEFAULT 'other',
              created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS financial_items (
              id SERIAL PRIMARY KEY,
              user_id BIGINT NOT NULL,
              name TEXT NOT NULL,
              type TEXT NOT NULL,
              category TEXT NOT NULL,
              value DOUBLE PRECISION NOT NULL CHECK (value >= 0),
              monthly_impact DOUBLE PRECISION NOT NULL DEFAULT 0,
              interest_rate DOUBLE PRECISION NOT NULL DEFAULT 0,
              created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )
        cur.execute("CREATE INDEX IF NOT EXISTS idx_financial_items_user ON financial_items (user_id)")
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS goals (
              id SERIAL PRIMARY KEY,
              user_id BIGINT NOT NULL,
              goal_type TEXT NOT NULL,
              priority INTEGER NOT NULL CHECK (priority BETWEEN 1 AND 3),
              timeline TEXT NOT NULL DEFAULT 'medium',
              status TEXT NOT NULL DEFAULT 'not_started',
              target_amount DOUBLE PRECISION NOT NULL DEFAULT 0 CHECK (target_amount >= 0),
              created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              UNIQUE (user_id, goal_type)
            )
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS roadmaps (
              user_id BIGINT PRIMARY KEY,
              steps JSONB NOT NULL DEFAULT '[]'::jsonb,
              last_generated TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )
    conn.close()
