from typing import Optional

from finpath.db.pg import get_conn
from finpath.schemas.profile import UserProfile


def get_profile(user_id: int) -> Optional[UserProfile]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute("SELECT monthly_income, employment_status FROM users WHERE id=%s", (user_id,))
            row = cur.fetchone()
    conn.close()
    if not row:
        return None
    return UserProfile(monthly_income=row[0], employment_status=row[1])


def upsert_profile(user_id: int, profile: UserProfile) -> UserProfile:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO users (id, monthly_income, employment_status) VALUES (%s,%s,%s) "
                "ON CONFLICT (id) DO UPDATE SET monthly_income=EXCLUDED.monthly_income, "
                "employment_status=EXCLUDED.employment_status, updated_at=NOW() "
                "RETURNING monthly_income, employment_status",
                (user_id, profile.monthly_income, profile.employment_status.value),
            )
            row = cur.fetchone()
    conn.close()
    return UserProfile(monthly_income=row[0], employment_status=row[1])
