from datetime import datetime
from typing import Callable, List, Optional

from psycopg2.extras import Json

from finpath.db.pg import get_conn
from finpath.schemas.roadmap import Roadmap, RoadmapStep

_COLUMNS = "user_id, steps, last_generated, created_at, updated_at"


def _row_to_roadmap(row) -> Roadmap:
    return Roadmap(
        user_id=row[0],
        steps=[RoadmapStep.model_validate(s) for s in (row[1] or [])],
        last_generated=row[2],
        created_at=row[3],
        updated_at=row[4],
    )


def _steps_json(steps: List[RoadmapStep]) -> Json:
    return Json([s.model_dump(mode="json") for s in steps])


def get_roadmap(user_id: int) -> Optional[Roadmap]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM roadmaps WHERE user_id=%s", (user_id,))
            row = cur.fetchone()
    conn.close()
    return _row_to_roadmap(row) if row else None


def save_roadmap(user_id: int, steps: List[RoadmapStep], generated_at: datetime) -> Roadmap:
    """Insert or fully replace the user's roadmap."""
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO roadmaps (user_id, steps, last_generated) VALUES (%s,%s,%s) "
                "ON CONFLICT (user_id) DO UPDATE SET steps=EXCLUDED.steps, "
                "last_generated=EXCLUDED.last_generated, updated_at=NOW() "
                f"RETURNING {_COLUMNS}",
                (user_id, _steps_json(steps), generated_at),
            )
            row = cur.fetchone()
    conn.close()
    return _row_to_roadmap(row)


def update_roadmap(user_id: int, mutate: Callable[[Roadmap], Roadmap]) -> Optional[Roadmap]:
    """Read-modify-write under a row lock.

    Returns None when the user has no roadmap. Exceptions raised by ``mutate``
    roll the transaction back.
    """
    conn = get_conn()
    try:
        with conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM roadmaps WHERE user_id=%s FOR UPDATE", (user_id,))
                row = cur.fetchone()
                if not row:
                    return None
                roadmap = mutate(_row_to_roadmap(row))
                cur.execute(
                    f"UPDATE roadmaps SET steps=%s, updated_at=NOW() WHERE user_id=%s RETURNING {_COLUMNS}",
                    (_steps_json(roadmap.steps), user_id),
                )
                row = cur.fetchone()
    finally:
        conn.close()
    return _row_to_roadmap(row)


def delete_roadmap(user_id: int) -> bool:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM roadmaps WHERE user_id=%s", (user_id,))
            deleted = cur.rowcount > 0
    conn.close()
    return deleted
