from typing import Any, Dict, List, Optional

from finpath.db.pg import get_conn
from finpath.schemas.goal import Goal, GoalType, Timeline

_COLUMNS = "id, user_id, goal_type, priority, timeline, status, target_amount, created_at, updated_at"
_UPDATABLE = ("priority", "timeline", "status", "target_amount")


def _row_to_goal(row) -> Goal:
    return Goal(
        id=row[0], user_id=row[1], goal_type=row[2], priority=row[3], timeline=row[4],
        status=row[5], target_amount=row[6], created_at=row[7], updated_at=row[8],
    )


def list_goals(user_id: int) -> List[Goal]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM goals WHERE user_id=%s ORDER BY priority ASC, id ASC", (user_id,))
            rows = cur.fetchall()
    conn.close()
    return [_row_to_goal(r) for r in rows]


def get_goal(goal_id: int) -> Optional[Goal]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM goals WHERE id=%s", (goal_id,))
            row = cur.fetchone()
    conn.close()
    return _row_to_goal(row) if row else None


def create_goal(user_id: int, goal_type: GoalType, priority: int, timeline: Timeline, target_amount: float) -> Goal:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                f"INSERT INTO goals (user_id, goal_type, priority, timeline, target_amount) VALUES (%s,%s,%s,%s,%s) RETURNING {_COLUMNS}",
                (user_id, goal_type.value, priority, timeline.value, target_amount),
            )
            row = cur.fetchone()
    conn.close()
    return _row_to_goal(row)


def update_goal(goal_id: int, fields: Dict[str, Any]) -> Optional[Goal]:
    fields = {k: v for k, v in fields.items() if k in _UPDATABLE}
    if not fields:
        return get_goal(goal_id)
    assignments = ", ".join(f"{k}=%s" for k in fields)
    values = [getattr(v, "value", v) for v in fields.values()]
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                f"UPDATE goals SET {assignments}, updated_at=NOW() WHERE id=%s RETURNING {_COLUMNS}",
                (*values, goal_id),
            )
            row = cur.fetchone()
    conn.close()
    return _row_to_goal(row) if row else None


def delete_goal(goal_id: int) -> bool:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM goals WHERE id=%s", (goal_id,))
            deleted = cur.rowcount > 0
    conn.close()
    return deleted
