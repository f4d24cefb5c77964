from typing import Any, Dict, List, Optional

from finpath.db.pg import get_conn
from finpath.schemas.financial import FinancialItem, FinancialItemCreate

_COLUMNS = "id, user_id, name, type, category, value, monthly_impact, interest_rate, created_at, updated_at"
_UPDATABLE = ("name", "type", "category", "value", "monthly_impact", "interest_rate")


def _row_to_item(row) -> FinancialItem:
    return FinancialItem(
        id=row[0], user_id=row[1], name=row[2], type=row[3], category=row[4],
        value=row[5], monthly_impact=row[6], interest_rate=row[7],
        created_at=row[8], updated_at=row[9],
    )


def list_items(user_id: int) -> List[FinancialItem]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM financial_items WHERE user_id=%s ORDER BY created_at DESC, id DESC", (user_id,))
            rows = cur.fetchall()
    conn.close()
    return [_row_to_item(r) for r in rows]


def get_item(item_id: int) -> Optional[FinancialItem]:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM financial_items WHERE id=%s", (item_id,))
            row = cur.fetchone()
    conn.close()
    return _row_to_item(row) if row else None


def create_item(user_id: int, payload: FinancialItemCreate) -> FinancialItem:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO financial_items (user_id, name, type, category, value, monthly_impact, interest_rate) "
                f"VALUES (%s,%s,%s,%s,%s,%s,%s) RETURNING {_COLUMNS}",
                (
                    user_id,
                    payload.name,
                    payload.type.value,
                    payload.category.value,
                    payload.value,
                    payload.monthly_impact or 0.0,
                    payload.interest_rate or 0.0,
                ),
            )
            row = cur.fetchone()
    conn.close()
    return _row_to_item(row)


def update_item(item_id: int, fields: Dict[str, Any]) -> Optional[FinancialItem]:
    fields = {k: v for k, v in fields.items() if k in _UPDATABLE}
    if not fields:
        return get_item(item_id)
    assignments = ", ".join(f"{k}=%s" for k in fields)
    values = [getattr(v, "value", v) for v in fields.values()]
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute(
                f"UPDATE financial_items SET {assignments}, updated_at=NOW() WHERE id=%s RETURNING {_COLUMNS}",
                (*values, item_id),
            )
            row = cur.fetchone()
    conn.close()
    return _row_to_item(row) if row else None


def delete_item(item_id: int) -> bool:
    conn = get_conn()
    with conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM financial_items WHERE id=%s", (item_id,))
            deleted = cur.rowcount > 0
    conn.close()
    return deleted
