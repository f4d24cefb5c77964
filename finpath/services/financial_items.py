from typing import List, Tuple

from finpath.core.errors import ForbiddenError, NotFoundError, ValidationError
from finpath.core.logging import logger
from finpath.db import items_repo
from finpath.schemas.financial import (
    FinancialItem,
    FinancialItemCreate,
    FinancialItemUpdate,
    FinancialSummary,
)
from finpath.services.financial_state import summarize


def _check_value(value: float | None) -> None:
    if value is not None and value < 0:
        raise ValidationError("Value cannot be negative", target="value")


def list_with_summary(user_id: int) -> Tuple[List[FinancialItem], FinancialSummary]:
    items = items_repo.list_items(user_id)
    return items, summarize(items)


def get_owned_item(user_id: int, item_id: int) -> FinancialItem:
    item = items_repo.get_item(item_id)
    if item is None:
        raise NotFoundError("Financial item not found", target="item_id")
    if item.user_id != user_id:
        raise ForbiddenError("Not authorized to access this item")
    return item


def create_item(user_id: int, payload: FinancialItemCreate) -> FinancialItem:
    _check_value(payload.value)
    item = items_repo.create_item(user_id, payload)
    logger.info("financial_item_created", user_id=user_id, item_id=item.id, type=item.type.value)
    return item


def update_item(user_id: int, item_id: int, payload: FinancialItemUpdate) -> FinancialItem:
    get_owned_item(user_id, item_id)
    _check_value(payload.value)
    item = items_repo.update_item(item_id, payload.model_dump(exclude_none=True))
    if item is None:
        raise NotFoundError("Financial item not found", target="item_id")
    return item


def delete_item(user_id: int, item_id: int) -> None:
    get_owned_item(user_id, item_id)
    items_repo.delete_item(item_id)
    logger.info("financial_item_deleted", user_id=user_id, item_id=item_id)
