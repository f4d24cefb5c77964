from fastapi import APIRouter, Depends

from finpath.api.common import ApiError, MessageResponse
from finpath.api.deps import get_current_user_id
from finpath.schemas.financial import (
    FinancialItem,
    FinancialItemCreate,
    FinancialItemsResponse,
    FinancialItemUpdate,
)
from finpath.services import financial_items as svc

router = APIRouter(prefix="/v1/financial-items", tags=["Financial items"])

_errors = {400: {"model": ApiError}, 403: {"model": ApiError}, 404: {"model": ApiError}}


@router.get("", summary="List items", description="All assets and liabilities of the user, newest first, with totals.", response_model=FinancialItemsResponse)
def list_items(user_id: int = Depends(get_current_user_id)):
    items, summary = svc.list_with_summary(user_id)
    return {"items": items, "summary": summary}


@router.get("/{item_id}", summary="Get item", response_model=FinancialItem, responses=_errors)
def get_item(item_id: int, user_id: int = Depends(get_current_user_id)):
    return svc.get_owned_item(user_id, item_id)


@router.post("", status_code=201, summary="Create item", response_model=FinancialItem, responses=_errors)
def create_item(payload: FinancialItemCreate, user_id: int = Depends(get_current_user_id)):
    return svc.create_item(user_id, payload)


@router.put("/{item_id}", summary="Update item", response_model=FinancialItem, responses=_errors)
def update_item(item_id: int, payload: FinancialItemUpdate, user_id: int = Depends(get_current_user_id)):
    return svc.update_item(user_id, item_id, payload)


@router.delete("/{item_id}", summary="Delete item", response_model=MessageResponse, responses=_errors)
def delete_item(item_id: int, user_id: int = Depends(get_current_user_id)):
    svc.delete_item(user_id, item_id)
    return {"message": "Financial item deleted successfully"}
