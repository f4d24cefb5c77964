from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class ItemType(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"


class ItemCategory(str, Enum):
    CASH_SAVINGS = "cash_savings"
    STOCKS_INVESTMENTS = "stocks_investments"
    RETIREMENT_ACCOUNT = "retirement_account"
    BUSINESS = "business"
    OTHER_ASSET = "other_asset"
    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    CAR_LOAN = "car_loan"
    STUDENT_LOAN = "student_loan"
    OTHER_LIABILITY = "other_liability"


class FinancialItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: ItemType
    category: ItemCategory
    value: float
    monthly_impact: float = 0.0
    interest_rate: float = 0.0


class FinancialItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ItemType] = None
    category: Optional[ItemCategory] = None
    value: Optional[float] = None
    monthly_impact: Optional[float] = None
    interest_rate: Optional[float] = None


class FinancialItem(BaseModel):
    id: int
    user_id: int
    name: str
    type: ItemType
    category: ItemCategory
    value: float
    monthly_impact: float = 0.0
    interest_rate: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FinancialState(BaseModel):
    """Snapshot of a user's balance sheet as seen by the roadmap generator."""

    total_assets: float = 0.0
    total_liabilities: float = 0.0
    net_worth: float = 0.0
    cash_assets: float = 0.0
    investment_assets: float = 0.0
    business_assets: float = 0.0
    has_high_interest_debt: bool = False

    model_config = {"frozen": True}


class FinancialSummary(BaseModel):
    total_assets: float
    total_liabilities: float
    net_worth: float
    asset_to_liability_ratio: Optional[float] = None
    has_high_interest_debt: bool
    item_count: int


class FinancialItemsResponse(BaseModel):
    items: List[FinancialItem]
    summary: FinancialSummary
