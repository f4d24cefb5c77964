from typing import Iterable, List

from finpath.schemas.financial import (
    FinancialItem,
    FinancialState,
    FinancialSummary,
    ItemCategory,
    ItemType,
)

HIGH_INTEREST_RATE = 10.0

INVESTMENT_CATEGORIES = {ItemCategory.STOCKS_INVESTMENTS, ItemCategory.RETIREMENT_ACCOUNT}


def _total(items: Iterable[FinancialItem]) -> float:
    return float(sum(it.value for it in items))


def is_high_interest(item: FinancialItem) -> bool:
    return item.type == ItemType.LIABILITY and (item.interest_rate or 0.0) > HIGH_INTEREST_RATE


def aggregate_state(items: Iterable[FinancialItem]) -> FinancialState:
    items = list(items)
    assets = [it for it in items if it.type == ItemType.ASSET]
    liabilities = [it for it in items if it.type == ItemType.LIABILITY]
    total_assets = _total(assets)
    total_liabilities = _total(liabilities)
    return FinancialState(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=total_assets - total_liabilities,
        cash_assets=_total(it for it in assets if it.category == ItemCategory.CASH_SAVINGS),
        investment_assets=_total(it for it in assets if it.category in INVESTMENT_CATEGORIES),
        business_assets=_total(it for it in assets if it.category == ItemCategory.BUSINESS),
        has_high_interest_debt=any(is_high_interest(it) for it in liabilities),
    )


def summarize(items: List[FinancialItem]) -> FinancialSummary:
    state = aggregate_state(items)
    ratio = None
    if state.total_liabilities > 0:
        ratio = round(state.total_assets / state.total_liabilities, 2)
    return FinancialSummary(
        total_assets=state.total_assets,
        total_liabilities=state.total_liabilities,
        net_worth=state.net_worth,
        asset_to_liability_ratio=ratio,
        has_high_interest_debt=state.has_high_interest_debt,
        item_count=len(items),
    )
