import math
from datetime import date
from enum import Enum
from typing import Optional


class DepreciationMethod(str, Enum):
    STRAIGHT_LINE = "straight_line"
    DECLINING_BALANCE = "declining_balance"


def _months_owned(purchase_date: date, as_of: date) -> int:
    # Whole 30-day months, never negative
    return max(0, math.floor((as_of - purchase_date).days / 30))


def calculate_depreciation(
    purchase_price: float,
    salvage_value: float,
    useful_life: float,
    purchase_date: date,
    method: str = DepreciationMethod.STRAIGHT_LINE.value,
    as_of: Optional[date] = None,
) -> dict:
    """Depreciation to date for a fixed asset.

    straight_line spreads (price - salvage) evenly over `useful_life`
    years. declining_balance applies a 2 / useful_life rate to the book
    value once per full year owned and never drops below salvage.
    Any other method depreciates nothing.
    """
    as_of = as_of or date.today()
    years_owned = _months_owned(purchase_date, as_of) / 12
    depreciable = purchase_price - salvage_value

    if method == DepreciationMethod.STRAIGHT_LINE.value:
        annual = depreciable / useful_life
        total = min(annual * years_owned, depreciable)
        return {
            "annual_depreciation": annual,
            "monthly_depreciation": annual / 12,
            "total_depreciation": total,
            "current_value": purchase_price - total,
            "remaining_life": max(0, useful_life - years_owned),
        }

    if method == DepreciationMethod.DECLINING_BALANCE.value:
        rate = 2 / useful_life
        book_value = purchase_price
        total = 0.0
        for _ in range(math.floor(years_owned)):
            year_depreciation = book_value * rate
            total += year_depreciation
            book_value -= year_depreciation

        return {
            "annual_depreciation": book_value * rate,
            "monthly_depreciation": book_value * rate / 12,
            "total_depreciation": total,
            "current_value": max(book_value, salvage_value),
            "remaining_life": max(0, useful_life - years_owned),
        }

    return {
        "annual_depreciation": 0,
        "monthly_depreciation": 0,
        "total_depreciation": 0,
        "current_value": purchase_price,
        "remaining_life": useful_life,
    }
