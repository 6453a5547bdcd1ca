"""
Brazilian fixed-income taxes on accrued profit.

- IOF (transaction tax): regressive daily table, only within the first 29 days.
- IR (withholding tax): regressive tenure brackets applied to profit net of IOF.

Both are flat rates on the whole profit (first matching bracket, not marginal).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


# percent of profit, index = calendar days held
IOF_TABLE: List[int] = [
    96, 93, 90, 86, 83, 80, 76, 73, 70, 66,
    63, 60, 56, 53, 50, 46, 43, 40, 36, 33,
    30, 26, 23, 20, 16, 13, 10, 6, 3, 0,
]

IOF_WINDOW_DAYS = 30

# (held strictly more than N days, rate) - checked longest tenure first
IR_BRACKETS: List[Tuple[int, float]] = [
    (720, 0.15),
    (360, 0.175),
    (180, 0.20),
]
IR_BASE_RATE = 0.225


@dataclass(frozen=True)
class TaxBreakdown:
    transaction_tax_value: float
    withholding_tax_value: float
    transaction_tax_rate_percent: float
    withholding_tax_rate_percent: float

    @property
    def total_taxes(self) -> float:
        return self.transaction_tax_value + self.withholding_tax_value


NO_TAXES = TaxBreakdown(0.0, 0.0, 0.0, 0.0)


def transaction_tax_rate(calendar_days: int) -> float:
    """IOF rate as a decimal for a holding of `calendar_days`."""
    if calendar_days < 0:
        raise ValueError("calendar_days must be non-negative")
    if calendar_days >= IOF_WINDOW_DAYS:
        return 0.0
    return IOF_TABLE[calendar_days] / 100.0


def withholding_tax_rate(calendar_days: int) -> float:
    """IR rate as a decimal for a holding of `calendar_days`."""
    for threshold, rate in IR_BRACKETS:
        if calendar_days > threshold:
            return rate
    return IR_BASE_RATE


def apply_taxes(profit: float, calendar_days: int) -> TaxBreakdown:
    """
    IOF on profit, then IR on (profit - IOF).

    Non-positive profit is not taxed (no refunds on losses), but the rates
    for the tenure are still reported.
    """
    iof_rate = transaction_tax_rate(calendar_days)
    ir_rate = withholding_tax_rate(calendar_days)

    if profit <= 0:
        return TaxBreakdown(0.0, 0.0, iof_rate * 100.0, ir_rate * 100.0)

    iof_value = profit * iof_rate
    ir_value = (profit - iof_value) * ir_rate
    return TaxBreakdown(iof_value, ir_value, iof_rate * 100.0, ir_rate * 100.0)
