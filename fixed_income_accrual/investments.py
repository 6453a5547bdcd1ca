from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd


class AssetClass(str, Enum):
    FIXED_INCOME = "FIXED_INCOME"
    STOCK = "STOCK"
    CRYPTO = "CRYPTO"
    REAL_ESTATE = "REAL_ESTATE"


class RateMode(str, Enum):
    """How a fixed-income position grows. Values are the stored codes."""
    BENCHMARK_LINKED = "CDI"
    FIXED_ANNUAL = "FIXED"
    MANUAL = "MANUAL"


@dataclass(frozen=True)
class Investment:
    investment_id: str
    name: str
    asset_class: AssetClass
    gross_value: float = 0.0          # stored current value
    change_percent: float = 0.0       # stored display change
    principal: Optional[float] = None
    start_date: Optional[pd.Timestamp] = None
    rate_mode: RateMode = RateMode.MANUAL
    rate_percent: Optional[float] = None  # 100 = 100% of CDI, or 12.5 = 12.5% a.a.
    accrue_on_weekends: bool = False

    @property
    def is_auto_valued(self) -> bool:
        return (
            self.asset_class == AssetClass.FIXED_INCOME
            and self.rate_mode != RateMode.MANUAL
            and self.principal is not None
            and self.start_date is not None
        )


@dataclass(frozen=True)
class EvaluationResult:
    gross_value: float
    net_value: float
    transaction_tax_value: float
    withholding_tax_value: float
    total_taxes: float
    transaction_tax_rate_percent: float
    withholding_tax_rate_percent: float
    calendar_days: int
    business_days: int
    annualized_net_yield_percent: float
    change_percent: float

    @classmethod
    def identity(cls, value: float, change_percent: float = 0.0) -> "EvaluationResult":
        """Untaxed, zero-elapsed result whose gross and net both equal `value`."""
        return cls(
            gross_value=value,
            net_value=value,
            transaction_tax_value=0.0,
            withholding_tax_value=0.0,
            total_taxes=0.0,
            transaction_tax_rate_percent=0.0,
            withholding_tax_rate_percent=0.0,
            calendar_days=0,
            business_days=0,
            annualized_net_yield_percent=0.0,
            change_percent=change_percent,
        )
