"""
Fixed Income Accrual Engine

Modules:
- utils: date normalization + calendar/business day counting
- rates: annual factor, daily rate, compounding accrual
- taxes: IOF table + regressive IR brackets
- investments: investment + evaluation result objects
- valuation: single-investment evaluation + valuer bound to a CDI snapshot
- history: restartable sampled history for charting
- portfolio: stored-record table valuation + QC flags + totals
- config / log: pydantic-settings configuration, loguru setup

The benchmark (CDI) rate is always supplied by the caller.
"""
from .exceptions import InvalidInvestmentError, ValuationError
from .history import HistoryPoint, HistoryProjection, project_history
from .investments import AssetClass, EvaluationResult, Investment, RateMode
from .valuation import InvestmentValuer, evaluate

__all__ = [
    "AssetClass",
    "EvaluationResult",
    "HistoryPoint",
    "HistoryProjection",
    "Investment",
    "InvestmentValuer",
    "InvalidInvestmentError",
    "RateMode",
    "ValuationError",
    "evaluate",
    "project_history",
]
