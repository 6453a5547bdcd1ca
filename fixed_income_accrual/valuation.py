from __future__ import annotations

import math
from typing import Optional, Tuple

from loguru import logger

from .config import get_settings
from .exceptions import InvalidInvestmentError
from .investments import EvaluationResult, Investment, RateMode
from .rates import accrue, annual_factor, daily_rate
from .taxes import TaxBreakdown, apply_taxes
from .utils import annual_base, business_days_between, calendar_days_between, to_date


def validate_investment(investment: Investment, benchmark_rate: float) -> None:
    """Raise InvalidInvestmentError when the engine's input contract is violated."""
    if investment.principal is not None:
        if not math.isfinite(investment.principal) or investment.principal < 0:
            raise InvalidInvestmentError(
                f"{investment.investment_id}: principal must be a non-negative number."
            )

    if investment.rate_percent is not None and not math.isfinite(investment.rate_percent):
        raise InvalidInvestmentError(f"{investment.investment_id}: rate_percent is not finite.")

    if investment.rate_mode == RateMode.BENCHMARK_LINKED and not math.isfinite(benchmark_rate):
        raise InvalidInvestmentError("Benchmark rate must be a finite annual percentage.")

    factor = annual_factor(investment.rate_mode, investment.rate_percent, benchmark_rate)
    if factor <= -1.0:
        raise InvalidInvestmentError(
            f"{investment.investment_id}: annual rate {factor * 100:.2f}% would lose more than the principal."
        )


def investment_daily_rate(investment: Investment, benchmark_rate: float) -> float:
    factor = annual_factor(investment.rate_mode, investment.rate_percent, benchmark_rate)
    return daily_rate(factor, annual_base(investment.accrue_on_weekends))


def value_at(
    principal: float,
    rate: float,
    calendar_days: int,
    business_days: int,
    accrue_on_weekends: bool,
) -> Tuple[float, TaxBreakdown]:
    """
    Gross value and taxes after `calendar_days` held.
    Weekend-accruing positions compound on calendar days, others on business days.
    """
    days = calendar_days if accrue_on_weekends else business_days
    gross = accrue(principal, rate, days)
    return gross, apply_taxes(gross - principal, calendar_days)


def evaluate(investment: Investment, benchmark_rate: float, now) -> EvaluationResult:
    """
    Value an auto-valued fixed-income investment as of `now`.

    Investments the engine does not apply to (manual rate, other asset classes,
    missing principal/start date) pass their stored value through untaxed.
    """
    if not investment.is_auto_valued:
        return EvaluationResult.identity(investment.gross_value, investment.change_percent)

    validate_investment(investment, benchmark_rate)

    principal = float(investment.principal)
    start = to_date(investment.start_date)
    today = to_date(now)

    if start > today:
        logger.warning(
            "{}: start date {} is after {}; treating as zero elapsed days",
            investment.investment_id, start.date(), today.date(),
        )
        return EvaluationResult.identity(principal)

    calendar_days = calendar_days_between(start, today)
    if calendar_days == 0:
        return EvaluationResult.identity(principal)

    business_days = business_days_between(start, today)
    rate = investment_daily_rate(investment, benchmark_rate)

    gross, taxes = value_at(principal, rate, calendar_days, business_days, investment.accrue_on_weekends)
    net = gross - taxes.total_taxes

    annualized = 0.0
    change = 0.0
    if principal > 0:
        annualized = round(((net / principal) ** (365.0 / calendar_days) - 1.0) * 100.0, 2)
        change = round((gross / principal - 1.0) * 100.0, 2)

    logger.debug(
        "{}: {} calendar / {} business days, daily rate {:.8f}, gross {:.2f}, net {:.2f}",
        investment.investment_id, calendar_days, business_days, rate, gross, net,
    )

    return EvaluationResult(
        gross_value=gross,
        net_value=net,
        transaction_tax_value=taxes.transaction_tax_value,
        withholding_tax_value=taxes.withholding_tax_value,
        total_taxes=taxes.total_taxes,
        transaction_tax_rate_percent=taxes.transaction_tax_rate_percent,
        withholding_tax_rate_percent=taxes.withholding_tax_rate_percent,
        calendar_days=calendar_days,
        business_days=business_days,
        annualized_net_yield_percent=annualized,
        change_percent=change,
    )


class InvestmentValuer:
    """
    Values investments against one benchmark snapshot, so every position in
    a rendering pass sees the same CDI rate.
    """

    def __init__(self, benchmark_rate: Optional[float] = None):
        if benchmark_rate is None:
            benchmark_rate = get_settings().default_benchmark_rate
        self.benchmark_rate = float(benchmark_rate)

    def validate(self, investment: Investment) -> None:
        validate_investment(investment, self.benchmark_rate)

    def evaluate(self, investment: Investment, now) -> EvaluationResult:
        return evaluate(investment, self.benchmark_rate, now)

    def history(self, investment: Investment, now, max_points: Optional[int] = None):
        from .history import project_history  # history depends on this module

        if max_points is None:
            max_points = get_settings().history_max_points
        return project_history(investment, self.benchmark_rate, now, max_points)
