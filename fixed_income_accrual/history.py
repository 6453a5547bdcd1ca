from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List

import pandas as pd
from loguru import logger

from .exceptions import ValuationError
from .investments import Investment
from .utils import business_days_between, calendar_days_between, to_date
from .valuation import investment_daily_rate, validate_investment, value_at


@dataclass(frozen=True)
class HistoryPoint:
    date: pd.Timestamp
    gross_value: float
    net_value: float
    profit: float
    taxes: float


def sample_offsets(total_days: int, max_points: int) -> range:
    """Day offsets 0, step, 2*step, ... <= total_days with step = ceil(total/max), at least 1."""
    step = max(1, math.ceil(total_days / max_points))
    return range(0, total_days + 1, step)


class HistoryProjection:
    """
    Lazy (date, gross, net, profit) series from start date to `now`.

    Each iteration recomputes the points, so the projection can be consumed
    any number of times.
    """

    def __init__(self, investment: Investment, benchmark_rate: float, now, max_points: int = 60):
        self.investment = investment
        self.benchmark_rate = benchmark_rate
        self.now = to_date(now)
        if max_points < 1:
            raise ValuationError("max_points must be at least 1.")
        self.max_points = max_points
        self._offsets = self._build_offsets()

    def _build_offsets(self) -> range:
        inv = self.investment
        if not inv.is_auto_valued:
            return range(0)

        start = to_date(inv.start_date)
        if start > self.now:
            logger.warning("{}: start date is in the future; empty history", inv.investment_id)
            return range(0)

        return sample_offsets(calendar_days_between(start, self.now), self.max_points)

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[HistoryPoint]:
        if not self._offsets:
            return

        inv = self.investment
        validate_investment(inv, self.benchmark_rate)

        principal = float(inv.principal)
        start = to_date(inv.start_date)
        rate = investment_daily_rate(inv, self.benchmark_rate)

        logger.debug("{}: sampling {} history points", inv.investment_id, len(self._offsets))

        for offset in self._offsets:
            point_date = start + pd.Timedelta(days=offset)
            if offset == 0:
                yield HistoryPoint(point_date, principal, principal, 0.0, 0.0)
                continue

            business_days = 0 if inv.accrue_on_weekends else business_days_between(start, point_date)
            gross, taxes = value_at(principal, rate, offset, business_days, inv.accrue_on_weekends)
            yield HistoryPoint(
                date=point_date,
                gross_value=gross,
                net_value=gross - taxes.total_taxes,
                profit=gross - principal,
                taxes=taxes.total_taxes,
            )

    def to_frame(self) -> pd.DataFrame:
        points: List[HistoryPoint] = list(self)
        return pd.DataFrame(
            {
                "date": [p.date for p in points],
                "gross_value": [p.gross_value for p in points],
                "net_value": [p.net_value for p in points],
                "profit": [p.profit for p in points],
                "taxes": [p.taxes for p in points],
            }
        )


def project_history(investment: Investment, benchmark_rate: float, now, max_points: int = 60) -> HistoryProjection:
    return HistoryProjection(investment, benchmark_rate, now, max_points)
