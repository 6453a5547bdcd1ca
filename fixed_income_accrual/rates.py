from __future__ import annotations

from typing import Optional, Union

import numpy as np

from .investments import RateMode


DEFAULT_CDI_PERCENT = 100.0


def annual_factor(rate_mode: RateMode, rate_percent: Optional[float], benchmark_rate: float) -> float:
    """
    Annual growth factor as a decimal (0.12 = 12% a.a.).

    - BENCHMARK_LINKED: (benchmark/100) * (rate/100), rate defaults to 100% of CDI
    - FIXED_ANNUAL: rate/100, rate defaults to 0
    - MANUAL: 0
    """
    if rate_mode == RateMode.BENCHMARK_LINKED:
        pct = DEFAULT_CDI_PERCENT if rate_percent is None else rate_percent
        return (benchmark_rate / 100.0) * (pct / 100.0)

    if rate_mode == RateMode.FIXED_ANNUAL:
        return (rate_percent or 0.0) / 100.0

    return 0.0


def daily_rate(factor: float, base: int) -> float:
    """Equivalent daily rate under compounding: (1 + f)^(1/base) - 1."""
    if base <= 0:
        raise ValueError("Annual base must be positive.")
    if factor <= -1.0:
        raise ValueError("Annual factor must be greater than -1.")
    return (1.0 + factor) ** (1.0 / base) - 1.0


def accrue(principal: float, rate: float, days: Union[int, np.ndarray]):
    """
    Gross value after compounding `rate` over `days` accrual days.
    `days` may be a scalar or an array of day counts.
    """
    if np.ndim(days) == 0:
        return float(principal * (1.0 + rate) ** int(days))
    return principal * np.power(1.0 + rate, np.asarray(days, dtype=float))
