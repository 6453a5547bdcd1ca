from __future__ import annotations

import math
from dataclasses import asdict
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger

from .config import get_settings
from .investments import AssetClass, EvaluationResult, Investment, RateMode
from .rates import annual_factor
from .utils import to_date
from .valuation import evaluate


# rows carrying these are passed through instead of valued
BLOCKING_FLAGS = frozenset({"NEGATIVE_PRINCIPAL", "BAD_PRINCIPAL", "BAD_RATE"})


def _opt(value):
    """None for missing/NaN cells, the value otherwise."""
    if value is None:
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NaT:
        return None
    return value


def investment_from_record(r) -> Investment:
    """
    Build an Investment from a stored record (dict or DataFrame row) using the
    persistence layer's snake_case column names.
    """
    get = r.get
    principal = _opt(get("initial_value"))
    start = _opt(get("start_date"))
    rate = _opt(get("profitability_rate"))
    mode = _opt(get("profitability_type"))

    return Investment(
        investment_id=str(get("id")),
        name=str(get("name", "")),
        asset_class=AssetClass(get("type")),
        gross_value=float(_opt(get("value")) or 0.0),
        change_percent=float(_opt(get("change_percent")) or 0.0),
        principal=None if principal is None else float(principal),
        start_date=None if start is None else to_date(start),
        rate_mode=RateMode(mode) if mode is not None else RateMode.MANUAL,
        rate_percent=None if rate is None else float(rate),
        accrue_on_weekends=bool(_opt(get("yield_on_weekends")) or False),
    )


def qc_flags_for_investment(inv: Investment, now, benchmark_rate: Optional[float] = None) -> List[str]:
    """
    Data-quality flags for one stored investment.

    `benchmark_rate` defaults to Settings.default_benchmark_rate; it only
    matters for CDI-linked rows.
    """
    flags: List[str] = []

    if inv.asset_class != AssetClass.FIXED_INCOME:
        flags.append("NOT_FIXED_INCOME")
        return flags

    if inv.rate_mode == RateMode.MANUAL:
        flags.append("MANUAL")
        return flags

    if inv.principal is None:
        flags.append("MISSING_PRINCIPAL")
    elif not math.isfinite(inv.principal):
        flags.append("BAD_PRINCIPAL")
    elif inv.principal < 0:
        flags.append("NEGATIVE_PRINCIPAL")

    if inv.start_date is None:
        flags.append("MISSING_START")
    elif to_date(inv.start_date) > to_date(now):
        flags.append("FUTURE_START")

    if benchmark_rate is None:
        benchmark_rate = get_settings().default_benchmark_rate
    factor = annual_factor(inv.rate_mode, inv.rate_percent, benchmark_rate)
    if not math.isfinite(factor) or factor <= -1.0:
        flags.append("BAD_RATE")

    return flags


def value_portfolio(records, benchmark_rate: float, now) -> pd.DataFrame:
    """
    Value every stored investment record as of `now`.

    `records` is a DataFrame or an iterable of dicts. Auto-valued fixed-income
    rows are run through the engine; everything else passes its stored value
    through. Rows the engine cannot value (negative or non-finite principal,
    non-finite rate or an annual rate at or below -100%) are flagged and
    passed through instead of raising.
    """
    if isinstance(records, pd.DataFrame):
        rows = [r for _, r in records.iterrows()]
    else:
        rows = list(records)

    out_rows: List[Dict] = []
    for r in rows:
        inv = investment_from_record(r)
        flags = qc_flags_for_investment(inv, now, benchmark_rate)

        blocking = [f for f in flags if f in BLOCKING_FLAGS]
        if blocking:
            logger.warning("{}: {}; passing stored value through", inv.investment_id, "|".join(blocking))
            result = EvaluationResult.identity(inv.gross_value, inv.change_percent)
            auto = False
        else:
            result = evaluate(inv, benchmark_rate, now)
            auto = inv.is_auto_valued

        row = {"id": inv.investment_id, "name": inv.name, "type": inv.asset_class.value}
        row.update(asdict(result))
        row["auto"] = auto
        row["flags"] = "|".join(flags) if flags else ""
        out_rows.append(row)

    columns = ["id", "name", "type"] + list(EvaluationResult.__dataclass_fields__) + ["auto", "flags"]
    out = pd.DataFrame(out_rows, columns=columns)
    logger.debug("Valued {} investments ({} auto)", len(out), int(out["auto"].sum()) if len(out) else 0)
    return out


def portfolio_totals(valued: pd.DataFrame) -> Dict[str, float]:
    return {
        "gross": float(valued["gross_value"].sum()),
        "net": float(valued["net_value"].sum()),
        "taxes": float(valued["total_taxes"].sum()),
    }


def make_sample_portfolio(
    n: int = 12,
    now: Optional[pd.Timestamp] = None,
    seed: int = 7,
) -> pd.DataFrame:
    """
    Create synthetic stored investment records for demo/testing.

    - Two thirds fixed income (CDI-linked 90-120% or fixed 9-14% a.a.),
      started 1..1000 days before `now`
    - The rest manual stock/crypto/real estate positions with a stored value
    """
    if now is None:
        now = pd.Timestamp.today().normalize()
    now = to_date(now)

    rng = np.random.default_rng(seed)
    others = [AssetClass.STOCK, AssetClass.CRYPTO, AssetClass.REAL_ESTATE]

    rows = []
    for i in range(n):
        if i % 3 != 2:
            mode = RateMode.BENCHMARK_LINKED if i % 2 == 0 else RateMode.FIXED_ANNUAL
            rate = rng.uniform(90, 120) if mode == RateMode.BENCHMARK_LINKED else rng.uniform(9, 14)
            principal = float(rng.integers(1, 50) * 1000)
            rows.append({
                "id": f"INV_{i:03d}",
                "name": f"CDB {i:03d}",
                "type": AssetClass.FIXED_INCOME.value,
                "value": principal,
                "initial_value": principal,
                "start_date": now - pd.Timedelta(days=int(rng.integers(1, 1001))),
                "profitability_type": mode.value,
                "profitability_rate": round(float(rate), 2),
                "yield_on_weekends": bool(rng.integers(0, 2)),
                "change_percent": 0.0,
            })
        else:
            rows.append({
                "id": f"INV_{i:03d}",
                "name": f"Asset {i:03d}",
                "type": others[(i // 3) % len(others)].value,
                "value": float(rng.uniform(1000, 20000)),
                "initial_value": None,
                "start_date": None,
                "profitability_type": RateMode.MANUAL.value,
                "profitability_rate": None,
                "yield_on_weekends": None,
                "change_percent": round(float(rng.uniform(-10, 25)), 2),
            })

    return pd.DataFrame(rows)
