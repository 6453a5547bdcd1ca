import pandas as pd
import pytest
from loguru import logger
from pydantic import ValidationError

from fixed_income_accrual.config import Settings, get_settings
from fixed_income_accrual.investments import AssetClass, Investment, RateMode
from fixed_income_accrual.log import setup_logging
from fixed_income_accrual.valuation import evaluate


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("DEFAULT_BENCHMARK_RATE", "HISTORY_MAX_POINTS", "LOG_LEVEL"):
        monkeypatch.delenv(f"FIXED_INCOME_{key}", raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_defaults(clean_env):
    s = Settings(_env_file=None)
    assert s.default_benchmark_rate == 11.15
    assert s.history_max_points == 60
    assert s.log_level == "WARNING"


def test_env_overrides(clean_env):
    clean_env.setenv("FIXED_INCOME_DEFAULT_BENCHMARK_RATE", "10.4")
    clean_env.setenv("FIXED_INCOME_LOG_LEVEL", "debug")
    s = get_settings()
    assert s.default_benchmark_rate == 10.4
    assert s.log_level == "DEBUG"
    assert get_settings() is s, "settings must be cached"


def test_history_max_points_must_be_positive(clean_env):
    clean_env.setenv("FIXED_INCOME_HISTORY_MAX_POINTS", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_setup_logging_writes_engine_warnings(tmp_path, clean_env):
    log_file = tmp_path / "engine.log"
    setup_logging(level="WARNING", log_file=str(log_file))
    try:
        future = Investment(
            investment_id="CDB_FUT",
            name="CDB",
            asset_class=AssetClass.FIXED_INCOME,
            principal=1000.0,
            start_date=pd.Timestamp("2026-03-01"),
            rate_mode=RateMode.FIXED_ANNUAL,
            rate_percent=10.0,
        )
        evaluate(future, 11.15, pd.Timestamp("2026-02-13"))
        logger.remove()  # closes and flushes the file sink
        text = log_file.read_text()
        assert "CDB_FUT" in text
        assert "WARNING" in text
    finally:
        setup_logging(level="WARNING")
