"""Tests for the unified indicator calculator."""

import numpy as np
import pytest

from techsignal.indicators.base_indicator import PriceSeries
from techsignal.indicators.indicator_calculator import IndicatorCalculator, IndicatorConfig
from techsignal.indicators.trend_classifier import TrendDirection
from techsignal.utils.config import Config, ConfigError


@pytest.fixture
def sample_series():
    """Create 60 prices of a noisy uptrend."""
    rng = np.random.default_rng(11)
    prices = np.linspace(100, 130, 60) + rng.normal(0, 0.5, 60)
    return PriceSeries.from_prices(prices, start=1_700_000_000_000, interval_ms=10_000)


class TestIndicatorConfig:
    """Tests for IndicatorConfig."""

    def test_defaults(self):
        """Test default periods match the standard settings."""
        config = IndicatorConfig()
        assert config.rsi_period == 14
        assert (config.macd_fast, config.macd_slow, config.macd_signal) == (12, 26, 9)
        assert config.bollinger_period == 20
        assert config.bollinger_std_dev == 2.0
        assert config.trend_period == 20
        assert config.min_points == 26

    def test_from_config(self):
        """Test values are read from the indicators section."""
        config = Config.from_dict({
            "indicators": {
                "rsi_period": 7,
                "macd": {"fast": 5, "slow": 10, "signal": 3},
                "bollinger": {"period": 10, "std_dev": 1.5},
                "sma_periods": [5, 10],
            }
        })
        ind_config = IndicatorConfig.from_config(config)
        assert ind_config.rsi_period == 7
        assert (ind_config.macd_fast, ind_config.macd_slow, ind_config.macd_signal) == (5, 10, 3)
        assert ind_config.bollinger_period == 10
        assert ind_config.bollinger_std_dev == 1.5
        assert ind_config.sma_periods == [5, 10]
        # Missing keys fall back to defaults
        assert ind_config.trend_period == 20

    def test_from_config_invalid(self):
        """Test a malformed value raises ConfigError."""
        config = Config.from_dict({"indicators": {"rsi_period": "fast"}})
        with pytest.raises(ConfigError):
            IndicatorConfig.from_config(config)

    @pytest.mark.parametrize("section", [
        {"rsi_period": 0},
        {"macd": {"slow": -26}},
        {"bollinger": {"period": 0}},
        {"trend_period": 0},
        {"sma_periods": [20, 0]},
        {"bollinger": {"std_dev": -1}},
    ])
    def test_from_config_rejects_bad_periods(self, section):
        """Test non-positive periods and a negative band width raise ConfigError."""
        config = Config.from_dict({"indicators": section})
        with pytest.raises(ConfigError):
            IndicatorConfig.from_config(config)


class TestIndicatorCalculator:
    """Tests for IndicatorCalculator."""

    def test_compute_returns_all_groups(self, sample_series):
        """Test compute returns RSI, MACD and Bollinger results."""
        results = IndicatorCalculator().compute(sample_series)
        assert set(results) == {"rsi", "macd", "bollinger"}
        assert len(results["rsi"]) == 60 - 14
        assert len(results["macd"]) == 60
        assert len(results["bollinger"]) == 60 - 19

    def test_assess_trend(self, sample_series):
        """Test trend assessment over the configured window."""
        assert IndicatorCalculator().assess_trend(sample_series).trend == TrendDirection.UPTREND

    def test_calculate_all_columns(self, sample_series):
        """Test calculate_all adds parameterized columns."""
        df = IndicatorCalculator().calculate_all(sample_series)
        expected = {
            "price", "timestamp", "SMA_20", "EMA_12", "EMA_26", "RSI_14",
            "MACD_12_26_9", "MACD_signal_12_26_9", "MACD_hist_12_26_9",
            "BOLL_upper_20_2", "BOLL_middle_20_2", "BOLL_lower_20_2",
        }
        assert set(df.columns) == expected
        assert len(df) == len(sample_series)

    def test_calculate_all_pads_warmup_with_nan(self, sample_series):
        """Test rows before a full window are NaN."""
        df = IndicatorCalculator().calculate_all(sample_series)
        assert df["RSI_14"].iloc[:14].isna().all()
        assert df["RSI_14"].iloc[14:].notna().all()
        assert df["SMA_20"].iloc[:19].isna().all()
        assert df["MACD_12_26_9"].notna().all()

    def test_calculate_all_histogram_identity(self, sample_series):
        """Test histogram column equals MACD minus signal."""
        df = IndicatorCalculator().calculate_all(sample_series)
        np.testing.assert_allclose(
            df["MACD_hist_12_26_9"],
            df["MACD_12_26_9"] - df["MACD_signal_12_26_9"],
            atol=1e-12
        )

    def test_calculate_all_short_input(self):
        """Test short input yields all-NaN indicator columns, not an error."""
        series = PriceSeries.from_prices([1.0, 2.0, 3.0])
        df = IndicatorCalculator().calculate_all(series)
        assert df["RSI_14"].isna().all()
        assert df["BOLL_upper_20_2"].isna().all()
        assert len(df) == 3

    def test_calculate_all_empty_input(self):
        """Test empty input yields an empty frame."""
        df = IndicatorCalculator().calculate_all(PriceSeries())
        assert df.empty
