"""Unified indicator calculator for batch processing."""

from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from ..utils.config import Config, ConfigError
from .base_indicator import IndicatorResult, PriceInput, PriceSeries, check_period
from .momentum_indicators import RSIIndicator
from .trend_classifier import TrendAssessment, TrendClassifier
from .trend_indicators import EMAIndicator, MACDIndicator, SMAIndicator
from .volatility_indicators import BollingerBandsIndicator


@dataclass
class IndicatorConfig:
    """Configuration for indicator calculation.

    ``min_points`` is the history length below which the analyzer reports
    insufficient data; it defaults to the slow MACD period.
    """
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    trend_period: int = 20
    min_points: int = 26
    sma_periods: list[int] = field(default_factory=lambda: [20])
    ema_periods: list[int] = field(default_factory=lambda: [12, 26])

    @staticmethod
    def from_config(config: Config) -> "IndicatorConfig":
        """Build from the ``indicators`` section of a Config.

        Raises:
            ConfigError: If a value has the wrong type, a period is not a
                positive integer or the band width is negative
        """
        defaults = IndicatorConfig()

        def period(key: str, default: int) -> int:
            return check_period(int(config.get(key, default)), key)

        try:
            ind_config = IndicatorConfig(
                rsi_period=period("indicators.rsi_period", defaults.rsi_period),
                macd_fast=period("indicators.macd.fast", defaults.macd_fast),
                macd_slow=period("indicators.macd.slow", defaults.macd_slow),
                macd_signal=period("indicators.macd.signal", defaults.macd_signal),
                bollinger_period=period("indicators.bollinger.period", defaults.bollinger_period),
                bollinger_std_dev=float(
                    config.get("indicators.bollinger.std_dev", defaults.bollinger_std_dev)
                ),
                trend_period=period("indicators.trend_period", defaults.trend_period),
                min_points=int(config.get("indicators.min_points", defaults.min_points)),
                sma_periods=[
                    check_period(int(p), "indicators.sma_periods")
                    for p in config.get("indicators.sma_periods", defaults.sma_periods)
                ],
                ema_periods=[
                    check_period(int(p), "indicators.ema_periods")
                    for p in config.get("indicators.ema_periods", defaults.ema_periods)
                ],
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid indicators config: {e}")

        if ind_config.bollinger_std_dev < 0:
            raise ConfigError(
                "Invalid indicators config: indicators.bollinger.std_dev must be >= 0, "
                f"got {ind_config.bollinger_std_dev}"
            )
        return ind_config


class IndicatorCalculator:
    """Unified calculator for all technical indicators.

    ``compute`` returns the classified results used for signal synthesis;
    ``calculate_all`` returns every series as one DataFrame with
    parameterized column names: SMA_20, EMA_12, RSI_14, MACD_12_26_9,
    MACD_signal_12_26_9, MACD_hist_12_26_9, BOLL_upper_20_2, etc.
    """

    def __init__(self, config: Optional[IndicatorConfig] = None):
        self.config = config or IndicatorConfig()
        self.rsi = RSIIndicator(period=self.config.rsi_period)
        self.macd = MACDIndicator(
            fast_period=self.config.macd_fast,
            slow_period=self.config.macd_slow,
            signal_period=self.config.macd_signal,
        )
        self.bollinger = BollingerBandsIndicator(
            period=self.config.bollinger_period,
            std_dev=self.config.bollinger_std_dev,
        )
        self.trend = TrendClassifier(period=self.config.trend_period)

    def prepare_data(self, data: PriceInput) -> PriceSeries:
        return self.rsi.prepare_data(data)

    def compute(self, data: PriceInput) -> Dict[str, IndicatorResult]:
        """RSI, MACD and Bollinger results keyed by indicator group."""
        series = self.prepare_data(data)
        return {
            "rsi": self.rsi.calculate(series),
            "macd": self.macd.calculate(series),
            "bollinger": self.bollinger.calculate(series),
        }

    def assess_trend(self, data: PriceInput) -> TrendAssessment:
        return self.trend.assess(self.prepare_data(data))

    def calculate_all(self, data: PriceInput) -> pd.DataFrame:
        """All indicator series aligned on the input rows.

        Rows before an indicator's first complete window hold NaN.
        """
        series = self.prepare_data(data)
        result = series.to_frame()

        self._add_sma(series, result)
        self._add_ema(series, result)
        self._add_rsi(series, result)
        self._add_macd(series, result)
        self._add_bollinger(series, result)

        return result

    def _add_sma(self, series: PriceSeries, result: pd.DataFrame) -> None:
        for period in self.config.sma_periods:
            ind_result = SMAIndicator(period=period)(series)
            self._add_column(result, ind_result, "value", ind_result.name)

    def _add_ema(self, series: PriceSeries, result: pd.DataFrame) -> None:
        for period in self.config.ema_periods:
            ind_result = EMAIndicator(period=period)(series)
            self._add_column(result, ind_result, "value", ind_result.name)

    def _add_rsi(self, series: PriceSeries, result: pd.DataFrame) -> None:
        ind_result = self.rsi(series)
        self._add_column(result, ind_result, "value", ind_result.name)

    def _add_macd(self, series: PriceSeries, result: pd.DataFrame) -> None:
        ind_result = self.macd(series)
        suffix = f"_{self.macd.fast_period}_{self.macd.slow_period}_{self.macd.signal_period}"
        self._add_column(result, ind_result, "macd", f"MACD{suffix}")
        self._add_column(result, ind_result, "signal", f"MACD_signal{suffix}")
        self._add_column(result, ind_result, "histogram", f"MACD_hist{suffix}")

    def _add_bollinger(self, series: PriceSeries, result: pd.DataFrame) -> None:
        ind_result = self.bollinger(series)
        suffix = f"_{self.bollinger.period}_{self.bollinger.std_dev:g}"
        for attr in ("upper", "middle", "lower"):
            self._add_column(result, ind_result, attr, f"BOLL_{attr}{suffix}")

    @staticmethod
    def _add_column(
        frame: pd.DataFrame,
        ind_result: IndicatorResult,
        attr: str,
        column: str
    ) -> None:
        # Results are tail-aligned, so pad the head with NaN
        values = [getattr(p, attr) for p in ind_result.points]
        padding = [float("nan")] * (len(frame) - len(values))
        frame[column] = padding + values
