"""Trend-following technical indicators: SMA, EMA and MACD."""

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from .base_indicator import (
    BaseIndicator,
    IndicatorPoint,
    IndicatorResult,
    PriceSeries,
    check_period,
    rolling_windows,
)


def exponential_average(values: np.ndarray, period: int) -> np.ndarray:
    """EMA of ``values`` seeded with the first value.

    ``ema[0] = values[0]`` and ``ema[i] = values[i]*k + ema[i-1]*(1-k)`` with
    ``k = 2/(period+1)``. The first-value seed (rather than an SMA of the first
    ``period`` values) is kept for compatibility with existing charts, so
    there is no warm-up and the output has the same length as the input.
    """
    if len(values) == 0:
        return np.array([], dtype=float)
    return (
        pd.Series(values, dtype=float)
        .ewm(span=period, adjust=False)
        .mean()
        .to_numpy()
    )


class SMAIndicator(BaseIndicator):
    """Simple Moving Average indicator.

    SMA smooths price data by averaging over a fixed trailing window.
    Emits ``n - period + 1`` points; none if ``n < period``.
    """

    def __init__(self, period: int = 20):
        """Initialize SMA indicator.

        Args:
            period: Number of periods for calculation (default: 20)
        """
        self.period = check_period(period)

    @property
    def name(self) -> str:
        return f"SMA_{self.period}"

    @property
    def params(self) -> dict:
        return {"period": self.period}

    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate Simple Moving Average.

        Args:
            series: Price history

        Returns:
            IndicatorResult with one point per complete window
        """
        windows = rolling_windows(series.prices, self.period)
        if len(windows) == 0:
            return self.empty_result()

        averages = windows.sum(axis=1) / self.period
        closing_ts = series.timestamps[self.period - 1:]
        return IndicatorResult(
            name=self.name,
            points=[
                IndicatorPoint(float(v), int(ts))
                for v, ts in zip(averages, closing_ts)
            ],
            params=self.params
        )


class EMAIndicator(BaseIndicator):
    """Exponential Moving Average indicator.

    EMA gives more weight to recent prices, making it more responsive
    to new information than SMA. Seeded with the first price, so it emits
    one point per input.
    """

    def __init__(self, period: int = 20):
        """Initialize EMA indicator.

        Args:
            period: Number of periods for calculation (default: 20)
        """
        self.period = check_period(period)

    @property
    def name(self) -> str:
        return f"EMA_{self.period}"

    @property
    def params(self) -> dict:
        return {"period": self.period}

    @property
    def multiplier(self) -> float:
        return 2 / (self.period + 1)

    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate Exponential Moving Average.

        Args:
            series: Price history

        Returns:
            IndicatorResult with one point per input point
        """
        values = exponential_average(series.prices, self.period)
        return IndicatorResult(
            name=self.name,
            points=[
                IndicatorPoint(float(v), int(ts))
                for v, ts in zip(values, series.timestamps)
            ],
            params=self.params
        )


class MACDTrend(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class MACDPoint:
    """MACD output at one input point."""
    macd: float
    signal: float
    histogram: float
    timestamp: int
    trend: MACDTrend


def classify_macd(macd: float, signal: float, histogram: float) -> MACDTrend:
    """Bullish/bearish only when line order and histogram sign agree."""
    if macd > signal and histogram > 0:
        return MACDTrend.BULLISH
    if macd < signal and histogram < 0:
        return MACDTrend.BEARISH
    return MACDTrend.NEUTRAL


class MACDIndicator(BaseIndicator):
    """Moving Average Convergence Divergence indicator.

    MACD shows the relationship between two EMAs and includes:
    - MACD line: Difference between fast and slow EMAs
    - Signal line: EMA of MACD line
    - Histogram: Difference between MACD and signal

    Both EMAs are full length, so the output has one point per input.
    """

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9
    ):
        """Initialize MACD indicator.

        Args:
            fast_period: Fast EMA period (default: 12)
            slow_period: Slow EMA period (default: 26)
            signal_period: Signal line EMA period (default: 9)
        """
        self.fast_period = check_period(fast_period, "fast_period")
        self.slow_period = check_period(slow_period, "slow_period")
        self.signal_period = check_period(signal_period, "signal_period")

    @property
    def name(self) -> str:
        return f"MACD_{self.fast_period}_{self.slow_period}_{self.signal_period}"

    @property
    def params(self) -> dict:
        return {
            "fast_period": self.fast_period,
            "slow_period": self.slow_period,
            "signal_period": self.signal_period,
        }

    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate MACD, signal line, and histogram.

        Args:
            series: Price history

        Returns:
            IndicatorResult of MACDPoint, classified bullish/bearish/neutral
        """
        if len(series) == 0:
            return self.empty_result()

        fast = exponential_average(series.prices, self.fast_period)
        slow = exponential_average(series.prices, self.slow_period)
        # Both EMAs span the whole input, so the overlap is the full length
        length = min(len(fast), len(slow))
        macd_line = fast[:length] - slow[:length]
        signal_line = exponential_average(macd_line, self.signal_period)
        histogram = macd_line - signal_line

        points = [
            MACDPoint(
                macd=float(m),
                signal=float(s),
                histogram=float(h),
                timestamp=int(ts),
                trend=classify_macd(m, s, h),
            )
            for m, s, h, ts in zip(
                macd_line, signal_line, histogram, series.timestamps[:length]
            )
        ]
        return IndicatorResult(name=self.name, points=points, params=self.params)
