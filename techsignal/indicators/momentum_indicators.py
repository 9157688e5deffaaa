"""Momentum-based technical indicators."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .base_indicator import (
    BaseIndicator,
    IndicatorResult,
    PriceSeries,
    check_period,
    rolling_windows,
)

OVERSOLD_THRESHOLD = 30.0
OVERBOUGHT_THRESHOLD = 70.0
# Stand-in for a zero average loss
MIN_AVERAGE_LOSS = 0.01


class RSISignal(str, Enum):
    OVERSOLD = "oversold"
    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class RSIPoint:
    value: float
    timestamp: int
    signal: RSISignal


def classify_rsi(value: float) -> RSISignal:
    """Classify an RSI value; the 30 and 70 boundaries themselves are neutral."""
    if value < OVERSOLD_THRESHOLD:
        return RSISignal.OVERSOLD
    if value > OVERBOUGHT_THRESHOLD:
        return RSISignal.OVERBOUGHT
    return RSISignal.NEUTRAL


class RSIIndicator(BaseIndicator):
    """Relative Strength Index indicator.

    RSI measures the speed and magnitude of price changes:
    - RSI > 70: Overbought (potential reversal down)
    - RSI < 30: Oversold (potential reversal up)
    - RSI 30-70: Neutral zone

    Average gain and loss are plain means over each window of ``period``
    price changes (no Wilder smoothing). A window without losses uses 0.01
    as its average loss, which pushes RSI close to 100 instead of dividing
    by zero.
    """

    def __init__(self, period: int = 14):
        """Initialize RSI indicator.

        Args:
            period: Number of price changes per window (default: 14)
        """
        self.period = check_period(period)

    @property
    def name(self) -> str:
        return f"RSI_{self.period}"

    @property
    def params(self) -> dict:
        return {"period": self.period}

    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate RSI.

        Args:
            series: Price history

        Returns:
            IndicatorResult of RSIPoint (0-100); ``n - period`` points, none
            if ``n < period + 1``
        """
        if len(series) < self.period + 1:
            return self.empty_result()

        changes = np.diff(series.prices)
        gains = np.where(changes > 0, changes, 0.0)
        losses = np.where(changes < 0, -changes, 0.0)

        avg_gain = rolling_windows(gains, self.period).sum(axis=1) / self.period
        avg_loss = rolling_windows(losses, self.period).sum(axis=1) / self.period
        avg_loss = np.where(avg_loss == 0, MIN_AVERAGE_LOSS, avg_loss)

        rs = avg_gain / avg_loss
        rsi = 100 - (100 / (1 + rs))

        # Change j spans prices j..j+1, so the window ends on price index j+1
        closing_ts = series.timestamps[self.period:]
        points = [
            RSIPoint(value=float(v), timestamp=int(ts), signal=classify_rsi(v))
            for v, ts in zip(rsi, closing_ts)
        ]
        return IndicatorResult(name=self.name, points=points, params=self.params)
