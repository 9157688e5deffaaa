"""Volatility indicators."""

from dataclasses import dataclass
from enum import Enum

from .base_indicator import (
    BaseIndicator,
    IndicatorResult,
    PriceSeries,
    check_period,
    rolling_windows,
)


class BandPosition(str, Enum):
    ABOVE = "above"
    BELOW = "below"
    INSIDE = "inside"


@dataclass(frozen=True)
class BollingerPoint:
    upper: float
    middle: float
    lower: float
    timestamp: int
    position: BandPosition

    @property
    def bandwidth(self) -> float:
        return self.upper - self.lower


def classify_band_position(price: float, upper: float, lower: float) -> BandPosition:
    if price > upper:
        return BandPosition.ABOVE
    if price < lower:
        return BandPosition.BELOW
    return BandPosition.INSIDE


class BollingerBandsIndicator(BaseIndicator):
    """Bollinger Bands indicator.

    Envelope of ``std_dev`` population standard deviations around the
    trailing mean. Each point also classifies the window's closing price
    as above, below or inside the bands.
    """

    def __init__(self, period: int = 20, std_dev: float = 2.0):
        """Initialize Bollinger Bands indicator.

        Args:
            period: Moving average period (default: 20)
            std_dev: Standard deviation multiplier (default: 2.0)

        Raises:
            ValueError: If std_dev is negative
        """
        self.period = check_period(period)
        if std_dev < 0:
            raise ValueError(f"std_dev must be >= 0, got {std_dev}")
        self.std_dev = float(std_dev)

    @property
    def name(self) -> str:
        return f"BOLL_{self.period}_{self.std_dev:g}"

    @property
    def params(self) -> dict:
        return {"period": self.period, "std_dev": self.std_dev}

    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate upper, middle and lower bands.

        Args:
            series: Price history

        Returns:
            IndicatorResult of BollingerPoint; ``n - period + 1`` points
        """
        windows = rolling_windows(series.prices, self.period)
        if len(windows) == 0:
            return self.empty_result()

        mean = windows.sum(axis=1) / self.period
        variance = ((windows - mean[:, None]) ** 2).sum(axis=1) / self.period
        std = variance ** 0.5

        upper = mean + self.std_dev * std
        lower = mean - self.std_dev * std
        closing = series.prices[self.period - 1:]
        closing_ts = series.timestamps[self.period - 1:]

        points = [
            BollingerPoint(
                upper=float(u),
                middle=float(m),
                lower=float(lo),
                timestamp=int(ts),
                position=classify_band_position(price, u, lo),
            )
            for u, m, lo, price, ts in zip(upper, mean, lower, closing, closing_ts)
        ]
        return IndicatorResult(name=self.name, points=points, params=self.params)
