"""Trend direction and support/resistance over a trailing window."""

from dataclasses import dataclass
from enum import Enum

from .base_indicator import PriceInput, PriceSeries, check_period

TREND_THRESHOLD_PCT = 2.0


class TrendDirection(str, Enum):
    UPTREND = "uptrend"
    DOWNTREND = "downtrend"
    SIDEWAYS = "sideways"


@dataclass(frozen=True)
class TrendAssessment:
    """Trend over the trailing window.

    Attributes:
        trend: Direction of the move across the window
        strength: Absolute percent change, unbounded (clamp for display)
        support: Lowest price in the window
        resistance: Highest price in the window
    """
    trend: TrendDirection
    strength: float
    support: float
    resistance: float

    @classmethod
    def insufficient(cls) -> "TrendAssessment":
        return cls(TrendDirection.SIDEWAYS, 0.0, 0.0, 0.0)


class TrendClassifier:
    """Classify the trend of the last ``period`` prices.

    Compares the first and last price of the window: more than +2% is an
    uptrend, less than -2% a downtrend, anything else sideways.
    """

    def __init__(self, period: int = 20):
        self.period = check_period(period)

    @property
    def name(self) -> str:
        return f"TREND_{self.period}"

    def assess(self, series: PriceSeries) -> TrendAssessment:
        """Assess the trailing window.

        Returns ``TrendAssessment.insufficient()`` when fewer than ``period``
        points are available.
        """
        if len(series) < self.period:
            return TrendAssessment.insufficient()

        prices = series.prices[-self.period:]
        first = float(prices[0])
        last = float(prices[-1])
        support = float(prices.min())
        resistance = float(prices.max())

        # Percent change from a zero price is undefined
        if first == 0:
            return TrendAssessment(TrendDirection.SIDEWAYS, 0.0, support, resistance)

        change = (last - first) / first * 100
        if change > TREND_THRESHOLD_PCT:
            trend = TrendDirection.UPTREND
        elif change < -TREND_THRESHOLD_PCT:
            trend = TrendDirection.DOWNTREND
        else:
            trend = TrendDirection.SIDEWAYS

        return TrendAssessment(trend, abs(change), support, resistance)

    def __call__(self, data: PriceInput) -> TrendAssessment:
        if not isinstance(data, PriceSeries):
            data = PriceSeries.from_records(data)
        return self.assess(data)
