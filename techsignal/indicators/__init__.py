"""Technical indicator calculation module.

Provides technical analysis indicators over a price history:
- Trend indicators: SMA, EMA, MACD
- Momentum indicators: RSI
- Volatility indicators: Bollinger Bands
- Trend classifier: direction, strength, support/resistance
- Unified calculator for batch processing
"""

from .base_indicator import (
    BaseIndicator,
    IndicatorPoint,
    IndicatorResult,
    PricePoint,
    PriceSeries,
)
from .trend_indicators import (
    SMAIndicator,
    EMAIndicator,
    MACDIndicator,
    MACDPoint,
    MACDTrend,
)
from .momentum_indicators import RSIIndicator, RSIPoint, RSISignal
from .volatility_indicators import BollingerBandsIndicator, BollingerPoint, BandPosition
from .trend_classifier import TrendClassifier, TrendAssessment, TrendDirection
from .indicator_calculator import IndicatorCalculator, IndicatorConfig

__all__ = [
    # Base
    "BaseIndicator",
    "IndicatorPoint",
    "IndicatorResult",
    "PricePoint",
    "PriceSeries",
    # Trend
    "SMAIndicator",
    "EMAIndicator",
    "MACDIndicator",
    "MACDPoint",
    "MACDTrend",
    # Momentum
    "RSIIndicator",
    "RSIPoint",
    "RSISignal",
    # Volatility
    "BollingerBandsIndicator",
    "BollingerPoint",
    "BandPosition",
    # Trend classification
    "TrendClassifier",
    "TrendAssessment",
    "TrendDirection",
    # Calculator
    "IndicatorCalculator",
    "IndicatorConfig",
]
