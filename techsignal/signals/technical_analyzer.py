"""Latest-reading analysis: indicators, trend and the synthesized signal."""

from dataclasses import dataclass
from typing import List, Optional

from ..indicators import IndicatorCalculator, IndicatorConfig
from ..indicators.base_indicator import PriceInput
from ..indicators.momentum_indicators import RSIPoint
from ..indicators.trend_classifier import TrendAssessment
from ..indicators.trend_indicators import MACDPoint
from ..indicators.volatility_indicators import BollingerPoint
from ..utils.logger import get_logger
from .base_signal import TradingSignal
from .signal_synthesizer import SignalSynthesizer

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Latest indicator readings and the resulting signal.

    Attributes:
        timestamp: Timestamp of the latest price
        price: Latest price
        rsi: Latest RSI point
        macd: Latest MACD point
        bollinger: Latest Bollinger point
        trend: Trend over the trailing window
        signal: Synthesized trading signal
    """
    timestamp: int
    price: float
    rsi: RSIPoint
    macd: MACDPoint
    bollinger: BollingerPoint
    trend: TrendAssessment
    signal: TradingSignal

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "price": self.price,
            "rsi": {"value": self.rsi.value, "signal": self.rsi.signal.value},
            "macd": {
                "macd": self.macd.macd,
                "signal": self.macd.signal,
                "histogram": self.macd.histogram,
                "trend": self.macd.trend.value,
            },
            "bollinger": {
                "upper": self.bollinger.upper,
                "middle": self.bollinger.middle,
                "lower": self.bollinger.lower,
                "position": self.bollinger.position.value,
            },
            "trend": {
                "trend": self.trend.trend.value,
                "strength": self.trend.strength,
                "support": self.trend.support,
                "resistance": self.trend.resistance,
            },
            "signal": self.signal.to_dict(),
        }


class TechnicalAnalyzer:
    """Runs the indicator set over a price history and synthesizes a signal.

    Workflow:
    1. Check the history holds at least ``min_points`` prices
    2. Calculate RSI, MACD and Bollinger Bands
    3. Assess the trailing trend
    4. Synthesize the trading signal from the latest points

    Recompute over the full history whenever it changes; nothing is cached
    between calls.

    Usage:
        analyzer = TechnicalAnalyzer()
        snapshot = analyzer.analyze(series)   # None until enough data
    """

    def __init__(
        self,
        indicator_config: Optional[IndicatorConfig] = None,
        synthesizer: Optional[SignalSynthesizer] = None
    ):
        """Initialize technical analyzer.

        Args:
            indicator_config: Custom indicator configuration
            synthesizer: Custom signal synthesizer (default rule list if None)
        """
        self.indicator_calculator = IndicatorCalculator(
            config=indicator_config or IndicatorConfig()
        )
        self.synthesizer = synthesizer or SignalSynthesizer()

    @property
    def min_points(self) -> int:
        return self.indicator_calculator.config.min_points

    def signals(self, data: PriceInput) -> List[TradingSignal]:
        """Signals for the latest point; empty while any indicator is empty."""
        series = self.indicator_calculator.prepare_data(data)
        results = self.indicator_calculator.compute(series)
        return self.synthesizer.generate_signals(
            series, results["rsi"], results["macd"], results["bollinger"]
        )

    def analyze(self, data: PriceInput) -> Optional[AnalysisSnapshot]:
        """Latest readings and signal.

        Args:
            data: Price history, oldest first

        Returns:
            AnalysisSnapshot, or None while there is not enough data
        """
        series = self.indicator_calculator.prepare_data(data)
        if len(series) < self.min_points:
            logger.debug(
                f"Insufficient data for analysis: {len(series)} < {self.min_points} points"
            )
            return None

        results = self.indicator_calculator.compute(series)
        signals = self.synthesizer.generate_signals(
            series, results["rsi"], results["macd"], results["bollinger"]
        )
        # min_points can be configured below an indicator's window
        if not signals:
            logger.debug("Insufficient data for analysis: an indicator is still empty")
            return None

        latest = series[-1]
        return AnalysisSnapshot(
            timestamp=latest.timestamp,
            price=latest.price,
            rsi=results["rsi"].latest,
            macd=results["macd"].latest,
            bollinger=results["bollinger"].latest,
            trend=self.indicator_calculator.assess_trend(series),
            signal=signals[0],
        )
