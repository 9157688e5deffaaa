"""Rule-based synthesis of one trading signal from the latest indicator points."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..indicators.base_indicator import IndicatorResult, PriceSeries
from ..indicators.momentum_indicators import RSIPoint, RSISignal
from ..indicators.trend_indicators import MACDPoint, MACDTrend
from ..indicators.volatility_indicators import BandPosition, BollingerPoint
from ..utils.logger import get_logger
from .base_signal import SignalStrength, SignalType, TradingSignal

logger = get_logger(__name__)

HOLD_REASON = "analysis in progress"


@dataclass(frozen=True)
class SignalRule:
    """One entry of the ordered decision list.

    A rule matches when every condition it names equals the latest
    indicator state; conditions it leaves out are ignored.
    """
    name: str
    signal_type: SignalType
    strength: SignalStrength
    confidence: int
    reason: str
    rsi: Optional[RSISignal] = None
    macd: Optional[MACDTrend] = None
    band: Optional[BandPosition] = None

    def matches(
        self,
        rsi: RSISignal,
        macd: MACDTrend,
        band: BandPosition
    ) -> bool:
        return (
            (self.rsi is None or self.rsi == rsi)
            and (self.macd is None or self.macd == macd)
            and (self.band is None or self.band == band)
        )


# First match wins, so aligned combinations sit above single-indicator rules
DEFAULT_RULES: Tuple[SignalRule, ...] = (
    SignalRule(
        name="oversold_bullish_below_band",
        signal_type=SignalType.BUY,
        strength=SignalStrength.STRONG,
        confidence=85,
        reason="RSI oversold + MACD bullish + price below lower Bollinger band",
        rsi=RSISignal.OVERSOLD,
        macd=MACDTrend.BULLISH,
        band=BandPosition.BELOW,
    ),
    SignalRule(
        name="oversold_bullish",
        signal_type=SignalType.BUY,
        strength=SignalStrength.MODERATE,
        confidence=70,
        reason="RSI oversold + MACD bullish",
        rsi=RSISignal.OVERSOLD,
        macd=MACDTrend.BULLISH,
    ),
    SignalRule(
        name="oversold",
        signal_type=SignalType.BUY,
        strength=SignalStrength.WEAK,
        confidence=55,
        reason="RSI in oversold zone",
        rsi=RSISignal.OVERSOLD,
    ),
    SignalRule(
        name="overbought_bearish_above_band",
        signal_type=SignalType.SELL,
        strength=SignalStrength.STRONG,
        confidence=85,
        reason="RSI overbought + MACD bearish + price above upper Bollinger band",
        rsi=RSISignal.OVERBOUGHT,
        macd=MACDTrend.BEARISH,
        band=BandPosition.ABOVE,
    ),
    SignalRule(
        name="overbought_bearish",
        signal_type=SignalType.SELL,
        strength=SignalStrength.MODERATE,
        confidence=70,
        reason="RSI overbought + MACD bearish",
        rsi=RSISignal.OVERBOUGHT,
        macd=MACDTrend.BEARISH,
    ),
    SignalRule(
        name="overbought",
        signal_type=SignalType.SELL,
        strength=SignalStrength.WEAK,
        confidence=55,
        reason="RSI in overbought zone",
        rsi=RSISignal.OVERBOUGHT,
    ),
)


class SignalSynthesizer:
    """Combine the latest RSI, MACD and Bollinger points into one signal.

    Rules are evaluated in order and the first match wins; with no match
    the result is hold/weak with confidence 0. Trend assessment is not
    consulted. Each call is independent, so the same inputs always give
    the same signal.

    Usage:
        synthesizer = SignalSynthesizer()
        signals = synthesizer.generate_signals(series, rsi, macd, bollinger)
    """

    def __init__(self, rules: Sequence[SignalRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def evaluate(
        self,
        rsi: RSIPoint,
        macd: MACDPoint,
        bollinger: BollingerPoint,
        timestamp: int
    ) -> TradingSignal:
        """Apply the decision list to single indicator points.

        Args:
            rsi: Latest RSI point
            macd: Latest MACD point
            bollinger: Latest Bollinger point
            timestamp: Timestamp to stamp on the signal (latest price)

        Returns:
            TradingSignal from the first matching rule, or hold
        """
        rule = self.match(rsi.signal, macd.trend, bollinger.position)
        if rule is None:
            return TradingSignal(
                type=SignalType.HOLD,
                strength=SignalStrength.WEAK,
                reason=HOLD_REASON,
                timestamp=timestamp,
                confidence=0,
            )

        logger.debug(
            f"Rule {rule.name} matched: rsi={rsi.signal.value} "
            f"macd={macd.trend.value} band={bollinger.position.value}"
        )
        return TradingSignal(
            type=rule.signal_type,
            strength=rule.strength,
            reason=rule.reason,
            timestamp=timestamp,
            confidence=rule.confidence,
        )

    def match(
        self,
        rsi: RSISignal,
        macd: MACDTrend,
        band: BandPosition
    ) -> Optional[SignalRule]:
        for rule in self.rules:
            if rule.matches(rsi, macd, band):
                return rule
        return None

    def generate_signals(
        self,
        series: PriceSeries,
        rsi: IndicatorResult,
        macd: IndicatorResult,
        bollinger: IndicatorResult
    ) -> List[TradingSignal]:
        """Synthesize the signal for the most recent data point.

        Args:
            series: Price history the indicators were computed from
            rsi: RSI result
            macd: MACD result
            bollinger: Bollinger Bands result

        Returns:
            Empty list while any input is still empty, otherwise a list
            holding exactly one signal
        """
        if len(series) == 0 or rsi.is_empty() or macd.is_empty() or bollinger.is_empty():
            return []

        return [
            self.evaluate(
                rsi.latest, macd.latest, bollinger.latest,
                timestamp=series[-1].timestamp,
            )
        ]
