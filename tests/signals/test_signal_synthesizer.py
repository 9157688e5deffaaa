"""Tests for the rule-based signal synthesizer."""

import pytest

from techsignal.indicators.base_indicator import IndicatorResult, PriceSeries
from techsignal.indicators.momentum_indicators import RSIPoint, RSISignal
from techsignal.indicators.trend_indicators import MACDPoint, MACDTrend
from techsignal.indicators.volatility_indicators import BandPosition, BollingerPoint
from techsignal.signals.base_signal import SignalStrength, SignalType
from techsignal.signals.signal_synthesizer import (
    DEFAULT_RULES,
    HOLD_REASON,
    SignalRule,
    SignalSynthesizer,
)

TS = 1_700_000_000_000


def make_points(rsi_signal, macd_trend, band_position, ts=TS):
    """Build one point per indicator carrying the given labels."""
    rsi = RSIPoint(value=50.0, timestamp=ts, signal=rsi_signal)
    macd = MACDPoint(macd=0.0, signal=0.0, histogram=0.0, timestamp=ts, trend=macd_trend)
    boll = BollingerPoint(upper=1.0, middle=0.5, lower=0.0, timestamp=ts, position=band_position)
    return rsi, macd, boll


@pytest.fixture
def synthesizer():
    return SignalSynthesizer()


class TestSignalRules:
    """Tests for each entry of the decision list."""

    @pytest.mark.parametrize("rsi,macd,band,expected", [
        (RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.BELOW,
         (SignalType.BUY, SignalStrength.STRONG, 85)),
        (RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.INSIDE,
         (SignalType.BUY, SignalStrength.MODERATE, 70)),
        (RSISignal.OVERSOLD, MACDTrend.NEUTRAL, BandPosition.BELOW,
         (SignalType.BUY, SignalStrength.WEAK, 55)),
        (RSISignal.OVERSOLD, MACDTrend.BEARISH, BandPosition.ABOVE,
         (SignalType.BUY, SignalStrength.WEAK, 55)),
        (RSISignal.OVERBOUGHT, MACDTrend.BEARISH, BandPosition.ABOVE,
         (SignalType.SELL, SignalStrength.STRONG, 85)),
        (RSISignal.OVERBOUGHT, MACDTrend.BEARISH, BandPosition.INSIDE,
         (SignalType.SELL, SignalStrength.MODERATE, 70)),
        (RSISignal.OVERBOUGHT, MACDTrend.BULLISH, BandPosition.ABOVE,
         (SignalType.SELL, SignalStrength.WEAK, 55)),
        (RSISignal.NEUTRAL, MACDTrend.BULLISH, BandPosition.BELOW,
         (SignalType.HOLD, SignalStrength.WEAK, 0)),
        (RSISignal.NEUTRAL, MACDTrend.BEARISH, BandPosition.ABOVE,
         (SignalType.HOLD, SignalStrength.WEAK, 0)),
    ])
    def test_rule_outcomes(self, synthesizer, rsi, macd, band, expected):
        """Test the first matching rule decides type, strength and confidence."""
        signal = synthesizer.evaluate(*make_points(rsi, macd, band), timestamp=TS)
        assert (signal.type, signal.strength, signal.confidence) == expected

    def test_strongest_buy_takes_priority(self, synthesizer):
        """Test oversold + bullish + below selects the strong buy, never a weaker rule."""
        points = make_points(RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.BELOW)
        signal = synthesizer.evaluate(*points, timestamp=TS)
        assert signal.type == SignalType.BUY
        assert signal.strength == SignalStrength.STRONG
        assert signal.confidence == 85
        assert signal.reason == DEFAULT_RULES[0].reason

    def test_hold_reason(self, synthesizer):
        """Test no match gives hold with the in-progress reason."""
        points = make_points(RSISignal.NEUTRAL, MACDTrend.NEUTRAL, BandPosition.INSIDE)
        signal = synthesizer.evaluate(*points, timestamp=TS)
        assert signal.type == SignalType.HOLD
        assert signal.reason == HOLD_REASON == "analysis in progress"

    def test_reasons_are_distinct(self):
        """Test each rule has its own reason."""
        reasons = [rule.reason for rule in DEFAULT_RULES]
        assert len(set(reasons)) == len(reasons) == 6

    def test_match_returns_rule(self, synthesizer):
        """Test match exposes the winning rule."""
        rule = synthesizer.match(RSISignal.OVERBOUGHT, MACDTrend.BEARISH, BandPosition.INSIDE)
        assert rule.name == "overbought_bearish"
        assert synthesizer.match(RSISignal.NEUTRAL, MACDTrend.BULLISH, BandPosition.BELOW) is None

    def test_custom_rules(self):
        """Test a custom rule list replaces the defaults."""
        rule = SignalRule(
            name="any_bullish",
            signal_type=SignalType.BUY,
            strength=SignalStrength.WEAK,
            confidence=40,
            reason="MACD bullish",
            macd=MACDTrend.BULLISH,
        )
        synthesizer = SignalSynthesizer(rules=[rule])
        points = make_points(RSISignal.NEUTRAL, MACDTrend.BULLISH, BandPosition.INSIDE)
        assert synthesizer.evaluate(*points, timestamp=TS).confidence == 40


class TestGenerateSignals:
    """Tests for generate_signals over full indicator results."""

    @pytest.fixture
    def series(self):
        return PriceSeries.from_prices([1.0, 2.0, 3.0], start=TS, interval_ms=1000)

    def results(self, rsi_signal, macd_trend, band_position):
        rsi, macd, boll = make_points(rsi_signal, macd_trend, band_position)
        return (
            IndicatorResult("RSI_14", [rsi]),
            IndicatorResult("MACD_12_26_9", [macd]),
            IndicatorResult("BOLL_20_2", [boll]),
        )

    def test_single_signal_stamped_with_latest_price(self, synthesizer, series):
        """Test one signal using the latest price's timestamp."""
        signals = synthesizer.generate_signals(
            series, *self.results(RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.BELOW)
        )
        assert len(signals) == 1
        assert signals[0].timestamp == TS + 2000
        assert signals[0].type == SignalType.BUY

    @pytest.mark.parametrize("empty_index", [0, 1, 2])
    def test_empty_indicator_gives_no_signal(self, synthesizer, series, empty_index):
        """Test any empty indicator result means not enough data yet."""
        results = list(self.results(RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.BELOW))
        results[empty_index] = IndicatorResult(results[empty_index].name)
        assert synthesizer.generate_signals(series, *results) == []

    def test_empty_series_gives_no_signal(self, synthesizer):
        """Test an empty price history gives no signal."""
        results = self.results(RSISignal.OVERSOLD, MACDTrend.BULLISH, BandPosition.BELOW)
        assert synthesizer.generate_signals(PriceSeries(), *results) == []

    def test_idempotent(self, synthesizer, series):
        """Test identical inputs give identical signals."""
        results = self.results(RSISignal.OVERBOUGHT, MACDTrend.BEARISH, BandPosition.ABOVE)
        first = synthesizer.generate_signals(series, *results)
        second = synthesizer.generate_signals(series, *results)
        assert first == second
