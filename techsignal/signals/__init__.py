"""Trading signal generation module.

Combines the latest indicator readings into a buy/sell/hold signal:
- SignalSynthesizer: ordered rule list over RSI, MACD and Bollinger Bands
- TechnicalAnalyzer: full analysis snapshot for a price history
"""

from .base_signal import (
    SignalType,
    SignalStrength,
    TradingSignal,
    clamp_confidence,
)
from .signal_synthesizer import SignalSynthesizer, SignalRule, DEFAULT_RULES, HOLD_REASON
from .technical_analyzer import TechnicalAnalyzer, AnalysisSnapshot

__all__ = [
    # Base types
    "SignalType",
    "SignalStrength",
    "TradingSignal",
    "clamp_confidence",
    # Synthesizer
    "SignalSynthesizer",
    "SignalRule",
    "DEFAULT_RULES",
    "HOLD_REASON",
    # Analyzer
    "TechnicalAnalyzer",
    "AnalysisSnapshot",
]
