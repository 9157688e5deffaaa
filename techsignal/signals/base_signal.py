"""Base types for trading signal generation."""

from dataclasses import dataclass
from enum import Enum, IntEnum


class SignalType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class SignalStrength(IntEnum):
    """Trading signal strength, totally ordered WEAK < MODERATE < STRONG."""
    WEAK = 1
    MODERATE = 2
    STRONG = 3

    @property
    def label(self) -> str:
        return self.name.lower()


def clamp_confidence(confidence: float) -> int:
    """Round to a whole percentage and clamp to 0-100."""
    return int(max(0, min(100, round(confidence))))


@dataclass(frozen=True)
class TradingSignal:
    """Synthesized trading signal.

    Attributes:
        type: buy, sell or hold
        strength: weak, moderate or strong
        reason: Human-readable explanation of which indicators agreed
        timestamp: Timestamp of the latest price the signal applies to
        confidence: Integer percentage, 0-100
    """
    type: SignalType
    strength: SignalStrength
    reason: str
    timestamp: int
    confidence: int

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))

    def is_actionable(self) -> bool:
        return self.type != SignalType.HOLD

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "strength": self.strength.label,
            "reason": self.reason,
            "timestamp": self.timestamp,
            "confidence": self.confidence,
        }
