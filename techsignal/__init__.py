"""techsignal - technical analysis indicators and rule-based trading signals."""

__version__ = "0.1.0"
