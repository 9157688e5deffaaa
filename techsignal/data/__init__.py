"""Price history sources: file loading and a simulated feed."""

from .price_loader import (
    PriceDataError,
    InvalidPriceSeriesError,
    load_prices,
    save_prices,
    validate_series,
)
from .price_simulator import PriceSimulator

__all__ = [
    "PriceDataError",
    "InvalidPriceSeriesError",
    "load_prices",
    "save_prices",
    "validate_series",
    "PriceSimulator",
]
