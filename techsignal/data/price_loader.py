"""Load and save price histories as CSV or JSON files."""
import math
import os

import pandas as pd

from ..indicators.base_indicator import PriceSeries
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json")
TIME_COLUMNS = ("timestamp", "time")


class PriceDataError(Exception):
    """Price file could not be read or written."""
    pass


class InvalidPriceSeriesError(ValueError):
    """Price series violates the ordering or finiteness contract."""
    pass


def _suffix(path: str) -> str:
    suffix = os.path.splitext(path)[1].lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise PriceDataError(
            f"Unsupported price file type '{suffix}', expected one of {SUPPORTED_SUFFIXES}"
        )
    return suffix


def load_prices(path: str) -> PriceSeries:
    """Read a price history file.

    The file needs a ``price`` column and a ``timestamp`` (or ``time``)
    column in epoch milliseconds. Rows keep their file order.

    Args:
        path: .csv file, or .json file holding a list of records

    Returns:
        PriceSeries in file order

    Raises:
        PriceDataError: Missing file, unsupported type, unreadable content
            or missing columns
    """
    suffix = _suffix(path)
    if not os.path.exists(path):
        raise PriceDataError(f"Price file not found: {path}")

    try:
        if suffix == ".csv":
            df = pd.read_csv(path)
        else:
            df = pd.read_json(path, orient="records", convert_dates=False)
    except ValueError as e:
        raise PriceDataError(f"Failed to parse price file {path}: {e}")

    if "price" not in df.columns:
        raise PriceDataError(f"Missing required column 'price' in {path}")
    time_column = next((c for c in TIME_COLUMNS if c in df.columns), None)
    if time_column is None:
        raise PriceDataError(f"Missing required column 'timestamp' in {path}")

    try:
        series = PriceSeries.from_frame(df, timestamp_column=time_column)
    except (TypeError, ValueError) as e:
        raise PriceDataError(f"Invalid price rows in {path}: {e}")
    logger.debug(f"Loaded {len(series)} prices from {path}")
    return series


def save_prices(series: PriceSeries, path: str) -> None:
    """Write a price history as CSV or JSON records.

    Raises:
        PriceDataError: Unsupported type or write failure
    """
    suffix = _suffix(path)
    df = series.to_frame()
    try:
        if suffix == ".csv":
            df.to_csv(path, index=False)
        else:
            df.to_json(path, orient="records")
    except OSError as e:
        raise PriceDataError(f"Failed to write price file {path}: {e}")
    logger.debug(f"Saved {len(series)} prices to {path}")


def validate_series(series: PriceSeries) -> PriceSeries:
    """Check a series before it reaches the indicators.

    Indicators assume finite prices in non-decreasing timestamp order and do
    not check it themselves; call this at the boundary where untrusted data
    enters.

    Returns:
        The same series, for chaining

    Raises:
        InvalidPriceSeriesError: On a non-finite price or a timestamp lower
            than its predecessor
    """
    previous = None
    for index, point in enumerate(series):
        if not math.isfinite(point.price):
            raise InvalidPriceSeriesError(
                f"Non-finite price {point.price!r} at index {index}"
            )
        if previous is not None and point.timestamp < previous:
            raise InvalidPriceSeriesError(
                f"Timestamp {point.timestamp} at index {index} precedes {previous}"
            )
        previous = point.timestamp
    return series
