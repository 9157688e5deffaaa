"""Core data types and the base class shared by all technical indicators."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterable, Optional, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class PricePoint:
    """A single price observation.

    Attributes:
        price: Observed price
        timestamp: Epoch milliseconds
    """
    price: float
    timestamp: int


class PriceSeries(Sequence):
    """Immutable, timestamp-ordered sequence of PricePoints.

    The input contract for every indicator. Duplicate timestamps are kept
    and handled by position. Ordering and finiteness are not checked here;
    see ``techsignal.data.price_loader.validate_series`` for a boundary check.

    Usage:
        series = PriceSeries.from_records([{"price": 100.0, "timestamp": 1}])
        series.prices      # read-only numpy array
        series.tail(20)    # last 20 points as a new PriceSeries
    """

    __slots__ = ("_points", "_prices", "_timestamps")

    def __init__(self, points: Iterable[PricePoint] = ()):
        self._points = tuple(points)
        self._prices = np.array([p.price for p in self._points], dtype=float)
        self._timestamps = np.array(
            [p.timestamp for p in self._points], dtype=np.int64
        )
        self._prices.setflags(write=False)
        self._timestamps.setflags(write=False)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "PriceSeries":
        """Build a series from dicts or ``(price, timestamp)`` pairs.

        Dicts may use either ``timestamp`` or ``time`` for the time key.
        """
        points = []
        for record in records:
            if isinstance(record, PricePoint):
                points.append(record)
            elif isinstance(record, dict):
                ts = record["timestamp"] if "timestamp" in record else record["time"]
                points.append(PricePoint(float(record["price"]), int(ts)))
            else:
                price, ts = record
                points.append(PricePoint(float(price), int(ts)))
        return cls(points)

    @classmethod
    def from_prices(
        cls,
        prices: Iterable[float],
        start: int = 0,
        interval_ms: int = 1000
    ) -> "PriceSeries":
        """Build a series from bare prices with evenly spaced timestamps."""
        return cls(
            PricePoint(float(price), start + i * interval_ms)
            for i, price in enumerate(prices)
        )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        price_column: str = "price",
        timestamp_column: str = "timestamp"
    ) -> "PriceSeries":
        """Build a series from a DataFrame, keeping row order."""
        return cls(
            PricePoint(float(price), int(ts))
            for price, ts in zip(df[price_column], df[timestamp_column])
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "price": self._prices.copy(),
            "timestamp": self._timestamps.copy(),
        })

    @property
    def prices(self) -> np.ndarray:
        return self._prices

    @property
    def timestamps(self) -> np.ndarray:
        return self._timestamps

    def tail(self, n: int) -> "PriceSeries":
        """Return the last ``n`` points (all points if fewer)."""
        if n <= 0:
            return PriceSeries()
        return PriceSeries(self._points[-n:])

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PriceSeries(self._points[index])
        return self._points[index]

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PriceSeries):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"PriceSeries(n={len(self._points)})"


PriceInput = Union[PriceSeries, Iterable[PricePoint]]


@dataclass(frozen=True)
class IndicatorPoint:
    """One indicator output, stamped with the closing input's timestamp."""
    value: float
    timestamp: int


_PRIMARY_FIELDS = ("value", "macd", "middle")


def _row(point: Any) -> dict:
    row = {}
    for f in fields(point):
        value = getattr(point, f.name)
        row[f.name] = value.value if isinstance(value, Enum) else value
    return row


@dataclass
class IndicatorResult:
    """Container for indicator calculation results.

    Attributes:
        name: Indicator identifier (e.g., 'SMA_20', 'MACD_12_26_9')
        points: Output points, aligned to the tail of the input series
        params: Parameters used for calculation
    """
    name: str
    points: list = field(default_factory=list)
    params: dict = field(default_factory=dict)

    @property
    def latest(self) -> Optional[Any]:
        """Most recent point, or None while there is not enough data."""
        return self.points[-1] if self.points else None

    @property
    def values(self) -> np.ndarray:
        """Primary values as an array.

        ``value`` for single-line indicators, the MACD line for MACD and the
        middle band for Bollinger Bands.
        """
        if not self.points:
            return np.array([], dtype=float)
        first = self.points[0]
        attr = next(a for a in _PRIMARY_FIELDS if hasattr(first, a))
        return np.array([getattr(p, attr) for p in self.points], dtype=float)

    def is_empty(self) -> bool:
        return not self.points

    def to_frame(self) -> pd.DataFrame:
        """Points as a DataFrame, one column per point field."""
        return pd.DataFrame([_row(p) for p in self.points])

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


def rolling_windows(values: np.ndarray, window: int) -> np.ndarray:
    """Trailing windows of ``values``; row ``j`` ends at index ``j + window - 1``.

    Returns an empty (0, window) array when there are fewer than ``window``
    values.
    """
    if len(values) < window:
        return np.empty((0, window), dtype=float)
    return np.lib.stride_tricks.sliding_window_view(values, window)


def check_period(value: int, label: str = "period") -> int:
    """Validate a window length parameter.

    Raises:
        ValueError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{label} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{label} must be >= 1, got {value}")
    return int(value)


class BaseIndicator(ABC):
    """Abstract base class for all technical indicators.

    Subclasses must implement:
        - name: Property returning indicator name
        - calculate: Method performing the actual calculation

    Indicators hold configuration only, so one instance can be shared
    between threads. Too little input is not an error: ``calculate``
    returns an empty result.

    Usage:
        indicator = ConcreteIndicator()
        result = indicator(series)  # Coerces input and calculates
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return indicator name."""
        pass

    @abstractmethod
    def calculate(self, series: PriceSeries) -> IndicatorResult:
        """Calculate indicator values.

        Args:
            series: Price history, oldest first

        Returns:
            IndicatorResult with calculated points
        """
        pass

    @property
    def params(self) -> dict:
        return {}

    def prepare_data(self, data: PriceInput) -> PriceSeries:
        """Coerce input into a PriceSeries.

        Raises:
            TypeError: If data is neither a PriceSeries nor an iterable
        """
        if isinstance(data, PriceSeries):
            return data
        if isinstance(data, pd.DataFrame):
            return PriceSeries.from_frame(data)
        try:
            return PriceSeries.from_records(data)
        except TypeError as e:
            raise TypeError(
                f"{self.name} expects a PriceSeries, got {type(data).__name__}"
            ) from e

    def empty_result(self) -> IndicatorResult:
        return IndicatorResult(name=self.name, points=[], params=self.params)

    def __call__(self, data: PriceInput) -> IndicatorResult:
        """Coerce data and calculate indicator."""
        return self.calculate(self.prepare_data(data))
