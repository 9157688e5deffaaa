"""Random-walk price feed for demos and paper trading."""
import time
from typing import Callable, Optional

import numpy as np

from ..indicators.base_indicator import PricePoint, PriceSeries
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class PriceSimulator:
    """Simulated price feed.

    ``generate_history`` builds an initial history whose steps are uniform in
    +/-1% of the base price, with output prices floored at half the base.
    ``next_tick`` rolls the window forward one step of up to +/-0.75% of the
    latest price, floored at ``min_price``.

    Usage:
        simulator = PriceSimulator(seed=42)
        series = simulator.generate_history(50, base_price=50000)
        series = simulator.next_tick(series)
    """

    HISTORY_STEP = 0.02
    TICK_STEP = 0.015
    HISTORY_FLOOR = 0.5

    def __init__(
        self,
        base_price: float = 50000.0,
        interval_ms: int = 10000,
        min_price: float = 1000.0,
        seed: Optional[int] = None,
        clock: Callable[[], int] = _now_ms
    ):
        """Initialize simulator.

        Args:
            base_price: Starting price of generated histories
            interval_ms: Spacing between generated points
            min_price: Floor for prices produced by next_tick
            seed: Seed for reproducible walks
            clock: Returns the current time in epoch milliseconds
        """
        if base_price <= 0:
            raise ValueError(f"base_price must be > 0, got {base_price}")
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        self.base_price = float(base_price)
        self.interval_ms = int(interval_ms)
        self.min_price = float(min_price)
        self._rng = np.random.default_rng(seed)
        self._clock = clock

    def generate_history(
        self,
        length: int = 50,
        base_price: Optional[float] = None,
        end_timestamp: Optional[int] = None
    ) -> PriceSeries:
        """Generate ``length + 1`` points ending at ``end_timestamp``.

        Args:
            length: Number of steps; the history holds length + 1 points
            base_price: Override the simulator's base price
            end_timestamp: Timestamp of the last point (default: now)

        Returns:
            PriceSeries spaced ``interval_ms`` apart
        """
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        base = self.base_price if base_price is None else float(base_price)
        end = self._clock() if end_timestamp is None else int(end_timestamp)

        steps = (self._rng.random(length + 1) - 0.5) * base * self.HISTORY_STEP
        # The walk itself is not floored, only the reported prices
        walk = base + np.cumsum(steps)
        prices = np.maximum(walk, base * self.HISTORY_FLOOR)

        points = [
            PricePoint(float(price), end - (length - i) * self.interval_ms)
            for i, price in enumerate(prices)
        ]
        logger.debug(f"Generated {len(points)} simulated prices around {base}")
        return PriceSeries(points)

    def next_tick(
        self,
        series: PriceSeries,
        timestamp: Optional[int] = None
    ) -> PriceSeries:
        """Drop the oldest point and append one new simulated price.

        Args:
            series: Current window
            timestamp: Timestamp of the new point (default: now)

        Returns:
            New PriceSeries of the same length (one point if series is empty)
        """
        current = series[-1].price if len(series) else self.base_price
        change = (self._rng.random() - 0.5) * current * self.TICK_STEP
        price = max(current + change, self.min_price)
        ts = self._clock() if timestamp is None else int(timestamp)

        kept = list(series)[1:] if len(series) else []
        return PriceSeries(kept + [PricePoint(float(price), ts)])
