"""Tests for price file loading and series validation."""

import json

import pytest

from techsignal.data.price_loader import (
    InvalidPriceSeriesError,
    PriceDataError,
    load_prices,
    save_prices,
    validate_series,
)
from techsignal.indicators.base_indicator import PricePoint, PriceSeries


class TestLoadPrices:
    """Tests for load_prices."""

    def test_load_csv(self, tmp_path):
        """Test loading a CSV file keeps row order."""
        path = tmp_path / "prices.csv"
        path.write_text("timestamp,price\n1000,100.5\n2000,101.0\n3000,99.75\n")

        series = load_prices(str(path))

        assert len(series) == 3
        assert series[0] == PricePoint(100.5, 1000)
        assert series[-1] == PricePoint(99.75, 3000)

    def test_load_json_with_time_key(self, tmp_path):
        """Test JSON records may use 'time' for the timestamp."""
        path = tmp_path / "prices.json"
        path.write_text(json.dumps([
            {"time": 1700000000000, "price": 50000.0},
            {"time": 1700000010000, "price": 50100.0},
        ]))

        series = load_prices(str(path))

        assert list(series.timestamps) == [1700000000000, 1700000010000]
        assert list(series.prices) == [50000.0, 50100.0]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises PriceDataError."""
        with pytest.raises(PriceDataError, match="not found"):
            load_prices(str(tmp_path / "missing.csv"))

    def test_unsupported_suffix(self, tmp_path):
        """Test unknown file types are rejected."""
        path = tmp_path / "prices.txt"
        path.write_text("price\n1\n")
        with pytest.raises(PriceDataError, match="Unsupported"):
            load_prices(str(path))

    def test_missing_price_column(self, tmp_path):
        """Test a file without a price column is rejected."""
        path = tmp_path / "prices.csv"
        path.write_text("timestamp,close\n1,2\n")
        with pytest.raises(PriceDataError, match="price"):
            load_prices(str(path))

    def test_missing_timestamp_column(self, tmp_path):
        """Test a file without a time column is rejected."""
        path = tmp_path / "prices.csv"
        path.write_text("price\n1\n")
        with pytest.raises(PriceDataError, match="timestamp"):
            load_prices(str(path))

    def test_invalid_json(self, tmp_path):
        """Test unparsable JSON raises PriceDataError."""
        path = tmp_path / "prices.json"
        path.write_text("{not json")
        with pytest.raises(PriceDataError):
            load_prices(str(path))


class TestSavePrices:
    """Tests for save_prices."""

    @pytest.mark.parametrize("name", ["out.csv", "out.json"])
    def test_save_then_load(self, tmp_path, name):
        """Test saved files load back to the same series."""
        series = PriceSeries.from_prices([1.5, 2.5, 3.5], start=1000)
        path = str(tmp_path / name)

        save_prices(series, path)

        assert load_prices(path) == series

    def test_save_unsupported_suffix(self, tmp_path):
        """Test saving to an unknown type is rejected."""
        with pytest.raises(PriceDataError):
            save_prices(PriceSeries(), str(tmp_path / "out.parquet"))


class TestValidateSeries:
    """Tests for validate_series."""

    def test_valid_series_passes(self):
        """Test a well-formed series is returned unchanged."""
        series = PriceSeries.from_records([(1.0, 1), (2.0, 1), (3.0, 2)])
        assert validate_series(series) is series

    def test_nan_price_rejected(self):
        """Test NaN prices are rejected."""
        series = PriceSeries.from_records([(1.0, 1), (float("nan"), 2)])
        with pytest.raises(InvalidPriceSeriesError, match="index 1"):
            validate_series(series)

    def test_infinite_price_rejected(self):
        """Test infinite prices are rejected."""
        series = PriceSeries.from_records([(float("inf"), 1)])
        with pytest.raises(InvalidPriceSeriesError):
            validate_series(series)

    def test_decreasing_timestamp_rejected(self):
        """Test timestamps must not go backwards."""
        series = PriceSeries.from_records([(1.0, 5), (2.0, 4)])
        with pytest.raises(InvalidPriceSeriesError, match="precedes"):
            validate_series(series)

    def test_is_value_error(self):
        """Test InvalidPriceSeriesError is a ValueError."""
        assert issubclass(InvalidPriceSeriesError, ValueError)
