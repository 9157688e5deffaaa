"""techsignal command line entry point."""
import argparse
import json
import os
import sys

from techsignal.data.price_loader import (
    InvalidPriceSeriesError,
    PriceDataError,
    load_prices,
    save_prices,
    validate_series,
)
from techsignal.data.price_simulator import PriceSimulator
from techsignal.indicators import IndicatorConfig
from techsignal.signals import TechnicalAnalyzer
from techsignal.utils.config import Config, ConfigError
from techsignal.utils.logger import get_logger, setup_logger

DEFAULT_CONFIG_PATH = "config/config.yaml"


def load_config(config_path: str) -> Config:
    """Load the config file, or an empty config if the default is absent.

    Raises:
        ConfigError: An explicitly given file is missing or invalid
    """
    if config_path == DEFAULT_CONFIG_PATH and not os.path.exists(config_path):
        return Config.from_dict({})
    return Config(config_path)


def init_system(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration and set up logging."""
    config = load_config(config_path)

    log_file = config.get("logging.file", "logs/techsignal.log")
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    setup_logger(
        log_file=log_file,
        level=config.get("logging.level", "INFO"),
        rotation=config.get("logging.rotation", "10 MB"),
        retention=config.get("logging.retention", "30 days"),
    )
    return config


def cmd_analyze(args, config: Config) -> int:
    """Analyze a price file and print the latest readings and signal."""
    logger = get_logger(__name__)

    series = validate_series(load_prices(args.input))
    analyzer = TechnicalAnalyzer(IndicatorConfig.from_config(config))
    snapshot = analyzer.analyze(series)

    if snapshot is None:
        logger.info(
            f"Insufficient data for analysis: {len(series)} prices, "
            f"at least {analyzer.min_points} required"
        )
        return 0

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
        return 0

    signal = snapshot.signal
    print(f"Price:      {snapshot.price:.2f} @ {snapshot.timestamp}")
    print(f"RSI:        {snapshot.rsi.value:.2f} ({snapshot.rsi.signal.value})")
    print(f"MACD:       {snapshot.macd.macd:.4f} / signal {snapshot.macd.signal:.4f} "
          f"/ hist {snapshot.macd.histogram:.4f} ({snapshot.macd.trend.value})")
    print(f"Bollinger:  {snapshot.bollinger.lower:.2f} - {snapshot.bollinger.upper:.2f} "
          f"({snapshot.bollinger.position.value})")
    print(f"Trend:      {snapshot.trend.trend.value} ({snapshot.trend.strength:.2f}%), "
          f"support {snapshot.trend.support:.2f}, resistance {snapshot.trend.resistance:.2f}")
    print(f"Signal:     {signal.type.value.upper()} {signal.strength.label} "
          f"({signal.confidence}%) - {signal.reason}")
    return 0


def cmd_simulate(args, config: Config) -> int:
    """Write a simulated price history to a file."""
    logger = get_logger(__name__)

    try:
        simulator = PriceSimulator(
            base_price=args.base_price or config.get("simulator.base_price", 50000.0),
            interval_ms=config.get("simulator.interval_ms", 10000),
            min_price=config.get("simulator.min_price", 1000.0),
            seed=args.seed,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid simulator config: {e}")

    length = args.length if args.length is not None else config.get("simulator.length", 50)
    series = simulator.generate_history(length)
    save_prices(series, args.output)

    logger.info(f"Wrote {len(series)} simulated prices to {args.output}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="techsignal - technical indicators and trading signals"
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Config file path"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a price history file")
    analyze_parser.add_argument(
        "--input",
        required=True,
        help="CSV or JSON file with price and timestamp columns"
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis as JSON"
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    simulate_parser = subparsers.add_parser("simulate", help="Generate a simulated price history")
    simulate_parser.add_argument(
        "--output",
        required=True,
        help="CSV or JSON output file"
    )
    simulate_parser.add_argument("--length", type=int, help="Number of steps")
    simulate_parser.add_argument("--base-price", type=float, help="Starting price")
    simulate_parser.add_argument("--seed", type=int, help="Random seed")
    simulate_parser.set_defaults(func=cmd_simulate)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = init_system(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    logger = get_logger(__name__)
    try:
        return args.func(args, config)
    except (PriceDataError, InvalidPriceSeriesError, ConfigError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
