"""CLI entry point for one-off analysis of a saved candle window.

Candle acquisition is not done here: the input is a JSON file written by a
market-data collector, either a list of candle objects or raw exchange
kline rows (Binance layout, or Bybit layout with --exchange bybit).

Usage:
    python -m signal_engine candles.json --symbol BTCUSDT --timeframe 1h
    python -m signal_engine candles.json --symbol ETHUSDT --exchange bybit --trading-type futures
    python -m signal_engine candles.json --symbol BTCUSDT --config analysis.yaml -o result.json
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

from signal_engine.analyzer import AnalysisResult, analyze
from signal_engine.config import get_settings, load_analysis_config
from signal_engine.models import (
    Exchange,
    Timeframe,
    TradingType,
    candles_from_payload,
)

logger = logging.getLogger("signal_engine")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Detect EMA bounce and supply/demand signals in a candle window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m signal_engine candles.json --symbol BTCUSDT --timeframe 1h
  python -m signal_engine candles.json --symbol ETHUSDT --exchange bybit --trading-type futures
  python -m signal_engine candles.json --symbol BTCUSDT --config analysis.yaml -o result.json
        """,
    )
    parser.add_argument(
        "candles",
        type=Path,
        help="JSON file with candle objects or kline rows (Binance layout, or Bybit with --exchange bybit)",
    )
    parser.add_argument(
        "--symbol",
        type=str,
        required=True,
        help="Trading pair, e.g. BTCUSDT",
    )
    parser.add_argument(
        "--exchange",
        type=str,
        choices=[e.value for e in Exchange],
        default=Exchange.BINANCE.value,
        help="Exchange the candles came from (default: binance)",
    )
    parser.add_argument(
        "--trading-type",
        type=str,
        choices=[t.value for t in TradingType],
        default=TradingType.SPOT.value,
        help="Market type (default: spot)",
    )
    parser.add_argument(
        "--timeframe",
        type=str,
        choices=[t.value for t in Timeframe],
        default=Timeframe.H1.value,
        help="Candle interval (default: 1h)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="analysis.yaml with parameter overrides",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file path for JSON results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def format_summary(result: AnalysisResult) -> str:
    """Human-readable summary of an analysis."""
    lines = [
        f"EMA points:   {len(result.ema_series)}",
        f"VWAP points:  {len(result.vwap_series)}",
        f"MACD points:  {len(result.macd_series)}",
        f"Zones:        {len(result.zones)}",
        f"Signals:      {len(result.all_signals)} "
        f"({len(result.bounce_signals)} bounce, {len(result.zone_signals)} zone)",
    ]
    for signal in result.all_signals:
        lines.append(
            f"  {signal.id:<24} {signal.direction.value:<4} @ {signal.price} "
            f"confidence={signal.confidence}"
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        with open(args.candles) as f:
            payload = json.load(f, parse_float=Decimal)
        # Bybit rows carry no close time
        interval_ms = (
            Timeframe(args.timeframe).milliseconds
            if args.exchange == Exchange.BYBIT.value
            else None
        )
        candles = candles_from_payload(payload, interval_ms)
        config = load_analysis_config(args.config)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Failed to load input: {e}")
        return 1

    result = analyze(
        candles,
        symbol=args.symbol,
        exchange=args.exchange,
        trading_type=args.trading_type,
        timeframe=args.timeframe,
        config=config,
    )

    print(format_summary(result))

    if args.output:
        args.output.write_text(result.model_dump_json(indent=2))
        logger.info(f"Results written to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
