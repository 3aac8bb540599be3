"""Converters from raw candle payloads to Candle models.

Market-data collectors hand candles over in one of three shapes:

- Binance kline rows: ``[open_time, open, high, low, close, volume, close_time, ...]``
  (trailing fields are ignored)
- Bybit kline rows: ``[start_time, open, high, low, close, volume, turnover]``;
  there is no close time, so it is derived as ``start_time + interval - 1``
- objects with ``open_time``/``openTime`` ... ``close_time``/``closeTime`` keys

Prices may arrive as strings, Decimals or JSON numbers. Strings and Decimals
are exact. A float has already lost whatever digits binary precision could
not hold; ``str`` only keeps its shortest repr from growing into float noise.
Parse JSON with ``parse_float=Decimal`` to keep every digit.
"""

from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from signal_engine.models.candle import Candle


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def candle_from_row(row: Sequence[Any], interval_ms: int | None = None) -> Candle:
    """Convert an exchange kline row to a Candle.

    Args:
        row: Binance layout ``[open_time, open, high, low, close, volume, close_time, ...]``,
            or Bybit layout ``[start_time, open, high, low, close, volume, ...]``
            when ``interval_ms`` is given
        interval_ms: Candle interval for rows without a close time (Bybit)

    Returns:
        Candle model

    Raises:
        ValueError: If the row is too short for its layout
    """
    required = 7 if interval_ms is None else 6
    if len(row) < required:
        raise ValueError(f"Kline row needs at least {required} fields, got {len(row)}")

    open_time = int(row[0])
    if interval_ms is None:
        close_time = int(row[6])
    else:
        close_time = open_time + interval_ms - 1

    return Candle(
        open_time=open_time,
        open=_to_decimal(row[1]),
        high=_to_decimal(row[2]),
        low=_to_decimal(row[3]),
        close=_to_decimal(row[4]),
        volume=_to_decimal(row[5]),
        close_time=close_time,
    )


def candle_from_mapping(data: Mapping[str, Any]) -> Candle:
    """Convert a candle object (snake_case or camelCase keys) to a Candle."""
    open_time = data["open_time"] if "open_time" in data else data["openTime"]
    close_time = data["close_time"] if "close_time" in data else data["closeTime"]
    return Candle(
        open_time=int(open_time),
        open=_to_decimal(data["open"]),
        high=_to_decimal(data["high"]),
        low=_to_decimal(data["low"]),
        close=_to_decimal(data["close"]),
        volume=_to_decimal(data["volume"]),
        close_time=int(close_time),
    )


def candles_from_payload(
    payload: Iterable[Any],
    interval_ms: int | None = None,
) -> list[Candle]:
    """Convert a list of rows or candle objects to Candles, preserving order.

    ``interval_ms`` is only used for rows, see ``candle_from_row``.
    """
    candles = []
    for item in payload:
        if isinstance(item, Candle):
            candles.append(item)
        elif isinstance(item, Mapping):
            candles.append(candle_from_mapping(item))
        else:
            candles.append(candle_from_row(item, interval_ms))
    return candles
