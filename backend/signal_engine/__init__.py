"""Technical-indicator and trading-signal detection engine.

This package contains pure analysis logic with no I/O dependencies
(no exchange access, database, or network). Candle acquisition, alerting
and rendering are left to the caller; ``signal_engine.analyzer.analyze``
turns one candle window into indicators, zones and signals.
"""
