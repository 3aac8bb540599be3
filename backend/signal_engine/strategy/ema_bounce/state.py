"""Wait-for-pullback state machine for the EMA bounce strategy.

Two states:
- IDLE: no setup armed
- WAITING(n): a fast/medium cross-up armed the setup n bars ago

The state is a plain immutable value threaded through ``advance`` so a
caller can keep it between calls (e.g., one per symbol) and resume.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BounceState:
    """Current position in the wait-for-pullback cycle."""

    waiting: bool = False
    bars_waited: int = 0


IDLE = BounceState()


@dataclass(frozen=True)
class BounceStep:
    """Conditions observed on one bar.

    Attributes:
        bullish_stack: fast EMA > medium EMA > slow EMA.
        cross_up: fast EMA crossed above medium EMA on this bar while above slow EMA.
        bounce: low reached the tolerance band and close reclaimed the fast EMA.
        price_above_vwap: close > VWAP.
        macd_bullish: MACD line > signal line.
    """

    bullish_stack: bool
    cross_up: bool
    bounce: bool
    price_above_vwap: bool
    macd_bullish: bool

    @property
    def entry_ready(self) -> bool:
        return self.bounce and self.price_above_vwap and self.macd_bullish


def advance(
    state: BounceState,
    step: BounceStep,
    max_wait_bars: int = 0,
) -> tuple[BounceState, bool]:
    """
    Apply one bar to the state machine.

    A cross-up (re-)arms the setup with a fresh counter; otherwise an armed
    setup ages by one bar. The setup is dropped when the bullish stack
    breaks or it has waited more than ``max_wait_bars`` (0 = no limit).
    A buy fires when the setup is armed and the entry conditions hold;
    firing returns the machine to IDLE.

    Args:
        state: State before this bar
        step: Conditions observed on this bar
        max_wait_bars: Maximum bars to wait for the pullback (0 = unlimited)

    Returns:
        Tuple of (state after this bar, whether a buy fired)
    """
    if step.cross_up:
        state = BounceState(waiting=True, bars_waited=0)
    elif state.waiting:
        state = BounceState(waiting=True, bars_waited=state.bars_waited + 1)

    if not step.bullish_stack or (
        max_wait_bars > 0 and state.bars_waited > max_wait_bars
    ):
        state = IDLE

    fired = state.waiting and step.entry_ready
    if fired:
        state = IDLE

    return state, fired
