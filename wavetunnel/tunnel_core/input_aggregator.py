"""
Input Aggregator
================

Collects vertical steering intent from scroll, touch-drag and gamepad input
and turns it into a single per-tick delta for the ball.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config


# Returns the current vertical axis in [-1, 1], or None when no device is attached
GamepadProvider = Callable[[], Optional[float]]


class InputAggregator:
    """
    Per-tick input accumulator.

    Event handlers (possibly on another thread) push raw deltas through
    accumulate() or the on_* helpers. The game loop calls consume() exactly
    once per tick, which combines the accumulated delta with a single gamepad
    sample, scales both by sensitivity and resets the accumulator.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        gamepad_provider: Optional[GamepadProvider] = None
    ):
        """
        Initialize input aggregator.

        Args:
            config: Game configuration. Uses default if None.
            gamepad_provider: Callable polled once per tick for the gamepad
                vertical axis. No gamepad contribution if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scroll_scale = config.input.scroll_scale
        self._touch_scale = config.input.touch_scale
        self._deadzone = config.input.gamepad_deadzone

        self._gamepad_provider = gamepad_provider
        self._lock = threading.Lock()
        self._pending: float = 0.0
        self._touch_anchor: Optional[float] = None

    @property
    def pending(self) -> float:
        """Accumulated scroll/touch delta not yet consumed."""
        with self._lock:
            return self._pending

    def set_gamepad_provider(self, provider: Optional[GamepadProvider]) -> None:
        """Attach or detach the gamepad polling callable."""
        self._gamepad_provider = provider

    def accumulate(self, delta_y: float) -> None:
        """Add a raw vertical delta (before sensitivity scaling)."""
        with self._lock:
            self._pending += delta_y

    def on_scroll(self, delta_y: float) -> None:
        """Mouse wheel / trackpad scroll event."""
        self.accumulate(delta_y * self._scroll_scale)

    def on_touch_start(self, y: float) -> None:
        """Finger down: remember the anchor for subsequent drags."""
        with self._lock:
            self._touch_anchor = y

    def on_touch_move(self, y: float) -> None:
        """Finger drag: accumulate movement since the previous touch point."""
        with self._lock:
            if self._touch_anchor is None:
                self._touch_anchor = y
                return
            delta = y - self._touch_anchor
            self._touch_anchor = y
            self._pending += delta * self._touch_scale

    def on_touch_end(self) -> None:
        with self._lock:
            self._touch_anchor = None

    def sample_gamepad_axis(self) -> float:
        """
        Poll the gamepad vertical axis.

        Returns:
            Axis value clamped to [-1, 1]; 0.0 when no gamepad is available.
        """
        if self._gamepad_provider is None:
            return 0.0

        try:
            value = self._gamepad_provider()
        except (OSError, RuntimeError, IndexError):
            # Device unplugged between polls
            return 0.0

        if value is None:
            return 0.0

        value = max(-1.0, min(1.0, float(value)))
        if abs(value) < self._deadzone:
            return 0.0
        return value

    def consume(self, sensitivity: float) -> float:
        """
        Produce this tick's vertical delta and reset the accumulator.

        Args:
            sensitivity: Player sensitivity multiplier.

        Returns:
            accumulated * sensitivity + gamepad_axis * sensitivity
        """
        axis = self.sample_gamepad_axis()
        with self._lock:
            pending = self._pending
            self._pending = 0.0
        return pending * sensitivity + axis * sensitivity

    def reset(self) -> None:
        """Drop any pending input and touch anchor."""
        with self._lock:
            self._pending = 0.0
            self._touch_anchor = None
