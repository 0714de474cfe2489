"""
Tunnel Generator
================

Maintains the tunnel centerline as a bounded sliding window of vertical
offsets, one per horizontal slot, and extends it procedurally every tick.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config
from wavetunnel.tunnel_core.rng import JitterSource


def validate_viewport(config: GameConfig, viewport_width: float, viewport_height: float) -> int:
    """
    Check that a viewport can host the tunnel.

    Returns:
        Tunnel capacity for the viewport width.

    Raises:
        ValueError: If the height is not positive or the width holds no slot.
    """
    capacity = config.capacity_for(viewport_width)
    if viewport_height <= 0 or capacity < 1:
        raise ValueError(f"Viewport too small: {viewport_width}x{viewport_height}")
    return capacity


class TunnelGenerator:
    """
    Procedural tunnel centerline.

    The newest entry is at the end of the list (rightmost slot). Each call to
    advance() drops the oldest entries so that the window never holds more
    than `capacity` values, then appends one new centerline offset made of a
    slow sine drift plus uniform jitter.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        viewport_width: Optional[float] = None,
        viewport_height: Optional[float] = None,
        jitter: Optional[JitterSource] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize tunnel generator.

        Args:
            config: Game configuration. Uses default if None.
            viewport_width: Viewport width. Uses config viewport if None.
            viewport_height: Viewport height. Uses config viewport if None.
            jitter: Jitter source. A new one seeded with `seed` if None.
            seed: Seed for the jitter source created when `jitter` is None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._slot_width = config.tunnel.slot_width
        self._drift_period = config.tunnel.drift_period
        self._drift_amplitude = config.tunnel.drift_amplitude
        self._jitter_amplitude = config.tunnel.jitter_amplitude

        self._viewport_width = float(viewport_width if viewport_width is not None else config.viewport.width)
        self._viewport_height = float(viewport_height if viewport_height is not None else config.viewport.height)
        self._capacity = validate_viewport(config, self._viewport_width, self._viewport_height)

        self._jitter = jitter if jitter is not None else JitterSource(seed)
        self._curves: List[float] = []

    @property
    def capacity(self) -> int:
        """Maximum number of centerline entries (viewport width / slot width)."""
        return self._capacity

    @property
    def slot_width(self) -> float:
        """Horizontal width of one slot."""
        return self._slot_width

    @property
    def viewport_height(self) -> float:
        return self._viewport_height

    @property
    def curves(self) -> Tuple[float, ...]:
        """Current centerline offsets, oldest first."""
        return tuple(self._curves)

    @property
    def jitter(self) -> JitterSource:
        return self._jitter

    def __len__(self) -> int:
        return len(self._curves)

    def __getitem__(self, index: int) -> float:
        return self._curves[index]

    def clear(self) -> None:
        """Remove all centerline entries."""
        self._curves = []

    def reset(self) -> None:
        """Clear the tunnel and pre-fill it flat at half the viewport height."""
        self._curves = [self._viewport_height / 2] * self._capacity

    def seed_curves(self, curves: List[float]) -> None:
        """
        Replace the centerline with explicit values.

        Args:
            curves: Offsets, oldest first. Must not exceed capacity.
        """
        if len(curves) > self._capacity:
            raise ValueError(
                f"Cannot seed {len(curves)} entries into a tunnel of capacity {self._capacity}"
            )
        self._curves = [float(c) for c in curves]

    def next_offset(self, last: float, tick_index: int) -> float:
        """Centerline value that follows `last` at the given tick."""
        drift = math.sin(tick_index / self._drift_period) * self._drift_amplitude
        return last + drift + self._jitter.sample() * self._jitter_amplitude

    def advance(self, tick_index: int) -> float:
        """
        Extend the tunnel by one slot.

        Args:
            tick_index: Monotonic tick count used as the drift phase.

        Returns:
            The appended centerline offset.
        """
        keep = max(self._capacity - 1, 0)
        if len(self._curves) > keep:
            self._curves = self._curves[len(self._curves) - keep:]

        last = self._curves[-1] if self._curves else self._viewport_height / 2
        new_curve = self.next_offset(last, tick_index)
        self._curves.append(new_curve)
        return new_curve

    def resize(self, viewport_width: float, viewport_height: float) -> None:
        """
        Re-derive capacity after a viewport change.

        Shrinking keeps the newest entries. Growing pads the front with the
        oldest value so the window stays exactly `capacity` long.
        """
        self._capacity = validate_viewport(self._config, viewport_width, viewport_height)
        self._viewport_width = float(viewport_width)
        self._viewport_height = float(viewport_height)

        if len(self._curves) > self._capacity:
            self._curves = self._curves[len(self._curves) - self._capacity:]
        elif self._curves and len(self._curves) < self._capacity:
            pad = [self._curves[0]] * (self._capacity - len(self._curves))
            self._curves = pad + self._curves
