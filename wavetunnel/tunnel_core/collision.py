"""
Collision Detection
===================

Tests the ball against the tunnel corridor at the ball's horizontal slot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


class SlotOutOfRangeError(IndexError):
    """Ball slot falls outside the tunnel window (an upstream logic error)."""


@dataclass
class Ball:
    """Player ball. `x` only changes on start/restart/resize."""
    x: float
    y: float
    radius: float

    def copy(self) -> "Ball":
        return Ball(self.x, self.y, self.radius)


def ball_slot(ball: Ball, slot_width: float) -> int:
    """Index of the tunnel slot under the ball."""
    return int(math.floor(ball.x / slot_width))


def check_collision(
    ball: Ball,
    tunnel: Sequence[float],
    tunnel_width: float,
    slot_width: float = 10.0
) -> bool:
    """
    Check whether the ball touches a tunnel wall.

    Args:
        ball: The ball.
        tunnel: Centerline offsets, oldest first.
        tunnel_width: Full corridor thickness.
        slot_width: Horizontal width of one tunnel slot.

    Returns:
        True if ball.y lies strictly outside [center - half, center + half].

    Raises:
        SlotOutOfRangeError: If the ball's slot is not inside the tunnel.
    """
    slot = ball_slot(ball, slot_width)
    if slot < 0 or slot >= len(tunnel):
        raise SlotOutOfRangeError(
            f"Ball slot {slot} (x={ball.x}) out of range [0, {len(tunnel)})"
        )

    center = tunnel[slot]
    half = tunnel_width / 2
    return ball.y < center - half or ball.y > center + half
