"""
State Snapshot
==============

Immutable per-tick view of the game consumed by renderers, the game loop and
the Gymnasium wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import numpy as np

from wavetunnel.tunnel_core.collision import Ball


class GameStatus(str, Enum):
    """Lifecycle of a game session."""
    IDLE = "idle"          # Created, start() not called yet
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True)
class GameSnapshot:
    """
    Scene snapshot for one tick.

    `tunnel` is a read-only float64 array of centerline offsets, oldest first.
    """
    tunnel: np.ndarray
    ball_x: float
    ball_y: float
    ball_radius: float
    score: int
    status: GameStatus
    tunnel_width: float
    slot_width: float
    viewport_width: float
    viewport_height: float
    speed: float
    sensitivity: float

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.OVER

    @property
    def half_width(self) -> float:
        return self.tunnel_width / 2

    @property
    def capacity(self) -> int:
        return int(self.viewport_width // self.slot_width)

    @property
    def top_boundary(self) -> np.ndarray:
        """Upper wall y per slot."""
        return self.tunnel - self.half_width

    @property
    def bottom_boundary(self) -> np.ndarray:
        """Lower wall y per slot."""
        return self.tunnel + self.half_width

    def to_obs_dict(self, window: Optional[int] = None) -> Dict[str, np.ndarray]:
        """
        Convert to Gymnasium observation dictionary.

        Args:
            window: Fixed tunnel array length. Shorter tunnels are left-padded
                with their oldest value, longer ones keep the newest entries.
                Uses the snapshot capacity if None.
        """
        if window is None:
            window = self.capacity

        tunnel = np.zeros(window, dtype=np.float32)
        if len(self.tunnel) >= window:
            tunnel[:] = self.tunnel[len(self.tunnel) - window:]
        elif len(self.tunnel) > 0:
            pad = window - len(self.tunnel)
            tunnel[:pad] = self.tunnel[0]
            tunnel[pad:] = self.tunnel

        return {
            "ball_x": np.array(self.ball_x, dtype=np.float32),
            "ball_y": np.array(self.ball_y, dtype=np.float32),
            "tunnel": tunnel,
            "tunnel_width": np.array(self.tunnel_width, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
        }


def build_snapshot(
    tunnel,
    ball: Ball,
    score: int,
    status: GameStatus,
    tunnel_width: float,
    slot_width: float,
    viewport_width: float,
    viewport_height: float,
    speed: float,
    sensitivity: float
) -> GameSnapshot:
    """Copy live game state into a frozen snapshot."""
    curves = np.array(tunnel, dtype=np.float64)
    curves.setflags(write=False)
    return GameSnapshot(
        tunnel=curves,
        ball_x=float(ball.x),
        ball_y=float(ball.y),
        ball_radius=float(ball.radius),
        score=int(score),
        status=status,
        tunnel_width=float(tunnel_width),
        slot_width=float(slot_width),
        viewport_width=float(viewport_width),
        viewport_height=float(viewport_height),
        speed=float(speed),
        sensitivity=float(sensitivity),
    )
