"""
Array Renderer
==============

Fast numpy-based renderer for headless use (agents, tests, recordings).
Draws the tunnel corridor and the ball; score text is left to the pygame
renderer.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot


class ArrayRenderer:
    """
    Renders a snapshot into an RGB array without pygame.

    The image has the snapshot's viewport size unless an output size is
    requested, in which case the scene is scaled to fit.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array(config.render.background_color, dtype=np.uint8)
        self._tunnel_color = np.array(config.render.tunnel_color, dtype=np.uint8)
        self._ball_color = np.array(config.render.ball_color, dtype=np.uint8)
        self._game_over_color = np.array(config.render.game_over_color, dtype=np.uint8)

    def render(
        self,
        snapshot: GameSnapshot,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            snapshot: Scene to draw.
            width: Output image width. Viewport width if None.
            height: Output image height. Viewport height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        width = int(width or snapshot.viewport_width)
        height = int(height or snapshot.viewport_height)
        scale_x = width / snapshot.viewport_width
        scale_y = height / snapshot.viewport_height

        img = np.empty((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        curves = snapshot.tunnel
        if len(curves) > 0:
            # Slot under every pixel column; columns past the last slot reuse it
            world_x = (np.arange(width) + 0.5) / scale_x
            slots = np.minimum((world_x // snapshot.slot_width).astype(np.int64), len(curves) - 1)
            centers = curves[slots]
            top = (centers - snapshot.half_width) * scale_y
            bottom = (centers + snapshot.half_width) * scale_y

            rows = (np.arange(height) + 0.5)[:, None]
            inside = (rows >= top[None, :]) & (rows <= bottom[None, :])
            img[inside] = self._tunnel_color

        # Ball
        yy, xx = np.mgrid[0:height, 0:width]
        cx = snapshot.ball_x * scale_x
        cy = snapshot.ball_y * scale_y
        r = snapshot.ball_radius * min(scale_x, scale_y)
        ball_mask = (xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2 <= r * r
        img[ball_mask] = self._ball_color

        if snapshot.is_over:
            # Banner band across the middle of the screen
            band = max(2, height // 12)
            mid = height // 2
            img[max(0, mid - band // 2):min(height, mid + band // 2)] = self._game_over_color

        return img
