"""
Pygame Renderer
===============

Draws a GameSnapshot: background, tunnel polygon, ball, score and the
"Game Over!" banner. Supports both display mode (human play) and headless RGB
output.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot


GAME_OVER_TEXT = "Game Over!"


def tunnel_polygon(snapshot: GameSnapshot) -> List[Tuple[float, float]]:
    """
    Closed outline of the corridor.

    Top boundary left to right, extended to the right viewport edge, then the
    bottom boundary right to left.
    """
    curves = snapshot.tunnel
    if len(curves) == 0:
        return []

    half = snapshot.half_width
    slot = snapshot.slot_width
    width = snapshot.viewport_width

    points: List[Tuple[float, float]] = [(0.0, float(curves[0] - half))]
    for i, curve in enumerate(curves):
        points.append((i * slot, float(curve - half)))
    points.append((width, float(curves[-1] - half)))
    points.append((width, float(curves[-1] + half)))
    for i in range(len(curves) - 1, -1, -1):
        points.append((i * slot, float(curves[i] + half)))
    return points


class PygameRenderer:
    """
    Renderer using pygame.

    Supports:
    - Screen display for human mode
    - Drawing onto any caller-provided surface
    - RGB array output for agents
    """

    def __init__(self, config: Optional[GameConfig] = None, caption: str = "Wave Tunnel"):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
            caption: Window title used when a display is opened.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._caption = caption
        colors = config.render

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, colors.font_size)
        self._font_small = pygame.font.Font(None, max(12, colors.font_size // 2))

        self._bg_color = colors.background_color
        self._tunnel_color = colors.tunnel_color
        self._ball_color = colors.ball_color
        self._score_color = colors.score_color
        self._game_over_color = colors.game_over_color
        self._score_pos = (colors.score_x, colors.score_y)

    @property
    def screen(self) -> Optional["pygame.Surface"]:
        return self._screen

    def render(self, snapshot: GameSnapshot) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Returns:
            (height, width, 3) uint8 array sized to the snapshot viewport.
        """
        size = (int(snapshot.viewport_width), int(snapshot.viewport_height))
        surface = pygame.Surface(size)
        self.draw(surface, snapshot)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        snapshot: GameSnapshot,
        status_line: Optional[str] = None,
        resizable: bool = False
    ) -> None:
        """
        Render to the pygame window, opening or resizing it as needed.

        Args:
            snapshot: Scene to draw.
            status_line: Optional extra text drawn under the banner
                (name prompt, submission result).
            resizable: Open the window with the RESIZABLE flag.
        """
        size = (int(snapshot.viewport_width), int(snapshot.viewport_height))
        if self._screen is None or self._screen_size != size:
            flags = pygame.RESIZABLE if resizable else 0
            self._screen = pygame.display.set_mode(size, flags)
            self._screen_size = size
            pygame.display.set_caption(self._caption)

        self.draw(self._screen, snapshot, status_line)
        pygame.display.flip()

    def draw(
        self,
        surface: "pygame.Surface",
        snapshot: GameSnapshot,
        status_line: Optional[str] = None
    ) -> None:
        """Draw the full scene onto a surface."""
        surface.fill(self._bg_color)
        self._draw_tunnel(surface, snapshot)
        self._draw_ball(surface, snapshot)
        self._draw_score(surface, snapshot)

        if snapshot.is_over:
            self._draw_game_over(surface, snapshot, status_line)
        elif status_line:
            line = self._font_small.render(status_line, True, self._game_over_color)
            rect = line.get_rect(center=(int(snapshot.viewport_width / 2), int(snapshot.viewport_height / 2)))
            surface.blit(line, rect)

    def _draw_tunnel(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> None:
        points = tunnel_polygon(snapshot)
        if len(points) >= 3:
            pygame.draw.polygon(surface, self._tunnel_color, points)

    def _draw_ball(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> None:
        center = (int(round(snapshot.ball_x)), int(round(snapshot.ball_y)))
        pygame.draw.circle(surface, self._ball_color, center, max(1, int(snapshot.ball_radius)))

    def _draw_score(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> None:
        text = self._font.render(str(snapshot.score), True, self._score_color)
        # Anchor is the text baseline, like canvas fillText
        x, y = self._score_pos
        surface.blit(text, (x, y - self._font.get_ascent()))

    def _draw_game_over(
        self,
        surface: "pygame.Surface",
        snapshot: GameSnapshot,
        status_line: Optional[str]
    ) -> None:
        text = self._font.render(GAME_OVER_TEXT, True, self._game_over_color)
        x = int(snapshot.viewport_width / 2 - 100)
        y = int(snapshot.viewport_height / 2)
        surface.blit(text, (x, y - self._font.get_ascent()))

        if status_line:
            line = self._font_small.render(status_line, True, self._game_over_color)
            surface.blit(line, (x, y + self._font.get_descent() + 10))

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
