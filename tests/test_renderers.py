"""
Tests for the pygame and numpy renderers.
"""

import numpy as np
import pytest

from wavetunnel.tunnel_core.game import TunnelGame
from wavetunnel.tunnel_core.render_array import ArrayRenderer


@pytest.fixture
def game(config):
    game = TunnelGame(config=config, seed=42)
    game.start()
    return game


def _crashed_snapshot(game):
    game.input.accumulate(1000)
    return game.tick().snapshot


class TestArrayRenderer:
    """Headless numpy renderer."""

    def test_shape(self, game, config):
        img = ArrayRenderer(config).render(game.snapshot())
        assert img.shape == (config.viewport.height, config.viewport.width, 3)
        assert img.dtype == np.uint8

    def test_scene_colors(self, game, config):
        """Background outside, tunnel inside, ball at its center."""
        img = ArrayRenderer(config).render(game.snapshot())

        assert tuple(img[10, 400]) == config.render.background_color
        assert tuple(img[590, 400]) == config.render.background_color
        assert tuple(img[300, 600]) == config.render.tunnel_color
        assert tuple(img[300, 160]) == config.render.ball_color

    def test_scaled_output(self, game):
        img = ArrayRenderer().render(game.snapshot(), width=200, height=150)
        assert img.shape == (150, 200, 3)

    def test_game_over_band(self, game, config):
        img = ArrayRenderer(config).render(_crashed_snapshot(game))
        assert tuple(img[300, 600]) == config.render.game_over_color


class TestPygameRenderer:
    """Pygame renderer (headless surfaces only)."""

    @pytest.fixture
    def renderer(self, config):
        pytest.importorskip("pygame")
        from wavetunnel.tunnel_core.render_pygame import PygameRenderer
        renderer = PygameRenderer(config)
        yield renderer
        renderer.close()

    def test_render_array(self, renderer, game, config):
        img = renderer.render(game.snapshot())

        assert img.shape == (config.viewport.height, config.viewport.width, 3)
        assert tuple(img[300, 600]) == config.render.tunnel_color
        assert tuple(img[300, 160]) == config.render.ball_color
        assert tuple(img[590, 400]) == config.render.background_color

    def test_game_over_banner_drawn(self, renderer, game, config):
        """The banner adds game-over colored pixels."""
        running = renderer.render(game.snapshot())
        over = renderer.render(_crashed_snapshot(game))

        color = np.array(config.render.game_over_color, dtype=np.uint8)
        assert not np.all(running == color, axis=-1).any()
        assert np.all(over == color, axis=-1).any()


class TestTunnelPolygon:
    """Polygon outline used by the pygame renderer."""

    def test_outline_order(self, small_config):
        pytest.importorskip("pygame")
        from wavetunnel.tunnel_core.render_pygame import tunnel_polygon

        game = TunnelGame(config=small_config, seed=1)
        game.start()
        game.tunnel.seed_curves([100.0, 110.0, 120.0, 130.0, 140.0])
        points = tunnel_polygon(game.snapshot())

        # top: lead-in + 5 slots + right edge; bottom: right edge + 5 slots
        assert len(points) == 2 * 5 + 3
        assert points[0] == (0.0, 25.0)
        assert points[1:6] == [(0.0, 25.0), (10.0, 35.0), (20.0, 45.0), (30.0, 55.0), (40.0, 65.0)]
        assert points[6] == (50.0, 65.0)
        assert points[7] == (50.0, 215.0)
        assert points[8:] == [(40.0, 215.0), (30.0, 205.0), (20.0, 195.0), (10.0, 185.0), (0.0, 175.0)]
