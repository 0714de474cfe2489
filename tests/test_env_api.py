"""
Tests for Gymnasium environment API.
"""

import pytest
import numpy as np

from wavetunnel.tunnel_core.env_gym import TunnelEnv


@pytest.fixture
def env():
    env = TunnelEnv()
    yield env
    env.close()


class TestTunnelEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        capacity = env.config.capacity
        assert obs["tunnel"].shape == (capacity,)
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        obs, reward, terminated, truncated, info = env.step(0.0)

        assert isinstance(obs, dict)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert info["score"] == 1

    def test_action_moves_ball(self, env):
        """Action acts as the gamepad axis."""
        obs, _ = env.reset(seed=42)
        start_y = float(obs["ball_y"])

        obs, _, _, _, info = env.step(np.array(1.0, dtype=np.float32))

        assert float(obs["ball_y"]) == pytest.approx(start_y + env.game.sensitivity)
        assert info["delta_y"] == pytest.approx(env.game.sensitivity)

    def test_action_bounds(self, env):
        """Actions outside [-1, 1] should be clamped."""
        obs, _ = env.reset(seed=42)
        start_y = float(obs["ball_y"])

        obs, _, _, _, _ = env.step(100.0)

        assert float(obs["ball_y"]) == pytest.approx(start_y + env.game.sensitivity)

    def test_wall_hit_terminates(self, env):
        """Steering hard in one direction hits a wall with zero reward."""
        env.reset(seed=42)

        terminated = False
        reward = None
        for _ in range(100):
            _, reward, terminated, _, _ = env.step(1.0)
            if terminated:
                break

        assert terminated
        assert reward == 0.0

    def test_truncation(self):
        env = TunnelEnv(max_ticks=5)
        env.reset(seed=1)
        results = [env.step(0.0) for _ in range(5)]

        assert [r[3] for r in results] == [False, False, False, False, True]
        env.close()

    def test_deterministic_with_seed(self):
        """Same seed should produce the same tunnel."""
        env1 = TunnelEnv()
        env2 = TunnelEnv()

        env1.reset(seed=7)
        env2.reset(seed=7)
        for _ in range(30):
            obs1, *_ = env1.step(0.0)
            obs2, *_ = env2.step(0.0)

        assert np.array_equal(obs1["tunnel"], obs2["tunnel"])

    def test_rgb_array_render(self):
        env = TunnelEnv(render_mode="rgb_array")
        env.reset(seed=3)
        frame = env.render()

        assert frame.shape == (env.config.viewport.height, env.config.viewport.width, 3)
        assert frame.dtype == np.uint8
        env.close()

    def test_no_render_mode(self, env):
        env.reset(seed=3)
        assert env.render() is None
