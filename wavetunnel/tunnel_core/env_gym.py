"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the tunnel game. The action plays
the role of the gamepad's vertical axis for one tick.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from wavetunnel.tunnel_core.config_loader import GameConfig, load_config
from wavetunnel.tunnel_core.game import TunnelGame
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot


class TunnelEnv(gym.Env):
    """
    Wave tunnel game as a Gymnasium environment.

    Action Space:
        Box(low=-1.0, high=1.0, shape=(), dtype=float32)
        Vertical stick deflection, scaled by the game's sensitivity.

    Observation Space:
        Dict with ball position, the tunnel centerline window and score.

    Reward:
        1.0 for every tick survived, 0.0 on the tick that hits a wall.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        max_ticks: Optional[int] = None,
        sensitivity: Optional[float] = None,
        debug: bool = False,
    ):
        """
        Initialize tunnel environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            max_ticks: Truncate episodes after this many ticks. Unlimited if None.
            sensitivity: Override the default sensitivity.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._max_ticks = max_ticks
        self._debug = debug

        self._action: float = 0.0
        self._ticks: int = 0

        self._game = TunnelGame(config=self._config, gamepad_provider=self._current_action)
        if sensitivity is not None:
            self._game.sensitivity = sensitivity

        self._window = self._config.capacity
        self._renderer = None

        self.action_space = spaces.Box(
            low=-1.0,
            high=1.0,
            shape=(),
            dtype=np.float32
        )
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] TunnelEnv initialized")
            print(f"[DEBUG]   Viewport: {self._config.viewport.width}x{self._config.viewport.height}")
            print(f"[DEBUG]   Tunnel window: {self._window} slots")

    def _current_action(self) -> float:
        return self._action

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        viewport = self._config.viewport
        return spaces.Dict({
            "ball_x": spaces.Box(low=0, high=viewport.width, shape=(), dtype=np.float32),
            "ball_y": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "tunnel": spaces.Box(low=-np.inf, high=np.inf, shape=(self._window,), dtype=np.float32),
            "tunnel_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._action = 0.0
        self._ticks = 0

        # Each episode gets its own tunnel seed drawn from the env RNG
        tunnel_seed = int(self.np_random.integers(0, 2**31 - 1))
        snapshot = self._game.restart(seed=tunnel_seed)

        obs = snapshot.to_obs_dict(self._window)
        info = self._game.get_info()
        info["delta_score"] = 0
        return obs, info

    def step(
        self,
        action: Union[float, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: Vertical stick deflection in [-1, 1]; clamped.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = float(action.item() if action.ndim == 0 else action[0])
        self._action = float(np.clip(action, -1.0, 1.0))

        result = self._game.tick()
        self._ticks += 1

        obs = result.snapshot.to_obs_dict(self._window)
        reward = float(result.delta_score)
        terminated = result.snapshot.is_over
        truncated = (
            not terminated
            and self._max_ticks is not None
            and self._ticks >= self._max_ticks
        )

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["delta_y"] = result.delta_y

        if self._debug:
            print(f"[DEBUG] Step: action={self._action:.3f}, ball_y={result.snapshot.ball_y:.1f}, "
                  f"score={result.snapshot.score}")
            if terminated:
                print(f"[DEBUG] TERMINATED: wall hit at score {result.snapshot.score}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _init_renderer(self) -> None:
        """Initialize renderer for the current render mode."""
        if self.render_mode == "human":
            from wavetunnel.tunnel_core.render_pygame import PygameRenderer
            self._renderer = PygameRenderer(self._config)
        else:
            from wavetunnel.tunnel_core.render_array import ArrayRenderer
            self._renderer = ArrayRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode is None:
            return None

        if self._renderer is None:
            self._init_renderer()

        snapshot: GameSnapshot = self._game.snapshot()
        if self.render_mode == "rgb_array":
            return self._renderer.render(snapshot)

        self._renderer.render_to_screen(snapshot)
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None and hasattr(self._renderer, "close"):
            self._renderer.close()
        self._renderer = None

    @property
    def game(self) -> TunnelGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
