"""
Core Game
=========

Game state machine combining tunnel generation, input and collision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config
from wavetunnel.tunnel_core.collision import Ball, check_collision
from wavetunnel.tunnel_core.input_aggregator import GamepadProvider, InputAggregator
from wavetunnel.tunnel_core.rng import JitterSource
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot, GameStatus, build_snapshot
from wavetunnel.tunnel_core.tunnel import TunnelGenerator, validate_viewport


GameOverCallback = Callable[[int], None]


@dataclass
class GameSession:
    """Mutable per-game state. Speed and sensitivity survive restarts."""
    score: int
    status: GameStatus
    speed: float
    sensitivity: float


@dataclass
class TickResult:
    """Result of a single game tick."""
    snapshot: GameSnapshot
    collided: bool
    delta_y: float
    delta_score: int

    @property
    def should_continue(self) -> bool:
        """False once the game is over; the driver stops scheduling ticks."""
        return not self.snapshot.is_over


class TunnelGame:
    """
    Main game simulation class.

    Orchestrates:
    - Tunnel generator
    - Input aggregation
    - Collision checks
    - Score and running/over status

    One tick = one rendered frame. The tunnel advances using the score value
    from before the tick's increment, so the drift phase equals the number of
    ticks survived.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        viewport_width: Optional[float] = None,
        viewport_height: Optional[float] = None,
        gamepad_provider: Optional[GamepadProvider] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible tunnels.
            viewport_width: Viewport width. Uses config viewport if None.
            viewport_height: Viewport height. Uses config viewport if None.
            gamepad_provider: Callable polled once per tick for the gamepad axis.
            debug: If True, prints state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._debug = debug

        self._viewport_width = float(viewport_width if viewport_width is not None else config.viewport.width)
        self._viewport_height = float(viewport_height if viewport_height is not None else config.viewport.height)

        # Subsystems
        self._jitter = JitterSource(seed)
        self._tunnel = TunnelGenerator(
            config,
            viewport_width=self._viewport_width,
            viewport_height=self._viewport_height,
            jitter=self._jitter
        )
        self._input = InputAggregator(config, gamepad_provider=gamepad_provider)

        self._tunnel_width = config.tunnel.width
        self._slot_width = config.tunnel.slot_width

        # Game state
        self._ball = self._new_ball()
        self._session = GameSession(
            score=0,
            status=GameStatus.IDLE,
            speed=config.controls.default_speed,
            sensitivity=config.controls.default_sensitivity
        )
        self._tunnel.reset()
        self._game_over_callbacks: List[GameOverCallback] = []

    def _new_ball(self) -> Ball:
        return Ball(
            x=self._viewport_width * self._config.ball.x_fraction,
            y=self._viewport_height / 2,
            radius=self._config.ball.radius
        )

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def tunnel(self) -> TunnelGenerator:
        """Tunnel generator instance."""
        return self._tunnel

    @property
    def input(self) -> InputAggregator:
        """Input aggregator that event handlers feed."""
        return self._input

    @property
    def ball(self) -> Ball:
        return self._ball

    @property
    def score(self) -> int:
        """Current score (ticks survived)."""
        return self._session.score

    @property
    def status(self) -> GameStatus:
        return self._session.status

    @property
    def is_running(self) -> bool:
        return self._session.status == GameStatus.RUNNING

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._session.status == GameStatus.OVER

    @property
    def tunnel_width(self) -> float:
        return self._tunnel_width

    @property
    def speed(self) -> float:
        """Player speed setting. Stored and reported but does not affect ticks."""
        return self._session.speed

    @speed.setter
    def speed(self, value: float) -> None:
        self._session.speed = float(value)

    @property
    def sensitivity(self) -> float:
        """Multiplier applied to all input deltas."""
        return self._session.sensitivity

    @sensitivity.setter
    def sensitivity(self, value: float) -> None:
        self._session.sensitivity = float(value)

    @property
    def viewport_size(self):
        return (self._viewport_width, self._viewport_height)

    def set_speed(self, ui_value: float) -> float:
        """Map a speed slider value to the speed setting."""
        self.speed = ui_value / self._config.controls.speed_divisor
        return self.speed

    def set_sensitivity(self, ui_value: float) -> float:
        """Map a sensitivity slider value to the sensitivity setting."""
        self.sensitivity = ui_value / self._config.controls.sensitivity_divisor
        return self.sensitivity

    def on_game_over(self, callback: GameOverCallback) -> None:
        """Register a listener called with the final score on game over."""
        self._game_over_callbacks.append(callback)

    def start(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Start a game.

        Args:
            seed: New random seed. Replays the previous seed if None.

        Returns:
            Initial game snapshot.
        """
        return self.restart(seed)

    def restart(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Reset ball, tunnel and score and enter RUNNING, whatever the prior state.

        Args:
            seed: New random seed. Replays the previous seed if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._seed = seed
        self._jitter.reset(self._seed)

        self._ball = self._new_ball()
        self._tunnel.reset()
        self._input.reset()

        self._session.score = 0
        self._session.status = GameStatus.RUNNING

        if self._debug:
            print(f"[DEBUG] Game started: seed={self._seed}, capacity={self._tunnel.capacity}")

        return self.snapshot()

    def tick(self) -> TickResult:
        """
        Advance the simulation by one tick.

        Returns:
            TickResult with the new snapshot. Ticks after game over change
            nothing.

        Raises:
            RuntimeError: If start() has not been called.
        """
        if self._session.status == GameStatus.IDLE:
            raise RuntimeError("Game not started. Call start() first.")

        if self._session.status == GameStatus.OVER:
            return TickResult(
                snapshot=self.snapshot(),
                collided=False,
                delta_y=0.0,
                delta_score=0
            )

        self._tunnel.advance(self._session.score)

        delta_y = self._input.consume(self._session.sensitivity)
        self._ball.y += delta_y

        collided = check_collision(
            self._ball,
            self._tunnel,
            self._tunnel_width,
            self._slot_width
        )

        if collided:
            self._session.status = GameStatus.OVER
            if self._debug:
                print(f"[DEBUG] GAME OVER: score={self._session.score}, ball_y={self._ball.y:.1f}")
            self._emit_game_over()
            return TickResult(
                snapshot=self.snapshot(),
                collided=True,
                delta_y=delta_y,
                delta_score=0
            )

        self._session.score += 1
        return TickResult(
            snapshot=self.snapshot(),
            collided=False,
            delta_y=delta_y,
            delta_score=1
        )

    def _emit_game_over(self) -> None:
        """Notify listeners; a failing listener must not break the loop."""
        final_score = self._session.score
        for callback in list(self._game_over_callbacks):
            try:
                callback(final_score)
            except Exception as e:
                print(f"Error in game over callback {callback!r}: {e}")

    def resize(self, viewport_width: float, viewport_height: float) -> None:
        """
        Apply a viewport change.

        Recenters the ball at (width * x_fraction, height / 2) and re-derives
        the tunnel capacity.

        Raises:
            ValueError: If the new viewport has no tunnel slot or no height.
        """
        validate_viewport(self._config, viewport_width, viewport_height)

        self._viewport_width = float(viewport_width)
        self._viewport_height = float(viewport_height)
        self._ball.x = self._viewport_width * self._config.ball.x_fraction
        self._ball.y = self._viewport_height / 2
        self._tunnel.resize(self._viewport_width, self._viewport_height)

        if self._debug:
            print(f"[DEBUG] Resized to {viewport_width}x{viewport_height}, capacity={self._tunnel.capacity}")

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return build_snapshot(
            tunnel=self._tunnel.curves,
            ball=self._ball,
            score=self._session.score,
            status=self._session.status,
            tunnel_width=self._tunnel_width,
            slot_width=self._slot_width,
            viewport_width=self._viewport_width,
            viewport_height=self._viewport_height,
            speed=self._session.speed,
            sensitivity=self._session.sensitivity
        )

    def get_info(self) -> dict:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._session.score,
            "status": self._session.status.value,
            "ball_y": self._ball.y,
            "tunnel_length": len(self._tunnel),
            "capacity": self._tunnel.capacity,
        }
