"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class ViewportConfig:
    """Initial viewport size."""
    width: int
    height: int


@dataclass(frozen=True)
class TunnelConfig:
    """Tunnel geometry and generation parameters."""
    slot_width: float        # Horizontal width of one centerline entry
    width: float             # Full corridor thickness
    drift_period: float      # Divisor applied to the tick index inside sin()
    drift_amplitude: float
    jitter_amplitude: float

    @property
    def half_width(self) -> float:
        return self.width / 2


@dataclass(frozen=True)
class BallConfig:
    """Ball size and horizontal placement."""
    radius: float
    x_fraction: float        # Ball x as a fraction of viewport width


@dataclass(frozen=True)
class InputConfig:
    """Input scaling applied before sensitivity."""
    scroll_scale: float
    touch_scale: float
    gamepad_axis: int
    gamepad_deadzone: float


@dataclass(frozen=True)
class ControlsConfig:
    """Player-adjustable parameter defaults and UI slider mapping."""
    default_speed: float
    default_sensitivity: float
    speed_divisor: float
    sensitivity_divisor: float


@dataclass(frozen=True)
class SubmissionConfig:
    """Score submission endpoint."""
    endpoint: str
    leaderboard_path: str
    timeout: float


@dataclass(frozen=True)
class RenderConfig:
    """Colors and layout used by the renderers."""
    background_color: Tuple[int, int, int]
    tunnel_color: Tuple[int, int, int]
    ball_color: Tuple[int, int, int]
    score_color: Tuple[int, int, int]
    game_over_color: Tuple[int, int, int]
    font_size: int
    score_x: int
    score_y: int
    fps: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    viewport: ViewportConfig
    tunnel: TunnelConfig
    ball: BallConfig
    input: InputConfig
    controls: ControlsConfig
    submission: SubmissionConfig
    render: RenderConfig

    def capacity_for(self, viewport_width: float) -> int:
        """Number of tunnel slots that fit in a viewport of the given width."""
        return int(viewport_width // self.tunnel.slot_width)

    @property
    def capacity(self) -> int:
        """Tunnel capacity for the configured viewport."""
        return self.capacity_for(self.viewport.width)


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    if any(c < 0 or c > 255 for c in color):
        raise ValueError(f"Color components must be in [0, 255], got {color_data}")
    return color


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.viewport.width <= 0 or config.viewport.height <= 0:
        raise ValueError(
            f"Viewport must be positive, got {config.viewport.width}x{config.viewport.height}"
        )

    if config.tunnel.slot_width <= 0:
        raise ValueError(f"tunnel.slot_width must be positive, got {config.tunnel.slot_width}")

    if config.tunnel.width <= 0:
        raise ValueError(f"tunnel.width must be positive, got {config.tunnel.width}")

    if config.tunnel.drift_period == 0:
        raise ValueError("tunnel.drift_period must be non-zero")

    if config.capacity < 1:
        raise ValueError(
            f"Viewport width {config.viewport.width} holds no tunnel slot "
            f"of width {config.tunnel.slot_width}"
        )

    # Ball must sit inside the tunnel window, otherwise its slot lookup fails
    if not 0.0 <= config.ball.x_fraction < 1.0:
        raise ValueError(f"ball.x_fraction must be in [0, 1), got {config.ball.x_fraction}")

    if config.ball.radius <= 0:
        raise ValueError(f"ball.radius must be positive, got {config.ball.radius}")

    if config.controls.speed_divisor == 0 or config.controls.sensitivity_divisor == 0:
        raise ValueError("controls divisors must be non-zero")

    if config.submission.timeout <= 0:
        raise ValueError(f"submission.timeout must be positive, got {config.submission.timeout}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    viewport_data = raw["viewport"]
    viewport = ViewportConfig(
        width=int(viewport_data["width"]),
        height=int(viewport_data["height"])
    )

    tunnel_data = raw["tunnel"]
    tunnel = TunnelConfig(
        slot_width=float(tunnel_data.get("slot_width", 10)),
        width=float(tunnel_data["width"]),
        drift_period=float(tunnel_data.get("drift_period", 10.0)),
        drift_amplitude=float(tunnel_data.get("drift_amplitude", 10.0)),
        jitter_amplitude=float(tunnel_data.get("jitter_amplitude", 15.0))
    )

    ball_data = raw["ball"]
    ball = BallConfig(
        radius=float(ball_data.get("radius", 10)),
        x_fraction=float(ball_data.get("x_fraction", 0.2))
    )

    # Input, controls, submission and render sections are optional
    input_data = raw.get("input", {})
    input_config = InputConfig(
        scroll_scale=float(input_data.get("scroll_scale", 0.1)),
        touch_scale=float(input_data.get("touch_scale", 0.2)),
        gamepad_axis=int(input_data.get("gamepad_axis", 1)),
        gamepad_deadzone=float(input_data.get("gamepad_deadzone", 0.0))
    )

    controls_data = raw.get("controls", {})
    controls = ControlsConfig(
        default_speed=float(controls_data.get("default_speed", 2.5)),
        default_sensitivity=float(controls_data.get("default_sensitivity", 5.0)),
        speed_divisor=float(controls_data.get("speed_divisor", 2.0)),
        sensitivity_divisor=float(controls_data.get("sensitivity_divisor", 1.5))
    )

    submission_data = raw.get("submission", {})
    submission = SubmissionConfig(
        endpoint=str(submission_data.get("endpoint", "http://localhost:8000/submit-score")),
        leaderboard_path=str(submission_data.get("leaderboard_path", "/leaderboard.html")),
        timeout=float(submission_data.get("timeout", 5.0))
    )

    render_data = raw.get("render", {})
    render = RenderConfig(
        background_color=_parse_color(render_data.get("background_color", [0, 0, 0])),
        tunnel_color=_parse_color(render_data.get("tunnel_color", [255, 255, 255])),
        ball_color=_parse_color(render_data.get("ball_color", [0, 0, 0])),
        score_color=_parse_color(render_data.get("score_color", [255, 255, 255])),
        game_over_color=_parse_color(render_data.get("game_over_color", [255, 0, 0])),
        font_size=int(render_data.get("font_size", 48)),
        score_x=int(render_data.get("score_x", 10)),
        score_y=int(render_data.get("score_y", 50)),
        fps=int(render_data.get("fps", 60))
    )

    config = GameConfig(
        viewport=viewport,
        tunnel=tunnel,
        ball=ball,
        input=input_config,
        controls=controls,
        submission=submission,
        render=render
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
