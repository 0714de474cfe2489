"""
Tunnel Core - Simulation and render loop.

This module provides the game state machine, tunnel generation, collision
checks, input aggregation, renderers and the Gymnasium wrapper.

Main exports:
- TunnelGame: Game state machine (start/restart/tick/on_game_over)
- GameLoop: Frame scheduler driving a TunnelGame
- TunnelEnv: Gymnasium environment
- ScoreSubmitter: Leaderboard submission client
- GameConfig: Configuration loaded from game_config.yaml
"""

from wavetunnel.tunnel_core.config_loader import GameConfig, load_config
from wavetunnel.tunnel_core.collision import Ball, SlotOutOfRangeError, check_collision
from wavetunnel.tunnel_core.input_aggregator import InputAggregator
from wavetunnel.tunnel_core.tunnel import TunnelGenerator
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot, GameStatus
from wavetunnel.tunnel_core.game import TunnelGame, TickResult
from wavetunnel.tunnel_core.game_loop import GameLoop
from wavetunnel.tunnel_core.submission import (
    InvalidPlayerNameError,
    ScoreSubmitter,
    SubmissionResult,
)
from wavetunnel.tunnel_core.env_gym import TunnelEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Ball",
    "SlotOutOfRangeError",
    "check_collision",
    "InputAggregator",
    "TunnelGenerator",
    "GameSnapshot",
    "GameStatus",
    "TunnelGame",
    "TickResult",
    "GameLoop",
    "InvalidPlayerNameError",
    "ScoreSubmitter",
    "SubmissionResult",
    "TunnelEnv",
]
