"""
Shared fixtures.
"""

import dataclasses
import os

# Headless pygame for renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from wavetunnel.tunnel_core.config_loader import GameConfig, ViewportConfig, load_config


@pytest.fixture
def config() -> GameConfig:
    return load_config()


@pytest.fixture
def small_config(config) -> GameConfig:
    """50x200 viewport: capacity 5, ball at x=10 (slot 1)."""
    return dataclasses.replace(config, viewport=ViewportConfig(width=50, height=200))
