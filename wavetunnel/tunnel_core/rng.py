"""
RNG - Seeded Jitter Source
==========================

Provides the random jitter layered on top of the tunnel drift. Wrapping a
private random.Random keeps tunnel generation reproducible per game.
"""

from __future__ import annotations

import random
from typing import Any, Optional


class JitterSource:
    """
    Seeded source of uniform jitter in [-0.5, 0.5).

    Each game owns its own instance so that two games created with the same
    seed produce identical tunnels regardless of global random state.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize jitter source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed the source was last reset with."""
        return self._seed

    def sample(self) -> float:
        """Draw one jitter value in [-0.5, 0.5)."""
        return self._rng.random() - 0.5

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the source with optional new seed.

        Args:
            seed: New random seed. Replays the previous seed if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)

    def get_state(self) -> Any:
        """Get the generator state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: Any) -> None:
        """Restore a state captured by get_state()."""
        self._rng.setstate(state)
