"""
Game Loop
=========

Frame scheduler: each frame polls input, ticks the game and hands the new
snapshot to a render sink. The loop ends when a frame reports game over.
"""

from __future__ import annotations

from typing import Callable, Optional

from wavetunnel.tunnel_core.game import TickResult, TunnelGame
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot


RenderSink = Callable[[GameSnapshot], None]


class GameLoop:
    """
    Drives a TunnelGame one frame at a time.

    Order per frame: poll (aggregate input) -> tick (advance) -> render. The
    frame that ends the game is still rendered so the sink can show the
    banner, then run_frame() returns False.
    """

    def __init__(
        self,
        game: TunnelGame,
        render: Optional[RenderSink] = None,
        poll_input: Optional[Callable[[], None]] = None
    ):
        """
        Initialize loop.

        Args:
            game: Started (or startable) game.
            render: Called with every frame's snapshot.
            poll_input: Called first in each frame to pump input events into
                game.input (e.g. a pygame event handler).
        """
        self._game = game
        self._render = render
        self._poll_input = poll_input
        self._frames = 0
        self._last_result: Optional[TickResult] = None

    @property
    def game(self) -> TunnelGame:
        return self._game

    @property
    def frames(self) -> int:
        """Frames executed since the loop was created."""
        return self._frames

    @property
    def last_result(self) -> Optional[TickResult]:
        return self._last_result

    def run_frame(self) -> bool:
        """
        Execute one frame.

        Returns:
            True if another frame should be scheduled.
        """
        if self._poll_input is not None:
            self._poll_input()

        result = self._game.tick()
        self._last_result = result
        self._frames += 1

        if self._render is not None:
            self._render(result.snapshot)

        return result.should_continue

    def run(
        self,
        max_frames: Optional[int] = None,
        pacer: Optional[Callable[[], object]] = None
    ) -> GameSnapshot:
        """
        Run frames until game over or `max_frames`.

        Args:
            max_frames: Frame limit for this call. Unlimited if None.
            pacer: Called between frames to yield to the host (e.g. a
                bound pygame Clock.tick).

        Returns:
            Snapshot after the last frame.
        """
        if not self._game.is_running and not self._game.is_over:
            self._game.start()

        executed = 0
        while max_frames is None or executed < max_frames:
            keep_going = self.run_frame()
            executed += 1
            if not keep_going or (max_frames is not None and executed >= max_frames):
                break
            if pacer is not None:
                pacer()

        return self._game.snapshot()
