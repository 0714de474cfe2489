"""
Human Play Mode
================

Play the wave tunnel interactively.

Controls:
    - Mouse wheel: Steer (scroll)
    - Touch drag / left-button drag: Steer (touch)
    - Gamepad left stick (vertical): Steer
    - Space: Start game
    - R or F5: Restart after game over (F5 while typing a name)
    - +/-: Sensitivity slider, [/]: Speed slider
    - After game over: type your name, Enter to submit
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from wavetunnel.tunnel_core.config_loader import load_config, GameConfig
from wavetunnel.tunnel_core.game import TunnelGame
from wavetunnel.tunnel_core.game_loop import GameLoop
from wavetunnel.tunnel_core.render_pygame import PygameRenderer
from wavetunnel.tunnel_core.state_snapshot import GameSnapshot
from wavetunnel.tunnel_core.submission import InvalidPlayerNameError, ScoreSubmitter

# Browsers report roughly this many pixels per wheel notch
WHEEL_NOTCH_PIXELS = 100

# UI slider ranges (slider value is divided by the configured divisor)
SENSITIVITY_SLIDER_RANGE = (1, 15)
SPEED_SLIDER_RANGE = (1, 10)


class HumanPlayer:
    """
    Human-playable tunnel game.

    Drives the game through GameLoop while a game is running; between games
    it keeps pumping events so the player can start, restart or submit a
    score.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: Optional[int] = None,
        submit_url: Optional[str] = None,
        speed_slider: Optional[float] = None,
        sensitivity_slider: Optional[float] = None,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._target_fps = target_fps or config.render.fps

        pygame.init()
        pygame.joystick.init()
        self._clock = pygame.time.Clock()
        self._joystick = None

        self._game = TunnelGame(
            config=config,
            seed=seed,
            viewport_width=window_width,
            viewport_height=window_height,
            gamepad_provider=self._read_gamepad,
            debug=debug
        )
        self._game.on_game_over(self._on_game_over)

        self._renderer = PygameRenderer(config)
        self._loop = GameLoop(self._game, render=self._render, poll_input=self._handle_events)
        self._submitter = ScoreSubmitter(config, endpoint=submit_url, debug=debug)

        # Slider positions
        self._sensitivity_slider = (
            sensitivity_slider if sensitivity_slider is not None
            else config.controls.default_sensitivity * config.controls.sensitivity_divisor
        )
        self._speed_slider = (
            speed_slider if speed_slider is not None
            else config.controls.default_speed * config.controls.speed_divisor
        )
        self._game.set_sensitivity(self._sensitivity_slider)
        self._game.set_speed(self._speed_slider)

        # State
        self._running = True
        self._dragging = False
        self._name = ""
        self._status_line: Optional[str] = None
        self._submitted = False

    @property
    def game(self) -> TunnelGame:
        return self._game

    @property
    def name(self) -> str:
        """Player name typed so far."""
        return self._name

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Wave Tunnel ===")
        print("Scroll, drag or use a gamepad to steer")
        print("Space to play, R or F5 to restart, ESC to quit")
        print()

        while self._running:
            if self._game.is_running:
                self._loop.run_frame()
            else:
                self._handle_events()
                self._render(self._game.snapshot())
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._game.score

    def _read_gamepad(self) -> Optional[float]:
        """Vertical axis of the first joystick, or None when none is attached."""
        if self._joystick is None:
            if pygame.joystick.get_count() == 0:
                return None
            self._joystick = pygame.joystick.Joystick(0)
            self._joystick.init()
        axis = self._config.input.gamepad_axis
        if axis >= self._joystick.get_numaxes():
            return None
        return self._joystick.get_axis(axis)

    def _handle_events(self) -> None:
        """Process pygame events."""
        aggregator = self._game.input
        height = self._game.viewport_size[1]

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)

            elif event.type == pygame.JOYDEVICEREMOVED:
                self._joystick = None

            elif event.type == pygame.MOUSEWHEEL:
                # Wheel up is positive in pygame, negative deltaY in browsers
                aggregator.on_scroll(-event.y * WHEEL_NOTCH_PIXELS)

            elif event.type == pygame.FINGERDOWN:
                aggregator.on_touch_start(event.y * height)
            elif event.type == pygame.FINGERMOTION:
                aggregator.on_touch_move(event.y * height)
            elif event.type == pygame.FINGERUP:
                aggregator.on_touch_end()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._dragging = True
                aggregator.on_touch_start(event.pos[1])
            elif event.type == pygame.MOUSEMOTION and self._dragging:
                aggregator.on_touch_move(event.pos[1])
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._dragging = False
                aggregator.on_touch_end()

            elif event.type == pygame.TEXTINPUT:
                self._on_text(event.text)

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event) -> None:
        if event.key == pygame.K_ESCAPE:
            self._running = False
        elif self._name_entry_active:
            # Printable keys arrive as TEXTINPUT; only editing keys act here
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._submit()
            elif event.key == pygame.K_BACKSPACE:
                self._name = self._name[:-1]
                self._status_line = f"Name: {self._name}"
            elif event.key == pygame.K_F5:
                self._restart()
        elif event.key == pygame.K_SPACE and not self._game.is_running and not self._game.is_over:
            self._game.start()
        elif event.key in (pygame.K_r, pygame.K_F5) and self._game.is_over:
            self._restart()
        elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._adjust_sensitivity(1)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self._adjust_sensitivity(-1)
        elif event.key == pygame.K_RIGHTBRACKET:
            self._adjust_speed(1)
        elif event.key == pygame.K_LEFTBRACKET:
            self._adjust_speed(-1)

    @property
    def _name_entry_active(self) -> bool:
        """Game over and the score not yet submitted."""
        return self._game.is_over and not self._submitted

    def _on_text(self, text: str) -> None:
        if self._name_entry_active:
            self._name += text
            self._status_line = f"Name: {self._name}"

    def _on_resize(self, width: int, height: int) -> None:
        try:
            self._game.resize(width, height)
        except ValueError as e:
            # Keep the previous viewport; the next frame reopens the window at that size
            print(f"Ignoring resize: {e}")

    def _adjust_sensitivity(self, step: int) -> None:
        low, high = SENSITIVITY_SLIDER_RANGE
        self._sensitivity_slider = max(low, min(high, self._sensitivity_slider + step))
        value = self._game.set_sensitivity(self._sensitivity_slider)
        print(f"Sensitivity: {value:.2f}")

    def _adjust_speed(self, step: int) -> None:
        low, high = SPEED_SLIDER_RANGE
        self._speed_slider = max(low, min(high, self._speed_slider + step))
        value = self._game.set_speed(self._speed_slider)
        print(f"Speed: {value:.2f}")

    def _on_game_over(self, score: int) -> None:
        print(f"\nGAME OVER - Score: {score}")
        print("Type your name and press Enter to submit, or F5 to restart")
        self._name = ""
        self._submitted = False
        self._status_line = "Type your name, Enter to submit, F5 to restart"

    def _submit(self) -> None:
        """Submit the frozen score under the typed name."""
        if self._submitted:
            return
        try:
            result = self._submitter.submit(self._name, self._game.score)
        except InvalidPlayerNameError as e:
            self._status_line = str(e)
            print(e)
            return

        print(result.message)
        if result.ok:
            self._status_line = f"{result.message} (R to restart)"
            self._submitted = True
            if result.redirect:
                print(f"Leaderboard: {result.redirect}")
        else:
            self._status_line = f"{result.message} (F5 to restart)"
        self._name = ""

    def _restart(self) -> None:
        """Restart the game."""
        self._game.restart(seed=self._seed)
        self._name = ""
        self._status_line = None
        self._submitted = False
        print("\n=== Game Restarted ===\n")

    def _render(self, snapshot: GameSnapshot) -> None:
        """Render the game."""
        if snapshot.is_over:
            status_line = self._status_line
        elif not self._game.is_running:
            status_line = "Press Space to play"
        else:
            status_line = None
        self._renderer.render_to_screen(snapshot, status_line=status_line, resizable=True)


def main():
    parser = argparse.ArgumentParser(description="Play the wave tunnel interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS")
    parser.add_argument("--speed", type=float, default=None, help="Speed slider value")
    parser.add_argument("--sensitivity", type=float, default=None, help="Sensitivity slider value")
    parser.add_argument("--submit-url", type=str, default=None, help="Score submission endpoint")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--debug", action="store_true", help="Print debug traces")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            submit_url=args.submit_url,
            speed_slider=args.speed,
            sensitivity_slider=args.sensitivity,
            debug=args.debug
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
