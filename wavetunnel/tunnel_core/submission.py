"""
Score Submission
================

Sends a finished game's score to the leaderboard endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from wavetunnel.tunnel_core.config_loader import GameConfig, get_config


class InvalidPlayerNameError(ValueError):
    """Player name is empty after trimming."""


@dataclass
class SubmissionResult:
    """Outcome of a submission attempt, reported back to the UI."""
    ok: bool
    message: str
    status_code: Optional[int] = None
    redirect: Optional[str] = None
    response: Dict[str, Any] = field(default_factory=dict)


class ScoreSubmitter:
    """
    POSTs {"name", "score"} as JSON to the configured endpoint.

    Transport failures are returned as unsuccessful results rather than
    raised, so the caller can show them without touching game state. No
    retries are attempted.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        debug: bool = False
    ):
        """
        Initialize submitter.

        Args:
            config: Game configuration. Uses default if None.
            endpoint: Override for config.submission.endpoint.
            timeout: Override for config.submission.timeout (seconds).
            session: requests session to reuse. Module-level requests if None.
            debug: If True, prints submission outcomes.
        """
        if config is None:
            config = get_config()

        self._endpoint = endpoint or config.submission.endpoint
        self._timeout = timeout if timeout is not None else config.submission.timeout
        self._leaderboard_path = config.submission.leaderboard_path
        self._http = session if session is not None else requests
        self._debug = debug

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @staticmethod
    def validate_name(name: str) -> str:
        """
        Trim and check a player name.

        Raises:
            InvalidPlayerNameError: If nothing is left after trimming.
        """
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidPlayerNameError("Please enter your name!")
        return cleaned

    def submit(self, name: str, score: int) -> SubmissionResult:
        """
        Submit a score.

        Args:
            name: Player name; trimmed before sending.
            score: Final score.

        Returns:
            SubmissionResult describing success or the transport failure.

        Raises:
            InvalidPlayerNameError: If the name is empty. No request is made.
        """
        player_name = self.validate_name(name)
        payload = {"name": player_name, "score": int(score)}

        try:
            response = self._http.post(self._endpoint, json=payload, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            status = getattr(getattr(e, "response", None), "status_code", None)
            if self._debug:
                print(f"[DEBUG] Error submitting score: {e}")
            return SubmissionResult(
                ok=False,
                message="Failed to submit score. Please try again.",
                status_code=status
            )
        except ValueError as e:
            # Body was not JSON
            if self._debug:
                print(f"[DEBUG] Invalid response from {self._endpoint}: {e}")
            return SubmissionResult(
                ok=False,
                message="Failed to submit score. Please try again.",
                status_code=response.status_code
            )

        if self._debug:
            print(f"[DEBUG] Score submitted: {payload}")

        return SubmissionResult(
            ok=True,
            message="Score submitted successfully!",
            status_code=response.status_code,
            redirect=self._leaderboard_path,
            response=body if isinstance(body, dict) else {"data": body}
        )
