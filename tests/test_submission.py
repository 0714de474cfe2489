"""
Tests for score submission.
"""

import pytest
import requests

from wavetunnel.tunnel_core.submission import InvalidPlayerNameError, ScoreSubmitter


class FakeResponse:
    def __init__(self, status_code=200, body=None, json_error=False):
        self.status_code = status_code
        self._body = body if body is not None else {"status": "ok"}
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._body


@pytest.fixture
def calls(monkeypatch):
    """Record requests.post calls and answer with a 200 response."""
    recorded = []

    def fake_post(url, json=None, timeout=None):
        recorded.append({"url": url, "json": json, "timeout": timeout})
        return FakeResponse()

    monkeypatch.setattr(requests, "post", fake_post)
    return recorded


@pytest.fixture
def submitter(config):
    return ScoreSubmitter(config, endpoint="http://scores.test/submit-score")


class TestSubmit:
    """Successful submissions and validation."""

    def test_posts_json(self, submitter, calls, config):
        result = submitter.submit("Ada", 42)

        assert result.ok
        assert result.message == "Score submitted successfully!"
        assert result.redirect == "/leaderboard.html"
        assert calls == [{
            "url": "http://scores.test/submit-score",
            "json": {"name": "Ada", "score": 42},
            "timeout": config.submission.timeout,
        }]

    def test_name_trimmed(self, submitter, calls):
        submitter.submit("  Ada  ", 1)
        assert calls[0]["json"]["name"] == "Ada"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, submitter, calls, name):
        """Empty names raise and send nothing."""
        with pytest.raises(InvalidPlayerNameError):
            submitter.submit(name, 10)
        assert calls == []

    def test_invalid_name_is_value_error(self):
        assert issubclass(InvalidPlayerNameError, ValueError)

    def test_default_endpoint_from_config(self, config, calls):
        ScoreSubmitter(config).submit("Ada", 3)
        assert calls[0]["url"] == config.submission.endpoint


class TestTransportFailures:
    """Failures are reported, not raised."""

    def test_connection_error(self, submitter, monkeypatch):
        def fail(url, json=None, timeout=None):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(requests, "post", fail)
        result = submitter.submit("Ada", 5)

        assert not result.ok
        assert result.message == "Failed to submit score. Please try again."
        assert result.redirect is None

    def test_http_error_status(self, submitter, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda url, json=None, timeout=None: FakeResponse(500))
        result = submitter.submit("Ada", 5)

        assert not result.ok
        assert result.status_code == 500

    def test_invalid_json_body(self, submitter, monkeypatch):
        monkeypatch.setattr(
            requests, "post",
            lambda url, json=None, timeout=None: FakeResponse(200, json_error=True)
        )
        result = submitter.submit("Ada", 5)

        assert not result.ok

    def test_session_used_when_given(self, config):
        class Session:
            def __init__(self):
                self.posted = []

            def post(self, url, json=None, timeout=None):
                self.posted.append(json)
                return FakeResponse(body=["rank", 3])

        session = Session()
        result = ScoreSubmitter(config, session=session).submit("Ada", 9)

        assert result.ok
        assert result.response == {"data": ["rank", 3]}
        assert session.posted == [{"name": "Ada", "score": 9}]
