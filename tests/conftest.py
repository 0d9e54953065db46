import pytest

import musebot.config

ENV_VARS = [
    "HUGGINGFACE_API_TOKEN",
    "HF_TOKEN",
    "MUSE_MODEL_ID",
    "MUSE_API_URL",
    "MUSE_BACKEND_URL",
    "MUSE_REQUEST_TIMEOUT",
    "MUSE_BACKEND_HOST",
    "MUSE_BACKEND_PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's real .env and shell variables out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(musebot.config, "load_dotenv", lambda *args, **kwargs: False)


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK", json_error=False):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self._json_error = json_error

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._body


class RecordingPost:
    """Stand-in for requests.post that records calls and replays one outcome."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_post(monkeypatch):
    def install(response=None, error=None):
        post = RecordingPost(response, error)
        monkeypatch.setattr("musebot.inference.requests.post", post)
        return post
    return install
