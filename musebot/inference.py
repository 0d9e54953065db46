# inference.py
import logging
from dataclasses import asdict, dataclass
from typing import List, Optional

import requests

from musebot.config import MISSING_TOKEN_MESSAGE, Settings, is_usable_token
from musebot.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationParameters:
    max_new_tokens: int = 500
    temperature: float = 0.7
    top_p: float = 0.95

    def as_dict(self) -> dict:
        return asdict(self)


def extract_generated_text(payload) -> Optional[str]:
    """
    Pull the completion out of a provider payload.

    Returns None when the payload has no usable ``generated_text`` string;
    callers decide what to show instead.
    """
    if not isinstance(payload, dict):
        return None
    text = payload.get("generated_text")
    if isinstance(text, str):
        return text
    return None


def _prompt_from_messages(messages: List[dict]) -> str:
    # Single-turn only: the last user message is the whole prompt.
    for message in reversed(messages):
        if message.get("role") == "user":
            return message.get("content", "")
    raise ValueError("messages must contain a user message")


def _error_detail(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        error = body["error"]
        return error if isinstance(error, str) else str(error)
    return f"{response.status_code} {response.reason}"


def _normalize_payload(body) -> dict:
    # The text-generation task answers with a one-element list.
    if isinstance(body, list):
        body = body[0] if body else {}
    return body if isinstance(body, dict) else {}


class HuggingFaceClient:
    """
    Calls the hosted Hugging Face inference API directly.

    Parameters:
        api_token (str): Bearer token. Checked before every call so that a
                         missing or placeholder token never reaches the network.
        api_url (str): Base URL; the model id is appended to it.
        timeout (float): Transport timeout in seconds.
    """

    def __init__(self, api_token: Optional[str], api_url: str, timeout: float = 120.0):
        self.api_token = api_token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "HuggingFaceClient":
        return cls(settings.api_token, settings.api_url, settings.request_timeout)

    def complete(self, model_id: str, messages: List[dict], parameters: GenerationParameters) -> dict:
        """
        Request one completion for a single-turn message list.

        Returns:
            dict: The provider payload, expected to carry ``generated_text``.
        Raises:
            ConfigurationError: the token is missing or still the placeholder.
            TransportError: the request failed or the provider answered non-2xx.
        """
        if not is_usable_token(self.api_token):
            raise ConfigurationError(MISSING_TOKEN_MESSAGE)

        url = f"{self.api_url}/{model_id}"
        body = {
            "inputs": _prompt_from_messages(messages),
            "parameters": {**parameters.as_dict(), "return_full_text": False},
        }
        headers = {"Authorization": f"Bearer {self.api_token.strip()}"}

        logger.info(f"Requesting completion from {url}")
        try:
            response = requests.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Could not reach inference provider: {e}") from e

        if not response.ok:
            raise TransportError(_error_detail(response))

        try:
            return _normalize_payload(response.json())
        except ValueError as e:
            raise TransportError("Malformed response from inference provider") from e


class BackendClient:
    """Sends the prompt to the Flask backend, which holds the token."""

    def __init__(self, backend_url: str, timeout: float = 120.0):
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendClient":
        return cls(settings.backend_url, settings.request_timeout)

    def complete(self, model_id: str, messages: List[dict], parameters: GenerationParameters) -> dict:
        # The backend owns the model id and parameters; both are fixed there too.
        url = f"{self.backend_url}/chat"
        try:
            response = requests.post(
                url, json={"message": _prompt_from_messages(messages)}, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Error contacting backend: {e}") from e

        if not response.ok:
            raise TransportError(_error_detail(response))

        try:
            return _normalize_payload(response.json())
        except ValueError as e:
            raise TransportError("Malformed response from backend") from e
