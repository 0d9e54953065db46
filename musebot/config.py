# config.py
import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL_ID = "Domver345/lightnovel_ai_proto"
DEFAULT_API_URL = "https://api-inference.huggingface.co/models"
DEFAULT_TIMEOUT = 120.0
DEFAULT_BACKEND_HOST = "127.0.0.1"
DEFAULT_BACKEND_PORT = 5000

# Value shipped in .env.example
PLACEHOLDER_TOKEN = "your_token_here"
MISSING_TOKEN_MESSAGE = "Please set your Hugging Face API token in the .env file"


@dataclass(frozen=True)
class Settings:
    api_token: Optional[str] = None
    model_id: str = DEFAULT_MODEL_ID
    api_url: str = DEFAULT_API_URL
    backend_url: Optional[str] = None
    request_timeout: float = DEFAULT_TIMEOUT
    backend_host: str = DEFAULT_BACKEND_HOST
    backend_port: int = DEFAULT_BACKEND_PORT

    @property
    def token_configured(self) -> bool:
        return is_usable_token(self.api_token)


def is_usable_token(token: Optional[str]) -> bool:
    """A token counts only if it is non-blank and not the placeholder."""
    if token is None:
        return False
    token = token.strip()
    return bool(token) and token != PLACEHOLDER_TOKEN


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _getenv_number(name: str, default, cast):
    """Parse a positive, finite number; anything else falls back to ``default``."""
    value = _getenv(name)
    if value is None:
        return default
    try:
        number = cast(value)
    except ValueError:
        number = None
    if number is None or not math.isfinite(number) or number <= 0:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default
    return number


def _getenv_token() -> Optional[str]:
    # HF_TOKEN stands in when the primary variable is unset or still the placeholder
    token = _getenv("HUGGINGFACE_API_TOKEN")
    if is_usable_token(token):
        return token
    fallback = _getenv("HF_TOKEN")
    return fallback if is_usable_token(fallback) else token


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Read settings from the environment after loading the .env file.

    Variables already present in the environment win over the .env file.
    """
    load_dotenv(dotenv_path, override=False)

    return Settings(
        api_token=_getenv_token(),
        model_id=_getenv("MUSE_MODEL_ID", DEFAULT_MODEL_ID),
        api_url=_getenv("MUSE_API_URL", DEFAULT_API_URL).rstrip("/"),
        backend_url=_getenv("MUSE_BACKEND_URL"),
        request_timeout=_getenv_number("MUSE_REQUEST_TIMEOUT", DEFAULT_TIMEOUT, float),
        backend_host=_getenv("MUSE_BACKEND_HOST", DEFAULT_BACKEND_HOST),
        backend_port=_getenv_number("MUSE_BACKEND_PORT", DEFAULT_BACKEND_PORT, int),
    )
