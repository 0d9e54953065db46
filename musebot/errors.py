# errors.py


class MuseError(Exception):
    """Base class for failures raised while talking to the inference provider."""


class ConfigurationError(MuseError, ValueError):
    """The API token is missing or still set to the placeholder value."""


class TransportError(MuseError):
    """The provider (or the backend) could not be reached or refused the request."""
