"""Errors raised by the relay and mapped to JSON responses in app.main."""

from typing import Optional


class RelayError(Exception):
    """
    Base for every client-visible failure.

    Attributes:
        message: Text returned to the caller as {"error": message}.
        status_code: HTTP status of the response.
    """

    status_code: int = 500
    default_message: str = "An internal server error occurred."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(RelayError):
    """The server has no API key."""

    default_message = "The API key is not configured on the server."


class InvalidRequest(RelayError):
    """The caller left out a required field."""

    status_code = 400
    default_message = "Invalid request."


class UpstreamError(RelayError):
    """Gemini answered with an error status or an unexpected body."""

    default_message = "An error occurred in the Gemini API."


class InternalError(RelayError):
    """Anything else: network failures, unparseable bodies."""
