"""Typed failures raised by the studio services and mapped to HTTP responses."""

from typing import Any, Dict, Optional


class StudioError(Exception):
    """Base class for failures that carry an HTTP status and a client message."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body sent to the client."""
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(StudioError):
    """A required credential or project setting is missing."""

    status_code = 500


class UnsupportedModelError(StudioError):
    """The client asked for a model identifier the service does not know."""

    status_code = 400

    def __init__(self, model: str) -> None:
        super().__init__(f"Model {model} is not supported.")
        self.model = model


class ModelNotImplementedError(StudioError):
    """A recognized model whose provider path is not enabled in this deployment."""

    status_code = 501


class UpstreamTransportError(StudioError):
    """The hosted model call itself failed."""

    status_code = 500


class NoImageDataError(StudioError):
    """The hosted model answered but returned no inline image payload."""

    status_code = 500


class InvalidRequestError(StudioError):
    status_code = 400


class SessionBusyError(StudioError):
    """A trigger fired while the same pipeline still has a request in flight."""

    status_code = 409


class NotFoundError(StudioError):
    """An unknown session id or history index."""

    status_code = 404


def error_message(exc: BaseException, fallback: str = "Unknown error") -> str:
    """Extract a human-readable message from an arbitrary exception."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(exc)
    return text if text.strip() else fallback
