"""Error taxonomy for the Spotr MCP server."""

from typing import Optional

from shared.toolkit.errors import InputValidationError, ToolError

__all__ = [
    "SpotrError",
    "ConfigurationError",
    "InputValidationError",
    "BackendError",
    "NotFoundError",
    "TransportError",
]

DEFAULT_BACKEND_HINT = (
    "Check the request and try again; if the problem persists the Spotr API may be unavailable."
)


class SpotrError(ToolError):
    """Base class for Spotr errors that are safe to show to the agent."""


class ConfigurationError(SpotrError):
    """Required connection settings are missing; fatal at startup."""


class BackendError(SpotrError):
    """The Spotr API answered with a non-success status or an unreadable body."""

    def __init__(
        self,
        status: Optional[int],
        reason: str,
        detail: Optional[str] = None,
        hint: Optional[str] = DEFAULT_BACKEND_HINT,
        message: Optional[str] = None,
    ):
        self.status = status
        self.reason = reason
        self.detail = detail
        if message is None:
            if status is None:
                message = f"Spotr API request failed ({reason})"
            else:
                message = f"Spotr API request failed (HTTP {status} {reason})"
            if detail:
                message = f"{message}: {detail}"
        super().__init__(message, hint=hint)


class NotFoundError(BackendError):
    """The requested entity does not exist on the backend."""

    suggest_recovery = True

    def __init__(self, entity: str, identifier: str, status: int = 404, reason: str = "Not Found"):
        self.entity = entity
        self.identifier = identifier
        super().__init__(
            status,
            reason,
            hint=None,
            message=f"{entity.capitalize()} '{identifier}' was not found (HTTP {status} {reason})",
        )


class TransportError(BackendError):
    """The Spotr API could not be reached (DNS, connection refused, timeout)."""

    def __init__(self, reason: str):
        super().__init__(
            None,
            reason,
            hint="The Spotr API could not be reached. Try again shortly.",
        )
