"""Uniform success/error envelopes for tool results."""

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .errors import ToolError

UNEXPECTED_ERROR_TEXT = "An unexpected internal error occurred. The details were logged on the server."


@dataclass(frozen=True)
class Ok:
    """A successful handler result: confirmation text plus optional payload."""

    message: str
    data: Any = None


@dataclass(frozen=True)
class Err:
    """A failed handler result."""

    error: BaseException


Outcome = Union[Ok, Err]


@dataclass(frozen=True)
class TextItem:
    text: str

    def as_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class JsonItem:
    data: Any

    def as_text(self) -> str:
        return json.dumps(self.data, indent=2, default=str)


@dataclass
class Envelope:
    """Content items returned to the calling agent plus an error flag."""

    content: list[Union[TextItem, JsonItem]] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        """All content items joined, mostly useful for logs and tests."""
        return "\n".join(item.as_text() for item in self.content)


def describe_error(error: BaseException, recovery_hint: Optional[str] = None) -> str:
    """Render an error as plain text without internal representations."""
    if not isinstance(error, ToolError):
        return UNEXPECTED_ERROR_TEXT

    lines = [error.describe()]
    hints = []
    if error.hint:
        hints.append(error.hint)
    if error.suggest_recovery and recovery_hint:
        hints.append(recovery_hint)
    if hints:
        lines.append("")
        lines.extend(hints)
    return "\n".join(lines)


def render_outcome(
    outcome: Outcome,
    action: str = "running tool",
    recovery_hint: Optional[str] = None,
) -> Envelope:
    """
    Convert a handler outcome into an envelope.

    Success yields the confirmation message followed by the JSON payload
    (omitted when there is none). Failure yields a single text item:
    "Error <action>: <description>", the proximate cause and any hints.
    """
    if isinstance(outcome, Ok):
        items: list[Union[TextItem, JsonItem]] = [TextItem(outcome.message)]
        if outcome.data is not None:
            items.append(JsonItem(outcome.data))
        return Envelope(content=items, is_error=False)

    text = f"Error {action}: {describe_error(outcome.error, recovery_hint)}"
    return Envelope(content=[TextItem(text)], is_error=True)
