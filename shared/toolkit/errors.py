"""Errors raised and rendered by the dispatch framework."""

from typing import Optional

from pydantic import ValidationError


class ToolError(Exception):
    """
    An error whose message is safe to show to the calling agent.

    ``hint`` is a short remediation sentence appended to the rendered error.
    ``suggest_recovery`` asks the renderer to also append the tool's own
    recovery hint (e.g. "call fetch-all-programs to find the ID").
    """

    suggest_recovery = False

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(message)

    def describe(self) -> str:
        return self.message


class InputValidationError(ToolError):
    """Arguments failed schema validation; no backend call was made."""

    def __init__(self, problems: list[tuple[str, str]]):
        self.problems = problems
        super().__init__(
            "Invalid input",
            hint="Correct the listed fields and call the tool again.",
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "InputValidationError":
        problems = []
        for err in exc.errors():
            path = ".".join(str(part) for part in err["loc"]) or "(root)"
            problems.append((path, err["msg"]))
        return cls(problems)

    @classmethod
    def single(cls, path: str, message: str) -> "InputValidationError":
        return cls([(path, message)])

    def describe(self) -> str:
        lines = [f"{self.message}:"]
        lines.extend(f"- {path}: {msg}" for path, msg in self.problems)
        return "\n".join(lines)


class NotRegisteredError(KeyError):
    """No tool, resource or prompt is registered under the identifier."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind} registered as '{identifier}'")

    def __str__(self) -> str:
        return self.args[0]
