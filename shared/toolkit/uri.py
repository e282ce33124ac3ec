"""URI templates for addressable resources."""

import re
from typing import Optional

_VARIABLE = re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}")


class UriTemplate:
    """
    A URI with ``{name}`` placeholders, each matching one path segment.

    Examples:
        UriTemplate("program://{program_id}").match("program://p-1")
            -> {"program_id": "p-1"}
        UriTemplate("coach://{coach_id}/profile").expand(coach_id="c-9")
            -> "coach://c-9/profile"
    """

    def __init__(self, template: str):
        self.template = template
        self.variables = _VARIABLE.findall(template)

        pattern = ""
        last = 0
        for m in _VARIABLE.finditer(template):
            pattern += re.escape(template[last:m.start()])
            pattern += f"(?P<{m.group(1)}>[^/?#]+)"
            last = m.end()
        pattern += re.escape(template[last:])
        self._regex = re.compile(f"^{pattern}$")

    @property
    def is_template(self) -> bool:
        return bool(self.variables)

    def match(self, uri: str) -> Optional[dict[str, str]]:
        """Return the extracted variables, or None if the URI does not fit."""
        m = self._regex.match(uri)
        if m is None:
            return None
        return m.groupdict()

    def expand(self, **values: str) -> str:
        missing = [v for v in self.variables if v not in values]
        if missing:
            raise KeyError(f"Missing template values: {missing}")
        return _VARIABLE.sub(lambda m: str(values[m.group(1)]), self.template)

    def __repr__(self) -> str:
        return f"UriTemplate({self.template!r})"
