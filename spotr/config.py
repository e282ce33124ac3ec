"""Process configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from spotr.errors import ConfigurationError

DEFAULT_WEB_APP_URL = "http://localhost:3000"
DEFAULT_MOCK_DATA_DIR = "mock-data"

_TRUTHY = {"1", "true", "yes", "on"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Connection settings, read-only after startup."""

    base_url: Optional[str]
    api_key: Optional[str]
    web_app_url: str = DEFAULT_WEB_APP_URL
    mock_mode: bool = False
    mock_data_dir: Path = Path(DEFAULT_MOCK_DATA_DIR)
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        """
        Build settings from SPOTR_* environment variables.

        Keyword overrides (e.g. from the command line) win over the
        environment. Raises ConfigurationError when the base URL or API key
        is missing outside mock mode.
        """
        env = os.environ if environ is None else environ

        timeout_raw = env.get("SPOTR_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError:
            raise ConfigurationError(f"SPOTR_TIMEOUT must be a number, got {timeout_raw!r}") from None

        values = {
            "base_url": env.get("SPOTR_BASE_URL") or None,
            "api_key": env.get("SPOTR_API_KEY") or None,
            "web_app_url": env.get("SPOTR_WEB_APP_URL", DEFAULT_WEB_APP_URL),
            "mock_mode": env.get("SPOTR_MOCK_MODE", "").strip().lower() in _TRUTHY,
            "mock_data_dir": Path(env.get("SPOTR_MOCK_DATA_DIR", DEFAULT_MOCK_DATA_DIR)),
            "timeout": timeout,
            "log_level": env.get("SPOTR_LOG_LEVEL", "INFO").strip().upper(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls(**values)
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"log level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        if self.mock_mode:
            return
        if not self.base_url or not self.api_key:
            raise ConfigurationError("SPOTR_BASE_URL and SPOTR_API_KEY must be set")
