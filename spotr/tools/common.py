"""Helpers shared by the tool modules."""

from typing import Any, Optional

from spotr.config import Settings


def web_link(settings: Settings, *parts: str) -> str:
    """Human-facing URL in the Spotr web app."""
    path = "/".join(str(p).strip("/") for p in parts)
    return f"{settings.web_app_url.rstrip('/')}/{path}"


def record_id(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return record.get("id")
    return None


def record_name(record: Any, default: str = "untitled") -> str:
    if isinstance(record, dict) and record.get("name"):
        return record["name"]
    return default


def count(records: Any) -> int:
    return len(records) if isinstance(records, (list, dict)) else 0
