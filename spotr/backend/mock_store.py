"""Local JSON-file stand-in for the Spotr API, used in mock mode."""

import copy
import json
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from spotr.backend.client import require_id
from spotr.errors import InputValidationError, NotFoundError

logger = logging.getLogger(__name__)

COLLECTIONS = (
    "programs",
    "blueprints",
    "coaches",
    "clients",
    "exercises",
    "analyses",
    "evaluations",
    "shares",
)

# Nested collection -> position key
_NESTED = {
    "days": "day_number",
    "blocks": "order_index",
    "exercises": "order_index",
}

# Shape given to a nested entity inserted by an update
_SEEDS = {
    "days": {"name": None, "description": None, "blocks": []},
    "blocks": {
        "name": None,
        "description": None,
        "format_type": None,
        "format_parameters": None,
        "exercises": [],
    },
    "exercises": {"video_url": None, "notes": None, "modifiable_parameters": None},
}

_REQUIRED_ON_INSERT = {"exercises": ("exercise_name",)}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id(kind: str) -> str:
    return f"{kind}-{uuid.uuid4().hex}"


def merge_entity(target: dict, changes: dict, path: str = "") -> dict:
    """
    Apply a partial update to ``target`` in place.

    Scalar fields present in ``changes`` replace the stored value. Nested
    days, blocks and exercises are matched by their position key: matches
    are merged recursively, unmatched entries are inserted with the full
    entity shape, and entries not mentioned are left alone. An inserted
    exercise must name its movement.
    """
    for name, value in changes.items():
        key = _NESTED.get(name)
        if key is not None and isinstance(value, list):
            target[name] = _merge_children(
                target.get(name) or [], value, name, key, f"{path}{name}"
            )
        else:
            target[name] = value
    return target


def _merge_children(
    existing: list[dict], changes: list[dict], name: str, key: str, path: str
) -> list[dict]:
    merged = list(existing)
    by_position = {item.get(key): item for item in merged}
    for index, change in enumerate(changes):
        child_path = f"{path}.{index}."
        current = by_position.get(change.get(key))
        if current is None:
            for field_name in _REQUIRED_ON_INSERT.get(name, ()):
                if not change.get(field_name):
                    raise InputValidationError.single(
                        f"{child_path}{field_name}",
                        f"required when inserting a new entry at {key} {change.get(key)}",
                    )
            current = copy.deepcopy(_SEEDS[name])
            merge_entity(current, change, child_path)
            merged.append(current)
            by_position[change.get(key)] = current
        else:
            merge_entity(current, change, child_path)
    merged.sort(key=lambda item: item.get(key, 0))
    return merged


def _matches(value: Any, wanted: str) -> bool:
    wanted = wanted.lower()
    if isinstance(value, list):
        return any(str(v).lower() == wanted for v in value)
    return value is not None and str(value).lower() == wanted


class MockStore:
    """
    Same coroutine interface as ``SpotrClient``, backed by one JSON file per
    collection in ``data_dir``. Missing files are created empty on first use.
    """

    def __init__(self, data_dir: Path, web_app_url: str = "http://localhost:3000"):
        self.data_dir = Path(data_dir)
        self.web_app_url = web_app_url.rstrip("/")
        self._ensure_files()

    def _ensure_files(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for name in COLLECTIONS:
            path = self._path(name)
            if not path.exists():
                path.write_text("[]")
        movements = self._path("movements")
        if not movements.exists():
            movements.write_text(json.dumps({"movements": {}}))
        logger.info(f"Mock store using {self.data_dir}")

    def _path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _load(self, name: str) -> Any:
        return json.loads(self._path(name).read_text())

    def _save(self, name: str, data: Any) -> None:
        self._path(name).write_text(json.dumps(data, indent=2))

    def _find(self, collection: str, entity: str, identifier: str) -> dict:
        for record in self._load(collection):
            if record.get("id") == identifier:
                return record
        raise NotFoundError(entity, identifier)

    def _insert(self, collection: str, kind: str, payload: dict) -> dict:
        records = self._load(collection)
        now = _now()
        record = {"id": _new_id(kind), **payload, "created_at": now, "updated_at": now}
        records.append(record)
        self._save(collection, records)
        return record

    # Movements

    async def fetch_all_movements(self) -> Any:
        return self._load("movements")

    async def search_exercises(self, criteria: dict[str, Any]) -> list[dict]:
        query = (criteria.get("query") or "").lower()
        filters = {
            "primary_muscle_group": criteria.get("muscle_group"),
            "equipment": criteria.get("equipment"),
            "difficulty": criteria.get("difficulty"),
            "movement_pattern": criteria.get("movement_pattern"),
        }
        results = []
        for exercise in self._load("exercises"):
            if query and query not in str(exercise.get("name", "")).lower():
                continue
            if any(
                wanted and not _matches(exercise.get(field), wanted)
                for field, wanted in filters.items()
            ):
                continue
            results.append(exercise)
        return results[: criteria.get("limit") or 20]

    # Programs

    async def fetch_all_programs(self) -> list[dict]:
        return self._load("programs")

    async def fetch_program(self, program_id: str) -> dict:
        require_id("program_id", program_id)
        return self._find("programs", "program", program_id)

    async def create_program(self, payload: dict[str, Any]) -> dict:
        return self._insert("programs", "program", payload)

    async def update_program(self, program_id: str, payload: dict[str, Any]) -> dict:
        require_id("program_id", program_id)
        programs = self._load("programs")
        for program in programs:
            if program.get("id") == program_id:
                merge_entity(program, payload)
                program["updated_at"] = _now()
                self._save("programs", programs)
                return program
        raise NotFoundError("program", program_id)

    async def delete_program(self, program_id: str) -> None:
        require_id("program_id", program_id)
        programs = self._load("programs")
        remaining = [p for p in programs if p.get("id") != program_id]
        if len(remaining) == len(programs):
            raise NotFoundError("program", program_id)
        self._save("programs", remaining)

    # Blueprints

    async def fetch_all_blueprints(self) -> list[dict]:
        return self._load("blueprints")

    async def fetch_blueprint(self, blueprint_id: str) -> dict:
        require_id("blueprint_id", blueprint_id)
        return self._find("blueprints", "blueprint", blueprint_id)

    async def create_blueprint(self, payload: dict[str, Any]) -> dict:
        return self._insert("blueprints", "blueprint", payload)

    # Coaches and clients

    async def fetch_coach(self, coach_id: str) -> dict:
        require_id("coach_id", coach_id)
        return self._find("coaches", "coach", coach_id)

    async def fetch_coach_style(self, coach_id: str) -> Any:
        coach = await self.fetch_coach(coach_id)
        return coach.get("style") or {}

    async def fetch_client(self, client_id: str) -> dict:
        require_id("client_id", client_id)
        return self._find("clients", "client", client_id)

    async def fetch_client_progress(self, client_id: str, program_id: str) -> dict:
        require_id("client_id", client_id)
        require_id("program_id", program_id)
        found: Optional[dict] = None
        for analysis in self._load("analyses"):
            if analysis.get("client_id") == client_id and analysis.get("program_id") == program_id:
                found = analysis
        if found is None:
            raise NotFoundError("progress", f"{client_id}/{program_id}")
        return found

    # Analyses, evaluations and sharing

    async def create_progress_analysis(self, payload: dict[str, Any]) -> dict:
        require_id("client_id", payload.get("client_id", ""))
        require_id("program_id", payload.get("program_id", ""))
        return self._insert("analyses", "analysis", payload)

    async def create_evaluation(self, payload: dict[str, Any]) -> dict:
        return self._insert("evaluations", "evaluation", payload)

    async def create_share_link(self, payload: dict[str, Any]) -> dict:
        token = secrets.token_urlsafe(16)
        expires_at = datetime.now(timezone.utc) + timedelta(days=payload.get("expires_in_days", 30))
        record = self._insert(
            "shares",
            "share",
            {
                **payload,
                "token": token,
                "share_url": f"{self.web_app_url}/shared/{token}",
                "expires_at": expires_at.isoformat(),
            },
        )
        return record
