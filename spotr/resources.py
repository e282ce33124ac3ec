"""Read-only resources addressed by URI."""

import logging
from typing import Any

from pydantic import ValidationError

from shared.toolkit import InputValidationError, ListedResource, RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings
from spotr.errors import BackendError
from spotr.schemas.movements import MovementLibrary, MuscleGroup, parse_muscle_group

logger = logging.getLogger(__name__)


def _as_library(data: Any) -> MovementLibrary:
    # Accept both {"movements": {...}} and a bare group mapping.
    if isinstance(data, dict) and "movements" not in data:
        data = {"movements": data}
    try:
        return MovementLibrary.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Movement library failed validation: {e.error_count()} errors")
        raise BackendError(None, "malformed movement library", f"{e.error_count()} invalid fields") from None


def list_muscle_groups() -> list[ListedResource]:
    return [
        ListedResource(
            uri=f"movements://muscle-group/{group.value}",
            name=f"{group.value} Movements",
            description=f"Movements that train the {group.value.lower()}, each with a demo video.",
        )
        for group in MuscleGroup
    ]


def register_resources(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    @builder.resource(
        "movements-library",
        "movements://library",
        title="Movements Library",
        description="A complete library of movements for creating programs. Every movement comes with a demo video.",
    )
    async def movements_library() -> Any:
        return await backend.fetch_all_movements()

    @builder.resource(
        "movements-by-muscle-group",
        "movements://muscle-group/{group}",
        title="Movements by muscle group",
        description=(
            "A list of movements for a specific muscle group for creating programs. "
            "Each movement comes with a demo video."
        ),
        list_handler=list_muscle_groups,
    )
    async def movements_by_muscle_group(group: str) -> list[dict]:
        try:
            muscle_group = parse_muscle_group(group)
        except ValueError as e:
            raise InputValidationError.single("group", str(e)) from None
        library = _as_library(await backend.fetch_all_movements())
        return [m.model_dump() for m in library.for_group(muscle_group)]

    @builder.resource(
        "program",
        "program://{program_id}",
        title="Program",
        description="A complete program with its days, blocks and exercises.",
        recovery_hint="Call fetch-all-programs to recover a valid program ID.",
    )
    async def program(program_id: str) -> Any:
        return await backend.fetch_program(program_id)

    @builder.resource(
        "blueprint",
        "blueprint://{blueprint_id}",
        title="Blueprint",
        description="A program blueprint with its phases and session templates.",
        recovery_hint="Call fetch-all-blueprints to recover a valid blueprint ID.",
    )
    async def blueprint(blueprint_id: str) -> Any:
        return await backend.fetch_blueprint(blueprint_id)

    @builder.resource(
        "coach-profile",
        "coach://{coach_id}/profile",
        title="Coach profile",
        description="Profile of a coach: background, specialties and certifications.",
    )
    async def coach_profile(coach_id: str) -> Any:
        return await backend.fetch_coach(coach_id)

    @builder.resource(
        "coach-style",
        "coach://{coach_id}/style",
        title="Coach style",
        description="A coach's programming style and preferences, to follow when designing programs for them.",
    )
    async def coach_style(coach_id: str) -> Any:
        return await backend.fetch_coach_style(coach_id)

    @builder.resource(
        "client-profile",
        "client://{client_id}/profile",
        title="Client profile",
        description="Profile of a client: goals, experience, equipment access, injuries and preferences.",
    )
    async def client_profile(client_id: str) -> Any:
        return await backend.fetch_client(client_id)

    @builder.resource(
        "client-progress",
        "client://{client_id}/programs/{program_id}/progress",
        title="Client progress",
        description="Progress data recorded for a client on a specific program.",
    )
    async def client_progress(client_id: str, program_id: str) -> Any:
        return await backend.fetch_client_progress(client_id, program_id)
