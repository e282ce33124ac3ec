"""Blueprint tools."""

import logging

from shared.toolkit import NoArguments, Ok, RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings
from spotr.schemas.blueprints import BlueprintCreate, BlueprintIdInput
from spotr.tools.common import count, record_id, record_name, web_link

logger = logging.getLogger(__name__)

RECOVER_BLUEPRINT_ID = "Call fetch-all-blueprints to recover a valid blueprint ID."

STORE_BLUEPRINT_DESCRIPTION = """Store a program blueprint: a template that can be personalized into programs for many clients.

A blueprint is client-agnostic. Instead of concrete exercises it describes phases, each with session templates made of exercise categories and set/rep ranges.

## Structure
- Blueprint level: coach_id, name, target_audience, duration_weeks (1-52), sessions_per_week (1-7), fitness_goal, equipment_level, description
- Phases: in chronological order, each with name, weeks, description, progression_strategy
- Session templates: name, description and exercise_categories
- Exercise categories: category, set_range, rep_range, intensity_guideline

## Example phase
```
{
  "name": "Accumulation Phase",
  "weeks": 3,
  "description": "Build work capacity with moderate loads",
  "progression_strategy": "Add one set per week",
  "session_templates": [
    {
      "name": "Push Day Template",
      "description": "Horizontal and vertical pressing",
      "exercise_categories": [
        {"category": "Compound Upper Push", "set_range": "3-4", "rep_range": "8-12", "intensity_guideline": "RPE 7-8"}
      ]
    }
  ]
}
```

To turn a blueprint into a client program, fetch it with fetch-blueprint, choose concrete movements for each category and save the result with create-program."""


def register_blueprint_tools(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    @builder.tool(
        "fetch-all-blueprints",
        title="Fetch all blueprints",
        description="Fetch all stored program blueprints along with their IDs.",
        input_model=NoArguments,
        read_only=True,
        idempotent=True,
        action="fetching blueprints",
    )
    async def fetch_all_blueprints(params: NoArguments) -> Ok:
        blueprints = await backend.fetch_all_blueprints()
        return Ok(f"Found {count(blueprints)} blueprints.", blueprints)

    @builder.tool(
        "fetch-blueprint",
        title="Fetch blueprint",
        description=(
            "Get an entire blueprint.\n"
            "NOTE: to use this tool you need the ID of the blueprint. "
            "If you do not already have it, use the fetch-all-blueprints tool."
        ),
        input_model=BlueprintIdInput,
        read_only=True,
        idempotent=True,
        action="fetching blueprint",
        recovery_hint=RECOVER_BLUEPRINT_ID,
    )
    async def fetch_blueprint(params: BlueprintIdInput) -> Ok:
        blueprint = await backend.fetch_blueprint(params.blueprint_id)
        return Ok(f"Fetched blueprint '{record_name(blueprint)}' ({params.blueprint_id}).", blueprint)

    @builder.tool(
        "store-blueprint",
        title="Store blueprint",
        description=STORE_BLUEPRINT_DESCRIPTION,
        input_model=BlueprintCreate,
        action="storing blueprint",
    )
    async def store_blueprint(params: BlueprintCreate) -> Ok:
        blueprint = await backend.create_blueprint(params.model_dump(mode="json"))
        blueprint_id = record_id(blueprint)
        logger.info(f"Stored blueprint {blueprint_id}")
        total_weeks = sum(phase.weeks for phase in params.phases)
        message = (
            f"Stored blueprint '{params.name}': {len(params.phases)} phases over {total_weeks} weeks, "
            f"{params.sessions_per_week} sessions per week"
        )
        if blueprint_id:
            message += f". ID {blueprint_id}, view it at {web_link(settings, 'blueprints', blueprint_id)}"
        return Ok(message + ".", blueprint)
