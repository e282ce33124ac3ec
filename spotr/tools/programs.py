"""Program tools: list, fetch, create, update and delete."""

import logging

from shared.toolkit import NoArguments, Ok, RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings
from spotr.schemas.programs import CreateProgramInput, ProgramIdInput, UpdateProgramInput
from spotr.tools.common import count, record_id, record_name, web_link

logger = logging.getLogger(__name__)

RECOVER_PROGRAM_ID = "Call fetch-all-programs to recover a valid program ID."

NEEDS_PROGRAM_ID = """
NOTE: to use this tool you need the ID of the program.
If you do not already have it, you can get a list of all the programs you have made for this user along with their IDs using the fetch-all-programs tool."""

CREATE_PROGRAM_DESCRIPTION = """Create and save a structured workout program based on the user's requirements.

This tool can represent strength training, cardio, HIIT, CrossFit or any combination of exercises organized into days and blocks.

## Program Structure
- Program level: name and description
- Days: ordered by day_number, with optional name/description
- Blocks: ordered components within days that can have different formats
- Exercises: individual movements within blocks with modifiable parameters

## Format Types
The `format_type` field defines how exercises in a block should be performed:
- `standard`: Traditional sets and reps format
- `circuit`: Sequential exercises to be completed in rounds
- `emom`: Every Minute On the Minute
- `amrap`: As Many Rounds As Possible
- `tabata`: Intervals of high intensity followed by rest
- `complex`: Multiple movements combined into a sequence

## Format Parameters
The `format_parameters` field varies based on format type:
- For `emom`: { "time": 20, "time_units": "minutes" }
- For `circuit`: { "rounds": 3 }
- For `amrap`: { "time": 10, "time_units": "minutes" }
- For `tabata`: { "work": 20, "rest": 10, "rounds": 8, "time_units": "seconds" }

## Modifiable Parameters
The `modifiable_parameters` field varies based on exercise type:
- For strength exercises: { "sets": 3, "reps": 10 } or { "reps": "8-10" }
- For timed exercises: { "time": 30, "time_units": "s" }
- For distance exercises: { "distance": 1, "distance_units": "km" }
- For exercises with rest: { "rest": 90, "rest_units": "s" }

## Example: EMOM Block
```
{
  "order_index": 1,
  "format_type": "emom",
  "format_parameters": {"time": 12, "time_units": "mins"},
  "exercises": [
    {"order_index": 0, "exercise_name": "Kettlebell Swings", "modifiable_parameters": {"reps": 15}},
    {"order_index": 1, "exercise_name": "Push-ups", "modifiable_parameters": {"reps": 12}}
  ]
}
```

## Example: Running Intervals
```
{
  "order_index": 0,
  "name": "Speed Work",
  "exercises": [
    {
      "order_index": 0,
      "exercise_name": "Run",
      "modifiable_parameters": {"distance": 400, "distance_units": "m", "rest": 90, "rest_units": "s"}
    }
  ]
}
```

Before using this tool, fetch the movements available to you with fetch-all-movements. You are not limited to those movements but they should be preferred."""

UPDATE_PROGRAM_DESCRIPTION = """Update a previously created program based on user feedback and preferences.

**Behavior**:
  - Updates only what's provided in the request
  - Doesn't affect entities that aren't included
  - Matches entities by their position (day_number, order_index)
  - Creates new entities if they don't exist

**Request Examples** (the `update` argument):
```json
// Update program metadata only
{"name": "Updated Program Name", "description": "Updated Description"}

// Update a specific day
{"days": [{"day_number": 2, "name": "Updated Day Name"}]}

// Update a specific exercise
{
  "days": [
    {
      "day_number": 1,
      "blocks": [
        {
          "order_index": 2,
          "exercises": [
            {"order_index": 3, "exercise_name": "Updated Exercise", "modifiable_parameters": {"sets": 4, "reps": "12"}}
          ]
        }
      ]
    }
  ]
}
```

Use this tool when a user has feedback on a previously created program that they want you to incorporate.
""" + NEEDS_PROGRAM_ID

FETCH_PROGRAM_DESCRIPTION = "Get an entire program.\n" + NEEDS_PROGRAM_ID

DELETE_PROGRAM_DESCRIPTION = """Delete an entire program.
You may wish to use this tool when it is simply easier to delete a program and re-write it rather than do partial updates.
This might be the case if the user wants to start from scratch or if feedback suggests they are very unhappy with the current suggestion.
""" + NEEDS_PROGRAM_ID


def register_program_tools(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    @builder.tool(
        "fetch-all-programs",
        title="Fetch all programs",
        description=(
            "Fetch all the programs you have created.\n"
            "Useful to get a complete picture of all the programs you have created, along with their IDs."
        ),
        input_model=NoArguments,
        read_only=True,
        idempotent=True,
        action="fetching programs",
    )
    async def fetch_all_programs(params: NoArguments) -> Ok:
        programs = await backend.fetch_all_programs()
        return Ok(f"Found {count(programs)} programs.", programs)

    @builder.tool(
        "fetch-program",
        title="Fetch program",
        description=FETCH_PROGRAM_DESCRIPTION,
        input_model=ProgramIdInput,
        read_only=True,
        idempotent=True,
        action="fetching program",
        recovery_hint=RECOVER_PROGRAM_ID,
    )
    async def fetch_program(params: ProgramIdInput) -> Ok:
        program = await backend.fetch_program(params.program_id)
        return Ok(f"Fetched program '{record_name(program)}' ({params.program_id}).", program)

    @builder.tool(
        "create-program",
        title="Create program",
        description=CREATE_PROGRAM_DESCRIPTION,
        input_model=CreateProgramInput,
        action="creating program",
    )
    async def create_program(params: CreateProgramInput) -> Ok:
        payload = params.program.model_dump(mode="json")
        program = await backend.create_program(payload)
        program_id = record_id(program)
        logger.info(f"Created program {program_id}")
        message = f"Created program '{params.program.name}'"
        if program_id:
            message += f" with ID {program_id}. View it at {web_link(settings, 'programs', program_id)}"
        return Ok(message + ".", program)

    @builder.tool(
        "update-program",
        title="Update program",
        description=UPDATE_PROGRAM_DESCRIPTION,
        input_model=UpdateProgramInput,
        idempotent=True,
        action="updating program",
        recovery_hint=RECOVER_PROGRAM_ID,
    )
    async def update_program(params: UpdateProgramInput) -> Ok:
        program = await backend.update_program(params.program_id, params.update.to_payload())
        logger.info(f"Updated program {params.program_id}")
        return Ok(
            f"Updated program {params.program_id}. "
            f"View it at {web_link(settings, 'programs', params.program_id)}.",
            program,
        )

    @builder.tool(
        "delete-program",
        title="Delete program",
        description=DELETE_PROGRAM_DESCRIPTION,
        input_model=ProgramIdInput,
        destructive=True,
        idempotent=True,
        action="deleting program",
        recovery_hint=RECOVER_PROGRAM_ID,
    )
    async def delete_program(params: ProgramIdInput) -> Ok:
        await backend.delete_program(params.program_id)
        logger.info(f"Deleted program {params.program_id}")
        return Ok(f"Program {params.program_id} deleted.")
