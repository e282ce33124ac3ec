"""Movement library tools."""

from shared.toolkit import NoArguments, Ok, RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings
from spotr.schemas.movements import ExerciseSearch
from spotr.tools.common import count


def register_movement_tools(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    @builder.tool(
        "fetch-all-movements",
        title="Fetch all movements",
        description=(
            "Fetch the entire movement library and corresponding demo videos.\n"
            "Useful to get a complete picture of all the movements you have at your disposal to design a program "
            "or if you are designing programs for full-body training splits where every major muscle group is "
            "trained in each session."
        ),
        input_model=NoArguments,
        read_only=True,
        idempotent=True,
        action="fetching movements",
    )
    async def fetch_all_movements(params: NoArguments) -> Ok:
        library = await backend.fetch_all_movements()
        return Ok("Fetched the movement library.", library)

    @builder.tool(
        "search-exercises",
        title="Search exercises",
        description=(
            "Search for exercises by name, muscle group, equipment, difficulty or movement pattern.\n"
            "Use this to find suitable exercises when designing or personalizing a program. "
            "All criteria are optional; results are limited to `limit` entries."
        ),
        input_model=ExerciseSearch,
        read_only=True,
        idempotent=True,
        action="searching exercises",
    )
    async def search_exercises(params: ExerciseSearch) -> Ok:
        results = await backend.search_exercises(params.to_query())
        return Ok(f"Found {count(results)} exercises matching the criteria.", results)
