"""Prompt templates that walk the agent through the core coaching workflows."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.toolkit import RegistryBuilder
from spotr.schemas.analyses import EntityType, EvaluationPurpose, Timeframe, format_timeframe


class GenerateProgramArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    coach_id: str = Field(min_length=1, description="ID of the coach who will create the program")
    coach_name: str = Field(description="Name of the coach")
    client_id: str = Field(min_length=1, description="ID of the client who will follow the program")
    client_name: str = Field(description="Name of the client")
    program_goal: str = Field(description="Primary fitness goal for the program")
    duration_weeks: int = Field(ge=1, le=52, description="Program duration in weeks")
    sessions_per_week: int = Field(ge=1, le=7, description="Sessions per week")
    equipment_availability: str = Field(description="Available equipment")


class GenerateBlueprintArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    coach_id: str = Field(min_length=1, description="ID of the coach who will create the blueprint")
    coach_name: str = Field(description="Name of the coach")
    goal_focus: str = Field(description="Primary fitness goal for the blueprint")
    target_audience: str = Field(description="Target audience for the blueprint")
    duration_weeks: int = Field(ge=1, le=52, description="Blueprint duration in weeks")
    sessions_per_week: int = Field(ge=1, le=7, description="Sessions per week")
    equipment_level: str = Field(description="Required equipment level")


class PersonalizeProgramArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    blueprint_id: str = Field(min_length=1, description="ID of the blueprint to personalize")
    blueprint_name: str = Field(description="Name of the blueprint")
    client_id: str = Field(min_length=1, description="ID of the client")
    client_name: str = Field(description="Name of the client")
    specific_goals: str = Field(description="Client's specific goals for this program")
    special_considerations: Optional[str] = Field(default=None, description="Any special considerations for this client")


class AnalyzeProgressArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: str = Field(min_length=1, description="ID of the client")
    client_name: str = Field(description="Name of the client")
    program_id: str = Field(min_length=1, description="ID of the program")
    program_name: str = Field(description="Name of the program")
    timeframe: Timeframe = Field(description="Analysis timeframe")


class EvaluateProgramArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_type: EntityType = Field(description="Type of entity to evaluate")
    entity_id: str = Field(min_length=1, description="ID of the program or blueprint")
    entity_name: str = Field(description="Name of the program or blueprint")
    evaluation_purpose: EvaluationPurpose = Field(description="Purpose of the evaluation")
    client_id: Optional[str] = Field(default=None, description="ID of the client (if evaluating for client suitability)")


def render_generate_program(p: GenerateProgramArgs) -> str:
    return f"""Please create a fitness program for {p.client_name} based on Coach {p.coach_name}'s style and approach. This program should focus on {p.program_goal}, last for {p.duration_weeks} weeks with {p.sessions_per_week} sessions per week, and be designed for someone with access to {p.equipment_availability} equipment.

You can access Coach {p.coach_name}'s profile and training style at coach://{p.coach_id}/profile and coach://{p.coach_id}/style to understand their coaching philosophy and programming approach.

You can also access {p.client_name}'s profile at client://{p.client_id}/profile to learn about their background, experience level, goals, and any limitations they have.

For exercise selection, read movements://library or use the search-exercises tool to find exercises that match the client's needs and available equipment.

Once you've designed the program, use the create-program tool to save it so it can be accessed by both the coach and client."""


def render_generate_blueprint(p: GenerateBlueprintArgs) -> str:
    return f"""Please create a workout blueprint for Coach {p.coach_name} that focuses on {p.goal_focus}. This blueprint should be designed for {p.target_audience}, last for {p.duration_weeks} weeks with {p.sessions_per_week} sessions per week, and require {p.equipment_level} equipment.

You can access Coach {p.coach_name}'s profile and training style at coach://{p.coach_id}/profile and coach://{p.coach_id}/style to understand their coaching philosophy and programming approach.

For exercise selection guidelines, use the search-exercises tool to find exercise categories that match the target audience's needs and the specified equipment level.

The blueprint should be general enough to be adaptable for multiple clients while still reflecting Coach {p.coach_name}'s training approach.

Once you've designed the blueprint, use the store-blueprint tool with coach_id "{p.coach_id}" to save it."""


def render_personalize_program(p: PersonalizeProgramArgs) -> str:
    considerations = ""
    if p.special_considerations:
        considerations = f" Also consider these special requirements: {p.special_considerations}."
    return f"""Please create a personalized fitness program for {p.client_name} based on the "{p.blueprint_name}" blueprint. The program should address {p.client_name}'s specific goals: {p.specific_goals}.{considerations}

You can access the blueprint at blueprint://{p.blueprint_id} to see its structure, phases, and general approach.

You can also access {p.client_name}'s profile at client://{p.client_id}/profile to learn about their background, experience level, current fitness status, and any limitations they have.

Adapt the blueprint into a concrete program: choose a movement for each exercise category, keep the phase structure and progression strategy, and fit the volume to {p.client_name}'s needs.

Once you've personalized the program, use the create-program tool to save it."""


def render_analyze_progress(p: AnalyzeProgressArgs) -> str:
    return f"""Please analyze {p.client_name}'s progress on the "{p.program_name}" program over the past {format_timeframe(p.timeframe)}.

You can access {p.client_name}'s profile at client://{p.client_id}/profile to understand their background and goals.

You can access the program details at program://{p.program_id} to see what they've been working on.

You can access their progress data at client://{p.client_id}/programs/{p.program_id}/progress to see their workout logs, performance metrics, and any notes they've added.

Based on this information, provide a comprehensive analysis of their progress, including:
1. Strength progress for key exercises (comparing initial to current performance)
2. Body composition changes, if data is available
3. Adherence to the program
4. Overall assessment of their progress relative to their goals
5. Actionable recommendations for the next phase of training

Use the store-progress-analysis tool with timeframe "{p.timeframe.value}" to save this analysis when you're done."""


def render_evaluate_program(p: EvaluateProgramArgs) -> str:
    kind = p.entity_type.value
    client_section = ""
    client_item = ""
    if p.client_id:
        client_section = (
            f"\n\nYou can also access the client's profile at client://{p.client_id}/profile "
            "to understand their specific needs and goals."
        )
        client_item = "\n6. A conclusion about whether this is suitable for the client and why"
    return f"""Please evaluate the "{p.entity_name}" {kind} for {p.evaluation_purpose.value.replace('_', ' ')}.

You can access the {kind} details at {kind}://{p.entity_id} to review its structure, approach, and methodology.{client_section}

Provide a comprehensive evaluation including:
1. Overall assessment of the {kind}'s quality and effectiveness
2. Scores for different aspects (structure, exercise selection, volume/intensity, recovery, specificity, practicality)
3. Key strengths of the {kind}
4. Areas that could be improved
5. Specific suggestions for improvement{client_item}

Use scientific principles of program design in your evaluation, considering progressive overload, specificity, recovery and individual differences.

Once complete, use the evaluate-program tool to record your evaluation."""


def register_prompts(builder: RegistryBuilder) -> None:
    builder.prompt(
        "generate-program-prompt",
        title="Generate program",
        description="Design a program for a client in a coach's style.",
        argument_model=GenerateProgramArgs,
    )(render_generate_program)
    builder.prompt(
        "generate-blueprint-prompt",
        title="Generate blueprint",
        description="Design a reusable blueprint in a coach's style.",
        argument_model=GenerateBlueprintArgs,
    )(render_generate_blueprint)
    builder.prompt(
        "personalize-program-prompt",
        title="Personalize blueprint",
        description="Turn a blueprint into a program for a specific client.",
        argument_model=PersonalizeProgramArgs,
    )(render_personalize_program)
    builder.prompt(
        "analyze-progress-prompt",
        title="Analyze progress",
        description="Analyze a client's progress on a program and store the analysis.",
        argument_model=AnalyzeProgressArgs,
    )(render_analyze_progress)
    builder.prompt(
        "evaluate-program-prompt",
        title="Evaluate program",
        description="Evaluate a program or blueprint and store the evaluation.",
        argument_model=EvaluateProgramArgs,
    )(render_evaluate_program)
