"""Blueprint schemas: client-agnostic program templates."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciseCategory(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: str = Field(min_length=1, description="Category of exercise. Example: 'Compound Upper Push', 'Isolation Shoulder'")
    set_range: str = Field(description="Recommended sets. Example: '3-4'")
    rep_range: str = Field(description="Recommended rep range. Example: '8-12'")
    intensity_guideline: str = Field(description="Intensity guideline. Example: '70-75% 1RM', 'RPE 7-8'")
    notes: Optional[str] = Field(default=None, description="Optional notes for this exercise category")


class SessionTemplate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Name of this session template. Example: 'Push Day Template'")
    description: str = Field(description="Brief description of the session's purpose")
    exercise_categories: list[ExerciseCategory] = Field(description="Exercise categories with set/rep ranges")
    notes: Optional[str] = Field(default=None, description="Optional notes for this session template")


class BlueprintPhase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Name of this training phase. Example: 'Accumulation Phase'")
    weeks: int = Field(ge=1, description="Duration of this phase in weeks. Example: 3")
    description: str = Field(description="Description of this phase's focus")
    session_templates: list[SessionTemplate] = Field(description="Session templates used in this phase")
    progression_strategy: str = Field(description="How to progress through this phase")
    notes: Optional[str] = Field(default=None, description="Optional notes specific to this phase")


class BlueprintCreate(BaseModel):
    """A template that can be personalised into programs for many clients."""

    model_config = ConfigDict(extra="forbid")

    coach_id: str = Field(min_length=1, description="ID of the coach creating the blueprint. Example: 'coach-123'")
    name: str = Field(min_length=1, description="Name of the blueprint. Example: 'Intermediate Upper Body Strength'")
    target_audience: str = Field(description="Who this blueprint is designed for. Example: 'Intermediate lifters focusing on upper body development'")
    duration_weeks: int = Field(ge=1, le=52, description="Total duration in weeks. Must be between 1-52. Example: 8")
    sessions_per_week: int = Field(ge=1, le=7, description="Sessions per week. Must be between 1-7. Example: 4")
    fitness_goal: str = Field(description="Primary fitness goal. Example: 'Strength', 'Hypertrophy', 'Endurance'")
    equipment_level: str = Field(description="Required equipment access. Example: 'Home', 'Basic Gym', 'Full Gym'")
    description: str = Field(description="Brief overview of the blueprint and its approach")
    phases: list[BlueprintPhase] = Field(min_length=1, description="Phases of the blueprint, in chronological order")
    notes: Optional[str] = Field(default=None, description="Optional general notes about the blueprint")


class BlueprintIdInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    blueprint_id: str = Field(min_length=1, description="ID of the blueprint. Example: 'blueprint-123'")
