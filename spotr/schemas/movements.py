"""Movement library and exercise search schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MuscleGroup(str, Enum):
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    LEGS = "Legs"
    CORE = "Core"


class Movement(BaseModel):
    """One library entry: a movement, its variation and a demo video."""

    model_config = ConfigDict(extra="allow")

    name: str
    variation: Optional[str] = None
    client_demo: Optional[str] = None


class MovementLibrary(BaseModel):
    """Movements grouped by muscle group, as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    movements: dict[str, list[Movement]] = Field(default_factory=dict)

    def for_group(self, group: MuscleGroup) -> list[Movement]:
        # Group keys are matched case-insensitively; the backend is not consistent.
        for key, movements in self.movements.items():
            if key.lower() == group.value.lower():
                return movements
        return []


def parse_muscle_group(value: str) -> MuscleGroup:
    """Resolve a muscle group name case-insensitively. Raises ValueError if unknown."""
    for group in MuscleGroup:
        if group.value.lower() == value.strip().lower():
            return group
    allowed = ", ".join(g.value for g in MuscleGroup)
    raise ValueError(f"Unknown muscle group '{value}'. Expected one of: {allowed}")


class ExerciseSearch(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    query: Optional[str] = Field(default=None, description="Search term for exercise name. Example: 'bench press'")
    muscle_group: Optional[str] = Field(default=None, description="Primary muscle group to target. Example: 'chest', 'back', 'legs'")
    equipment: Optional[str] = Field(default=None, description="Equipment required. Example: 'barbell', 'dumbbell', 'bodyweight'")
    difficulty: Optional[str] = Field(default=None, description="Exercise difficulty level. Example: 'beginner', 'intermediate', 'advanced'")
    movement_pattern: Optional[str] = Field(default=None, description="Movement pattern. Example: 'push', 'pull', 'hinge', 'squat'")
    limit: int = Field(default=20, ge=1, le=100, description="Maximum number of results to return. Default is 20.")

    def to_query(self) -> dict:
        return self.model_dump(exclude_none=True)
