"""Program schemas: days, blocks and exercises for create and update requests."""

from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_serializer,
    model_validator,
)


class FormatType(str, Enum):
    STANDARD = "standard"
    CIRCUIT = "circuit"
    AMRAP = "amrap"
    EMOM = "emom"
    TABATA = "tabata"
    COMPLEX = "complex"


class _OpenParameters(BaseModel):
    """Known keys are type-checked, unknown keys are kept as given."""

    model_config = ConfigDict(extra="allow")

    @model_serializer(mode="wrap")
    def _drop_nulls(self, handler):
        return {k: v for k, v in handler(self).items() if v is not None}


class TimedFormatParameters(_OpenParameters):
    """Parameters for emom and amrap blocks."""

    time: float = Field(gt=0, description="Total block duration. Example: 12")
    time_units: Optional[str] = Field(default=None, description="Units for time. Example: 'minutes'")


class CircuitFormatParameters(_OpenParameters):
    rounds: int = Field(ge=1, description="Number of rounds through the exercises. Example: 3")


class TabataFormatParameters(_OpenParameters):
    work: float = Field(gt=0, description="Work interval. Example: 20")
    rest: float = Field(ge=0, description="Rest interval. Example: 10")
    rounds: int = Field(ge=1, description="Number of work/rest rounds. Example: 8")
    time_units: Optional[str] = Field(default=None, description="Units for work and rest. Example: 'seconds'")


FORMAT_PARAMETER_MODELS: dict[FormatType, type[BaseModel]] = {
    FormatType.EMOM: TimedFormatParameters,
    FormatType.AMRAP: TimedFormatParameters,
    FormatType.CIRCUIT: CircuitFormatParameters,
    FormatType.TABATA: TabataFormatParameters,
}


def validate_format_parameters(
    format_type: Optional[FormatType], parameters: Optional[dict[str, Any]]
) -> Optional[dict[str, Any]]:
    """
    Check a block's format_parameters against the shape its format_type needs.

    standard and complex blocks (and blocks without a format type) take an
    open map. Raises ValueError naming the offending key.
    """
    if parameters is None or format_type is None:
        return parameters
    model = FORMAT_PARAMETER_MODELS.get(format_type)
    if model is None:
        return parameters
    try:
        return model.model_validate(parameters).model_dump()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValueError(
            f"format_parameters for a '{format_type.value}' block are invalid ({problems})"
        ) from None


class ModifiableParameters(_OpenParameters):
    """Sets, reps, time, distance and rest for one exercise. Extra keys are allowed."""

    sets: Optional[int] = Field(default=None, ge=1, description="Number of sets. Example: 3")
    reps: Optional[Union[int, str]] = Field(
        default=None, description="Reps per set, a number or a range. Example: 10 or '8-10'"
    )
    time: Optional[float] = Field(default=None, gt=0, description="Duration per set. Example: 30")
    time_units: Optional[str] = Field(default=None, description="Units for time. Example: 's'")
    distance: Optional[float] = Field(default=None, gt=0, description="Distance per set. Example: 400")
    distance_units: Optional[str] = Field(default=None, description="Units for distance. Example: 'm'")
    rest: Optional[float] = Field(default=None, ge=0, description="Rest between sets. Example: 90")
    rest_units: Optional[str] = Field(default=None, description="Units for rest. Example: 's'")

    @field_validator("reps")
    @classmethod
    def _reps_not_negative(cls, value):
        if isinstance(value, int) and value < 0:
            raise ValueError("reps must not be negative")
        return value


def _ensure_unique(items: Optional[list], key: str, label: str) -> None:
    if not items:
        return
    seen = set()
    for item in items:
        value = getattr(item, key)
        if value in seen:
            raise ValueError(f"duplicate {key} {value} in {label}; each {key} must be unique")
        seen.add(value)


# CREATE

EXERCISE_DESCRIPTION = (
    "Exercises are ordered by order_index and prescribe the movement. "
    "Movements can be modified in controlled ways by modifiable_parameters."
)
BLOCK_DESCRIPTION = (
    "Training blocks are ordered by order_index and consist of exercises. "
    "Blocks are formatted by their format type and parameters."
)
DAY_DESCRIPTION = "Training days are ordered by day_number and consist of logical blocks."
PROGRAM_DESCRIPTION = "The users program - broken down into days, blocks and exercises"


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": EXERCISE_DESCRIPTION})

    order_index: int = Field(ge=0, description="Position of the exercise within its block, starting at 0")
    exercise_name: str = Field(min_length=1, description="Movement name, preferably from the movement library. Example: 'Bench Press'")
    video_url: Optional[str] = Field(default=None, description="Demo video URL, if any")
    notes: Optional[str] = Field(default=None, description="Technique cues or special instructions")
    modifiable_parameters: Optional[ModifiableParameters] = Field(
        default=None, description="Sets/reps/time/distance/rest prescription. Example: {'sets': 3, 'reps': '8-10'}"
    )


class BlockCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": BLOCK_DESCRIPTION})

    order_index: int = Field(ge=0, description="Position of the block within its day, starting at 0")
    name: Optional[str] = Field(default=None, description="Block name. Example: 'Speed Work'")
    description: Optional[str] = Field(default=None, description="What the block is for")
    format_type: Optional[FormatType] = Field(default=None, description="How the exercises are performed")
    format_parameters: Optional[dict[str, Any]] = Field(
        default=None, description="Parameters for the format type. Example for circuit: {'rounds': 3}"
    )
    exercises: list[ExerciseCreate] = Field(default_factory=list, description="Exercises in this block")

    @model_validator(mode="after")
    def _check_block(self):
        _ensure_unique(self.exercises, "order_index", "block exercises")
        if self.format_parameters is not None:
            self.format_parameters = validate_format_parameters(self.format_type, self.format_parameters)
        return self


class DayCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": DAY_DESCRIPTION})

    day_number: int = Field(ge=1, description="Ordering key of the day, starting at 1. Need not be contiguous")
    name: Optional[str] = Field(default=None, description="Day name. Example: 'Upper Body Push'")
    description: Optional[str] = Field(default=None, description="What the day focuses on")
    blocks: list[BlockCreate] = Field(default_factory=list, description="Blocks in this day")

    @model_validator(mode="after")
    def _check_blocks(self):
        _ensure_unique(self.blocks, "order_index", "day blocks")
        return self


class ProgramCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": PROGRAM_DESCRIPTION})

    name: str = Field(min_length=1, description="Program name. Example: '8-Week Strength'")
    description: Optional[str] = Field(default=None, description="Short overview of the program")
    days: list[DayCreate] = Field(description="Training days of the program")

    @model_validator(mode="after")
    def _check_days(self):
        _ensure_unique(self.days, "day_number", "program days")
        return self


# UPDATE


class _PartialUpdate(BaseModel):
    """Every field optional; fields listed in non_nullable may be omitted but not nulled."""

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null; omit it to leave it unchanged")
        return self


class ExerciseUpdate(_PartialUpdate):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": EXERCISE_DESCRIPTION})
    non_nullable = ("exercise_name",)

    order_index: int = Field(ge=0, description="Position key used to match the exercise to update")
    exercise_name: Optional[str] = Field(default=None, min_length=1, description="New movement name")
    video_url: Optional[str] = Field(default=None, description="New demo video URL")
    notes: Optional[str] = Field(default=None, description="New notes")
    modifiable_parameters: Optional[ModifiableParameters] = Field(
        default=None, description="New sets/reps/time/distance/rest prescription"
    )


class BlockUpdate(_PartialUpdate):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": BLOCK_DESCRIPTION})
    non_nullable = ("exercises",)

    order_index: int = Field(ge=0, description="Position key used to match the block to update")
    name: Optional[str] = Field(default=None, description="New block name")
    description: Optional[str] = Field(default=None, description="New block description")
    format_type: Optional[FormatType] = Field(default=None, description="New format type")
    format_parameters: Optional[dict[str, Any]] = Field(default=None, description="New format parameters")
    exercises: Optional[list[ExerciseUpdate]] = Field(
        default=None, description="Exercises to update or insert, matched by order_index"
    )

    @model_validator(mode="after")
    def _check_block(self):
        _ensure_unique(self.exercises, "order_index", "block exercises")
        if self.format_parameters is not None:
            self.format_parameters = validate_format_parameters(self.format_type, self.format_parameters)
        return self


class DayUpdate(_PartialUpdate):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": DAY_DESCRIPTION})
    non_nullable = ("blocks",)

    day_number: int = Field(ge=1, description="Position key used to match the day to update")
    name: Optional[str] = Field(default=None, description="New day name")
    description: Optional[str] = Field(default=None, description="New day description")
    blocks: Optional[list[BlockUpdate]] = Field(
        default=None, description="Blocks to update or insert, matched by order_index"
    )

    @model_validator(mode="after")
    def _check_blocks(self):
        _ensure_unique(self.blocks, "order_index", "day blocks")
        return self


class ProgramUpdate(_PartialUpdate):
    model_config = ConfigDict(extra="forbid", json_schema_extra={"description": PROGRAM_DESCRIPTION})
    non_nullable = ("name", "days")

    name: Optional[str] = Field(default=None, min_length=1, description="New program name")
    description: Optional[str] = Field(default=None, description="New program description")
    days: Optional[list[DayUpdate]] = Field(
        default=None, description="Days to update or insert, matched by day_number"
    )

    @model_validator(mode="after")
    def _check_days(self):
        if not self.model_fields_set:
            raise ValueError("an update must include at least one field")
        _ensure_unique(self.days, "day_number", "program days")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Only the fields the caller named, so the backend leaves the rest alone."""
        return self.model_dump(mode="json", exclude_unset=True)


# TOOL INPUTS


class ProgramIdInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    program_id: str = Field(min_length=1, description="ID of the program. Example: 'program-123'")


class CreateProgramInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    program: ProgramCreate = Field(description="The complete program to create")


class UpdateProgramInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    program_id: str = Field(min_length=1, description="ID of the program to update. Example: 'program-123'")
    update: ProgramUpdate = Field(description="Fields and sub-entities to change")
