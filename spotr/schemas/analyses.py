"""Progress analysis, evaluation and share-link schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Timeframe(str, Enum):
    ONE_WEEK = "1_week"
    TWO_WEEKS = "2_weeks"
    FOUR_WEEKS = "4_weeks"
    EIGHT_WEEKS = "8_weeks"
    ENTIRE_PROGRAM = "entire_program"


TIMEFRAME_LABELS = {
    Timeframe.ONE_WEEK: "1 week",
    Timeframe.TWO_WEEKS: "2 weeks",
    Timeframe.FOUR_WEEKS: "4 weeks",
    Timeframe.EIGHT_WEEKS: "8 weeks",
    Timeframe.ENTIRE_PROGRAM: "Entire program duration",
}


class BodyMetric(str, Enum):
    WEIGHT = "weight"
    BODY_FAT = "body_fat"
    CHEST = "chest"
    WAIST = "waist"
    HIPS = "hips"
    ARMS = "arms"
    LEGS = "legs"
    OTHER = "other"


class StrengthProgress(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exercise_name: str = Field(min_length=1, description="Name of the exercise being analyzed")
    initial_performance: str = Field(description="Performance at the start of the timeframe. Example: '100kg x 5 reps'")
    current_performance: str = Field(description="Performance at the end of the timeframe. Example: '110kg x 5 reps'")
    percentage_improvement: Optional[float] = Field(default=None, description="Percentage improvement, if calculable")
    recommendation: str = Field(description="Recommendation for this exercise going forward")


class BodyCompositionChange(BaseModel):
    model_config = ConfigDict(extra="forbid")

    metric: BodyMetric = Field(description="Body composition metric being tracked")
    initial_value: float = Field(description="Value at the start of the timeframe")
    current_value: float = Field(description="Value at the end of the timeframe")
    unit: str = Field(description="Unit of measurement. Example: 'kg', 'cm', '%'")
    change: float = Field(description="Numeric change (positive or negative)")
    assessment: str = Field(description="Assessment of this change relative to goals")


class Adherence(BaseModel):
    model_config = ConfigDict(extra="forbid")

    planned_sessions: int = Field(ge=0, description="Number of sessions planned in this timeframe")
    completed_sessions: int = Field(ge=0, description="Number of sessions actually completed")
    adherence_rate: float = Field(ge=0, le=100, description="Adherence percentage (completed_sessions/planned_sessions x 100)")
    factors: Optional[list[str]] = Field(default=None, description="Factors affecting adherence, if known")


class ProgressAnalysisCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: str = Field(min_length=1, description="ID of the client whose progress is being analyzed. Example: 'client-123'")
    program_id: str = Field(min_length=1, description="ID of the program being analyzed. Example: 'program-456'")
    timeframe: Timeframe = Field(description="Timeframe for the analysis. Example: '4_weeks' for a monthly analysis")
    strength_progress: list[StrengthProgress] = Field(min_length=1, description="Analysis of strength progress for key exercises")
    body_composition_changes: Optional[list[BodyCompositionChange]] = Field(
        default=None, description="Analysis of body composition changes, if relevant"
    )
    adherence: Adherence = Field(description="Analysis of client's adherence to the program")
    overall_assessment: str = Field(description="Overall assessment of the client's progress in 2-3 paragraphs")
    actionable_recommendations: list[str] = Field(
        min_length=1, max_length=5, description="1-5 specific, actionable recommendations for the client going forward"
    )


class EntityType(str, Enum):
    PROGRAM = "program"
    BLUEPRINT = "blueprint"


class EvaluationPurpose(str, Enum):
    CLIENT_SUITABILITY = "client_suitability"
    GENERAL_QUALITY = "general_quality"
    SCIENTIFIC_VALIDITY = "scientific_validity"
    COACH_REVIEW = "coach_review"
    PEER_REVIEW = "peer_review"


def _score(description: str):
    return Field(ge=0, le=100, description=description)


class EvaluationScores(BaseModel):
    model_config = ConfigDict(extra="forbid")

    overall: float = _score("Overall score from 0-100")
    structure_and_progression: float = _score("Score for program structure and progression strategy")
    exercise_selection: float = _score("Score for exercise selection and balance")
    volume_and_intensity: float = _score("Score for appropriate volume and intensity")
    recovery: float = _score("Score for recovery management")
    specificity: float = _score("Score for specificity to stated goals")
    practicality: float = _score("Score for practicality and feasibility")


class EvaluationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_type: EntityType = Field(description="Type of entity to evaluate")
    entity_id: str = Field(min_length=1, description="ID of the program or blueprint to evaluate. Example: 'program-123'")
    evaluation_purpose: EvaluationPurpose = Field(description="Purpose of the evaluation. Example: 'client_suitability'")
    client_id: Optional[str] = Field(default=None, description="ID of the client, if evaluating suitability for a specific client")
    scores: EvaluationScores = Field(description="Scores for different aspects of the program/blueprint")
    strengths: list[str] = Field(min_length=1, description="Key strengths of the program/blueprint")
    weaknesses: list[str] = Field(description="Areas that could be improved")
    improvement_suggestions: list[str] = Field(description="Specific suggestions for improvement")
    suitability_conclusion: Optional[str] = Field(
        default=None, description="Conclusion about suitability for the client (only if client_id provided)"
    )


class ShareableType(str, Enum):
    PROGRAM = "program"
    BLUEPRINT = "blueprint"
    ANALYSIS = "analysis"
    EVALUATION = "evaluation"


class ShareLinkCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_type: ShareableType = Field(description="Type of content to share. Example: 'program'")
    entity_id: str = Field(min_length=1, description="ID of the entity to share. Example: 'program-123'")
    expires_in_days: int = Field(default=30, ge=1, le=365, description="Number of days until the link expires. Default is 30 days.")


def format_timeframe(timeframe: Timeframe) -> str:
    return TIMEFRAME_LABELS.get(timeframe, str(timeframe))


def top_improvement(progress: list[StrengthProgress]) -> str:
    """Describe the exercise with the largest percentage improvement."""
    if not progress:
        return "No exercises tracked"
    top = max(
        progress,
        key=lambda p: float("-inf") if p.percentage_improvement is None else p.percentage_improvement,
    )
    if top.percentage_improvement is not None:
        return f"{top.exercise_name} ({top.percentage_improvement:+.1f}%)"
    return f"{top.exercise_name} (improved from {top.initial_performance} to {top.current_performance})"


def summarize_body_composition(changes: Optional[list[BodyCompositionChange]]) -> str:
    if not changes:
        return "No data available"

    by_metric = {c.metric: c for c in changes}
    weight = by_metric.get(BodyMetric.WEIGHT)
    if weight:
        direction = "gained" if weight.change > 0 else "lost"
        return f"{direction} {abs(weight.change):g}{weight.unit} overall"

    body_fat = by_metric.get(BodyMetric.BODY_FAT)
    if body_fat:
        direction = "increased" if body_fat.change > 0 else "decreased"
        return f"body fat {direction} by {abs(body_fat.change):g}{body_fat.unit}"

    return f"{len(changes)} metrics tracked"


def score_to_rating(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Very Good"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Satisfactory"
    if score >= 50:
        return "Needs Improvement"
    return "Unsatisfactory"
