"""Progress analysis, evaluation and sharing tools."""

import logging

from shared.toolkit import Ok, RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings
from spotr.schemas.analyses import (
    EvaluationCreate,
    ProgressAnalysisCreate,
    ShareLinkCreate,
    format_timeframe,
    score_to_rating,
    summarize_body_composition,
    top_improvement,
)
from spotr.tools.common import record_id, web_link

logger = logging.getLogger(__name__)

STORE_ANALYSIS_DESCRIPTION = """Store an analysis of a client's progress on a program.

Before using this tool, read the client's progress data (client://{client_id}/programs/{program_id}/progress) and the program itself.

The analysis includes:
- strength_progress: for key exercises, initial and current performance, percentage improvement and a recommendation
- body_composition_changes: optional metric deltas (weight, body_fat, chest, waist, hips, arms, legs, other)
- adherence: planned vs completed sessions, adherence_rate (0-100) and known factors
- overall_assessment: 2-3 paragraphs
- actionable_recommendations: 1-5 specific next steps"""

EVALUATE_PROGRAM_DESCRIPTION = """Store an evaluation of a program or blueprint.

Score each aspect from 0 to 100: overall, structure_and_progression, exercise_selection, volume_and_intensity, recovery, specificity and practicality.
List at least one strength, plus weaknesses and improvement suggestions.

When evaluating suitability for a specific client, set evaluation_purpose to 'client_suitability', pass client_id and write a suitability_conclusion."""


def register_analysis_tools(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    @builder.tool(
        "store-progress-analysis",
        title="Store progress analysis",
        description=STORE_ANALYSIS_DESCRIPTION,
        input_model=ProgressAnalysisCreate,
        action="storing progress analysis",
    )
    async def store_progress_analysis(params: ProgressAnalysisCreate) -> Ok:
        analysis = await backend.create_progress_analysis(params.model_dump(mode="json"))
        analysis_id = record_id(analysis)
        logger.info(f"Stored progress analysis {analysis_id} for client {params.client_id}")

        adherence = params.adherence
        lines = [
            f"Stored progress analysis for client {params.client_id} on program {params.program_id}.",
            "",
            f"Timeframe: {format_timeframe(params.timeframe)}",
            f"Adherence: {adherence.adherence_rate:g}% "
            f"({adherence.completed_sessions}/{adherence.planned_sessions} sessions)",
            f"Top improvement: {top_improvement(params.strength_progress)}",
            f"Body composition: {summarize_body_composition(params.body_composition_changes)}",
        ]
        if analysis_id:
            link = web_link(
                settings, "clients", params.client_id, "programs", params.program_id, "analysis", analysis_id
            )
            lines.extend(["", f"View the full analysis at {link}"])
        return Ok("\n".join(lines), analysis)

    @builder.tool(
        "evaluate-program",
        title="Evaluate program",
        description=EVALUATE_PROGRAM_DESCRIPTION,
        input_model=EvaluationCreate,
        action="storing evaluation",
    )
    async def evaluate_program(params: EvaluationCreate) -> Ok:
        evaluation = await backend.create_evaluation(params.model_dump(mode="json"))
        evaluation_id = record_id(evaluation)
        logger.info(f"Stored evaluation {evaluation_id} for {params.entity_type.value} {params.entity_id}")

        overall = params.scores.overall
        lines = [
            f"Stored evaluation of {params.entity_type.value} {params.entity_id}.",
            "",
            f"Purpose: {params.evaluation_purpose.value.replace('_', ' ')}",
            f"Overall score: {overall:g}/100 ({score_to_rating(overall)})",
            f"Strengths: {len(params.strengths)}, weaknesses: {len(params.weaknesses)}, "
            f"suggestions: {len(params.improvement_suggestions)}",
        ]
        if params.client_id and params.suitability_conclusion:
            lines.append(f"Suitability for client {params.client_id}: {params.suitability_conclusion}")
        if evaluation_id:
            lines.extend(["", f"View the evaluation at {web_link(settings, 'evaluations', evaluation_id)}"])
        return Ok("\n".join(lines), evaluation)

    @builder.tool(
        "generate-share-link",
        title="Generate share link",
        description=(
            "Generate a link for sharing a program, blueprint, analysis or evaluation with a client or coach.\n"
            "The link expires after expires_in_days (default 30)."
        ),
        input_model=ShareLinkCreate,
        action="generating share link",
    )
    async def generate_share_link(params: ShareLinkCreate) -> Ok:
        share = await backend.create_share_link(params.model_dump(mode="json"))
        url = None
        if isinstance(share, dict):
            url = share.get("share_url") or share.get("url")
        message = (
            f"Share link for {params.entity_type.value} {params.entity_id} created, "
            f"expires in {params.expires_in_days} days"
        )
        if url:
            message += f": {url}"
        return Ok(message + ".", share)
