"""
Per-Call Analysis Service

Scores one transcript with the language model and writes the scorecard onto
its call record.

Flow:
    1. Fail fast when no model credential is configured
    2. Confirm the record exists (no model call for an unknown id)
    3. oracle.score(transcript) -> Scorecard
    4. One UPDATE writes every analysis field plus analyzed_at

Any failure before step 4 leaves the record unanalyzed. There are no retries.
"""

import logging
from typing import Optional

from call_insights.core.errors import ConfigurationError
from call_insights.models import DatasetType, Scorecard
from call_insights.services.call_records import get_call, save_analysis
from call_insights.services.oracle import ScoringOracle


logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "OPENAI_API_KEY is not configured"


async def analyze_call(
    oracle: Optional[ScoringOracle],
    call_id: str,
    transcript: str,
    dataset_type: DatasetType,
) -> Scorecard:
    """
    Analyze one call and persist the result.

    Args:
        oracle: Language model capability, or None when not configured.
        call_id: Record to analyze.
        transcript: Transcript text to score.
        dataset_type: Cohort of the record (used for logging).

    Returns:
        The Scorecard written to the record.

    Raises:
        ConfigurationError: No model credential configured.
        RecordNotFoundError: Unknown call id.
        UpstreamError: Model unreachable or returned an error status.
        FormatError: Model reply was not a usable scorecard.
        StorageError: The record could not be read or updated.
    """
    if oracle is None:
        raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)

    logger.info(f"Analyzing call {call_id} for dataset {DatasetType(dataset_type).value}")

    await get_call(call_id)

    scorecard = await oracle.score(transcript)

    await save_analysis(call_id, scorecard)

    logger.info(
        f"Successfully analyzed call {call_id}: "
        f"likelihood={scorecard.conversion_likelihood} score={scorecard.conversion_score}"
    )
    return scorecard
