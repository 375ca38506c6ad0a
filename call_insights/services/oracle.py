"""
Language model client used to score calls and compare cohorts.

The rest of the service only sees the narrow ``ScoringOracle`` capability:

    score(transcript)        -> Scorecard
    compare(set_a, set_b)    -> ComparisonResult

``OpenAIOracle`` implements it over the OpenAI chat completions API. Tests
substitute a fake that returns canned objects without network access.

Replies are treated as untrusted free text. ``extract_json_object`` pulls the
JSON object out of any surrounding prose or markdown fencing; a failure at
extraction, parsing or shape validation is reported as a single FormatError.
Calls are single-shot: the SDK's own retry loop is disabled.
"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from call_insights.core.config import Settings
from call_insights.core.errors import FormatError, UpstreamError
from call_insights.models import CohortData, ComparisonResult, Scorecard
from call_insights.prompts import build_comparison_prompt, build_scorecard_prompt


logger = logging.getLogger(__name__)

SCORECARD_PARSE_ERROR = "Failed to parse AI analysis response"
COMPARISON_PARSE_ERROR = "Failed to parse AI comparison response"


# =============================================================================
# JSON Extraction
# =============================================================================

def extract_json_object(text: Optional[str], error_message: str) -> Dict[str, Any]:
    """
    Extract and parse the JSON object embedded in a model reply.

    The span from the first '{' to the last '}' is tried first, which covers
    replies wrapped in ```json fences or framed by prose. If that span does
    not parse (for example a trailing remark containing a brace), the first
    complete object starting at each '{' is tried in turn.

    Args:
        text: Raw reply text.
        error_message: Message for the FormatError raised on failure.

    Returns:
        The parsed JSON object.

    Raises:
        FormatError: If no JSON object can be extracted and parsed.
    """
    if not text:
        raise FormatError(error_message)

    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end < start:
        logger.error(f"No JSON object found in model reply ({len(text)} chars)")
        raise FormatError(error_message)

    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        parsed = _scan_for_object(text, start)

    if not isinstance(parsed, dict):
        logger.error("Model reply did not contain a parsable JSON object")
        logger.debug(f"Raw reply: {text}")
        raise FormatError(error_message)

    return parsed


def _scan_for_object(text: str, start: int) -> Optional[Dict[str, Any]]:
    """Return the first object that decodes cleanly from some '{' onward."""
    decoder = json.JSONDecoder()
    position = start
    while position != -1:
        try:
            candidate, _ = decoder.raw_decode(text, position)
        except json.JSONDecodeError:
            position = text.find('{', position + 1)
            continue
        if isinstance(candidate, dict):
            return candidate
        position = text.find('{', position + 1)
    return None


# =============================================================================
# Oracle Capability
# =============================================================================

class ScoringOracle(Protocol):
    """The two questions the service asks the language model."""

    async def score(self, transcript: str) -> Scorecard:
        ...

    async def compare(self, set_a: CohortData, set_b: CohortData) -> ComparisonResult:
        ...


class OpenAIOracle:
    """
    ScoringOracle backed by the OpenAI chat completions API.

    One prompt, one request, one reply per question. Upstream failures
    (connection errors, timeouts, non-2xx statuses) raise UpstreamError;
    unusable replies raise FormatError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        analysis_temperature: float = 0.3,
        comparison_temperature: float = 0.2,
        max_tokens: int = 4000,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
        )
        self.model = model
        self.analysis_temperature = analysis_temperature
        self.comparison_temperature = comparison_temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["OpenAIOracle"]:
        """Build from settings, or None when no API key is configured."""
        if not settings.oracle_configured:
            return None
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            analysis_temperature=settings.analysis_temperature,
            comparison_temperature=settings.comparison_temperature,
            max_tokens=settings.oracle_max_tokens,
        )

    async def _complete(self, prompt: str, temperature: float) -> str:
        """Send one user prompt and return the reply text."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: status={e.status_code} message={e.message}")
            raise UpstreamError(
                f"OpenAI API error: {e.status_code} - {e.message}",
                status=e.status_code,
            ) from e
        except openai.APIError as e:
            logger.error(f"OpenAI API request failed: {e}")
            raise UpstreamError(f"OpenAI API request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def score(self, transcript: str) -> Scorecard:
        """Score one transcript."""
        reply = await self._complete(
            build_scorecard_prompt(transcript),
            self.analysis_temperature,
        )
        data = extract_json_object(reply, SCORECARD_PARSE_ERROR)
        try:
            return Scorecard.model_validate(data)
        except ValidationError as e:
            logger.error(f"Scorecard failed validation: {e}")
            raise FormatError(SCORECARD_PARSE_ERROR) from e

    async def compare(self, set_a: CohortData, set_b: CohortData) -> ComparisonResult:
        """Compare the two cohorts."""
        reply = await self._complete(
            build_comparison_prompt(set_a, set_b),
            self.comparison_temperature,
        )
        data = extract_json_object(reply, COMPARISON_PARSE_ERROR)
        try:
            return ComparisonResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"Comparison failed validation: {e}")
            raise FormatError(COMPARISON_PARSE_ERROR) from e

    async def aclose(self) -> None:
        """Release the HTTP connection pool held by the client."""
        await self.client.close()


# =============================================================================
# Shared Instances
# =============================================================================

# One oracle per distinct configuration, reused across requests
_oracles: Dict[tuple, OpenAIOracle] = {}


def get_shared_oracle(settings: Settings) -> Optional[OpenAIOracle]:
    """
    Return the long-lived oracle for these settings, creating it on first use.

    Returns None when no API key is configured.
    """
    if not settings.oracle_configured:
        return None

    key = (
        settings.openai_api_key,
        settings.openai_model,
        settings.openai_base_url,
        settings.analysis_temperature,
        settings.comparison_temperature,
        settings.oracle_max_tokens,
    )
    oracle = _oracles.get(key)
    if oracle is None:
        oracle = OpenAIOracle.from_settings(settings)
        _oracles[key] = oracle
        logger.info(f"OpenAI client created for model {settings.openai_model}")
    return oracle


async def close_oracles() -> None:
    """Close every shared oracle's client. Idempotent."""
    oracles = list(_oracles.values())
    _oracles.clear()
    for oracle in oracles:
        await oracle.aclose()
