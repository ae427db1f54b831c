"""
Service-backed clarification.

Forwards the problem description to a chat-completion provider with a fixed
instruction prompt and parses the JSON reply into a ClarificationResult.
There is no retry and no schema validation: missing keys stay empty and
extra keys are carried through in ``ClarificationResult.extra``.
"""

import json
import logging
import re
from typing import Any

import aiohttp

from ..core.models import ClarificationResult
from .base import LLMProvider, MalformedResponseError, ServiceError
from .providers.perplexity import PerplexityProvider

logger = logging.getLogger(__name__)

# Low temperature keeps the phrasing and structure stable between calls
SERVICE_TEMPERATURE = 0.2

SYSTEM_PROMPT = """You are an expert product manager and problem solver. Your goal is to clarify a messy problem description into a structured, professional breakdown.

You MUST output ONLY valid JSON.
The JSON object must have the following keys:
- problemStatement: A refined, detailed problem statement (>300 characters).
- targetUsers: A specific description of who is affected.
- userPainPoints: An array of strings describing specific frustrations.
- solutionDirection: A high-level proposal for how to solve it.
- keyFeatures: An array of strings listing core features.
- assumptionsRisks: A text block describing assumptions and potential risks.
- successMetrics: An array of strings listing specific metrics to measure success.
- technicalConsiderations: A text block regarding technical implementation details.
- nextSteps: An array of strings listing immediate next steps.

Do not include "problemContext"."""

USER_PROMPT_TEMPLATE = 'Analyze this problem: "{problem}"'

_FENCE_PATTERN = re.compile(r"```json|```")


def build_messages(problem: str) -> list[dict[str, str]]:
    """Build the system + user message pair for a problem description."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT_TEMPLATE.format(problem=problem)},
    ]


def strip_code_fences(content: str) -> str:
    """Remove every ```json and ``` marker and trim surrounding whitespace."""
    return _FENCE_PATTERN.sub("", content).strip()


def parse_clarification(content: str) -> ClarificationResult:
    """
    Parse a completion's text into a ClarificationResult.

    Args:
        content: Raw completion text, possibly wrapped in code fences

    Returns:
        ClarificationResult (leniently merged, no field validation)

    Raises:
        MalformedResponseError: If the text is not a JSON object
    """
    cleaned = strip_code_fences(content)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Reply is not valid JSON: {e}",
            provider="perplexity",
            body=content,
        )

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Reply is JSON but not an object (got {type(data).__name__})",
            provider="perplexity",
            body=content,
        )

    return ClarificationResult.from_dict(data)


class ServiceClarifier:
    """
    Clarifies problems through an external chat-completion provider.

    Example:
        clarifier = ServiceClarifier(PerplexityProvider(api_key="pplx-..."))
        result = await clarifier.clarify("Our onboarding takes too long")
    """

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    async def clarify(self, problem: str) -> ClarificationResult:
        """
        Send one request and parse the reply.

        Raises:
            ServiceHttpError: On a non-2xx response (no retry)
            MalformedResponseError: If the reply cannot be parsed
        """
        try:
            response = await self.provider.complete(
                build_messages(problem),
                temperature=SERVICE_TEMPERATURE,
            )
            return parse_clarification(response.content)
        except ServiceError as e:
            logger.warning("Clarification via %s failed: %s", self.provider.get_name(), e)
            raise


async def generate_via_service(
    api_key: str,
    problem: str,
    *,
    model: str | None = None,
    base_url: str | None = None,
    session: aiohttp.ClientSession | None = None,
    **kwargs: Any
) -> ClarificationResult:
    """
    Clarify a problem with the Perplexity API.

    Args:
        api_key: Perplexity API key
        problem: Free-form problem description
        model: Model override (default: sonar-pro)
        base_url: Endpoint override
        session: Caller-owned aiohttp session

    Returns:
        ClarificationResult parsed from the reply

    Raises:
        MissingApiKeyError: If api_key is empty
        ServiceHttpError: On a non-2xx response
        MalformedResponseError: If the reply is not a JSON object
    """
    provider = PerplexityProvider(
        api_key=api_key or None,
        model=model,
        base_url=base_url,
        session=session,
        **kwargs,
    )
    # An explicit empty key must not silently pick up the environment
    if not api_key:
        provider.api_key = None
    return await ServiceClarifier(provider).clarify(problem)
