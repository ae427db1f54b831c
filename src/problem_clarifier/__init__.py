"""
Problem Clarifier - turn messy ideas into clear problems

Takes a free-form problem description and produces a structured
clarification: problem statement, target users, pain points, solution
direction, features, risks, metrics, and next steps.

Two generation paths:
    - Local: keyword classification plus authored templates (no inference)
    - Service: the Perplexity chat-completions API asked for the same record as JSON

Example usage:
    from problem_clarifier import generate, generate_via_service

    result = generate("I need to organize my tasks and schedule better")
    print(result.problem_statement)

    result = await generate_via_service(api_key, "Our onboarding takes too long")
"""

__version__ = "1.0.0"

from .core import (
    ClarificationGenerator,
    ClarificationResult,
    GenerationMode,
    Topic,
    TopicClassifier,
    generate,
)
from .llm import (
    MalformedResponseError,
    PerplexityProvider,
    ServiceClarifier,
    ServiceError,
    ServiceHttpError,
    generate_via_service,
)
from .settings import Settings, SettingsStorage

__all__ = [
    "__version__",
    # Local path
    "ClarificationGenerator",
    "ClarificationResult",
    "GenerationMode",
    "Topic",
    "TopicClassifier",
    "generate",
    # Service path
    "PerplexityProvider",
    "ServiceClarifier",
    "generate_via_service",
    "ServiceError",
    "ServiceHttpError",
    "MalformedResponseError",
    # Settings
    "Settings",
    "SettingsStorage",
]
