"""
Problem Clarifier LLM Module

Provides the external-service path: a provider abstraction, the Perplexity
provider, and the clarification adapter that prompts the service and
parses its JSON reply.

Key Components:
- LLMProvider: Abstract base class for chat-completion providers
- LLMResponse: Standardized response type
- ServiceClarifier / generate_via_service: Prompt + parse adapter
- ServiceError, ServiceHttpError, MalformedResponseError: Error types
"""

from .base import (
    LLMProvider,
    LLMResponse,
    MalformedResponseError,
    MissingApiKeyError,
    ServiceError,
    ServiceHttpError,
    TokenUsage,
)
from .clarification import (
    SERVICE_TEMPERATURE,
    SYSTEM_PROMPT,
    ServiceClarifier,
    build_messages,
    generate_via_service,
    parse_clarification,
    strip_code_fences,
)
from .providers import PerplexityProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "TokenUsage",
    "PerplexityProvider",
    "ServiceClarifier",
    "generate_via_service",
    "build_messages",
    "parse_clarification",
    "strip_code_fences",
    "SYSTEM_PROMPT",
    "SERVICE_TEMPERATURE",
    "ServiceError",
    "ServiceHttpError",
    "MalformedResponseError",
    "MissingApiKeyError",
]
