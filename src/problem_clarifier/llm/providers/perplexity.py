"""
Perplexity LLM Provider

Implementation of LLMProvider for Perplexity's chat-completions API.
Uses plain HTTP requests (aiohttp) against the OpenAI-compatible endpoint.
"""

import json
import logging
import os
from typing import Any

import aiohttp

from ..base import (
    LLMProvider,
    LLMResponse,
    MalformedResponseError,
    ServiceHttpError,
    TokenUsage,
)

logger = logging.getLogger(__name__)


class PerplexityProvider(LLMProvider):
    """
    LLM provider for Perplexity's Sonar models.

    Sends exactly one request per call: no retries and no timeout beyond
    the aiohttp default. Cancel the awaiting task to abort a slow request.

    Example:
        provider = PerplexityProvider(api_key="pplx-...")
        response = await provider.complete([
            {"role": "user", "content": "Hello!"}
        ], temperature=0.2)

        # Reuse a caller-owned session
        async with aiohttp.ClientSession() as session:
            provider = PerplexityProvider(api_key="pplx-...", session=session)
    """

    API_URL = "https://api.perplexity.ai/chat/completions"

    MODELS = [
        "sonar",
        "sonar-pro",
        "sonar-reasoning",
        "sonar-reasoning-pro",
    ]

    DEFAULT_MODEL = "sonar-pro"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
        **kwargs: Any
    ):
        """
        Initialize the Perplexity provider.

        Args:
            api_key: Perplexity API key (uses PERPLEXITY_API_KEY env var if not provided)
            model: Model identifier (default: sonar-pro)
            base_url: Full chat-completions URL (default: API_URL)
            session: Caller-owned aiohttp session; never closed by the provider
            **kwargs: Additional configuration
        """
        api_key = api_key or os.environ.get("PERPLEXITY_API_KEY")
        base_url = base_url or self.API_URL
        super().__init__(api_key=api_key, model=model, base_url=base_url, **kwargs)
        self._session = session

    def build_headers(self) -> dict[str, str]:
        """Build request headers."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, messages: list[dict[str, Any]], temperature: float) -> dict[str, Any]:
        """Build the JSON request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": msg.get("role", "user"), "content": msg.get("content", "")}
                for msg in messages
            ],
            "temperature": temperature,
        }

    async def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float = 0.7,
        **kwargs: Any
    ) -> LLMResponse:
        """
        Send a completion request to Perplexity.

        Args:
            messages: List of message dictionaries
            temperature: Sampling temperature
            **kwargs: Ignored

        Returns:
            LLMResponse with the first completion's text

        Raises:
            MissingApiKeyError: If no API key is configured
            ServiceHttpError: On a non-2xx response
            MalformedResponseError: If the response envelope is unreadable
        """
        self.validate_config()
        payload = self.build_payload(messages, temperature)

        if self._session is not None:
            return await self._post(self._session, payload)

        async with aiohttp.ClientSession() as session:
            return await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: dict[str, Any]) -> LLMResponse:
        """Issue the request and parse the envelope."""
        logger.debug("POST %s (model=%s)", self.base_url, payload["model"])

        async with session.post(
            self.base_url,
            json=payload,
            headers=self.build_headers(),
        ) as response:
            if not 200 <= response.status < 300:
                error_text = await response.text()
                raise ServiceHttpError(
                    f"Perplexity API error ({response.status}): {error_text}",
                    provider="perplexity",
                    status_code=response.status,
                    body=error_text,
                )

            try:
                data = await response.json(content_type=None)
            except json.JSONDecodeError as e:
                raise MalformedResponseError(
                    f"Perplexity returned a non-JSON response: {e}",
                    provider="perplexity",
                    status_code=response.status,
                )

        return self._parse_response(data)

    def _parse_response(self, data: Any) -> LLMResponse:
        """Parse the chat-completions response envelope."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise MalformedResponseError(
                "Perplexity response has no completion content",
                provider="perplexity",
                body=json.dumps(data)[:500] if data is not None else None,
            )

        if content is not None and not isinstance(content, str):
            raise MalformedResponseError(
                f"Perplexity completion content is not text (got {type(content).__name__})",
                provider="perplexity",
                body=json.dumps(content)[:500],
            )

        usage = None
        usage_data = data.get("usage")
        if usage_data:
            usage = TokenUsage(
                input_tokens=usage_data.get("prompt_tokens", 0),
                output_tokens=usage_data.get("completion_tokens", 0),
                total_tokens=usage_data.get("total_tokens", 0),
            )

        metadata = {}
        if data.get("citations"):
            metadata["citations"] = data["citations"]

        return LLMResponse(
            content=content or "",
            model=data.get("model", self.model),
            usage=usage,
            metadata=metadata,
        )

    def get_name(self) -> str:
        """Get the provider name."""
        return "perplexity"

    def get_default_model(self) -> str:
        """Get the default model."""
        return self.DEFAULT_MODEL

    def get_supported_models(self) -> list[str]:
        """Get supported models."""
        return self.MODELS.copy()
