"""
LLM Provider Base Classes

Defines the abstract interface for chat-completion providers, the
standardized response type, and the service error hierarchy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TokenUsage:
    """
    Token usage statistics from an LLM response.

    Attributes:
        input_tokens: Number of tokens in the input/prompt
        output_tokens: Number of tokens in the output/response
        total_tokens: Total tokens used (input + output)
    """
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class LLMResponse:
    """
    Standardized response from an LLM provider.

    Attributes:
        content: Text content of the first completion
        model: Model identifier that generated this response
        usage: Token usage statistics
        metadata: Additional provider-specific metadata (citations, ids)
    """
    content: str
    model: str = ""
    usage: TokenUsage | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "content": self.content,
            "model": self.model,
            "usage": self.usage.to_dict() if self.usage else None,
            "metadata": self.metadata,
        }


class LLMProvider(ABC):
    """
    Abstract base class for chat-completion providers.

    Subclasses must implement:
    - complete(): Send one completion request and return the response
    - get_name(): Return the provider name
    - get_default_model(): Return the default model for this provider
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        **kwargs: Any
    ):
        """
        Initialize the LLM provider.

        Args:
            api_key: API key for authentication
            model: Model identifier to use (uses default if not specified)
            base_url: Endpoint URL for API requests
            **kwargs: Additional provider-specific configuration
        """
        self.api_key = api_key
        self._model = model
        self.base_url = base_url
        self.config = kwargs

    @property
    def model(self) -> str:
        """Get the model identifier to use."""
        return self._model or self.get_default_model()

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float = 0.7,
        **kwargs: Any
    ) -> LLMResponse:
        """
        Send a completion request to the LLM.

        Args:
            messages: List of message dictionaries with 'role' and 'content' keys
            temperature: Sampling temperature
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse containing the first completion

        Raises:
            ServiceHttpError: If the service answers with a non-success status
            MalformedResponseError: If the response envelope cannot be read
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get the name of this provider."""
        pass

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the default model for this provider."""
        pass

    def validate_config(self) -> bool:
        """
        Validate the provider configuration.

        Returns:
            True if configuration is valid

        Raises:
            MissingApiKeyError: If no API key is configured
        """
        if not self.api_key:
            raise MissingApiKeyError(
                f"{self.get_name()} API key is required",
                provider=self.get_name(),
            )
        return True


class ServiceError(Exception):
    """Base exception for external-service errors."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ):
        """
        Initialize service error.

        Args:
            message: Error message
            provider: Name of the provider that raised the error
            status_code: HTTP status code (if applicable)
            body: Raw response text (if available)
        """
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.body = body


class ServiceHttpError(ServiceError):
    """Raised when the service answers with a non-success HTTP status."""
    pass


class MalformedResponseError(ServiceError):
    """Raised when a reply cannot be parsed into a clarification."""
    pass


class MissingApiKeyError(ServiceError):
    """Raised when the service is called without an API key."""
    pass
