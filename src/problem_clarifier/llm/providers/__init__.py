"""
LLM Provider Implementations

Contains the concrete provider used by the service path:
- PerplexityProvider: Perplexity chat-completions API over aiohttp
"""

from .perplexity import PerplexityProvider

__all__ = ["PerplexityProvider"]
