"""
Settings data models for Problem Clarifier.

The only routing switch is the presence of a service API key; everything
here tunes how each path behaves once chosen.
"""

from dataclasses import dataclass, field

from ..core.models import GenerationMode

OUTPUT_FORMATS = ("rich", "markdown", "json")


@dataclass
class Settings:
    """
    Global settings for Problem Clarifier.

    Attributes:
        provider: Service provider name (also the keyring user name).
        model: Chat model requested from the provider.
        api_url: Chat-completions endpoint.
        default_mode: Generation mode used when none is requested.
        output_format: How the CLI renders results ("rich", "markdown", "json").
    """

    provider: str = "perplexity"
    model: str = "sonar-pro"
    api_url: str = "https://api.perplexity.ai/chat/completions"
    default_mode: GenerationMode = field(default=GenerationMode.STANDARD)
    output_format: str = "rich"
