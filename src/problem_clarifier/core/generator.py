"""
Heuristic Clarification Generator

Builds a ClarificationResult from authored templates without any model
inference. The flow is:

1. Classify the input into a topic (TopicClassifier)
2. Select prose for each field (standard or alternate wording by mode)
3. Order each list pool (authored order, or shuffled in variation mode)
4. Fill empty success metrics / next steps from the shared defaults

Standard mode is fully deterministic. Variation mode only randomizes list
order; the random source is injectable so tests can seed it.
"""

import logging
import random
from collections.abc import Sequence

from .models import ClarificationResult, GenerationMode
from .templates import (
    DEFAULT_NEXT_STEPS,
    DEFAULT_SUCCESS_METRICS,
    Variant,
    get_template,
)
from .topic_classifier import Classification, TopicClassifier

logger = logging.getLogger(__name__)


class ClarificationGenerator:
    """
    Template-driven clarification generator.

    Example:
        generator = ClarificationGenerator()
        result = generator.generate("I keep losing track of my tasks")

        # Reproducible variation output
        generator = ClarificationGenerator(rng=random.Random(42))
        result = generator.generate(text, GenerationMode.VARIATION)
    """

    def __init__(
        self,
        classifier: TopicClassifier | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the generator.

        Args:
            classifier: Topic classifier (a default one is created if omitted)
            rng: Random source for variation-mode shuffling (unseeded if omitted)
        """
        self.classifier = classifier or TopicClassifier()
        self.rng = rng or random.Random()

    def pick(self, variant: Variant, mode: GenerationMode) -> str:
        """Select the prose text for a mode."""
        if mode is GenerationMode.VARIATION and variant.variation is not None:
            return variant.variation
        return variant.standard

    def shuffle(self, pool: Sequence[str], mode: GenerationMode) -> list[str]:
        """Return the pool in authored order, or a random permutation in variation mode."""
        items = list(pool)
        if mode is GenerationMode.VARIATION:
            self.rng.shuffle(items)
        return items

    def generate(
        self,
        text: str,
        mode: GenerationMode | str = GenerationMode.STANDARD,
    ) -> ClarificationResult:
        """
        Generate a clarification for a problem description.

        Args:
            text: Free-form problem description
            mode: Generation mode or its string value

        Returns:
            ClarificationResult with every list field populated
        """
        mode = GenerationMode.parse(mode)
        classification = self.classifier.classify(text)
        return self.build(classification, mode)

    def build(self, classification: Classification, mode: GenerationMode) -> ClarificationResult:
        """Assemble the record for an already classified input."""
        template = get_template(classification.topic)
        logger.debug("Assembling %s template in %s mode", template.topic.value, mode.value)

        result = ClarificationResult(
            problem_statement=self.pick(template.problem_statement, mode),
            problem_context=self.pick(template.problem_context, mode),
            target_users=self.pick(template.target_users, mode),
            user_pain_points=self.shuffle(template.user_pain_points, mode),
            solution_direction=self.pick(template.solution_direction, mode),
            key_features=self.shuffle(template.key_features, mode),
            assumptions_risks=self.pick(template.assumptions_risks, mode),
            success_metrics=self.shuffle(template.success_metrics, mode),
            technical_considerations=self.pick(template.technical_considerations, mode),
            next_steps=self.shuffle(template.next_steps, mode),
        )

        # Only literally empty lists are filled; short lists are left alone
        if not result.next_steps:
            result.next_steps = self.shuffle(DEFAULT_NEXT_STEPS, mode)
        if not result.success_metrics:
            result.success_metrics = self.shuffle(DEFAULT_SUCCESS_METRICS, mode)

        return result


def generate(text: str, mode: GenerationMode | str = GenerationMode.STANDARD) -> ClarificationResult:
    """
    Generate a clarification with a fresh default generator.

    Each call builds its own generator, so callers never share random state.

    Args:
        text: Free-form problem description
        mode: "standard" or "variation"

    Returns:
        ClarificationResult
    """
    return ClarificationGenerator().generate(text, mode)
