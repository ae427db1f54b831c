"""
Topic Classifier for Problem Clarifier

Classifies a free-form problem description into one content branch:
- PRODUCTIVITY: task, time, and workflow management problems
- DATA_TIME: information that is slow to find
- ACCESS: barriers to reaching a resource or service
- COST: price as the blocker
- GENERIC: anything else

Every keyword signal is evaluated independently, then an ordered rule table
picks the first topic whose required signals are all present. The rule
order decides overlaps, so "hard to find information quickly" is DATA_TIME
even though the ACCESS signal also fires.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Topic(Enum):
    """Content branches for the template generator."""
    PRODUCTIVITY = "productivity"
    DATA_TIME = "data_time"
    ACCESS = "access"
    COST = "cost"
    GENERIC = "generic"


class Signal(Enum):
    """Independent keyword predicates."""
    PRODUCTIVITY = "productivity"
    DATA = "data"
    TIME = "time"
    COST = "cost"
    ACCESS = "access"


@dataclass
class Classification:
    """Result of topic classification."""
    topic: Topic
    signals: dict[Signal, bool] = field(default_factory=dict)
    matched_terms: dict[Signal, list[str]] = field(default_factory=dict)

    def has(self, signal: Signal) -> bool:
        """Check whether a signal fired."""
        return self.signals.get(signal, False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "topic": self.topic.value,
            "signals": {s.value: v for s, v in self.signals.items()},
            "matched_terms": {s.value: t for s, t in self.matched_terms.items()},
        }


class TopicClassifier:
    """
    Rule-based topic classifier over raw text.

    Patterns are case-insensitive substring searches, so "time" also
    matches "sometimes" and "store" matches "restore".
    """

    SIGNAL_PATTERNS = {
        Signal.PRODUCTIVITY: r"productiv|task|time|schedul|organiz|workflow",
        Signal.DATA: r"data|information|track|find|search|store",
        Signal.TIME: r"time|slow|fast|quick|efficient|waste",
        Signal.COST: r"expensive|cost|afford|price|cheap|budget",
        Signal.ACCESS: r"access|reach|available|hard to find",
    }

    # Evaluated top to bottom, first match wins. Do not reorder.
    RULES = [
        (Topic.PRODUCTIVITY, (Signal.PRODUCTIVITY,)),
        (Topic.DATA_TIME, (Signal.DATA, Signal.TIME)),
        (Topic.ACCESS, (Signal.ACCESS,)),
        (Topic.COST, (Signal.COST,)),
        (Topic.GENERIC, ()),
    ]

    def __init__(self):
        self._compiled = {
            signal: re.compile(pattern, re.IGNORECASE)
            for signal, pattern in self.SIGNAL_PATTERNS.items()
        }

    def detect_signals(self, text: str) -> dict[Signal, list[str]]:
        """
        Find matched keywords for every signal.

        Args:
            text: Raw problem description

        Returns:
            Mapping of signal to matched substrings (lowercased, in order)
        """
        return {
            signal: [m.group(0).lower() for m in regex.finditer(text)]
            for signal, regex in self._compiled.items()
        }

    def classify(self, text: str) -> Classification:
        """
        Classify text into a topic.

        Args:
            text: Raw problem description (may be empty)

        Returns:
            Classification with the chosen topic and every signal value
        """
        matched = self.detect_signals(text or "")
        signals = {signal: bool(terms) for signal, terms in matched.items()}

        topic = Topic.GENERIC
        for candidate, required in self.RULES:
            if all(signals[s] for s in required):
                topic = candidate
                break

        logger.debug(
            "Classified input as %s (signals: %s)",
            topic.value,
            ", ".join(s.value for s, on in signals.items() if on) or "none",
        )

        return Classification(
            topic=topic,
            signals=signals,
            matched_terms={s: t for s, t in matched.items() if t},
        )


def classify_topic(text: str) -> Topic:
    """Classify text with a default classifier and return only the topic."""
    return TopicClassifier().classify(text).topic
