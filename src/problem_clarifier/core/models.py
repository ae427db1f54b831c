"""
Clarification Result Models

Defines the structured record produced by both generation paths:
- GenerationMode: standard (deterministic) or variation (alternate wording)
- ClarificationResult: the flat clarification record

The record is serialized with camelCase keys so replies from the external
chat-completion service map onto it directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GenerationMode(Enum):
    """Content selection mode for the template generator."""
    STANDARD = "standard"     # Authored order, primary wording
    VARIATION = "variation"   # Alternate wording, shuffled lists

    @classmethod
    def parse(cls, value: "GenerationMode | str") -> "GenerationMode":
        """
        Coerce a mode name or member into a GenerationMode.

        Args:
            value: A GenerationMode or its (case-insensitive) string value

        Returns:
            Matching GenerationMode

        Raises:
            ValueError: If the value does not name a mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown generation mode '{value}' (expected one of: {valid})")


# (attribute, wire key) pairs in display order
_PROSE_FIELDS = (
    ("problem_statement", "problemStatement"),
    ("problem_context", "problemContext"),
    ("target_users", "targetUsers"),
    ("solution_direction", "solutionDirection"),
    ("assumptions_risks", "assumptionsRisks"),
    ("technical_considerations", "technicalConsiderations"),
)

_LIST_FIELDS = (
    ("user_pain_points", "userPainPoints"),
    ("key_features", "keyFeatures"),
    ("success_metrics", "successMetrics"),
    ("next_steps", "nextSteps"),
)

_FIELD_ORDER = (
    "problem_statement",
    "problem_context",
    "target_users",
    "user_pain_points",
    "solution_direction",
    "key_features",
    "assumptions_risks",
    "success_metrics",
    "technical_considerations",
    "next_steps",
)

_WIRE_KEYS = dict(_PROSE_FIELDS + _LIST_FIELDS)

_SECTION_TITLES = {
    "problem_statement": "Problem Statement",
    "problem_context": "Problem Context",
    "target_users": "Target Users",
    "user_pain_points": "User Pain Points",
    "solution_direction": "Solution Direction",
    "key_features": "Key Features",
    "assumptions_risks": "Assumptions & Risks",
    "success_metrics": "Success Metrics",
    "technical_considerations": "Technical Considerations",
    "next_steps": "Next Steps",
}


@dataclass
class ClarificationResult:
    """
    Structured clarification of a free-form problem description.

    Attributes:
        problem_statement: Refined statement of the problem
        problem_context: Legacy background paragraph (may be empty)
        target_users: Who is affected
        user_pain_points: Specific frustrations
        solution_direction: High-level proposal
        key_features: Core features of the proposed solution
        assumptions_risks: Assumptions and risks
        success_metrics: How success would be measured
        technical_considerations: Implementation notes
        next_steps: Immediate next steps
        extra: Unrecognized keys carried by a service reply
    """
    problem_statement: str = ""
    problem_context: str = ""
    target_users: str = ""
    user_pain_points: list[str] = field(default_factory=list)
    solution_direction: str = ""
    key_features: list[str] = field(default_factory=list)
    assumptions_risks: str = ""
    success_metrics: list[str] = field(default_factory=list)
    technical_considerations: str = ""
    next_steps: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def prose_fields() -> list[str]:
        """Attribute names of the single-text fields."""
        return [name for name, _ in _PROSE_FIELDS]

    @staticmethod
    def list_fields() -> list[str]:
        """Attribute names of the list-valued fields."""
        return [name for name, _ in _LIST_FIELDS]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary (extra keys included)."""
        data: dict[str, Any] = {}
        for name in _FIELD_ORDER:
            value = getattr(self, name)
            data[_WIRE_KEYS[name]] = list(value) if isinstance(value, list) else value
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClarificationResult":
        """
        Leniently build a result from a loosely-typed dictionary.

        Missing keys keep their empty defaults, unknown keys are kept in
        ``extra``. Both camelCase and snake_case keys are accepted. A scalar
        given for a list field becomes a one-element list; ``None`` is
        treated as missing. Values are kept as given, so structured items
        (objects, numbers) pass through to ``to_dict`` unchanged.

        Args:
            data: Parsed JSON object

        Returns:
            ClarificationResult
        """
        known = {}
        aliases = {}
        for name, key in _PROSE_FIELDS + _LIST_FIELDS:
            aliases[key] = name
            aliases[name] = name

        extra: dict[str, Any] = {}
        for key, value in data.items():
            name = aliases.get(key)
            if name is None:
                extra[key] = value
                continue
            if value is None:
                continue
            known[name] = value

        result = cls(extra=extra)
        for name, _ in _PROSE_FIELDS:
            if name in known:
                value = known[name]
                setattr(result, name, value)
        for name, _ in _LIST_FIELDS:
            if name in known:
                value = known[name]
                if isinstance(value, (list, tuple)):
                    setattr(result, name, list(value))
                else:
                    setattr(result, name, [value])
        return result

    def to_markdown(self, title: str = "Problem Clarification") -> str:
        """
        Render the record as a Markdown document.

        Empty sections are omitted.
        """
        lines = [f"# {title}", ""]
        for name in _FIELD_ORDER:
            value = getattr(self, name)
            if not value:
                continue
            lines.append(f"## {_SECTION_TITLES[name]}")
            lines.append("")
            if isinstance(value, list):
                lines.extend(f"- {item}" for item in value)
            else:
                lines.append(str(value))
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"

    def is_complete(self) -> bool:
        """Check that every list field is non-empty."""
        return all(getattr(self, name) for name in self.list_fields())
