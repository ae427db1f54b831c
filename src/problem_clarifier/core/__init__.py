"""
Problem Clarifier Core Module

Contains the local (inference-free) clarification path:
- ClarificationResult / GenerationMode: the shared record and mode flag
- TopicClassifier: ordered keyword rules, first match wins
- Templates: authored prose variants and list pools per topic
- ClarificationGenerator: assembles a record from the chosen template
"""

from .generator import ClarificationGenerator, generate
from .models import ClarificationResult, GenerationMode
from .templates import BranchTemplate, Variant, get_template
from .topic_classifier import Classification, Signal, Topic, TopicClassifier, classify_topic

__all__ = [
    "ClarificationResult",
    "GenerationMode",
    "Topic",
    "Signal",
    "Classification",
    "TopicClassifier",
    "classify_topic",
    "Variant",
    "BranchTemplate",
    "get_template",
    "ClarificationGenerator",
    "generate",
]
