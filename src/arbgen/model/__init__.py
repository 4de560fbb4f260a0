"""Message model: placeholders, type inference and per-key messages.

Python 3.13+.
"""

from .inference import InferredPlaceholders, PlaceholderUsageCollector, infer_placeholders
from .message import Message
from .placeholder import (
    PYTHON_TYPES,
    DeclaredPlaceholder,
    OptionalParameter,
    ResolvedPlaceholder,
    parse_placeholders,
)

__all__ = [
    "PYTHON_TYPES",
    "DeclaredPlaceholder",
    "InferredPlaceholders",
    "Message",
    "OptionalParameter",
    "PlaceholderUsageCollector",
    "ResolvedPlaceholder",
    "infer_placeholders",
    "parse_placeholders",
]
