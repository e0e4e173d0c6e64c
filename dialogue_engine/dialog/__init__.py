"""
Dialog module - runtime for compiled dialogue resources.

Provides:
- Resource models (titles, lines, conditions, mutations)
- State binding against host game states
- Condition, mutation and arithmetic evaluation
- Variable substitution
- Graph traversal with conditional branching
"""

from dialogue_engine.dialog.resource import (
    DialogueResource,
    LineData,
    LineType,
    ExpressionType,
    Condition,
    Mutation,
    Replacement,
)
from dialogue_engine.dialog.lines import DialogueLine, DialogueResponse
from dialogue_engine.dialog.state import (
    StateProvider,
    ObjectStateProvider,
    MappingStateProvider,
    StateBinder,
)
from dialogue_engine.dialog.expressions import ExpressionEvaluator
from dialogue_engine.dialog.interpolation import interpolate
from dialogue_engine.dialog.manager import DialogueManager

__all__ = [
    "DialogueResource",
    "LineData",
    "LineType",
    "ExpressionType",
    "Condition",
    "Mutation",
    "Replacement",
    "DialogueLine",
    "DialogueResponse",
    "StateProvider",
    "ObjectStateProvider",
    "MappingStateProvider",
    "StateBinder",
    "ExpressionEvaluator",
    "interpolate",
    "DialogueManager",
]
