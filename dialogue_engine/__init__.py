"""
Dialogue Engine

An embeddable runtime for compiled, graph-structured dialogue.

Quick Start:
    from dialogue_engine import DialogueConfig, DialogueManager, DialogueResource

    resource = DialogueResource.model_validate_json(compiled_json)
    manager = DialogueManager(DialogueConfig(game_states=[player]))

    line = await manager.get_next_dialogue_line("start", resource)
"""

__version__ = "0.1.0"

# Re-export the public API for convenience
from dialogue_engine.core import (
    DialogueConfig,
    EventBus,
    Event,
    DialogueEvent,
    DialogueError,
    MissingResourceError,
    ExportError,
    UnknownStatePropertyError,
    UnknownStateFunctionError,
    DialogueInProgressError,
)
from dialogue_engine.dialog import (
    DialogueManager,
    DialogueResource,
    DialogueLine,
    DialogueResponse,
    LineType,
    StateProvider,
    ObjectStateProvider,
    MappingStateProvider,
)

__all__ = [
    # Manager
    "DialogueManager",
    "DialogueConfig",
    # Resource and output
    "DialogueResource",
    "DialogueLine",
    "DialogueResponse",
    "LineType",
    # State
    "StateProvider",
    "ObjectStateProvider",
    "MappingStateProvider",
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    # Errors
    "DialogueError",
    "MissingResourceError",
    "ExportError",
    "UnknownStatePropertyError",
    "UnknownStateFunctionError",
    "DialogueInProgressError",
]
