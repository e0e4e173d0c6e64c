"""
Core runtime plumbing.

Exports:
- Model, ResourceModel: pydantic base classes
- EventBus, Event, DialogueEvent: Event system
- DialogueConfig: Manager configuration
- DialogueError and its subclasses: Error kinds
"""

from dialogue_engine.core.model import Model, ResourceModel
from dialogue_engine.core.events import EventBus, Event, DialogueEvent
from dialogue_engine.core.config import DialogueConfig
from dialogue_engine.core.errors import (
    DialogueError,
    MissingResourceError,
    ExportError,
    UnknownStatePropertyError,
    UnknownStateFunctionError,
    DialogueInProgressError,
)

__all__ = [
    # Models
    "Model",
    "ResourceModel",
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    # Config
    "DialogueConfig",
    # Errors
    "DialogueError",
    "MissingResourceError",
    "ExportError",
    "UnknownStatePropertyError",
    "UnknownStateFunctionError",
    "DialogueInProgressError",
]
