import os
import sys
import pytest

# Ensure dialogue_engine can be imported without installing
sys.path.append(os.getcwd())


class PlayerState:
    """A host game state with properties, an explicit setter and methods."""

    def __init__(self):
        self.gold = 10
        self.name = "Coco"
        self.has_met_nathan = False
        self.inventory = ["sword", "shield"]
        self.writes = []

    def set(self, prop, value):
        self.writes.append((prop, value))
        setattr(self, prop, value)

    def has_item(self, item):
        return item in self.inventory

    def double(self, value):
        return value * 2


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from dialogue_engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def player():
    return PlayerState()


@pytest.fixture
def make_resource():
    """Build a DialogueResource from plain JSON-shaped data."""
    from dialogue_engine.dialog.resource import DialogueResource

    def _make(lines, titles=None):
        return DialogueResource.model_validate({
            "titles": titles or {},
            "lines": lines,
        })

    return _make


@pytest.fixture
def manager(player):
    """Strict manager bound to a single player state."""
    from dialogue_engine.core.config import DialogueConfig
    from dialogue_engine.dialog.manager import DialogueManager
    return DialogueManager(DialogueConfig(game_states=[player]))


@pytest.fixture
def lenient_manager():
    """Lenient manager with no game states at all."""
    from dialogue_engine.core.config import DialogueConfig
    from dialogue_engine.dialog.manager import DialogueManager
    return DialogueManager(DialogueConfig(is_strict=False))
