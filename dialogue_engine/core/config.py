"""
Dialogue runtime configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from dialogue_engine.dialog.resource import DialogueResource


class DialogueConfig:
    """Configuration for a dialogue manager."""

    def __init__(
        self,
        is_strict: bool = True,
        game_states: Optional[list[Any]] = None,
        default_resource: Optional[DialogueResource] = None,
    ):
        self.is_strict = is_strict
        self.game_states = list(game_states) if game_states else []
        self.default_resource = default_resource
