"""
Printable units handed back to the host.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from dialogue_engine.core.model import Model
from dialogue_engine.dialog.resource import LineData, LineType, Mutation


class DialogueResponse(Model):
    """A single response option."""
    prompt: str = ""
    next_id: str = Field(default="", alias="nextId")

    @classmethod
    def from_line_data(cls, data: LineData) -> DialogueResponse:
        return cls(prompt=data.text, next_id=data.next_id)


class DialogueLine(Model):
    """
    A line of dialogue, a response set, or a pending mutation.

    Attributes:
        type: Kind of the node this unit was built from
        next_id: Key to request after this unit ("" ends the dialogue)
        character: Speaker name (dialogue only)
        dialogue: Interpolated text (dialogue only)
        mutation: Mutation to run (mutation only, never seen by the host)
        responses: Response options that follow this unit
    """
    type: LineType = LineType.DIALOGUE
    next_id: str = Field(default="", alias="nextId")
    character: Optional[str] = None
    dialogue: Optional[str] = None
    mutation: Optional[Mutation] = None
    responses: list[DialogueResponse] = Field(default_factory=list)

    @classmethod
    def from_line_data(cls, data: LineData) -> DialogueLine:
        """Build a unit from a node, copying only the fields its type uses."""
        line = cls(type=data.type, next_id=data.next_id)

        if data.type == LineType.DIALOGUE:
            line.character = data.character
            line.dialogue = data.text
        elif data.type == LineType.MUTATION:
            line.mutation = data.mutation

        return line

    @property
    def has_responses(self) -> bool:
        return len(self.responses) > 0
