"""
Compiled dialogue resource - titles plus keyed lines.

The resource is produced by the dialogue compiler and consumed read-only:

```
{
  "titles": {"start": "1"},
  "lines": {
    "1": {"type": "dialogue", "next_id": "2", "character": "Nathan", "text": "Hi"},
    "2": {"type": "response", "next_id": "", "responses": ["3", "4"]},
    ...
  }
}
```
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from dialogue_engine.core.model import ResourceModel


class LineType(str, Enum):
    """Discriminator for dialogue graph nodes."""
    CONDITION = "condition"
    DIALOGUE = "dialogue"
    MUTATION = "mutation"
    RESPONSE = "response"
    GOTO = "goto"


class ExpressionType(str, Enum):
    """Kind of one side of a condition, mutation, or replacement."""
    FUNCTION = "function"
    SCALAR = "scalar"
    ERROR = "error"


class Expression(ResourceModel):
    """
    A two-sided expression.

    Attributes:
        lhs_type: Kind of the left hand side
        lhs_function: Function name when lhs is a call
        lhs_args: Raw argument tokens when lhs is a call
        lhs: Scalar value (variable name, literal, or token list)
        operator: Optional operator joining both sides
        rhs_type: Kind of the right hand side
        rhs_function: Function name when rhs is a call
        rhs_args: Raw argument tokens when rhs is a call
        rhs: Token list (or bare scalar) for the right hand side
    """
    lhs_type: ExpressionType = ExpressionType.SCALAR
    lhs_function: Optional[str] = None
    lhs_args: list[Any] = Field(default_factory=list)
    lhs: Any = None
    operator: Optional[str] = None
    rhs_type: Optional[ExpressionType] = None
    rhs_function: Optional[str] = None
    rhs_args: list[Any] = Field(default_factory=list)
    rhs: Any = None


class Condition(Expression):
    """Gates a branch or a response."""


class Mutation(Expression):
    """Changes game state or runs a method."""


class Replacement(ResourceModel):
    """A literal substring of dialogue text to swap for a computed value."""
    type: ExpressionType = ExpressionType.SCALAR
    value: Any = None
    value_in_text: str = ""
    function: Optional[str] = None
    args: list[Any] = Field(default_factory=list)


class LineData(ResourceModel):
    """A single node in the dialogue graph."""
    type: LineType
    next_id: str = ""
    next_conditional_id: str = ""
    next_id_after: str = ""
    character: str = ""
    text: str = ""
    condition: Optional[Condition] = None
    mutation: Optional[Mutation] = None
    replacements: list[Replacement] = Field(default_factory=list)
    responses: list[str] = Field(default_factory=list)

    @field_validator(
        "next_id", "next_conditional_id", "next_id_after", "character", "text",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("replacements", "responses", mode="before")
    @classmethod
    def none_as_no_items(cls, value: Any) -> Any:
        return [] if value is None else value


class DialogueResource(ResourceModel):
    """A compiled dialogue document."""
    titles: dict[str, str] = Field(default_factory=dict)
    lines: dict[str, LineData] = Field(default_factory=dict)

    def resolve_key(self, key: Optional[str]) -> str:
        """Map a title to its line key, or return the key unchanged."""
        key = key or ""
        return self.titles.get(key, key)

    def get(self, key: Optional[str]) -> Optional[LineData]:
        """Get line data by key (None marks the end of the graph)."""
        if not key:
            return None
        return self.lines.get(key)
