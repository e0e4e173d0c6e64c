"""
Model base classes for data-only dialogue types.

Models are pure data containers with NO traversal logic.
All logic lives in the evaluator and the manager. This separation makes:
- Resource documents trivial to validate
- Boundary types trivial to serialize
- Testing easier

Usage:
    class Speaker(ResourceModel):
        name: str
        portrait: str | None = None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """
    Base class for boundary types handed back to the host.

    Uses Pydantic for:
    - Automatic validation
    - JSON serialization (camelCase aliases where the host expects them)
    - Type hints
    - Default values
    """

    model_config = ConfigDict(
        # Allow arbitrary types (mutation payloads, host values)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Accept both field names and aliases
        populate_by_name=True,
        extra='forbid',
    )


class ResourceModel(BaseModel):
    """
    Base class for compiled resource data.

    Resource models are read-only once validated. Fields the compiler
    emits but the runtime does not understand are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
    )
