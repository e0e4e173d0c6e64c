"""
Dialogue runtime exceptions.

Every error the runtime raises on purpose derives from DialogueError and
from the builtin it most resembles, so hosts can catch either.
"""


class DialogueError(Exception):
    """Base class for dialogue runtime errors."""


class MissingResourceError(DialogueError, RuntimeError):
    """Neither an override nor a default resource was supplied."""

    def __init__(self, message: str = "No dialogue resource provided"):
        super().__init__(message)


class ExportError(DialogueError, ValueError):
    """A condition, mutation, or expression was not exported properly."""

    def __init__(self, kind: str = "expression"):
        self.kind = kind
        super().__init__(f"This {kind} was not exported properly")


class UnknownStatePropertyError(DialogueError, AttributeError):
    """Strict mode: no game state defines the property."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not a property on any game state")


class UnknownStateFunctionError(DialogueError, AttributeError):
    """Strict mode: no game state exposes the method."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is not a method on any game state")


class DialogueInProgressError(DialogueError, RuntimeError):
    """A traversal call was made while another one is still suspended."""

    def __init__(self, message: str = "A dialogue line is already being resolved"):
        super().__init__(message)
