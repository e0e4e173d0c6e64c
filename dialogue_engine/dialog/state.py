"""
State binding - maps script-level names onto host game state.

The host supplies an ordered list of game states. Each entry is either a
StateProvider, a plain mapping, or any object whose public attributes and
methods should be visible to dialogue scripts. Lookups scan the list in
order and the first state that knows a name wins.

In strict mode an unknown name is an error. In lenient mode reads fall
back to an internal shadow map (or a default guessed from the type hint)
and writes land in the shadow map.
"""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence

from dialogue_engine.core.errors import UnknownStateFunctionError, UnknownStatePropertyError

QUOTED_PATTERN = re.compile(r'^".*"$', re.DOTALL)
INTEGER_PATTERN = re.compile(r'^-?\d+$')
FLOAT_PATTERN = re.compile(r'^-?(?:\d+\.\d*|\.\d+)(?:[eE][-+]?\d+)?$')

TRUE_WORDS = ("true", "yes")
FALSE_WORDS = ("false", "no")


def type_hint_for(value: Any) -> str:
    """Name the runtime type of a value the way lenient defaults expect."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "boolean"


class StateProvider(ABC):
    """
    Capability interface for one source of game state.

    Properties are readable values; methods are callables that may return
    an awaitable.
    """

    @abstractmethod
    def has_property(self, name: str) -> bool:
        ...

    @abstractmethod
    def get_property(self, name: str) -> Any:
        ...

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None:
        ...

    @abstractmethod
    def has_method(self, name: str) -> bool:
        ...

    @abstractmethod
    def call_method(self, name: str, *args: Any) -> Any:
        ...


class ObjectStateProvider(StateProvider):
    """
    Exposes a host object's public attributes and methods.

    Writes go through the object's own set(name, value) method when it
    defines one, otherwise plain attribute assignment is used.
    """

    def __init__(self, target: Any):
        self.target = target

    def _public_attr(self, name: str) -> Any:
        if not name or name.startswith("_"):
            return None
        return getattr(self.target, name, None)

    def has_property(self, name: str) -> bool:
        if not name or name.startswith("_") or not hasattr(self.target, name):
            return False
        return not inspect.isroutine(getattr(self.target, name))

    def get_property(self, name: str) -> Any:
        return getattr(self.target, name)

    def set_property(self, name: str, value: Any) -> None:
        setter = getattr(self.target, "set", None)
        if inspect.isroutine(setter):
            setter(name, value)
        else:
            setattr(self.target, name, value)

    def has_method(self, name: str) -> bool:
        return callable(self._public_attr(name))

    def call_method(self, name: str, *args: Any) -> Any:
        return getattr(self.target, name)(*args)


class MappingStateProvider(StateProvider):
    """Exposes a dict of values and an optional dict of callables."""

    def __init__(
        self,
        values: Optional[dict[str, Any]] = None,
        methods: Optional[dict[str, Callable[..., Any]]] = None,
    ):
        self.values = values if values is not None else {}
        self.methods = methods if methods is not None else {}

    def has_property(self, name: str) -> bool:
        return name in self.values

    def get_property(self, name: str) -> Any:
        return self.values[name]

    def set_property(self, name: str, value: Any) -> None:
        self.values[name] = value

    def has_method(self, name: str) -> bool:
        return callable(self.methods.get(name))

    def call_method(self, name: str, *args: Any) -> Any:
        return self.methods[name](*args)


def as_state_provider(state: Any) -> StateProvider:
    """Wrap a host game state in the matching provider."""
    if isinstance(state, StateProvider):
        return state
    if isinstance(state, dict):
        return MappingStateProvider(state)
    return ObjectStateProvider(state)


class StateBinder:
    """
    Resolves names and calls against an ordered list of game states.

    Attributes:
        game_states: Ordered list of host states (first match wins)
        is_strict: Raise on unknown names instead of defaulting
    """

    def __init__(self, game_states: Optional[list[Any]] = None, is_strict: bool = True):
        self.game_states: list[Any] = game_states if game_states is not None else []
        self.is_strict = is_strict

        # Lenient-mode storage for names no game state defines
        self._internal_state: dict[str, Any] = {}

    @property
    def shadow(self) -> Mapping[str, Any]:
        """Read-only view of values written in lenient mode."""
        return MappingProxyType(self._internal_state)

    def providers(self) -> list[StateProvider]:
        """Get the current game states as providers, in lookup order."""
        return [as_state_provider(state) for state in self.game_states]

    def find_property(self, name: str) -> Optional[StateProvider]:
        for provider in self.providers():
            if provider.has_property(name):
                return provider
        return None

    def find_method(self, name: str) -> Optional[StateProvider]:
        for provider in self.providers():
            if provider.has_method(name):
                return provider
        return None

    def get_state_value(self, token: Any, type_hint: str = "boolean") -> Any:
        """
        Resolve a raw token to a value.

        Literals are recognised in this order: quoted string, boolean word,
        integer, float. Anything else is a variable name.

        Args:
            token: Raw token text (numbers and booleans pass through)
            type_hint: "number", "string" or "boolean"; picks the lenient default

        Returns:
            The resolved value

        Raises:
            UnknownStatePropertyError: Strict mode and no state defines the name
        """
        if not isinstance(token, str):
            return token

        if QUOTED_PATTERN.fullmatch(token):
            return token[1:-1]

        lowered = token.lower()
        if lowered in TRUE_WORDS:
            return True
        if lowered in FALSE_WORDS:
            return False
        if INTEGER_PATTERN.fullmatch(token):
            return int(token)
        if FLOAT_PATTERN.fullmatch(token):
            return float(token)

        # It's a variable
        provider = self.find_property(token)
        if provider is not None:
            return provider.get_property(token)

        if self.is_strict:
            raise UnknownStatePropertyError(token)

        if token in self._internal_state:
            return self._internal_state[token]

        # Guess an initial value based on the type hint
        if type_hint == "number":
            return 0.0 if "." in token else 0
        if type_hint == "string":
            return ""
        return False

    def set_state_value(self, name: str, value: Any) -> None:
        """
        Write a value to the first game state that defines the name.

        Raises:
            UnknownStatePropertyError: Strict mode and no state defines the name
        """
        provider = self.find_property(name)
        if provider is not None:
            provider.set_property(name, value)
            return

        if self.is_strict:
            raise UnknownStatePropertyError(name)

        self._internal_state[name] = value

    def parse_args(self, args: Optional[Sequence[Any]]) -> list[Any]:
        """Resolve a list of raw argument tokens."""
        return [self.get_state_value(arg) for arg in args or ()]

    async def get_state_function_value(self, name: str, args: Optional[Sequence[Any]] = None) -> Any:
        """
        Call the first game state method with a matching name.

        Arguments are resolved before the lookup. Awaitable results are
        awaited.

        Raises:
            UnknownStateFunctionError: Strict mode and no state has the method
        """
        values = self.parse_args(args)

        provider = self.find_method(name)
        if provider is None:
            if self.is_strict:
                raise UnknownStateFunctionError(name)
            return False

        result = provider.call_method(name, *values)
        if inspect.isawaitable(result):
            result = await result
        return result

    def reset(self) -> None:
        """Forget every value written in lenient mode."""
        self._internal_state.clear()
