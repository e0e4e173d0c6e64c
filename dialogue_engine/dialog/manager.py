"""
Dialogue manager - walks a compiled dialogue graph.

Given a key, the manager steps through conditions, gotos and mutations
until it reaches something printable: a line of dialogue or a set of
responses. Mutations run as they are passed and are never handed back.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from dialogue_engine.core.config import DialogueConfig
from dialogue_engine.core.errors import DialogueInProgressError, MissingResourceError
from dialogue_engine.core.events import DialogueEvent, Event, EventBus
from dialogue_engine.dialog.expressions import ExpressionEvaluator
from dialogue_engine.dialog.interpolation import interpolate
from dialogue_engine.dialog.lines import DialogueLine, DialogueResponse
from dialogue_engine.dialog.resource import Condition, DialogueResource, LineType, Mutation
from dialogue_engine.dialog.state import StateBinder

logger = logging.getLogger(__name__)


class _Listener:
    """Adapts a no-argument callback to an event handler."""

    def __init__(self, callback: Callable[[], Any]):
        self.callback = callback

    def __call__(self, event: Event) -> None:
        self.callback()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _Listener):
            return self.callback == other.callback
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.callback)


class DialogueManager:
    """
    Runs dialogue for one host session.

    Handles:
    - Resolving titles and line keys
    - Branching on conditions and following gotos
    - Running mutations in document order
    - Interpolating dialogue text
    - Attaching (and collapsing) response options
    - Notifying listeners when dialogue starts and finishes

    Usage:
        manager = DialogueManager(DialogueConfig(game_states=[player]))
        line = await manager.get_next_dialogue_line("start", resource)
        while line is not None:
            show(line)
            line = await manager.get_next_dialogue_line(pick_next_id(line), resource)
    """

    def __init__(
        self,
        config: Optional[DialogueConfig] = None,
        events: Optional[EventBus] = None,
    ):
        config = config or DialogueConfig()

        self.events = events or EventBus()
        self.default_resource: Optional[DialogueResource] = config.default_resource

        self.state = StateBinder(list(config.game_states), config.is_strict)
        self.evaluator = ExpressionEvaluator(self.state)

        self._is_running = False
        self._is_pending = False

    # Configuration

    @property
    def is_strict(self) -> bool:
        return self.state.is_strict

    @is_strict.setter
    def is_strict(self, value: bool) -> None:
        self.state.is_strict = value

    @property
    def game_states(self) -> list[Any]:
        return self.state.game_states

    @game_states.setter
    def game_states(self, value: list[Any]) -> None:
        self.state.game_states = value

    @property
    def is_running(self) -> bool:
        """Check if dialogue is currently running."""
        return self._is_running

    # Listeners

    def add_listener(self, kind: str | DialogueEvent, callback: Callable[[], Any]) -> None:
        """
        Add a listener for when dialogue has started or finished.

        Args:
            kind: "started" or "finished"
            callback: Called with no arguments
        """
        self.events.subscribe(DialogueEvent(kind), _Listener(callback))

    def remove_listener(self, kind: str | DialogueEvent, callback: Callable[[], Any]) -> None:
        """Remove a listener added with add_listener."""
        self.events.unsubscribe(DialogueEvent(kind), _Listener(callback))

    def _set_is_running(self, value: bool) -> None:
        """Set the running signal, notifying listeners only when it changes."""
        if value != self._is_running:
            self._is_running = value
            if value:
                logger.debug("Dialogue started")
                self.events.publish(DialogueEvent.STARTED)
            else:
                logger.debug("Dialogue finished")
                self.events.publish(DialogueEvent.FINISHED)

    def _end(self) -> None:
        """Finish the dialogue, starting it first if this call never did."""
        self._set_is_running(True)
        self._set_is_running(False)

    # Traversal

    async def get_next_dialogue_line(
        self,
        key: str,
        resource: Optional[DialogueResource] = None,
    ) -> Optional[DialogueLine]:
        """
        Step through lines and run any mutations until we either hit some
        dialogue or the end of the conversation.

        Args:
            key: The key (or title) of the entry point into the dialogue
            resource: A resource to use instead of the default one

        Returns:
            The first printable line, or None when the dialogue has ended

        Raises:
            MissingResourceError: No resource was passed or configured
            DialogueInProgressError: Another call is still suspended
        """
        local_resource = resource if resource is not None else self.default_resource
        if local_resource is None:
            raise MissingResourceError()

        if self._is_pending:
            raise DialogueInProgressError()

        self._is_pending = True
        try:
            # The signal only moves once the call has nothing left that can raise
            while True:
                line = await self.get_line(key, local_resource)

                # If our dialogue is nothing then we hit the end
                if line is None or not self.is_valid(line):
                    self._end()
                    return None

                if line.type != LineType.MUTATION:
                    self._set_is_running(True)
                    return line

                logger.debug(f"Running mutation before '{line.next_id}'")
                await self.evaluator.mutate(line.mutation)

                if not line.next_id:
                    # End the conversation
                    self._end()
                    return None

                key = line.next_id
        finally:
            self._is_pending = False

    async def get_line(self, key: str, resource: DialogueResource) -> Optional[DialogueLine]:
        """
        Get a line by its key.

        Conditions and gotos are followed until a line of another type is
        found. Mutations are returned as-is; running them is the caller's job.

        Args:
            key: A line key or title
            resource: The resource to read from

        Returns:
            The first line that passes any conditions, or None at the end
        """
        while True:
            key = resource.resolve_key(key)
            data = resource.get(key)

            # End of conversation probably
            if data is None:
                return None

            if data.type == LineType.CONDITION:
                # "else" will have no actual condition
                if await self.evaluator.check(data.condition):
                    key = data.next_id
                else:
                    key = data.next_conditional_id
                continue

            if data.type == LineType.GOTO:
                key = data.next_id
                continue

            break

        line = DialogueLine.from_line_data(data)

        # Only responses
        if data.type == LineType.RESPONSE:
            line.responses = await self.get_responses(data.responses, resource)
            return line

        # Replace any variables in the dialogue text
        if data.type == LineType.DIALOGUE and data.replacements:
            line.dialogue = await interpolate(line.dialogue, data.replacements, self.evaluator)

        # Inject the next node's responses if they have any
        next_data = resource.get(line.next_id)
        if next_data is not None and next_data.type == LineType.RESPONSE:
            line.responses = await self.get_responses(next_data.responses, resource)
            # A single response has to point to the next node
            if len(line.responses) == 1:
                line.next_id = line.responses[0].next_id

        return line

    async def get_responses(
        self,
        keys: Sequence[str],
        resource: DialogueResource,
    ) -> list[DialogueResponse]:
        """
        Turn response line keys into the responses whose conditions pass.

        Args:
            keys: Line keys of the candidate responses
            resource: The resource to read from

        Returns:
            Responses in document order
        """
        responses: list[DialogueResponse] = []
        for key in keys:
            data = resource.get(key)
            if data is None:
                logger.warning(f"Response line not found: {key}")
                continue

            if await self.evaluator.check(data.condition):
                responses.append(DialogueResponse.from_line_data(data))

        return responses

    def is_valid(self, line: Optional[DialogueLine]) -> bool:
        """Check if a line contains meaningful information."""
        if line is None:
            return False
        if line.type == LineType.DIALOGUE and not line.dialogue:
            return False
        if line.type == LineType.MUTATION and line.mutation is None:
            return False
        if line.type == LineType.RESPONSE and not line.responses:
            return False
        return True

    # Evaluator and state shortcuts

    async def check(self, condition: Optional[Condition]) -> bool:
        return await self.evaluator.check(condition)

    async def mutate(self, mutation: Optional[Mutation]) -> None:
        await self.evaluator.mutate(mutation)

    def resolve(self, tokens: Any, type_hint: str = "boolean") -> Any:
        return self.evaluator.resolve(tokens, type_hint)

    def get_state_value(self, token: Any, type_hint: str = "boolean") -> Any:
        return self.state.get_state_value(token, type_hint)

    def set_state_value(self, name: str, value: Any) -> None:
        self.state.set_state_value(name, value)

    async def get_state_function_value(self, name: str, args: Optional[Sequence[Any]] = None) -> Any:
        return await self.state.get_state_function_value(name, args)
