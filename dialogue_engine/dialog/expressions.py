"""
Expression evaluator - conditions, mutations, and token arithmetic.

Conditions gate branches and responses, mutations change game state or
run game state methods, and resolve() reduces a flat token list such as

    [{"type": "value", "value": "2"},
     {"type": "operator", "value": "+"},
     {"type": "value", "value": "gold"}]

to a single value, honouring * and / before + and -.
"""

from __future__ import annotations

import asyncio
import logging
import operator
from collections.abc import Container, Mapping
from typing import Any, Callable, Optional, Sequence

from dialogue_engine.core.errors import ExportError
from dialogue_engine.dialog.resource import Condition, Expression, ExpressionType, Mutation
from dialogue_engine.dialog.state import StateBinder, type_hint_for

logger = logging.getLogger(__name__)

TOKEN_OPERATOR = "operator"
TOKEN_VALUE = "value"
TOKEN_GROUP = "group"

MULTIPLICATIVE = ("*", "/")
ADDITIVE = ("+", "-")
ORDERINGS = (">", ">=", "<", "<=")


def contains(lhs: Any, rhs: Any) -> bool:
    """
    Membership test behind the "in" operator.

    Mappings test keys, strings test substrings, other containers test
    elements. Anything else contains nothing.
    """
    if isinstance(rhs, Mapping):
        return lhs in rhs
    if isinstance(rhs, str):
        return str(lhs) in rhs
    if isinstance(rhs, Container):
        return lhs in rhs
    return False


def add_values(lhs: Any, rhs: Any) -> Any:
    """Add numbers, or concatenate when either side is a string."""
    if isinstance(lhs, str) or isinstance(rhs, str):
        return f"{lhs}{rhs}"
    return lhs + rhs


def quote(value: Any) -> Any:
    """Keep string results recognisable as string literals."""
    if isinstance(value, str):
        return f'"{value}"'
    return value


COMPARISONS: dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    "==": operator.eq,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "<>": operator.ne,
    "!=": operator.ne,
    "in": contains,
}

ARITHMETIC: dict[str, Callable[[Any, Any], Any]] = {
    "+": add_values,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}

ASSIGNMENTS: dict[str, Callable[[Any, Any], Any]] = {
    "+=": add_values,
    "-=": operator.sub,
    "*=": operator.mul,
    "/=": operator.truediv,
}


class ExpressionEvaluator:
    """
    Evaluates conditions and mutations against a StateBinder.

    Usage:
        evaluator = ExpressionEvaluator(StateBinder([player]))
        if await evaluator.check(line.condition):
            ...
        await evaluator.mutate(line.mutation)
    """

    def __init__(self, state: StateBinder):
        self.state = state

    # Conditions

    async def check(self, condition: Optional[Condition]) -> bool:
        """
        Check if a condition is met.

        Args:
            condition: The condition to check ("else" arms have none)

        Returns:
            True if the condition passes (or there was no condition)

        Raises:
            ExportError: A side of the condition failed to compile
        """
        if condition is None:
            return True

        if condition.lhs_type == ExpressionType.FUNCTION:
            lhs = await self.state.get_state_function_value(
                condition.lhs_function, condition.lhs_args
            )
        elif condition.lhs_type == ExpressionType.SCALAR:
            if condition.operator in ORDERINGS:
                # Default an unknown lhs to something comparable with rhs
                rhs = await self._evaluate_rhs(condition, "condition")
                lhs = self._scalar(condition.lhs, type_hint_for(rhs))
                return bool(COMPARISONS[condition.operator](lhs, rhs))
            lhs = self._scalar(condition.lhs)
        else:
            raise ExportError("condition")

        # No operator means the truthiness of the left hand side
        if not condition.operator:
            return bool(lhs)

        rhs = await self._evaluate_rhs(condition, "condition")

        compare = COMPARISONS.get(condition.operator)
        if compare is None:
            return False

        return bool(compare(lhs, rhs))

    # Mutations

    async def mutate(self, mutation: Optional[Mutation]) -> None:
        """
        Make a change to game state or run a method.

        A function on the left hand side is only ever called; it can't be
        assigned to. "wait" and "debug" are handled here, every other name
        is looked up on the game states.

        Raises:
            ExportError: A side of the mutation failed to compile
        """
        if mutation is None:
            return

        if mutation.lhs_type == ExpressionType.FUNCTION:
            await self._run_function(mutation.lhs_function, mutation.lhs_args)
            return

        if mutation.lhs_type == ExpressionType.ERROR:
            raise ExportError("mutation")

        # lhs is the name of a state property
        name = mutation.lhs

        if not mutation.operator:
            return

        rhs = await self._evaluate_rhs(mutation, "mutation")

        if mutation.operator == "=":
            self.state.set_state_value(name, rhs)
            return

        combine = ASSIGNMENTS.get(mutation.operator)
        if combine is None:
            return

        logger.debug(f"Mutating {name} {mutation.operator} {rhs!r}")
        current = self.state.get_state_value(name, type_hint_for(rhs))
        self.state.set_state_value(name, combine(current, rhs))

    async def _run_function(self, name: Optional[str], args: Sequence[Any]) -> None:
        """Run a function for its side effect."""
        if name == "wait":
            values = self.state.parse_args(args)
            milliseconds = float(values[0]) if values else 0.0
            await asyncio.sleep(milliseconds / 1000)
        elif name == "debug":
            values = self.state.parse_args(args)
            printable = {str(arg): value for arg, value in zip(args, values)}
            logger.info(f"debug: {printable}")
        else:
            await self.state.get_state_function_value(name, args)

    async def _evaluate_rhs(self, expression: Expression, kind: str) -> Any:
        """Evaluate the right hand side of a condition or mutation."""
        if expression.rhs_type == ExpressionType.FUNCTION:
            return await self.state.get_state_function_value(
                expression.rhs_function, expression.rhs_args
            )
        if expression.rhs_type == ExpressionType.ERROR:
            raise ExportError(kind)
        return self.resolve(expression.rhs)

    def _scalar(self, value: Any, type_hint: str = "boolean") -> Any:
        """Resolve a bare scalar or a token list."""
        if isinstance(value, (list, tuple)):
            return self.resolve(value, type_hint)
        return self.state.get_state_value(value, type_hint)

    # Token arithmetic

    def resolve(self, tokens: Any, type_hint: str = "boolean") -> Any:
        """
        Resolve a tokenised expression.

        Args:
            tokens: A list of operator/value/group tokens (a bare scalar is
                    resolved on its own)
            type_hint: A hint for default values when not in strict mode

        Returns:
            The final resolved value

        Raises:
            ExportError: The token list is empty or an operator lacks an operand
        """
        if not isinstance(tokens, (list, tuple)):
            return self.state.get_state_value(tokens, type_hint)

        if not tokens:
            raise ExportError("expression")

        # Groups first, then multiply and divide, then add and subtract
        reduced = [self._reduce_group(token, type_hint) for token in tokens]
        reduced = self._fold(reduced, MULTIPLICATIVE, type_hint)
        reduced = self._fold(reduced, ADDITIVE, type_hint)

        # Anything left over is an operator neither pass knows
        if len(reduced) != 1:
            raise ExportError("expression")

        return self.state.get_state_value(reduced[0]["value"], type_hint)

    def _reduce_group(self, token: Mapping[str, Any], type_hint: str) -> Mapping[str, Any]:
        if token.get("type") != TOKEN_GROUP:
            return token
        return {"type": TOKEN_VALUE, "value": quote(self.resolve(token.get("value"), type_hint))}

    def _fold(
        self,
        tokens: list[Mapping[str, Any]],
        operators: tuple[str, ...],
        type_hint: str,
    ) -> list[Mapping[str, Any]]:
        """Collapse every "a <op> b" for the given operators, left to right."""
        output: list[Mapping[str, Any]] = []
        pending: Optional[str] = None

        for token in tokens:
            if pending is not None:
                if token.get("type") == TOKEN_OPERATOR:
                    raise ExportError("expression")
                lhs = output.pop()
                value = self._apply(pending, lhs.get("value"), token.get("value"), type_hint)
                output.append({"type": TOKEN_VALUE, "value": value})
                pending = None
            elif token.get("type") == TOKEN_OPERATOR and token.get("value") in operators:
                if not output or output[-1].get("type") == TOKEN_OPERATOR:
                    raise ExportError("expression")
                pending = token["value"]
            else:
                output.append(token)

        if pending is not None:
            raise ExportError("expression")

        return output

    def _apply(self, op: str, lhs_raw: Any, rhs_raw: Any, type_hint: str) -> Any:
        lhs = self.state.get_state_value(lhs_raw, type_hint)
        rhs = self.state.get_state_value(rhs_raw, type_hint)
        return quote(ARITHMETIC[op](lhs, rhs))
