"""
Text interpolation - swaps computed values into dialogue text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from dialogue_engine.dialog.resource import ExpressionType, Replacement

if TYPE_CHECKING:
    from dialogue_engine.dialog.expressions import ExpressionEvaluator


def to_text(value: Any) -> str:
    """String form of a computed value, spelled the way scripts write literals."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


async def interpolate(
    text: str,
    replacements: Sequence[Replacement],
    evaluator: ExpressionEvaluator,
) -> str:
    """
    Replace variables, function calls, etc. in dialogue text.

    Each replacement swaps only the first occurrence of its literal
    placeholder, in document order.

    Args:
        text: The literal dialogue text
        replacements: Placeholders and how to compute their values
        evaluator: Evaluator bound to the current game states

    Returns:
        The text with replacements applied
    """
    for replacement in replacements:
        if not replacement.value_in_text:
            continue

        if replacement.type == ExpressionType.FUNCTION:
            value = await evaluator.state.get_state_function_value(
                replacement.function, replacement.args
            )
        elif replacement.type == ExpressionType.SCALAR:
            value = evaluator.resolve(replacement.value)
        else:
            value = ""

        text = text.replace(replacement.value_in_text, to_text(value), 1)

    return text
