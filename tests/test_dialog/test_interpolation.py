import asyncio

import pytest

from dialogue_engine.dialog.expressions import ExpressionEvaluator
from dialogue_engine.dialog.interpolation import interpolate, to_text
from dialogue_engine.dialog.resource import Replacement
from dialogue_engine.dialog.state import StateBinder


class Scoreboard:
    score = 7

    def rank(self, score):
        return "gold" if score > 5 else "bronze"

    def nothing(self):
        return None


@pytest.fixture
def evaluator():
    return ExpressionEvaluator(StateBinder([Scoreboard()]))


def score_replacement():
    return Replacement(
        type="scalar",
        value_in_text="{{score}}",
        value=[{"type": "value", "value": "score"}],
    )


def test_scalar_replacement(evaluator):
    text = asyncio.run(interpolate("Score: {{score}}", [score_replacement()], evaluator))

    assert text == "Score: 7"


def test_only_first_occurrence_is_replaced(evaluator):
    text = asyncio.run(interpolate(
        "Score: {{score}} (was {{score}})", [score_replacement()], evaluator
    ))

    assert text == "Score: 7 (was {{score}})"


def test_one_entry_per_occurrence(evaluator):
    text = asyncio.run(interpolate(
        "{{score}}/{{score}}", [score_replacement(), score_replacement()], evaluator
    ))

    assert text == "7/7"


def test_function_replacement(evaluator):
    replacement = Replacement(
        type="function", value_in_text="{{rank(score)}}", function="rank", args=["score"],
    )

    text = asyncio.run(interpolate("Rank: {{rank(score)}}", [replacement], evaluator))

    assert text == "Rank: gold"


def test_expression_replacement(evaluator):
    replacement = Replacement(
        type="scalar",
        value_in_text="{{score * 2}}",
        value=[
            {"type": "value", "value": "score"},
            {"type": "operator", "value": "*"},
            {"type": "value", "value": "2"},
        ],
    )

    text = asyncio.run(interpolate("Double: {{score * 2}}", [replacement], evaluator))

    assert text == "Double: 14"


def test_none_renders_empty(evaluator):
    replacement = Replacement(type="function", value_in_text="[x]", function="nothing")

    text = asyncio.run(interpolate("a[x]b", [replacement], evaluator))

    assert text == "ab"
    assert to_text(None) == ""
    assert to_text(3) == "3"


@pytest.mark.parametrize("value, expected", [
    (True, "true"),
    (False, "false"),
    (7.0, "7"),
    (2.5, "2.5"),
    ("Coco", "Coco"),
])
def test_values_render_like_literals(value, expected):
    assert to_text(value) == expected


def test_division_result_renders_without_fraction(evaluator):
    replacement = Replacement(
        type="scalar",
        value_in_text="{{half}}",
        value=[
            {"type": "value", "value": "score"},
            {"type": "operator", "value": "*"},
            {"type": "value", "value": "2"},
            {"type": "operator", "value": "/"},
            {"type": "value", "value": "2"},
        ],
    )

    text = asyncio.run(interpolate("Half: {{half}}", [replacement], evaluator))

    assert text == "Half: 7"
