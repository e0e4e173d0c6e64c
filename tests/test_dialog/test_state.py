import asyncio

import pytest

from dialogue_engine.core.errors import UnknownStateFunctionError, UnknownStatePropertyError
from dialogue_engine.dialog.state import (
    MappingStateProvider,
    ObjectStateProvider,
    StateBinder,
    StateProvider,
    type_hint_for,
)


@pytest.mark.parametrize("token, expected", [
    ('"hello"', "hello"),
    ('""', ""),
    ("TRUE", True),
    ("yes", True),
    ("False", False),
    ("no", False),
    ("42", 42),
    ("-7", -7),
    ("1.5", 1.5),
    ("1.0", 1.0),
    (".5", 0.5),
    (3, 3),
    (2.5, 2.5),
    (True, True),
])
def test_literals(token, expected):
    binder = StateBinder()

    value = binder.get_state_value(token)

    assert value == expected
    assert type(value) is type(expected)


def test_variable_lookup(player):
    binder = StateBinder([player])

    assert binder.get_state_value("gold") == 10
    assert binder.get_state_value("name") == "Coco"


def test_first_match_wins(player):
    other = {"gold": 999, "mood": "grumpy"}
    binder = StateBinder([player, other])

    assert binder.get_state_value("gold") == 10
    assert binder.get_state_value("mood") == "grumpy"

    binder.set_state_value("gold", 3)
    assert player.gold == 3
    assert other["gold"] == 999


def test_methods_are_not_properties(player):
    binder = StateBinder([player])

    with pytest.raises(UnknownStatePropertyError):
        binder.get_state_value("has_item")


def test_strict_unknown_property(player):
    binder = StateBinder([player])

    with pytest.raises(UnknownStatePropertyError):
        binder.get_state_value("missing")
    with pytest.raises(UnknownStatePropertyError):
        binder.set_state_value("missing", 1)


def test_lenient_defaults():
    binder = StateBinder(is_strict=False)

    assert binder.get_state_value("count", "number") == 0
    assert type(binder.get_state_value("count", "number")) is int
    assert binder.get_state_value("ratio.value", "number") == 0.0
    assert type(binder.get_state_value("ratio.value", "number")) is float
    assert binder.get_state_value("title", "string") == ""
    assert binder.get_state_value("flag") is False


def test_lenient_shadow_map():
    binder = StateBinder(is_strict=False)

    binder.set_state_value("visits", 2)

    assert binder.get_state_value("visits", "number") == 2
    assert binder.shadow == {"visits": 2}

    binder.reset()
    assert binder.get_state_value("visits", "number") == 0


def test_writes_use_explicit_setter(player):
    binder = StateBinder([player])

    binder.set_state_value("has_met_nathan", True)

    assert player.has_met_nathan is True
    assert player.writes == [("has_met_nathan", True)]


def test_writes_without_setter_assign():
    class Scene:
        door_open = False

    scene = Scene()
    binder = StateBinder([scene])

    binder.set_state_value("door_open", True)

    assert scene.door_open is True


def test_function_value(player):
    binder = StateBinder([player])

    assert asyncio.run(binder.get_state_function_value("has_item", ['"sword"'])) is True
    assert asyncio.run(binder.get_state_function_value("has_item", ['"bow"'])) is False
    assert asyncio.run(binder.get_state_function_value("double", ["gold"])) == 20


def test_function_value_awaits_coroutines():
    class Scene:
        async def roll(self, sides):
            await asyncio.sleep(0)
            return sides

    binder = StateBinder([Scene()])

    assert asyncio.run(binder.get_state_function_value("roll", ["6"])) == 6


def test_unknown_function(player):
    strict = StateBinder([player])
    lenient = StateBinder([player], is_strict=False)

    with pytest.raises(UnknownStateFunctionError):
        asyncio.run(strict.get_state_function_value("fly", []))
    assert asyncio.run(lenient.get_state_function_value("fly", [])) is False


def test_mapping_provider_methods():
    provider = MappingStateProvider({"hp": 5}, {"heal": lambda amount: amount + 1})
    binder = StateBinder([provider])

    assert binder.get_state_value("hp") == 5
    assert asyncio.run(binder.get_state_function_value("heal", ["2"])) == 3


def test_custom_provider():
    class Flags(StateProvider):
        def __init__(self):
            self.flags = {"intro_done": True}

        def has_property(self, name):
            return name in self.flags

        def get_property(self, name):
            return self.flags[name]

        def set_property(self, name, value):
            self.flags[name] = value

        def has_method(self, name):
            return False

        def call_method(self, name, *args):
            raise AttributeError(name)

    flags = Flags()
    binder = StateBinder([flags])

    assert binder.get_state_value("intro_done") is True
    binder.set_state_value("intro_done", False)
    assert flags.flags["intro_done"] is False


def test_private_names_are_hidden():
    class Scene:
        def __init__(self):
            self._secret = 1

    provider = ObjectStateProvider(Scene())

    assert not provider.has_property("_secret")
    assert not provider.has_method("__init__")


@pytest.mark.parametrize("value, hint", [
    (True, "boolean"),
    (3, "number"),
    (0.5, "number"),
    ("a", "string"),
    (None, "boolean"),
])
def test_type_hint_for(value, hint):
    assert type_hint_for(value) == hint
