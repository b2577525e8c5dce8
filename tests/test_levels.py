import json

import pytest

from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.schemas.pump import PumpEntry
from cocktailbot.schemas.recipe import RecipeItem


def amounts(store):
    return {lvl.ingredient_id: lvl.current_amount for lvl in store.get_levels()}


def test_levels_created_for_configured_pumps(container):
    levels = container.levels.get_levels()
    assert {lvl.ingredient_id for lvl in levels} == {"rum", "juice", "grenadine", "vodka"}
    assert all(lvl.current_amount == lvl.capacity == 1000 for lvl in levels)
    assert container.levels.document.exists()


def test_new_pump_gets_a_level(container):
    container.levels.get_levels()
    entries = container.pumps.get() + [PumpEntry(id=9, ingredient="gin", pin=5, flow_rate=2)]
    container.pumps.save(entries)
    assert container.levels.get_level("gin").current_amount == 1000


def test_set_level_clamps_to_capacity(container):
    assert container.levels.set_level("rum", 5000).current_amount == 1000
    assert container.levels.set_level("rum", 250).current_amount == 250


@pytest.mark.parametrize("bad", [-1, "12", None, float("nan"), True])
def test_set_level_rejects_bad_amounts(container, bad):
    with pytest.raises(ValidationError):
        container.levels.set_level("rum", bad)


def test_set_level_unknown_ingredient(container):
    with pytest.raises(NotFoundError):
        container.levels.set_level("absinthe", 100)


def test_refill_adds_and_clamps(container):
    container.levels.set_level("juice", 700)
    assert container.levels.refill("juice", 200).current_amount == 900
    assert container.levels.refill("juice", 200).current_amount == 1000


def test_set_capacity_clamps_current_amount(container):
    level = container.levels.set_capacity("juice", 750)
    assert level.capacity == 750
    assert level.current_amount == 750
    with pytest.raises(ValidationError):
        container.levels.set_capacity("juice", 0)


def test_decrement_success(container):
    result = container.levels.decrement_for_recipe([
        RecipeItem(ingredient_id="rum", amount=56),
        RecipeItem(ingredient_id="juice", amount=222),
    ])
    assert result.success
    levels = amounts(container.levels)
    assert levels["rum"] == 944
    assert levels["juice"] == 778


def test_decrement_is_all_or_nothing(container):
    container.levels.set_level("juice", 100)
    before = amounts(container.levels)

    result = container.levels.decrement_for_recipe([
        RecipeItem(ingredient_id="rum", amount=50),
        RecipeItem(ingredient_id="juice", amount=150),
        RecipeItem(ingredient_id="grenadine", amount=20),
    ])

    assert not result.success
    assert result.insufficient_ingredients == ["juice"]
    assert amounts(container.levels) == before


def test_decrement_sums_repeated_ingredients(container):
    container.levels.set_level("rum", 80)
    result = container.levels.decrement_for_recipe([
        RecipeItem(ingredient_id="rum", amount=50),
        RecipeItem(ingredient_id="rum", amount=50),
    ])
    assert result.insufficient_ingredients == ["rum"]


def test_refill_all(container):
    container.levels.set_level("rum", 10)
    container.levels.set_level("vodka", 0)
    assert all(lvl.current_amount == lvl.capacity for lvl in container.levels.refill_all())


def test_low_levels(container):
    container.levels.set_level("grenadine", 40)
    assert [lvl.ingredient_id for lvl in container.levels.low_levels(100)] == ["grenadine"]


def test_out_of_range_values_on_disk_are_clamped(container):
    path = container.levels.document.path
    container.levels.get_levels()
    data = json.loads(path.read_text())
    data[0]["currentAmount"] = -30
    path.write_text(json.dumps(data))

    assert amounts(container.levels)[data[0]["ingredientId"]] == 0
