import pytest

from cocktailbot.core.errors import ValidationError
from cocktailbot.hardware.actuator import pump_duration_ms, round_half_up
from cocktailbot.schemas.recipe import RecipeItem
from cocktailbot.services.machine_service import base_volume, scale_recipe


def items(*pairs):
    return [RecipeItem(ingredient_id=i, amount=a) for i, a in pairs]


def test_scale_sunrise_to_300():
    scaled = scale_recipe(items(("rum", 50), ("juice", 200), ("grenadine", 20)), 300)
    assert {i.ingredient_id: i.amount for i in scaled} == {
        "rum": 56,
        "juice": 222,
        "grenadine": 22,
    }


@pytest.mark.parametrize("target", [100, 250, 300, 333, 500])
@pytest.mark.parametrize(
    "recipe",
    [
        items(("a", 15), ("b", 15), ("c", 15), ("d", 15), ("e", 30)),
        items(("a", 80), ("b", 220)),
        items(("a", 40), ("b", 30), ("c", 80), ("d", 50), ("e", 20), ("f", 50), ("g", 20)),
    ],
)
def test_scaled_total_matches_target_within_rounding(recipe, target):
    scaled = scale_recipe(recipe, target)
    assert abs(base_volume(scaled) - target) <= len(recipe) * 0.5


def test_scale_to_own_base_volume_is_identity():
    recipe = items(("a", 12.5), ("b", 37.5), ("c", 20))
    scaled = scale_recipe(recipe, base_volume(recipe))
    assert scaled == recipe


def test_zero_volume_recipe_is_not_scaled():
    recipe = items(("a", 0), ("b", 0))
    assert scale_recipe(recipe, 300) == recipe


def test_manual_items_keep_their_flag_when_scaled():
    recipe = [
        RecipeItem(ingredient_id="vodka", amount=60),
        RecipeItem(ingredient_id="cream", amount=40, manual=True),
    ]
    scaled = scale_recipe(recipe, 200)
    assert [i.manual for i in scaled] == [False, True]
    assert scaled[1].amount == 80


def test_scale_does_not_mutate_input():
    recipe = items(("a", 50), ("b", 50))
    scale_recipe(recipe, 300)
    assert [i.amount for i in recipe] == [50, 50]


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_pump_duration():
    assert pump_duration_ms(40, 20) == 2000
    assert pump_duration_ms(22, 1.5) == 14667
    assert pump_duration_ms(0, 10) == 0


def test_pump_duration_rejects_bad_flow_rate():
    with pytest.raises(ValidationError):
        pump_duration_ms(10, 0)
