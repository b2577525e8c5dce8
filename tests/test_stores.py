import pytest

from cocktailbot.core.container import build_container
from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.db.defaults import DEFAULT_COCKTAILS, DEFAULT_PUMP_CONFIG
from cocktailbot.schemas.pump import PumpEntry
from cocktailbot.schemas.recipe import Cocktail, RecipeItem


# ===== pump configuration =====

def test_pump_config_falls_back_to_defaults_and_persists(settings, pump_driver, lighting_driver):
    c = build_container(settings, pump_driver=pump_driver, lighting_driver=lighting_driver)
    assert not c.pumps.document.exists()

    first = c.pumps.get()
    assert [p.id for p in first] == [p.id for p in DEFAULT_PUMP_CONFIG]
    assert c.pumps.document.exists()
    assert c.pumps.get() == first


def test_find_for_ingredient_ignores_disabled(container):
    entries = container.pumps.get()
    entries[3].enabled = False
    container.pumps.save(entries)
    assert container.pumps.find_for_ingredient("vodka") is None
    assert container.pumps.find_for_ingredient("rum").pin == 17


def test_save_rejects_two_enabled_pumps_for_one_ingredient(container):
    entries = container.pumps.get() + [PumpEntry(id=5, ingredient="rum", pin=5, flow_rate=1)]
    with pytest.raises(ValidationError):
        container.pumps.save(entries)


def test_save_allows_disabled_duplicate(container):
    entries = container.pumps.get() + [
        PumpEntry(id=5, ingredient="rum", pin=17, flow_rate=1, enabled=False)
    ]
    container.pumps.save(entries)
    assert container.pumps.find_for_ingredient("rum").id == 1


def test_save_rejects_duplicate_ids_and_pins(container):
    with pytest.raises(ValidationError):
        container.pumps.save(container.pumps.get() + [PumpEntry(id=1, ingredient="gin", pin=5, flow_rate=1)])
    with pytest.raises(ValidationError):
        container.pumps.save(container.pumps.get() + [PumpEntry(id=9, ingredient="gin", pin=17, flow_rate=1)])


def test_get_pump_not_found(container):
    with pytest.raises(NotFoundError):
        container.pumps.get_pump(42)


# ===== recipes =====

def test_get_all_merges_defaults_and_overlay(container):
    ids = [c.id for c in container.recipes.get_all()]
    assert ids[: len(DEFAULT_COCKTAILS)] == [c.id for c in DEFAULT_COCKTAILS]
    assert "test-sunrise" in ids


def test_user_overlay_wins_over_builtin(container):
    edited = container.recipes.get("zombie")
    edited.name = "House Zombie"
    container.recipes.save(edited)

    cocktails = container.recipes.get_all()
    assert [c.name for c in cocktails if c.id == "zombie"] == ["House Zombie"]
    assert len([c for c in cocktails if c.id == "zombie"]) == 1


def test_delete_builtin_records_tombstone(container):
    container.recipes.delete("zombie")
    assert "zombie" not in [c.id for c in container.recipes.get_all()]
    assert container.recipes.tombstones.read() == ["zombie"]
    with pytest.raises(NotFoundError):
        container.recipes.get("zombie")


def test_delete_then_save_restores_builtin(container):
    original = container.recipes.get("zombie")
    container.recipes.delete("zombie")
    container.recipes.save(original)

    assert container.recipes.get("zombie").name == original.name
    assert container.recipes.tombstones.read() == []


def test_delete_custom_and_unknown(container):
    container.recipes.delete("test-sunrise")
    with pytest.raises(NotFoundError):
        container.recipes.get("test-sunrise")
    with pytest.raises(NotFoundError):
        container.recipes.delete("test-sunrise")


def test_save_assigns_custom_id_and_ingredient_text(container):
    saved = container.recipes.save(Cocktail(
        name="Screwdriver",
        image="images/screwdriver.jpg",
        recipe=[
            RecipeItem(ingredient_id="vodka", amount=50),
            RecipeItem(ingredient_id="orange-juice", amount=150),
            RecipeItem(ingredient_id="cola", amount=20, manual=True),
        ],
    ))
    assert saved.id.startswith("custom-")
    assert len(saved.id) == len("custom-") + 8
    assert saved.image == "/images/screwdriver.jpg"
    assert saved.ingredients == [
        "50ml Vodka",
        "150ml Orange Juice",
        "20ml Cola (add manually)",
    ]


def test_supplied_ingredient_text_is_kept(container):
    saved = container.recipes.save(Cocktail(
        id="love-potion",
        name="Love Potion",
        ingredients=["a splash of love"],
        recipe=[RecipeItem(ingredient_id="vodka", amount=50)],
    ))
    assert saved.ingredients == ["a splash of love"]

    toggled = container.recipes.set_active("love-potion", False)
    assert toggled.ingredients == ["a splash of love"]


def test_toggling_builtin_keeps_its_ingredient_text(container):
    shipped = next(c for c in DEFAULT_COCKTAILS if c.id == "zombie").ingredients
    container.recipes.set_active("zombie", False)
    assert container.recipes.get("zombie").ingredients == shipped


@pytest.mark.parametrize(
    "cocktail",
    [
        Cocktail(name="", recipe=[RecipeItem(ingredient_id="vodka", amount=40)]),
        Cocktail(name="Nothing", recipe=[]),
    ],
)
def test_save_rejects_invalid(container, cocktail):
    with pytest.raises(ValidationError):
        container.recipes.save(cocktail)


def test_inactive_cocktails_are_hidden_on_request(container):
    container.recipes.set_active("zombie", False)
    assert "zombie" not in [c.id for c in container.recipes.get_all(include_inactive=False)]
    assert container.recipes.get("zombie").is_active is False


# ===== ingredient catalog =====

def test_add_custom_ingredient(container):
    ingredient = container.catalog.add_custom("Elder Flower Syrup!", alcoholic=False)
    assert ingredient.id == "custom-elder-flower-syrup"
    assert container.catalog.get(ingredient.id).name == "Elder Flower Syrup!"
    assert ingredient in container.catalog.all()


@pytest.mark.parametrize("name", ["", "   ", "Vodka"])
def test_add_custom_ingredient_rejects(container, name):
    with pytest.raises(ValidationError):
        container.catalog.add_custom(name)


def test_add_custom_ingredient_id_collision(container):
    container.catalog.add_custom("Mint Syrup")
    with pytest.raises(ValidationError):
        container.catalog.add_custom("mint  syrup")


def test_catalog_marks_grenadine_as_delayed(container):
    assert container.catalog.is_delayed("grenadine")
    assert not container.catalog.is_delayed("orange-juice")


# ===== stats =====

def test_stats_increment_and_reset(container):
    stats = container.stats
    stats.increment("zombie", "Zombie")
    stats.increment("zombie", "Zombie Deluxe")
    stats.increment("bahama-mama", "Bahama Mama")

    listed = stats.list()
    assert [(s.cocktail_id, s.count) for s in listed] == [("zombie", 2), ("bahama-mama", 1)]
    assert listed[0].cocktail_name == "Zombie Deluxe"
    assert stats.total_count() == 3
    assert [s.cocktail_id for s in stats.top(1)] == ["zombie"]

    stats.reset("zombie")
    assert [s.cocktail_id for s in stats.list()] == ["bahama-mama"]
    stats.reset_all()
    assert stats.list() == []
