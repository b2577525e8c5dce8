# cocktailbot/db/defaults.py
"""
Built-in reference data shipped with the machine.

Recipe amounts are ml at the recipe's own base volume (the sum of its
items); the machine scales them to the glass size that is ordered.
"""

from typing import List

from cocktailbot.schemas.ingredient import Ingredient
from cocktailbot.schemas.lighting import LightingConfig
from cocktailbot.schemas.pump import PumpEntry
from cocktailbot.schemas.recipe import Cocktail, RecipeItem


DEFAULT_INGREDIENTS: List[Ingredient] = [
    Ingredient(id="dark-rum", name="Dark Rum", alcoholic=True),
    Ingredient(id="white-rum", name="White Rum", alcoholic=True),
    Ingredient(id="malibu", name="Malibu", alcoholic=True),
    Ingredient(id="vodka", name="Vodka", alcoholic=True),
    Ingredient(id="tequila", name="Tequila", alcoholic=True),
    Ingredient(id="triple-sec", name="Triple Sec", alcoholic=True),
    Ingredient(id="blue-curacao", name="Blue Curacao", alcoholic=True),
    Ingredient(id="gin", name="Gin", alcoholic=True),
    Ingredient(id="lime-juice", name="Lime Juice"),
    Ingredient(id="orange-juice", name="Orange Juice"),
    Ingredient(id="pineapple-juice", name="Pineapple Juice"),
    Ingredient(id="passion-fruit-juice", name="Passion Fruit Juice"),
    Ingredient(id="grenadine", name="Grenadine", delayed=True),
    Ingredient(id="vanilla-syrup", name="Vanilla Syrup"),
    Ingredient(id="cola", name="Cola"),
    Ingredient(id="tonic-water", name="Tonic Water"),
    Ingredient(id="cream-of-coconut", name="Cream of Coconut"),
]


DEFAULT_PUMP_CONFIG: List[PumpEntry] = [
    PumpEntry(id=1, ingredient="dark-rum", pin=17, flow_rate=1.5),
    PumpEntry(id=2, ingredient="malibu", pin=4, flow_rate=1.5),
    PumpEntry(id=3, ingredient="vodka", pin=18, flow_rate=1.5),
    PumpEntry(id=4, ingredient="tequila", pin=27, flow_rate=1.5),
    PumpEntry(id=5, ingredient="triple-sec", pin=22, flow_rate=1.5),
    PumpEntry(id=6, ingredient="blue-curacao", pin=23, flow_rate=1.5),
    PumpEntry(id=7, ingredient="lime-juice", pin=24, flow_rate=1.5),
    PumpEntry(id=8, ingredient="orange-juice", pin=25, flow_rate=1.5),
    PumpEntry(id=9, ingredient="pineapple-juice", pin=5, flow_rate=1.5),
    PumpEntry(id=10, ingredient="passion-fruit-juice", pin=6, flow_rate=1.5),
    PumpEntry(id=11, ingredient="grenadine", pin=12, flow_rate=1.5),
    PumpEntry(id=12, ingredient="vanilla-syrup", pin=13, flow_rate=1.5),
]


def _item(ingredient_id: str, amount: float, manual: bool = False) -> RecipeItem:
    return RecipeItem(ingredient_id=ingredient_id, amount=amount, manual=manual)


DEFAULT_COCKTAILS: List[Cocktail] = [
    Cocktail(
        id="long-island-iced-tea",
        name="Long Island Iced Tea",
        description="Strong classic with four spirits, lime and cola",
        image="/images/cocktails/long_island_iced_tea.jpg",
        ingredients=[
            "15ml Dark Rum",
            "15ml Triple Sec",
            "15ml Vodka",
            "15ml Tequila",
            "30ml Lime Juice",
            "150ml Cola (add manually)",
        ],
        recipe=[
            _item("dark-rum", 15),
            _item("triple-sec", 15),
            _item("vodka", 15),
            _item("tequila", 15),
            _item("lime-juice", 30),
            _item("cola", 150, manual=True),
        ],
    ),
    Cocktail(
        id="bahama-mama",
        name="Bahama Mama",
        description="Tropical mix of dark rum, Malibu and fruit juices",
        image="/images/cocktails/bahama_mama.jpg",
        ingredients=[
            "50ml Dark Rum",
            "40ml Malibu",
            "80ml Orange Juice",
            "80ml Pineapple Juice",
            "20ml Lime Juice",
            "20ml Grenadine",
        ],
        recipe=[
            _item("dark-rum", 50),
            _item("malibu", 40),
            _item("orange-juice", 80),
            _item("pineapple-juice", 80),
            _item("lime-juice", 20),
            _item("grenadine", 20),
        ],
    ),
    Cocktail(
        id="malibu-ananas",
        name="Malibu Pineapple",
        description="Sweet coconut liqueur with pineapple juice",
        image="/images/cocktails/malibu_ananas.jpg",
        ingredients=["80ml Malibu", "220ml Pineapple Juice"],
        recipe=[_item("malibu", 80), _item("pineapple-juice", 220)],
    ),
    Cocktail(
        id="swimmingpool",
        name="Swimming Pool",
        description="Blue tropical cocktail with vodka and pineapple juice",
        image="/images/cocktails/swimmingpool.jpg",
        ingredients=[
            "60ml Vodka",
            "30ml Blue Curacao",
            "180ml Pineapple Juice",
            "40ml Cream of Coconut (add manually)",
        ],
        recipe=[
            _item("vodka", 60),
            _item("blue-curacao", 30),
            _item("pineapple-juice", 180),
            _item("cream-of-coconut", 40, manual=True),
        ],
    ),
    Cocktail(
        id="tequila-sunrise",
        name="Tequila Sunrise",
        description="Tequila and orange juice with a grenadine sunrise",
        image="/images/cocktails/tequila_sunrise.jpg",
        ingredients=["60ml Tequila", "220ml Orange Juice", "20ml Grenadine"],
        recipe=[
            _item("tequila", 60),
            _item("orange-juice", 220),
            _item("grenadine", 20),
        ],
    ),
    Cocktail(
        id="touch-down",
        name="Touch Down",
        description="Fruity dark rum, triple sec and passion fruit",
        image="/images/cocktails/touch_down.jpg",
        ingredients=[
            "60ml Dark Rum",
            "40ml Triple Sec",
            "140ml Passion Fruit Juice",
            "10ml Lime Juice",
            "20ml Grenadine",
        ],
        recipe=[
            _item("dark-rum", 60),
            _item("triple-sec", 40),
            _item("passion-fruit-juice", 140),
            _item("lime-juice", 10),
            _item("grenadine", 20),
        ],
    ),
    Cocktail(
        id="zombie",
        name="Zombie",
        description="Strong and fruity, dark rum with four juices",
        image="/images/cocktails/zombie.jpg",
        ingredients=[
            "40ml Dark Rum",
            "30ml Triple Sec",
            "80ml Pineapple Juice",
            "50ml Orange Juice",
            "20ml Lime Juice",
            "50ml Passion Fruit Juice",
            "20ml Grenadine",
        ],
        recipe=[
            _item("dark-rum", 40),
            _item("triple-sec", 30),
            _item("pineapple-juice", 80),
            _item("orange-juice", 50),
            _item("lime-juice", 20),
            _item("passion-fruit-juice", 50),
            _item("grenadine", 20),
        ],
    ),
    Cocktail(
        id="fruit-punch",
        name="Fruit Punch",
        description="Pineapple, orange and passion fruit",
        image="/palm-glow.png",
        alcoholic=False,
        ingredients=["100ml Pineapple Juice", "100ml Orange Juice", "100ml Passion Fruit Juice"],
        recipe=[
            _item("pineapple-juice", 100),
            _item("orange-juice", 100),
            _item("passion-fruit-juice", 100),
        ],
    ),
    Cocktail(
        id="sweet-sour-mix",
        name="Sweet & Sour",
        description="Balanced sweet and sour fruit juices",
        image="/vibrant-passion-fizz.png",
        alcoholic=False,
        ingredients=["150ml Pineapple Juice", "50ml Lime Juice", "20ml Grenadine"],
        recipe=[
            _item("pineapple-juice", 150),
            _item("lime-juice", 50),
            _item("grenadine", 20),
        ],
    ),
    Cocktail(
        id="vanilla-orange",
        name="Vanilla Orange",
        description="Creamy orange juice with a hint of vanilla",
        image="/citrus-swirl-sunset.png",
        alcoholic=False,
        ingredients=["200ml Orange Juice", "30ml Vanilla Syrup"],
        recipe=[_item("orange-juice", 200), _item("vanilla-syrup", 30)],
    ),
    Cocktail(
        id="grenadine-splash",
        name="Grenadine Splash",
        description="Fruity and sweet with grenadine and orange juice",
        image="/bursting-berries.png",
        alcoholic=False,
        ingredients=["150ml Orange Juice", "50ml Pineapple Juice", "30ml Grenadine"],
        recipe=[
            _item("orange-juice", 150),
            _item("pineapple-juice", 50),
            _item("grenadine", 30),
        ],
    ),
]


DEFAULT_LIGHTING = LightingConfig()
