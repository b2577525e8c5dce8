# cocktailbot/schemas/recipe.py

from typing import List

from pydantic import Field

from cocktailbot.schemas.base import CamelModel


class RecipeItem(CamelModel):
    ingredient_id: str
    amount: float = Field(..., ge=0, description="ml at the recipe's base volume")
    # poured by hand (soda, cream...), never by a pump
    manual: bool = False


class Cocktail(CamelModel):
    id: str = ""
    name: str
    description: str = ""
    image: str = ""
    alcoholic: bool = True
    is_active: bool = True
    ingredients: List[str] = []
    recipe: List[RecipeItem] = []


class ActiveUpdate(CamelModel):
    is_active: bool
