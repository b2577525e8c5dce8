# cocktailbot/schemas/ingredient.py

from typing import List

from pydantic import Field

from cocktailbot.schemas.base import CamelModel


class Ingredient(CamelModel):
    id: str = Field(..., examples=["dark-rum"])
    name: str = Field(..., examples=["Dark Rum"])
    alcoholic: bool = False
    # dense syrups are poured after the rest has settled
    delayed: bool = False


class IngredientCreate(CamelModel):
    name: str
    alcoholic: bool = False


class IngredientLevel(CamelModel):
    ingredient_id: str
    current_amount: float
    capacity: float = Field(..., gt=0)


class LevelUpdate(CamelModel):
    amount: float = Field(..., description="New absolute amount (ml)")


class RefillRequest(CamelModel):
    amount: float = Field(..., description="Amount added (ml)")


class CapacityUpdate(CamelModel):
    capacity: float


class DecrementResult(CamelModel):
    success: bool
    insufficient_ingredients: List[str] = []
