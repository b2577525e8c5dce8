# cocktailbot/api/v1/ingredients.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from cocktailbot.api.deps import get_container
from cocktailbot.core.container import Container
from cocktailbot.schemas.ingredient import (
    CapacityUpdate,
    Ingredient,
    IngredientCreate,
    IngredientLevel,
    LevelUpdate,
    RefillRequest,
)

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("/", response_model=List[Ingredient])
def list_ingredients(container: Container = Depends(get_container)):
    return container.catalog.all()


@router.post("/", response_model=Ingredient, status_code=status.HTTP_201_CREATED)
def add_ingredient(
    data: IngredientCreate,
    container: Container = Depends(get_container),
):
    return container.catalog.add_custom(data.name, data.alcoholic)


# ===== fill levels =====

@router.get("/levels", response_model=List[IngredientLevel])
def get_levels(
    low: bool = False,
    threshold: Optional[float] = None,
    container: Container = Depends(get_container),
):
    """
    All tracked bottles.

    - `low=true` keeps only bottles under `threshold` ml
      (LOW_LEVEL_THRESHOLD_ML when not given)
    """
    if low:
        limit = threshold if threshold is not None else container.settings.LOW_LEVEL_THRESHOLD_ML
        return container.levels.low_levels(limit)
    return container.levels.get_levels()


@router.post("/levels/refill-all", response_model=List[IngredientLevel])
def refill_all(container: Container = Depends(get_container)):
    return container.levels.refill_all()


@router.put("/levels/{ingredient_id}", response_model=IngredientLevel)
def set_level(
    ingredient_id: str,
    data: LevelUpdate,
    container: Container = Depends(get_container),
):
    return container.levels.set_level(ingredient_id, data.amount)


@router.post("/levels/{ingredient_id}/refill", response_model=IngredientLevel)
def refill(
    ingredient_id: str,
    data: RefillRequest,
    container: Container = Depends(get_container),
):
    return container.levels.refill(ingredient_id, data.amount)


@router.put("/levels/{ingredient_id}/capacity", response_model=IngredientLevel)
def set_capacity(
    ingredient_id: str,
    data: CapacityUpdate,
    container: Container = Depends(get_container),
):
    return container.levels.set_capacity(ingredient_id, data.capacity)
