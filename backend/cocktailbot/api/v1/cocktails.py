# cocktailbot/api/v1/cocktails.py

from typing import List

from fastapi import APIRouter, Depends, status

from cocktailbot.api.deps import get_container
from cocktailbot.core.container import Container
from cocktailbot.core.errors import ValidationError
from cocktailbot.schemas.recipe import ActiveUpdate, Cocktail

router = APIRouter(prefix="/cocktails", tags=["cocktails"])


@router.get("/", response_model=List[Cocktail])
def list_cocktails(
    include_inactive: bool = True,
    container: Container = Depends(get_container),
):
    return container.recipes.get_all(include_inactive=include_inactive)


@router.post("/", response_model=Cocktail, status_code=status.HTTP_201_CREATED)
def create_cocktail(
    data: Cocktail,
    container: Container = Depends(get_container),
):
    return container.recipes.save(data)


@router.get("/{cocktail_id}", response_model=Cocktail)
def get_cocktail(
    cocktail_id: str,
    container: Container = Depends(get_container),
):
    return container.recipes.get(cocktail_id)


@router.put("/{cocktail_id}", response_model=Cocktail)
def save_cocktail(
    cocktail_id: str,
    data: Cocktail,
    container: Container = Depends(get_container),
):
    if data.id and data.id != cocktail_id:
        raise ValidationError(f"Body id {data.id!r} does not match {cocktail_id!r}")
    data.id = cocktail_id
    return container.recipes.save(data)


@router.patch("/{cocktail_id}/active", response_model=Cocktail)
def set_cocktail_active(
    cocktail_id: str,
    data: ActiveUpdate,
    container: Container = Depends(get_container),
):
    return container.recipes.set_active(cocktail_id, data.is_active)


@router.delete("/{cocktail_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cocktail(
    cocktail_id: str,
    container: Container = Depends(get_container),
):
    container.recipes.delete(cocktail_id)
    return
