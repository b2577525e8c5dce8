# cocktailbot/services/ingredients_service.py

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.schemas.ingredient import Ingredient

CUSTOM_PREFIX = "custom-"


def custom_ingredient_id(name: str) -> str:
    slug = re.sub(r"\s+", "-", name.strip().lower())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return f"{CUSTOM_PREFIX}{slug}"


class IngredientCatalog:
    """Built-in ingredients plus the ones users add from the UI."""

    def __init__(self, document: JsonDocument, defaults: Sequence[Ingredient]) -> None:
        self.document = document
        self._defaults = [i.model_copy() for i in defaults]

    def custom(self) -> List[Ingredient]:
        return [Ingredient.model_validate(raw) for raw in self.document.read()]

    def _by_id(self) -> Dict[str, Ingredient]:
        merged: Dict[str, Ingredient] = {}
        for ingredient in [*self._defaults, *self.custom()]:
            merged[ingredient.id] = ingredient
        return merged

    def all(self) -> List[Ingredient]:
        return sorted(self._by_id().values(), key=lambda i: i.name.lower())

    def get(self, ingredient_id: str) -> Ingredient:
        ingredient = self._by_id().get(ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient {ingredient_id!r} not found")
        return ingredient

    def name_of(self, ingredient_id: str) -> str:
        ingredient = self._by_id().get(ingredient_id)
        return ingredient.name if ingredient else ingredient_id

    def is_delayed(self, ingredient_id: str) -> bool:
        ingredient = self._by_id().get(ingredient_id)
        return bool(ingredient and ingredient.delayed)

    def add_custom(self, name: str, alcoholic: bool = False) -> Ingredient:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Ingredient name cannot be empty")

        new_id = custom_ingredient_id(name)
        if new_id == CUSTOM_PREFIX:
            raise ValidationError(f"Ingredient name {name!r} has no usable characters")

        with self.document.transaction() as raw:
            known = {i.id: i for i in self._defaults}
            known.update({item["id"]: item for item in raw})
            if new_id in known:
                raise ValidationError(
                    f"An ingredient with id {new_id!r} already exists, choose a more unique name"
                )
            names = {i.name.lower() for i in self._defaults}
            names.update(item["name"].lower() for item in raw)
            if name.lower() in names:
                raise ValidationError(f"Ingredient {name!r} already exists")

            ingredient = Ingredient(id=new_id, name=name, alcoholic=alcoholic)
            raw.append(ingredient.to_json_dict())

        return ingredient
