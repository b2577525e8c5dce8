# cocktailbot/services/recipes_service.py

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional, Sequence

from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.schemas.recipe import Cocktail, RecipeItem

log = logging.getLogger(__name__)

CUSTOM_PREFIX = "custom-"


def new_cocktail_id() -> str:
    return f"{CUSTOM_PREFIX}{uuid.uuid4().hex[:8]}"


def normalize_image(image: str) -> str:
    image = image or ""
    if image and not image.startswith("http") and not image.startswith("/"):
        image = f"/{image}"
    return image


def _format_amount(amount: float) -> str:
    return f"{amount:g}"


def describe_recipe(items: Sequence[RecipeItem], name_of: Callable[[str], str]) -> List[str]:
    lines = []
    for item in items:
        line = f"{_format_amount(item.amount)}ml {name_of(item.ingredient_id)}"
        if item.manual:
            line += " (add manually)"
        lines.append(line)
    return lines


class RecipeStore:
    """Built-in cocktails merged with the user's overlay.

    Built-ins are never rewritten: a user edit is stored in the overlay
    under the same id, and deleting a built-in records a tombstone.
    """

    def __init__(
        self,
        overlay: JsonDocument,
        tombstones: JsonDocument,
        defaults: Sequence[Cocktail],
        name_of: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.overlay = overlay
        self.tombstones = tombstones
        self._defaults = [c.model_copy(deep=True) for c in defaults]
        self._builtin_ids = {c.id for c in self._defaults}
        self._name_of = name_of or (lambda ingredient_id: ingredient_id)

    def is_builtin(self, cocktail_id: str) -> bool:
        return cocktail_id in self._builtin_ids

    def get_all(self, include_inactive: bool = True) -> List[Cocktail]:
        deleted = set(self.tombstones.read())
        merged = {c.id: c for c in self._defaults if c.id not in deleted}

        for raw in self.overlay.read():
            cocktail = Cocktail.model_validate(raw)
            merged[cocktail.id] = cocktail

        cocktails = []
        for cocktail in merged.values():
            cocktail = cocktail.model_copy(deep=True)
            cocktail.image = normalize_image(cocktail.image)
            if include_inactive or cocktail.is_active:
                cocktails.append(cocktail)
        return cocktails

    def get(self, cocktail_id: str) -> Cocktail:
        for cocktail in self.get_all():
            if cocktail.id == cocktail_id:
                return cocktail
        raise NotFoundError(f"Cocktail {cocktail_id!r} not found")

    def save(self, cocktail: Cocktail) -> Cocktail:
        if not cocktail.name.strip():
            raise ValidationError("Cocktail name cannot be empty")
        if not cocktail.recipe:
            raise ValidationError("Recipe must contain at least one ingredient")

        cocktail = cocktail.model_copy(deep=True)
        if not cocktail.id:
            cocktail.id = new_cocktail_id()
        cocktail.image = normalize_image(cocktail.image)
        if not cocktail.ingredients:
            cocktail.ingredients = describe_recipe(cocktail.recipe, self._name_of)

        with self.overlay.transaction() as raw:
            for index, existing in enumerate(raw):
                if existing.get("id") == cocktail.id:
                    raw[index] = cocktail.to_json_dict()
                    log.info("[RECIPE] updated %s (%s)", cocktail.name, cocktail.id)
                    break
            else:
                raw.append(cocktail.to_json_dict())
                log.info("[RECIPE] added %s (%s)", cocktail.name, cocktail.id)

        with self.tombstones.transaction() as deleted:
            if cocktail.id in deleted:
                deleted.remove(cocktail.id)

        return cocktail

    def delete(self, cocktail_id: str) -> None:
        removed = False
        with self.overlay.transaction() as raw:
            kept = [item for item in raw if item.get("id") != cocktail_id]
            removed = len(kept) != len(raw)
            raw[:] = kept

        if self.is_builtin(cocktail_id):
            with self.tombstones.transaction() as deleted:
                if cocktail_id not in deleted:
                    deleted.append(cocktail_id)
                    removed = True

        if not removed:
            raise NotFoundError(f"Cocktail {cocktail_id!r} not found")
        log.info("[RECIPE] deleted %s", cocktail_id)

    def set_active(self, cocktail_id: str, active: bool) -> Cocktail:
        cocktail = self.get(cocktail_id)
        cocktail.is_active = active
        return self.save(cocktail)
