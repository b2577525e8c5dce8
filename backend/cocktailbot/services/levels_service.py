# cocktailbot/services/levels_service.py

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from typing import Dict, List, Sequence

from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.schemas.ingredient import DecrementResult, IngredientLevel
from cocktailbot.schemas.recipe import RecipeItem
from cocktailbot.services.pumps_service import PumpConfigStore

log = logging.getLogger(__name__)


def _check_amount(value, what: str = "amount") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{what} must be a number")
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{what} must be a non-negative number")
    return float(value)


def _clamp(amount: float, capacity: float) -> float:
    return max(0.0, min(float(amount), float(capacity)))


class IngredientLevelStore:
    """Fill level of every bottle connected to the machine.

    Levels appear lazily for every ingredient the pump configuration
    references. Each mutation is one locked read-modify-write of the whole
    document, so a sufficiency check and its deduction can never be split.
    """

    def __init__(
        self,
        document: JsonDocument,
        pumps: PumpConfigStore,
        default_capacity: float = 1000.0,
    ) -> None:
        self.document = document
        self.pumps = pumps
        self.default_capacity = default_capacity

    # ---- internal helpers -------------------------------------------------

    def _load(self, raw: list) -> "OrderedDict[str, IngredientLevel]":
        levels: "OrderedDict[str, IngredientLevel]" = OrderedDict()
        for item in raw:
            level = IngredientLevel.model_validate(item)
            level.current_amount = _clamp(level.current_amount, level.capacity)
            levels[level.ingredient_id] = level
        return levels

    def _ensure_configured(self, levels: Dict[str, IngredientLevel]) -> bool:
        created = False
        for entry in self.pumps.get():
            if entry.ingredient not in levels:
                levels[entry.ingredient] = IngredientLevel(
                    ingredient_id=entry.ingredient,
                    current_amount=self.default_capacity,
                    capacity=self.default_capacity,
                )
                created = True
        return created

    @staticmethod
    def _dump(levels: Dict[str, IngredientLevel]) -> list:
        return [level.to_json_dict() for level in levels.values()]

    def _mutate(self, fn):
        with self.document.transaction() as raw:
            levels = self._load(raw)
            self._ensure_configured(levels)
            result = fn(levels)
            raw[:] = self._dump(levels)
        return result

    # ---- public API -------------------------------------------------------

    def get_levels(self) -> List[IngredientLevel]:
        with self.document.transaction() as raw:
            levels = self._load(raw)
            if self._ensure_configured(levels):
                log.info("[LEVEL] created levels for newly configured ingredients")
            raw[:] = self._dump(levels)
        return list(levels.values())

    def get_level(self, ingredient_id: str) -> IngredientLevel:
        for level in self.get_levels():
            if level.ingredient_id == ingredient_id:
                return level
        raise NotFoundError(f"No level tracked for ingredient {ingredient_id!r}")

    def low_levels(self, threshold: float) -> List[IngredientLevel]:
        return [lvl for lvl in self.get_levels() if lvl.current_amount < threshold]

    def set_level(self, ingredient_id: str, amount) -> IngredientLevel:
        amount = _check_amount(amount)

        def apply(levels):
            level = levels.get(ingredient_id)
            if level is None:
                raise NotFoundError(f"No level tracked for ingredient {ingredient_id!r}")
            level.current_amount = _clamp(amount, level.capacity)
            return level.model_copy()

        level = self._mutate(apply)
        log.info("[LEVEL] %s set to %.0f/%.0f ml", ingredient_id, level.current_amount, level.capacity)
        return level

    def refill(self, ingredient_id: str, amount) -> IngredientLevel:
        amount = _check_amount(amount)

        def apply(levels):
            level = levels.get(ingredient_id)
            if level is None:
                raise NotFoundError(f"No level tracked for ingredient {ingredient_id!r}")
            level.current_amount = _clamp(level.current_amount + amount, level.capacity)
            return level.model_copy()

        return self._mutate(apply)

    def set_capacity(self, ingredient_id: str, capacity) -> IngredientLevel:
        capacity = _check_amount(capacity, "capacity")
        if capacity == 0:
            raise ValidationError("capacity must be greater than zero")

        def apply(levels):
            level = levels.get(ingredient_id)
            if level is None:
                raise NotFoundError(f"No level tracked for ingredient {ingredient_id!r}")
            level.capacity = capacity
            level.current_amount = _clamp(level.current_amount, capacity)
            return level.model_copy()

        return self._mutate(apply)

    def refill_all(self) -> List[IngredientLevel]:
        def apply(levels):
            for level in levels.values():
                level.current_amount = level.capacity
            return [level.model_copy() for level in levels.values()]

        levels = self._mutate(apply)
        log.info("[LEVEL] all %d ingredients refilled", len(levels))
        return levels

    def decrement_for_recipe(self, items: Sequence[RecipeItem]) -> DecrementResult:
        required: "OrderedDict[str, float]" = OrderedDict()
        for item in items:
            required[item.ingredient_id] = required.get(item.ingredient_id, 0.0) + float(item.amount)

        with self.document.transaction() as raw:
            levels = self._load(raw)
            self._ensure_configured(levels)

            insufficient = [
                ingredient_id
                for ingredient_id, amount in required.items()
                if ingredient_id not in levels or levels[ingredient_id].current_amount < amount
            ]
            if insufficient:
                # no amount changes when any ingredient falls short
                raw[:] = self._dump(levels)
                return DecrementResult(success=False, insufficient_ingredients=insufficient)

            for ingredient_id, amount in required.items():
                level = levels[ingredient_id]
                level.current_amount = _clamp(level.current_amount - amount, level.capacity)
            raw[:] = self._dump(levels)

        log.info(
            "[LEVEL] deducted %s",
            ", ".join(f"{k}={v:.0f}ml" for k, v in required.items()),
        )
        return DecrementResult(success=True)
