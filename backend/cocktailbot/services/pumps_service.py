# cocktailbot/services/pumps_service.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from cocktailbot.core.errors import NotFoundError, ValidationError
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.schemas.pump import PumpEntry

log = logging.getLogger(__name__)


def validate_pump_config(entries: Sequence[PumpEntry]) -> None:
    """Reject configurations that would make pump routing ambiguous."""
    seen_ids = set()
    enabled_pins = {}
    enabled_ingredients = {}

    for entry in entries:
        if entry.id in seen_ids:
            raise ValidationError(f"Duplicate pump id {entry.id}")
        seen_ids.add(entry.id)

        if not entry.enabled:
            continue

        if entry.pin in enabled_pins:
            raise ValidationError(
                f"Pin {entry.pin} is used by pumps {enabled_pins[entry.pin]} and {entry.id}"
            )
        enabled_pins[entry.pin] = entry.id

        if entry.ingredient in enabled_ingredients:
            raise ValidationError(
                f"Ingredient {entry.ingredient!r} is routed to pumps "
                f"{enabled_ingredients[entry.ingredient]} and {entry.id}"
            )
        enabled_ingredients[entry.ingredient] = entry.id


class PumpConfigStore:
    def __init__(self, document: JsonDocument, defaults: Sequence[PumpEntry]) -> None:
        self.document = document
        self._defaults = [entry.model_copy() for entry in defaults]

    def get(self) -> List[PumpEntry]:
        if not self.document.exists():
            log.info("[PUMP] %s missing, using default configuration", self.document.path)
            self.document.write([entry.to_json_dict() for entry in self._defaults])
            return [entry.model_copy() for entry in self._defaults]

        return [PumpEntry.model_validate(raw) for raw in self.document.read()]

    def save(self, entries: Sequence[PumpEntry]) -> List[PumpEntry]:
        validate_pump_config(entries)
        self.document.write([entry.to_json_dict() for entry in entries])
        for entry in entries:
            log.info(
                "[PUMP] pump %s (%s): pin %s, %.2f ml/s, %s",
                entry.id, entry.ingredient, entry.pin, entry.flow_rate,
                "enabled" if entry.enabled else "disabled",
            )
        return list(entries)

    def get_pump(self, pump_id: int) -> PumpEntry:
        for entry in self.get():
            if entry.id == pump_id:
                return entry
        raise NotFoundError(f"Pump {pump_id} not found")

    def find_for_ingredient(self, ingredient_id: str) -> Optional[PumpEntry]:
        # first enabled match wins; save() keeps it unique
        for entry in self.get():
            if entry.enabled and entry.ingredient == ingredient_id:
                return entry
        return None

    def update_flow_rate(self, pump_id: int, flow_rate: float) -> PumpEntry:
        if not flow_rate > 0:
            raise ValidationError("Flow rate must be positive")

        entries = self.get()
        for entry in entries:
            if entry.id == pump_id:
                entry.flow_rate = round(flow_rate, 3)
                self.save(entries)
                return entry
        raise NotFoundError(f"Pump {pump_id} not found")
