# cocktailbot/services/machine_service.py
"""
Cocktail preparation: scaling, sufficiency check, pump sequencing, lighting.

Only one preparation (cocktail, shot or maintenance pulse) may drive the
pumps at a time; a second request while one is running fails with
`BusyError` instead of interleaving pump commands.

Ordering inside a cocktail:
  1. every non-delayed ingredient, all pumps at once
  2. settle delay (SETTLE_DELAY_MS)
  3. delayed ingredients (dense syrups), one after the other, recipe order

Levels are deducted before the first pump starts and are not restored if
the hardware fails afterwards; the liquid that already left the bottle
cannot be put back either.
"""

from __future__ import annotations

import asyncio
import logging
import math
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from cocktailbot.core.errors import (
    BusyError,
    InactiveError,
    InsufficientIngredientsError,
    NotFoundError,
    ValidationError,
)
from cocktailbot.hardware.actuator import PumpActuator, pump_duration_ms, round_half_up
from cocktailbot.schemas.preparation import (
    DispenseStep,
    MachineState,
    MachineStatus,
    PreparationResult,
)
from cocktailbot.schemas.pump import PumpEntry
from cocktailbot.schemas.recipe import RecipeItem
from cocktailbot.services.ingredients_service import IngredientCatalog
from cocktailbot.services.levels_service import IngredientLevelStore
from cocktailbot.services.lighting_service import LightingSignalClient
from cocktailbot.services.pumps_service import PumpConfigStore
from cocktailbot.services.recipes_service import RecipeStore
from cocktailbot.services.stats_service import StatsStore

log = logging.getLogger(__name__)

EventSink = Callable[[str, Dict[str, Any]], None]

PUMP_PURPOSES = ("prime", "vent", "clean", "test", "calibrate")


def base_volume(recipe: Sequence[RecipeItem]) -> float:
    return sum(item.amount for item in recipe)


def scale_recipe(recipe: Sequence[RecipeItem], target_volume: float) -> List[RecipeItem]:
    """Scale every item so the recipe adds up to `target_volume` ml.

    A recipe without volume, or one already at the target, is returned
    unchanged.
    """
    base = base_volume(recipe)
    if base == 0 or target_volume == base:
        return [item.model_copy() for item in recipe]

    factor = target_volume / base
    return [
        item.model_copy(update={"amount": round_half_up(item.amount * factor)})
        for item in recipe
    ]


def _check_volume(value, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{what} must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{what} must be greater than zero")
    return float(value)


class CocktailMachine:
    def __init__(
        self,
        recipes: RecipeStore,
        pumps: PumpConfigStore,
        levels: IngredientLevelStore,
        catalog: IngredientCatalog,
        stats: StatsStore,
        lighting: LightingSignalClient,
        actuator: PumpActuator,
        settle_delay_ms: int = 2000,
        events: Optional[EventSink] = None,
    ) -> None:
        self.recipes = recipes
        self.pumps = pumps
        self.levels = levels
        self.catalog = catalog
        self.stats = stats
        self.lighting = lighting
        self.actuator = actuator
        self.settle_delay_ms = settle_delay_ms
        self._events = events

        self._gate = asyncio.Lock()
        self._status = MachineStatus()

    # ---- state ------------------------------------------------------------

    def status(self) -> MachineStatus:
        return self._status.model_copy()

    @property
    def busy(self) -> bool:
        return self._gate.locked()

    def cancel(self) -> bool:
        """Stop the steps that have not started yet. Running pulses finish."""
        if not self.busy:
            return False
        self._status.cancel_requested = True
        log.info("[MACHINE] cancel requested for %s", self._status.job)
        return True

    def _set_state(self, state: MachineState) -> None:
        self._status.state = state

    def _emit(self, event_type: str, **data: Any) -> None:
        if self._events is None:
            return
        try:
            self._events(event_type, data)
        except Exception as e:
            log.warning("[MACHINE] event %s not delivered: %r", event_type, e)

    @asynccontextmanager
    async def _exclusive(self, job: str):
        # no await between the check and the acquire: nothing can slip in
        if self._gate.locked():
            raise BusyError(f"Machine is busy with {self._status.job}")
        async with self._gate:
            self._status = MachineStatus(
                state=MachineState.CHECKING,
                job=job,
                started_at=datetime.now(timezone.utc),
            )
            try:
                yield
            finally:
                self._status = MachineStatus()

    # ---- pump helpers -----------------------------------------------------

    def _plan(
        self, items: Sequence[RecipeItem]
    ) -> Tuple[List[Tuple[RecipeItem, PumpEntry]], List[str]]:
        routed = []
        skipped = []
        for item in items:
            pump = self.pumps.find_for_ingredient(item.ingredient_id)
            if pump is None:
                log.warning("[MACHINE] no enabled pump for %s, skipping it", item.ingredient_id)
                skipped.append(item.ingredient_id)
                continue
            routed.append((item, pump))
        return routed, skipped

    async def _dispense(self, item: RecipeItem, pump: PumpEntry, delayed: bool) -> DispenseStep:
        duration = pump_duration_ms(item.amount, pump.flow_rate)
        log.info(
            "[MACHINE] pump %s (%s): %.0f ml for %d ms (%.2f ml/s)",
            pump.id, pump.ingredient, item.amount, duration, pump.flow_rate,
        )
        await self.actuator.activate(pump.pin, duration)
        return DispenseStep(
            ingredient_id=item.ingredient_id,
            pump_id=pump.id,
            pin=pump.pin,
            amount=item.amount,
            duration_ms=duration,
            delayed=delayed,
        )

    async def _run_primary(self, routed) -> List[DispenseStep]:
        results = await asyncio.gather(
            *(self._dispense(item, pump, delayed=False) for item, pump in routed),
            return_exceptions=True,
        )
        # every issued pulse has finished by now; surface the first failure
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def _run_delayed(self, routed) -> Tuple[List[DispenseStep], bool]:
        steps: List[DispenseStep] = []
        if not routed:
            return steps, False

        log.info("[MACHINE] waiting %d ms before the delayed ingredients", self.settle_delay_ms)
        await asyncio.sleep(self.settle_delay_ms / 1000.0)

        for item, pump in routed:
            if self._status.cancel_requested:
                return steps, True
            steps.append(await self._dispense(item, pump, delayed=True))
        return steps, False

    async def _fail(self, job: str, error: Exception, levels_deducted: bool) -> None:
        await self.lighting.signal("off")
        if levels_deducted:
            log.warning(
                "[MACHINE] %s aborted after levels were deducted; levels were NOT restored",
                job,
            )
        self._emit("preparation_failed", job=job, error=str(error))

    # ---- public API -------------------------------------------------------

    async def prepare(self, cocktail_id: str, target_volume_ml: float) -> PreparationResult:
        target_volume_ml = _check_volume(target_volume_ml, "Cocktail size")

        async with self._exclusive(f"cocktail:{cocktail_id}"):
            cocktail = self.recipes.get(cocktail_id)
            if not cocktail.is_active:
                raise InactiveError(f"Cocktail {cocktail.name!r} is deactivated")
            if not cocktail.recipe:
                raise ValidationError(f"Cocktail {cocktail.name!r} has an empty recipe")

            log.info("[MACHINE] preparing %s (%.0f ml)", cocktail.name, target_volume_ml)
            scaled = scale_recipe(cocktail.recipe, target_volume_ml)
            manual = [item for item in scaled if item.manual]
            pumped = [item for item in scaled if not item.manual]
            for item in manual:
                log.info("[MACHINE] add by hand: %s %.0f ml", item.ingredient_id, item.amount)

            routed, skipped = self._plan(pumped)

            check = self.levels.decrement_for_recipe([item for item, _ in routed])
            if not check.success:
                log.info("[MACHINE] not enough of %s", ", ".join(check.insufficient_ingredients))
                raise InsufficientIngredientsError(check.insufficient_ingredients)

            self._set_state(MachineState.DISPENSING)
            self._emit(
                "preparation_started",
                cocktail_id=cocktail.id,
                name=cocktail.name,
                size_ml=target_volume_ml,
            )
            await self.lighting.signal("busy")

            primary = [(i, p) for i, p in routed if not self.catalog.is_delayed(i.ingredient_id)]
            delayed = [(i, p) for i, p in routed if self.catalog.is_delayed(i.ingredient_id)]

            try:
                dispensed = await self._run_primary(primary)
                cancelled = self._status.cancel_requested
                if not cancelled:
                    delayed_steps, cancelled = await self._run_delayed(delayed)
                    dispensed.extend(delayed_steps)
            except Exception as e:
                await self._fail(f"cocktail:{cocktail.id}", e, levels_deducted=True)
                raise

            self._set_state(MachineState.FINISHING)

            if cancelled:
                log.info("[MACHINE] %s cancelled, remaining steps skipped", cocktail.name)
                await self.lighting.signal("idle")
                self._emit("preparation_cancelled", cocktail_id=cocktail.id)
                return PreparationResult(
                    success=False,
                    cancelled=True,
                    message=f"{cocktail.name} was cancelled",
                    cocktail_id=cocktail.id,
                    size_ml=target_volume_ml,
                    dispensed=dispensed,
                    skipped=skipped,
                    manual=manual,
                )

            await self.lighting.signal("ready")
            self.stats.increment(cocktail.id, cocktail.name)
            self._emit("preparation_finished", cocktail_id=cocktail.id, name=cocktail.name)
            log.info("[MACHINE] %s done", cocktail.name)

            return PreparationResult(
                success=True,
                message=f"{cocktail.name} ({target_volume_ml:g} ml) is ready!",
                cocktail_id=cocktail.id,
                size_ml=target_volume_ml,
                dispensed=dispensed,
                skipped=skipped,
                manual=manual,
            )

    async def prepare_shot(self, ingredient_id: str, amount_ml: float) -> PreparationResult:
        amount_ml = _check_volume(amount_ml, "Shot amount")

        async with self._exclusive(f"shot:{ingredient_id}"):
            pump = self.pumps.find_for_ingredient(ingredient_id)
            if pump is None:
                raise NotFoundError(f"No enabled pump configured for {ingredient_id!r}")

            item = RecipeItem(ingredient_id=ingredient_id, amount=amount_ml)
            check = self.levels.decrement_for_recipe([item])
            if not check.success:
                raise InsufficientIngredientsError(check.insufficient_ingredients)

            name = self.catalog.name_of(ingredient_id)
            log.info("[MACHINE] shot of %s (%.0f ml)", name, amount_ml)

            self._set_state(MachineState.DISPENSING)
            self._emit("preparation_started", ingredient_id=ingredient_id, size_ml=amount_ml)
            await self.lighting.signal("busy")

            try:
                step = await self._dispense(item, pump, delayed=False)
            except Exception as e:
                await self._fail(f"shot:{ingredient_id}", e, levels_deducted=True)
                raise

            self._set_state(MachineState.FINISHING)
            await self.lighting.signal("ready")
            self.stats.increment(f"shot-{ingredient_id}", f"{name} Shot")
            self._emit("preparation_finished", ingredient_id=ingredient_id)

            return PreparationResult(
                success=True,
                message=f"{name} shot ({amount_ml:g} ml) is ready!",
                size_ml=amount_ml,
                dispensed=[step],
            )

    async def run_pump(self, pump_id: int, duration_ms: int, purpose: str = "test") -> PumpEntry:
        """Single maintenance pulse (priming, venting, cleaning, calibration)."""
        if purpose not in PUMP_PURPOSES:
            raise ValidationError(f"Unknown pump action {purpose!r}")
        if isinstance(duration_ms, bool) or not isinstance(duration_ms, int) or duration_ms <= 0:
            raise ValidationError("Duration must be a positive number of milliseconds")

        async with self._exclusive(f"{purpose}:pump-{pump_id}"):
            pump = self.pumps.get_pump(pump_id)
            log.info(
                "[MACHINE] %s pump %s (%s) on pin %s for %d ms",
                purpose, pump.id, pump.ingredient, pump.pin, duration_ms,
            )
            self._set_state(MachineState.DISPENSING)
            await self.actuator.activate(pump.pin, duration_ms)
            self._emit("pump_activated", pump_id=pump.id, duration_ms=duration_ms, purpose=purpose)
            return pump

    def calibrate_pump(self, pump_id: int, measured_ml: float, duration_ms: int) -> PumpEntry:
        """Derive the flow rate from a timed test pour the user measured."""
        measured_ml = _check_volume(measured_ml, "Measured amount")
        if duration_ms <= 0:
            raise ValidationError("Duration must be greater than zero")

        flow_rate = measured_ml / (duration_ms / 1000.0)
        pump = self.pumps.update_flow_rate(pump_id, flow_rate)
        log.info("[MACHINE] pump %s calibrated to %.3f ml/s", pump.id, pump.flow_rate)
        return pump
