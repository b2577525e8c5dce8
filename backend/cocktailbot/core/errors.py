# cocktailbot/core/errors.py

from typing import Iterable, List


class CocktailBotError(Exception):
    """Base class for every error the machine surfaces to its callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "detail": self.message}


class NotFoundError(CocktailBotError):
    status_code = 404


class InactiveError(CocktailBotError):
    status_code = 409


class InsufficientIngredientsError(CocktailBotError):
    """Sufficiency check failed; nothing was dispensed, safe to retry after a refill."""

    status_code = 409

    def __init__(self, ingredient_ids: Iterable[str]) -> None:
        self.ingredient_ids: List[str] = list(ingredient_ids)
        super().__init__(
            "Not enough of: " + ", ".join(self.ingredient_ids)
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["ingredientIds"] = self.ingredient_ids
        return data


class HardwareError(CocktailBotError):
    status_code = 502


class BusyError(CocktailBotError):
    status_code = 409

    def __init__(self, message: str = "Another preparation is in progress") -> None:
        super().__init__(message)


class ValidationError(CocktailBotError):
    status_code = 422
