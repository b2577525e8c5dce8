# cocktailbot/schemas/__init__.py

from cocktailbot.schemas.ingredient import (  # noqa: F401
    DecrementResult,
    Ingredient,
    IngredientLevel,
)
from cocktailbot.schemas.lighting import LightingConfig  # noqa: F401
from cocktailbot.schemas.preparation import (  # noqa: F401
    DispenseStep,
    MachineState,
    MachineStatus,
    PreparationResult,
)
from cocktailbot.schemas.pump import PumpEntry  # noqa: F401
from cocktailbot.schemas.recipe import Cocktail, RecipeItem  # noqa: F401
from cocktailbot.schemas.stats import CocktailStat  # noqa: F401
