# cocktailbot/schemas/stats.py

from datetime import datetime
from typing import List

from cocktailbot.schemas.base import CamelModel


class CocktailStat(CamelModel):
    cocktail_id: str
    cocktail_name: str
    count: int = 0
    last_made: datetime


class StatsSummary(CamelModel):
    total: int
    top: List[CocktailStat]
