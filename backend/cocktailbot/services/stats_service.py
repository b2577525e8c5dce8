# cocktailbot/services/stats_service.py

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from cocktailbot.db.json_store import JsonDocument
from cocktailbot.schemas.stats import CocktailStat

log = logging.getLogger(__name__)


class StatsStore:
    def __init__(self, document: JsonDocument) -> None:
        self.document = document

    def list(self) -> List[CocktailStat]:
        stats = [CocktailStat.model_validate(raw) for raw in self.document.read()]
        return sorted(stats, key=lambda s: s.count, reverse=True)

    def increment(self, cocktail_id: str, cocktail_name: str) -> CocktailStat:
        now = datetime.now(timezone.utc)
        with self.document.transaction() as raw:
            for index, item in enumerate(raw):
                if item.get("cocktailId") == cocktail_id:
                    stat = CocktailStat.model_validate(item)
                    stat.count += 1
                    stat.last_made = now
                    # name may have been edited since the last pour
                    stat.cocktail_name = cocktail_name
                    raw[index] = stat.to_json_dict()
                    break
            else:
                stat = CocktailStat(
                    cocktail_id=cocktail_id,
                    cocktail_name=cocktail_name,
                    count=1,
                    last_made=now,
                )
                raw.append(stat.to_json_dict())

        log.debug("[STATS] %s -> %d", cocktail_id, stat.count)
        return stat

    def reset(self, cocktail_id: str) -> None:
        with self.document.transaction() as raw:
            raw[:] = [item for item in raw if item.get("cocktailId") != cocktail_id]

    def reset_all(self) -> None:
        self.document.write([])

    def total_count(self) -> int:
        return sum(stat.count for stat in self.list())

    def top(self, limit: int = 5) -> List[CocktailStat]:
        return self.list()[:limit]
