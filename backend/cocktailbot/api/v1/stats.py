# cocktailbot/api/v1/stats.py

from typing import List

from fastapi import APIRouter, Depends, status

from cocktailbot.api.deps import get_container
from cocktailbot.core.container import Container
from cocktailbot.schemas.stats import CocktailStat, StatsSummary

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/", response_model=List[CocktailStat])
def get_stats(container: Container = Depends(get_container)):
    return container.stats.list()


@router.get("/summary", response_model=StatsSummary)
def get_summary(
    limit: int = 5,
    container: Container = Depends(get_container),
):
    return StatsSummary(total=container.stats.total_count(), top=container.stats.top(limit))


@router.delete("/{cocktail_id}", status_code=status.HTTP_204_NO_CONTENT)
def reset_stat(
    cocktail_id: str,
    container: Container = Depends(get_container),
):
    container.stats.reset(cocktail_id)
    return


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def reset_all_stats(container: Container = Depends(get_container)):
    container.stats.reset_all()
    return
