# cocktailbot/api/deps.py

from fastapi import Request

from cocktailbot.core.container import Container
from cocktailbot.services.machine_service import CocktailMachine


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_machine(request: Request) -> CocktailMachine:
    return request.app.state.container.machine
