from aiogram import Router

from . import memory, play, start, teach


def get_routers() -> list[Router]:
    return [
        start.router,
        play.router,
        memory.router,
        teach.router,
    ]
