from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from .config import get_settings, require
from .handlers import get_routers
from .services.game import get_game_service
from .services.sweeper import SessionSweeper


settings = get_settings()
bot = Bot(
    token=require(settings.bot_token, "BOT_TOKEN"),
    default=DefaultBotProperties(parse_mode="HTML"),
)
dp = Dispatcher()

for router in get_routers():
    dp.include_router(router)

game_service = get_game_service()
session_sweeper = SessionSweeper(game_service)
