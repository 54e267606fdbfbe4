import asyncio
import logging

from guessbot.bot import bot, dp, game_service, session_sweeper
from guessbot.config import get_settings
from guessbot.db import close_client


settings = get_settings()
logger = logging.getLogger("guessbot")


async def on_shutdown() -> None:
    try:
        await session_sweeper.stop()
    finally:
        await bot.session.close()
        if settings.persistence_enabled:
            close_client()
    logger.info("Bot stopped.")


async def main() -> None:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    # drop a webhook left over from the FastAPI deployment
    await bot.delete_webhook(drop_pending_updates=True)

    if await game_service.restore():
        logger.info("Picked up stored knowledge")
    session_sweeper.start()
    logger.info("Bot started!")

    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await on_shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
