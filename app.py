import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

from aiogram import types

from guessbot.bot import bot, dp, game_service, session_sweeper
from guessbot.config import get_settings, require
from guessbot.db import close_client


settings = get_settings()
app = FastAPI()
log = logging.getLogger("guessbot.app")


@app.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return "ok"


@app.post(f"/webhook/{settings.bot_token}")
async def telegram_webhook(request: Request):
    data = await request.json()
    try:
        update = types.Update.model_validate(data)
    except Exception as exc:  # pragma: no cover - aiogram validation
        raise HTTPException(400, f"Invalid update payload: {exc}") from exc
    await dp.feed_update(bot, update)
    return {"ok": True}


@app.post("/cron/sweep")
async def trigger_sweep(request: Request):
    secret = request.headers.get("X-CRON-SECRET") or request.query_params.get("secret")
    if settings.cron_secret and secret != settings.cron_secret:
        raise HTTPException(403, "Forbidden")
    evicted = await session_sweeper.tick()
    return {"ok": True, "evicted": evicted}


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    await game_service.restore()
    url = f"{require(settings.webhook_base, 'WEBHOOK_BASE')}/webhook/{settings.bot_token}"
    await bot.delete_webhook(drop_pending_updates=True)
    await bot.set_webhook(url, drop_pending_updates=True)
    session_sweeper.start()
    log.info("Webhook set to %s", url)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    try:
        await session_sweeper.stop()
        await bot.delete_webhook(drop_pending_updates=False)
    finally:
        await bot.session.close()
        if settings.persistence_enabled:
            close_client()
