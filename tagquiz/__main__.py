import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiohttp import web

from tagquiz import config
from tagquiz.db import init_db, ProgressRepository
from tagquiz.handlers import setup_routers
from tagquiz.services.collage_service import CollageService
from tagquiz.services.errors import QuizError
from tagquiz.services.question_service import generate_queue
from tagquiz.services.session_service import SessionStore
from tagquiz.services.vocabulary import TagVocabulary
from tagquiz.webhook import create_app


def build_sessions() -> SessionStore:
    """Build the question queue and the session store. Fails before serving."""
    try:
        vocabulary = TagVocabulary.from_string(config.tags)
        queue = generate_queue(vocabulary, seed=config.quiz_seed)
    except QuizError as e:
        logging.critical(f"Can't build question queue: {e}")
        raise

    repository = None
    if config.database_url:
        init_db(config.database_url)
        repository = ProgressRepository()
        if config.quiz_seed is None:
            logging.warning("Saved positions won't match a queue built without QUIZ_SEED")

    logging.info(
        f"Loaded {len(vocabulary)} tags, seed={config.quiz_seed}, "
        f"scope={config.cursor_scope}, durable={repository is not None}"
    )
    return SessionStore(queue, scope=config.cursor_scope, repository=repository)


def build_dispatcher(sessions: SessionStore, collages: CollageService) -> Dispatcher:
    dp = Dispatcher(
        sessions=sessions,
        collages=collages,
        request_timeout=config.request_timeout,
    )
    dp.include_router(setup_routers())

    async def on_startup(bot: Bot) -> None:
        if config.webhook_url:
            await bot.set_webhook(
                f"{config.webhook_url}{config.webhook_path}",
                secret_token=config.webhook_secret,
                allowed_updates=["message"],
            )
            logging.info(f"Webhook set to {config.webhook_url}{config.webhook_path}")

    async def on_shutdown() -> None:
        await collages.close()

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp


def main() -> None:
    logging.basicConfig(level=config.log_level)
    if not config.bot_token:
        raise RuntimeError("❌ BOT_TOKEN is not set")

    sessions = build_sessions()
    collages = CollageService(
        config.image_service_url,
        api_key=config.image_service_key,
        timeout=config.request_timeout,
    )
    bot = Bot(token=config.bot_token)
    dp = build_dispatcher(sessions, collages)

    if config.webhook_url:
        app = create_app(dp, bot, config.webhook_path, config.webhook_secret)
        web.run_app(app, host=config.web_server_host, port=config.web_server_port)
    else:
        logging.info("WEBHOOK_URL is empty, using long polling")
        asyncio.run(dp.start_polling(bot))


if __name__ == "__main__":
    main()
