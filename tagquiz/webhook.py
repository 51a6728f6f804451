import json
import logging
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.types import Update
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web
from pydantic import ValidationError

from tagquiz.services.errors import MalformedInbound


class QuizRequestHandler(SimpleRequestHandler):
    """Webhook handler that rejects malformed updates with 400."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        bot: Bot,
        secret_token: Optional[str] = None,
        **data,
    ):
        # Handle in-line so every event lives as long as its request
        super().__init__(
            dispatcher,
            bot,
            handle_in_background=False,
            secret_token=secret_token,
            **data,
        )

    async def validate(self, request: web.Request) -> None:
        """Raise MalformedInbound if the body is not a Telegram update."""
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedInbound(f"invalid JSON: {e}") from e
        try:
            Update.model_validate(payload, context={"bot": self.bot})
        except ValidationError as e:
            raise MalformedInbound(f"invalid update: {e.error_count()} error(s)") from e

    async def handle(self, request: web.Request) -> web.Response:
        secret = request.headers.get("X-Telegram-Bot-Api-Secret-Token", "")
        if not self.verify_secret(secret, self.bot):
            return web.Response(status=401, text="Unauthorized")
        try:
            await self.validate(request)
        except MalformedInbound as e:
            logging.warning(f"Rejected update from {request.remote}: {e}")
            return web.Response(status=400, text="Malformed update")
        return await super().handle(request)


async def index(request: web.Request) -> web.Response:
    return web.Response(text="Hello world")


def create_app(
    dispatcher: Dispatcher,
    bot: Bot,
    path: str = "/bothook",
    secret_token: Optional[str] = None,
) -> web.Application:
    """Build the aiohttp application serving the webhook."""
    app = web.Application()
    app.router.add_get("/", index)
    QuizRequestHandler(dispatcher, bot, secret_token=secret_token).register(
        app, path=path
    )
    setup_application(app, dispatcher, bot=bot)
    return app
