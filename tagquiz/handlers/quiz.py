import asyncio
import logging
from aiogram import Router, Bot
from aiogram.enums import ChatAction
from aiogram.exceptions import TelegramAPIError
from aiogram.types import BufferedInputFile, Message

from tagquiz.keyboards import build_answers_keyboard
from tagquiz.services.collage_service import CollageService, TILES
from tagquiz.services.errors import DownstreamUnavailable
from tagquiz.services.session_service import SessionStore, Turn

def build_caption(turn: Turn) -> str:
    """Caption with the verdict for the previous reply and the score."""
    if turn.verdict is None:
        return "🔎 Which tag is this?"
    if turn.verdict:
        head = "✅ Right!"
    else:
        head = f"❌ Wrong, it was {turn.previous_answer}"
    return f"{head}\nScore: {turn.correct} of {turn.total}\n\n🔎 Which tag is this?"


async def handle_message(
    msg: Message,
    bot: Bot,
    sessions: SessionStore,
    collages: CollageService,
    request_timeout: float,
) -> None:
    """Every inbound message takes exactly one step through the quiz."""
    # The cursor moves before any network call, whatever happens next
    turn = sessions.play(msg.chat.id, msg.text)
    logging.info(
        f"Chat {msg.chat.id}: asking {turn.question.answer!r}, verdict={turn.verdict}"
    )

    try:
        await asyncio.wait_for(
            send_question(msg, bot, turn, collages), timeout=request_timeout
        )
    except asyncio.TimeoutError:
        logging.error(f"Timed out sending question to {msg.chat.id}")
    except TelegramAPIError as e:
        logging.error(f"Can't send question to {msg.chat.id}: {e}")


async def send_question(
    msg: Message, bot: Bot, turn: Turn, collages: CollageService
) -> None:
    """Send the collage for the question with the answer keyboard."""
    question = turn.question
    try:
        await bot.send_chat_action(msg.chat.id, ChatAction.UPLOAD_PHOTO)
    except TelegramAPIError as e:
        logging.warning(f"Can't send chat action: {e}")

    caption = build_caption(turn)
    try:
        image = await collages.fetch(question.answer, TILES)
    except DownstreamUnavailable as e:
        logging.error(f"Can't get collage for {question.answer!r}: {e}")
        # Fallback to text only, the question is skipped
        await msg.answer(f"{caption}\n\n⚠️ Picture is unavailable, send anything to go on.")
        return

    await msg.answer_photo(
        BufferedInputFile(image, filename="image.jpg"),
        caption=caption,
        reply_markup=build_answers_keyboard(question.variants),
    )


def create_router() -> Router:
    """Router sending a question for every inbound message."""
    router = Router(name="quiz")
    router.message.register(handle_message)
    return router
