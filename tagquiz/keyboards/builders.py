from typing import Sequence

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup


def build_answers_keyboard(
    variants: Sequence[str], columns: int = 2
) -> ReplyKeyboardMarkup:
    """
    Build reply keyboard for answer options.

    Labels keep the variant order, ``columns`` per row, so four variants
    give a 2x2 grid. The keyboard hides itself after one tap.
    """
    rows = [
        [KeyboardButton(text=text) for text in variants[i : i + columns]]
        for i in range(0, len(variants), columns)
    ]
    return ReplyKeyboardMarkup(
        keyboard=rows,
        resize_keyboard=True,
        one_time_keyboard=True,
        selective=False,
    )
