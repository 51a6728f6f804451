from tagquiz.keyboards.builders import build_answers_keyboard

__all__ = ["build_answers_keyboard"]
