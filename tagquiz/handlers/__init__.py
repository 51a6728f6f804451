from aiogram import Router

from tagquiz.handlers.quiz import create_router as create_quiz_router


def setup_routers() -> Router:
    """Setup and return the main router with all sub-routers."""
    router = Router()
    router.include_router(create_quiz_router())
    return router


__all__ = ["setup_routers"]
