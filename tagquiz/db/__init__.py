from tagquiz.db.models import init_db, get_session
from tagquiz.db.repository import ProgressRepository

__all__ = ["init_db", "get_session", "ProgressRepository"]
