from typing import Optional
from tagquiz.db.models import ChatProgress, get_session


class ProgressRepository:
    """Repository for chat progress operations."""

    @staticmethod
    def get(chat_id: int) -> Optional[dict]:
        """Get saved progress for a chat."""
        with get_session() as session:
            progress = (
                session.query(ChatProgress)
                .filter(ChatProgress.chat_id == chat_id)
                .first()
            )
            return progress.to_dict() if progress else None

    @staticmethod
    def save(chat_id: int, position: int, correct: int, total: int) -> None:
        """Create or update progress for a chat."""
        with get_session() as session:
            progress = (
                session.query(ChatProgress)
                .filter(ChatProgress.chat_id == chat_id)
                .first()
            )
            if progress is None:
                progress = ChatProgress(chat_id=chat_id)
                session.add(progress)
            progress.position = position
            progress.correct = correct
            progress.total = total
            session.commit()
