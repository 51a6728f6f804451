from sqlalchemy import create_engine, Column, Integer, BigInteger
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

SessionLocal = sessionmaker()


class ChatProgress(Base):
    """Quiz progress of one chat (or of everyone, in global scope)."""

    __tablename__ = "chat_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column(BigInteger, unique=True, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # next question index
    correct = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "correct": self.correct,
            "total": self.total,
        }


def init_db(url: str) -> Engine:
    """Bind sessions to the database and create tables."""
    engine = create_engine(url, echo=False)
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(engine)
    return engine


def get_session() -> Session:
    """Get a database session."""
    return SessionLocal()
