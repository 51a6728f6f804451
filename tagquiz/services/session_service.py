import logging
import threading
from typing import Callable, NamedTuple, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from tagquiz.services.question_service import Question

SCOPE_CHAT = "chat"
SCOPE_GLOBAL = "global"
SCOPES = (SCOPE_CHAT, SCOPE_GLOBAL)

# Key used for the single shared session in global scope
GLOBAL_KEY = 0


class SessionCursor:
    """Points at the current question of a queue and wraps around at the end."""

    def __init__(self, queue: Sequence[Question], position: int = 0):
        if not queue:
            raise ValueError("Queue is empty")
        self._queue = queue
        self._position = position % len(queue)
        self._lock = threading.Lock()

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._queue)

    def current(self) -> Question:
        """Return the current question without moving the cursor."""
        return self._queue[self._position]

    def take_next(self) -> Question:
        """Return the current question and step to the next one."""
        with self._lock:
            question = self._queue[self._position]
            self._position = (self._position + 1) % len(self._queue)
            return question


class Turn(NamedTuple):
    """Outcome of one quiz event."""

    question: Question
    verdict: Optional[bool]  # None when nothing was graded
    previous_answer: Optional[str]
    correct: int
    total: int
    position: int


class Session:
    """Quiz progress of one conversation."""

    def __init__(
        self,
        queue: Sequence[Question],
        position: int = 0,
        correct: int = 0,
        total: int = 0,
        on_turn: Optional[Callable[["Turn"], None]] = None,
    ):
        self.cursor = SessionCursor(queue, position)
        self.on_turn = on_turn
        self.asked: Optional[Question] = None
        self.correct = correct
        self.total = total
        self._lock = threading.Lock()

    def play(self, text: Optional[str]) -> Turn:
        """
        Grade the reply to the last asked question and take the next one.

        A reply is graded only if it is one of the labels shown for the
        last question; anything else (commands, free text, first contact)
        just moves on.
        """
        with self._lock:
            verdict = None
            previous = self.asked
            label = text.strip() if text else None
            if previous is not None and label in previous.variants:
                verdict = previous.is_correct(label)
                self.total += 1
                self.correct += int(verdict)

            question = self.cursor.take_next()
            self.asked = question
            turn = Turn(
                question=question,
                verdict=verdict,
                previous_answer=previous.answer if previous else None,
                correct=self.correct,
                total=self.total,
                position=self.cursor.position,
            )
            if self.on_turn is not None:
                self.on_turn(turn)
            return turn


class SessionStore:
    """Sessions keyed by chat id, created on first contact."""

    def __init__(
        self,
        queue: Sequence[Question],
        scope: str = SCOPE_CHAT,
        repository=None,
    ):
        if scope not in SCOPES:
            raise ValueError(f"Unknown cursor scope: {scope}")
        if not queue:
            raise ValueError("Queue is empty")
        self.queue = queue
        self.scope = scope
        self.repository = repository
        self._sessions: dict[int, Session] = {}
        self._lock = threading.Lock()

    def _key(self, chat_id: int) -> int:
        return GLOBAL_KEY if self.scope == SCOPE_GLOBAL else chat_id

    def get(self, chat_id: int) -> Session:
        """Get the session for a chat, restoring saved progress if any."""
        key = self._key(chat_id)
        with self._lock:
            session = self._sessions.get(key)
            if session is not None:
                return session
            session = self._create(key)
            if session is None:
                # Progress is unreadable: play from the start without
                # keeping or saving it, the next event reads again
                return Session(self.queue)
            self._sessions[key] = session
            logging.debug(f"Started session {key}, {len(self)} active")
            return session

    def _create(self, key: int) -> Optional[Session]:
        """Create a session from saved progress. None if the read fails."""
        on_turn = None
        position = correct = total = 0
        if self.repository is not None:
            try:
                saved = self.repository.get(key)
            except SQLAlchemyError as e:
                logging.error(f"Failed to load progress for {key}: {e}")
                return None
            on_turn = self._saver(key)
            if saved:
                logging.debug(f"Restored progress for {key}: {saved}")
                position = saved["position"]
                correct = saved["correct"]
                total = saved["total"]
        return Session(self.queue, position, correct, total, on_turn=on_turn)

    def _saver(self, key: int) -> Callable[[Turn], None]:
        def save(turn: Turn) -> None:
            try:
                self.repository.save(key, turn.position, turn.correct, turn.total)
            except SQLAlchemyError as e:
                logging.error(f"Failed to save progress for {key}: {e}")

        return save

    def play(self, chat_id: int, text: Optional[str]) -> Turn:
        """Run one quiz event for a chat. Advances its cursor exactly once."""
        return self.get(chat_id).play(text)

    def __len__(self) -> int:
        return len(self._sessions)
