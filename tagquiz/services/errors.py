class QuizError(Exception):
    """Base class for quiz engine errors."""


class InsufficientVocabulary(QuizError):
    """Raised when the tag vocabulary is too small for a full choice set."""

    def __init__(self, size: int, required: int):
        self.size = size
        self.required = required
        super().__init__(
            f"Vocabulary has {size} tag(s), at least {required} required"
        )


class DownstreamUnavailable(QuizError):
    """Raised when the image service or the chat transport fails."""

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"{service} unavailable: {reason}")


class MalformedInbound(QuizError):
    """Raised when an inbound update fails validation."""
