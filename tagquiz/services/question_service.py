import random
from dataclasses import dataclass
from typing import Optional, Sequence

from tagquiz.services.errors import InsufficientVocabulary

# Number of options shown with every question (2x2 keyboard)
CHOICES = 4


@dataclass(frozen=True)
class Question:
    """One correct tag plus the labels offered to the user."""

    answer: str
    variants: tuple[str, ...]

    def is_correct(self, text: Optional[str]) -> bool:
        """Check if the text matches the correct answer."""
        return text is not None and text.strip() == self.answer


def sample_distractors(
    limit: int, count: int, exclude: int, rng: random.Random
) -> list[int]:
    """
    Pick ``count - 1`` distinct indices from ``[0, limit)`` other than
    ``exclude`` and append ``exclude`` as the last element.

    Sparse pools use rejection sampling in draw order. When the choice set
    takes more than half of the pool, the pool without ``exclude`` is
    sampled directly so the loop can never starve.

    Raises:
        InsufficientVocabulary: if ``limit < count``
        ValueError: if ``count < 1`` or ``exclude`` is out of range
    """
    if count < 1:
        raise ValueError(f"count must be positive, got {count}")
    if limit < count:
        raise InsufficientVocabulary(limit, count)
    if not 0 <= exclude < limit:
        raise ValueError(f"exclude {exclude} out of range [0, {limit})")

    wanted = count - 1
    if count * 2 > limit:
        pool = [i for i in range(limit) if i != exclude]
        picked = rng.sample(pool, wanted)
    else:
        picked = []
        chosen = {exclude}
        while len(picked) < wanted:
            candidate = rng.randrange(limit)
            if candidate not in chosen:
                chosen.add(candidate)
                picked.append(candidate)

    picked.append(exclude)
    return picked


def build_question(
    vocabulary: Sequence[str],
    answer_index: int,
    rng: random.Random,
    shuffle: bool = True,
) -> Question:
    """Build a question whose answer is ``vocabulary[answer_index]``."""
    indices = sample_distractors(len(vocabulary), CHOICES, answer_index, rng)
    if shuffle:
        rng.shuffle(indices)
    return Question(
        answer=vocabulary[answer_index],
        variants=tuple(vocabulary[i] for i in indices),
    )


def generate_queue(
    vocabulary: Sequence[str],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    shuffle: bool = True,
) -> tuple[Question, ...]:
    """
    Build one question per tag, in random order.

    Every tag is the answer of exactly one question. The size check runs
    before anything is drawn, so a short vocabulary never yields a partial
    queue.
    """
    size = len(vocabulary)
    if size < CHOICES:
        raise InsufficientVocabulary(size, CHOICES)
    if rng is None:
        rng = random.Random(seed)

    order = rng.sample(range(size), size)
    return tuple(build_question(vocabulary, i, rng, shuffle) for i in order)
