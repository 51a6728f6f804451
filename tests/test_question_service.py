import random
from collections import Counter

import pytest

from tagquiz.services.errors import InsufficientVocabulary
from tagquiz.services.question_service import (
    CHOICES,
    Question,
    build_question,
    generate_queue,
    sample_distractors,
)
from tagquiz.services.vocabulary import TagVocabulary

TAGS = [
    "cat", "dog", "bird", "fish", "sunset", "mountains",
    "coffee", "city", "beach", "forest", "snow", "flowers",
]


@pytest.mark.parametrize("limit", [4, 5, 7, 8, 12, 100])
def test_sample_distractors_excludes_answer(limit):
    rng = random.Random(1)
    for exclude in range(min(limit, 10)):
        picked = sample_distractors(limit, CHOICES, exclude, rng)
        assert len(picked) == CHOICES
        assert picked[-1] == exclude
        assert exclude not in picked[:-1]
        assert len(set(picked)) == CHOICES
        assert all(0 <= i < limit for i in picked)


def test_sample_distractors_rejects_small_pool():
    with pytest.raises(InsufficientVocabulary) as exc:
        sample_distractors(3, 4, 0, random.Random())
    assert exc.value.size == 3
    assert exc.value.required == 4


@pytest.mark.parametrize("exclude", [-1, 5])
def test_sample_distractors_rejects_bad_exclude(exclude):
    with pytest.raises(ValueError):
        sample_distractors(5, 4, exclude, random.Random())


def test_sample_distractors_single_choice():
    assert sample_distractors(10, 1, 3, random.Random()) == [3]


def test_build_question_variants_are_distinct():
    rng = random.Random(3)
    for answer_index in range(len(TAGS)):
        question = build_question(TAGS, answer_index, rng)
        assert question.answer == TAGS[answer_index]
        assert len(question.variants) == CHOICES
        assert len(set(question.variants)) == CHOICES
        assert question.variants.count(question.answer) == 1
        assert set(question.variants) <= set(TAGS)


def test_build_question_without_shuffle_puts_answer_last():
    question = build_question(TAGS, 5, random.Random(0), shuffle=False)
    assert question.variants[-1] == "mountains"
    assert question.variants.index("mountains") == CHOICES - 1


def test_answer_slot_is_randomized():
    rng = random.Random(11)
    slots = {build_question(TAGS, 0, rng).variants.index("cat") for _ in range(200)}
    assert slots == set(range(CHOICES))


def test_question_is_correct():
    question = Question(answer="dog", variants=("cat", "dog", "bird", "fish"))
    assert question.is_correct("dog")
    assert question.is_correct(" dog ")
    assert not question.is_correct("cat")
    assert not question.is_correct(None)


@pytest.mark.parametrize("size", [4, 5, 6, 12])
def test_queue_covers_every_tag_once(size):
    tags = TAGS[:size]
    queue = generate_queue(tags, seed=size)
    assert len(queue) == size
    assert Counter(q.answer for q in queue) == Counter(tags)
    for question in queue:
        assert len(set(question.variants)) == CHOICES
        assert question.variants.count(question.answer) == 1


def test_queue_is_deterministic_for_seed():
    vocabulary = TagVocabulary(TAGS)
    assert generate_queue(vocabulary, seed=42) == generate_queue(vocabulary, seed=42)
    first = generate_queue(vocabulary, rng=random.Random(9))
    second = generate_queue(vocabulary, rng=random.Random(9))
    assert first == second


def test_queue_order_follows_permutation():
    orders = {
        tuple(q.answer for q in generate_queue(TAGS, seed=seed)) for seed in range(20)
    }
    assert len(orders) > 1


@pytest.mark.parametrize("size", [2, 3])
def test_queue_rejects_small_vocabulary(size):
    with pytest.raises(InsufficientVocabulary) as exc:
        generate_queue(TAGS[:size], seed=1)
    assert exc.value.size == size
    assert exc.value.required == CHOICES


def test_four_tag_scenario():
    tags = ["cat", "dog", "bird", "fish"]
    queue = generate_queue(TagVocabulary(tags), seed=42)
    assert len(queue) == 4
    assert sorted(q.answer for q in queue) == sorted(tags)
    for question in queue:
        assert sorted(question.variants) == sorted(tags)
