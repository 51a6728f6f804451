import pytest

from tagquiz.services.errors import InsufficientVocabulary
from tagquiz.services.vocabulary import TagVocabulary, parse_tags


def test_parse_tags_strips_and_deduplicates():
    assert parse_tags(" cat, dog ,,cat, bird ,") == ["cat", "dog", "bird"]


def test_parse_tags_empty():
    assert parse_tags("") == []
    assert parse_tags(None) == []


def test_vocabulary_keeps_order_and_indices():
    vocabulary = TagVocabulary.from_string("sunset,coffee,city,sunset")
    assert list(vocabulary) == ["sunset", "coffee", "city"]
    assert len(vocabulary) == 3
    assert vocabulary[1] == "coffee"
    assert vocabulary[2] == "city"


@pytest.mark.parametrize("raw", ["", "cat", "cat,cat, cat"])
def test_vocabulary_needs_two_tags(raw):
    with pytest.raises(InsufficientVocabulary) as exc:
        TagVocabulary.from_string(raw)
    assert exc.value.required == 2
