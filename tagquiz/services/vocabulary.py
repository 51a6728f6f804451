from typing import Iterable, Iterator

from tagquiz.services.errors import InsufficientVocabulary

MIN_TAGS = 2


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated tag list, dropping blanks and repeats."""
    tags: list[str] = []
    seen: set[str] = set()
    for item in (raw or "").split(","):
        tag = item.strip()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


class TagVocabulary:
    """Ordered, de-duplicated list of tags. Indices never change."""

    def __init__(self, tags: Iterable[str]):
        unique = tuple(dict.fromkeys(tags))
        if len(unique) < MIN_TAGS:
            raise InsufficientVocabulary(len(unique), MIN_TAGS)
        self._tags = unique

    @classmethod
    def from_string(cls, raw: str) -> "TagVocabulary":
        return cls(parse_tags(raw))

    def __len__(self) -> int:
        return len(self._tags)

    def __getitem__(self, index: int) -> str:
        return self._tags[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)
