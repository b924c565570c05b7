"""Validation helpers for decoded sentences and word forms."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from greek_sources.models import Sentence, TaggedWordForm, WordClass

PREVIEW_LIMIT = 25


def _word_errors(label: str, word: TaggedWordForm) -> list[str]:
    errors: list[str] = []
    tag = word.tag
    if tag.is_closed and tag.text is None:
        errors.append(f"{label}: closed-class tag without text for '{word.form}'")
    if tag.word_class is WordClass.PUNCTUATION and tag.text != word.form:
        errors.append(f"{label}: punctuation '{word.form}' tagged as '{tag.text}'")
    return errors


def _raise_if_errors(kind: str, errors: list[str]) -> None:
    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:PREVIEW_LIMIT])
        rest = len(errors) - min(PREVIEW_LIMIT, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"{kind} validation failed with {len(errors)} errors:\n{preview}{more}")


def validate_sentences(sentences: Sequence[Sentence]) -> None:
    """Check tag invariants over every word of every sentence.

    Closed-class tags must carry their literal text, and punctuation tags must
    carry the mark written as the form.

    Args:
        sentences: Decoded sentences.

    Raises:
        ValueError: If any word violates a tag invariant.
    """

    errors: list[str] = []
    for idx, sentence in enumerate(sentences, start=1):
        for position, word in enumerate(sentence, start=1):
            errors.extend(_word_errors(f"Sentence {idx}, word {position}", word))
    _raise_if_errors("Sentence", errors)


def validate_words(words: Sequence[TaggedWordForm]) -> None:
    """Check tag invariants over standalone word forms.

    Raises:
        ValueError: If any word violates a tag invariant.
    """

    errors: list[str] = []
    for idx, word in enumerate(words, start=1):
        errors.extend(_word_errors(f"Word {idx}", word))
    _raise_if_errors("Word", errors)


def collect_word_class_counts(words: Iterable[TaggedWordForm]) -> dict[str, int]:
    """Count word forms by word class.

    Args:
        words: Word forms, e.g. every word of every sentence.

    Returns:
        Dictionary of word class value to count.
    """

    counter: Counter[str] = Counter()
    for word in words:
        counter[word.tag.word_class.value] += 1
    return dict(counter)
