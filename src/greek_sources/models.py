"""Data models shared by decoders, the sentence accumulator and the readers.

Reference data (word classes, inflection categories and values) is immutable and
owned by the grammar registry. Tags, tagged word forms and sentences are frozen
records created per token and never mutated once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping


class WordClass(Enum):
    """Part of speech a decoded tag belongs to."""

    NOUN = "noun"
    VERB = "verb"
    PARTICIPLE = "participle"
    ADJECTIVE = "adjective"
    PRONOUN = "pronoun"
    ARTICLE = "article"
    ADVERB = "adverb"
    CONJUNCTION = "conjunction"
    PARTICLE = "particle"
    PREPOSITION = "preposition"
    EXCLAMATION = "exclamation"
    NUMERAL = "numeral"
    PUNCTUATION = "punctuation"

    @property
    def is_closed(self) -> bool:
        """Return whether tags of this class carry literal text instead of inflections."""

        return self in CLOSED_WORD_CLASSES


CLOSED_WORD_CLASSES = frozenset(
    {
        WordClass.CONJUNCTION,
        WordClass.PARTICLE,
        WordClass.PREPOSITION,
        WordClass.EXCLAMATION,
        WordClass.PUNCTUATION,
    }
)


class InflectionCategory(Enum):
    """Grammatical category of an inflection value.

    Number has no category of its own: it is folded into case values
    (``"gen pl"``) and person values (``"3rd sg"``).
    """

    CASE = "case"
    GENDER = "gender"
    PERSON = "person"
    TENSE = "tense"
    MOOD = "mood"
    VOICE = "voice"
    DEGREE = "degree"


@dataclass(frozen=True)
class InflectionValue:
    """One legal value of an inflection category, e.g. ``(case, "acc sg")``."""

    category: InflectionCategory
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class InflectionType:
    """A registry category together with its legal values keyed by name."""

    key: str
    category: InflectionCategory
    inflections: Mapping[str, InflectionValue]


@dataclass(frozen=True)
class Tag:
    """Decoded grammatical tag of one token.

    Open classes carry inflections and no text; closed classes carry the
    literal lemma (or punctuation mark) as ``text``; numerals carry neither.
    """

    word_class: WordClass
    inflections: tuple[InflectionValue, ...] = ()
    text: str | None = None

    @property
    def is_closed(self) -> bool:
        """Return whether the tag belongs to a closed word class."""

        return self.word_class.is_closed

    def inflection_names(self) -> tuple[str, ...]:
        """Return inflection names in tag order."""

        return tuple(inflection.name for inflection in self.inflections)

    def has_inflection(self, name: str) -> bool:
        """Return whether an inflection with ``name`` is part of the tag."""

        return any(inflection.name == name for inflection in self.inflections)


@dataclass(frozen=True)
class TaggedWordForm:
    """A normalized surface form with its lemma and decoded tag."""

    form: str
    lemma: str
    tag: Tag


@dataclass(frozen=True)
class Sentence:
    """Immutable snapshot of an accumulated sentence.

    Raises:
        ValueError: If constructed without any word forms.
    """

    words: tuple[TaggedWordForm, ...]

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError("A sentence must contain at least one word form")

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[TaggedWordForm]:
        return iter(self.words)

    @property
    def forms(self) -> tuple[str, ...]:
        """Return the surface forms in sentence order."""

        return tuple(word.form for word in self.words)
