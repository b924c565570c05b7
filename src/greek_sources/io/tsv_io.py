"""TSV writers for decoded sentences and word forms."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from greek_sources.models import Sentence, TaggedWordForm

TSV_HEADER = [
    "sentence_index",
    "position",
    "form",
    "lemma",
    "word_class",
    "inflections",
    "text",
]

INFLECTION_SEPARATOR = ","


def word_fields(sentence_index: str, position: int, word: TaggedWordForm) -> list[str]:
    """Render one word form as TSV fields in canonical column order."""

    return [
        sentence_index,
        str(position),
        word.form,
        word.lemma,
        word.tag.word_class.value,
        INFLECTION_SEPARATOR.join(word.tag.inflection_names()),
        word.tag.text or "",
    ]


def _write_lines(
    output_path: Path,
    lines: Iterable[Sequence[str]],
    include_header: bool,
) -> None:
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(TSV_HEADER))
            handle.write("\n")
        for fields in lines:
            handle.write("\t".join(fields))
            handle.write("\n")


def write_sentences_tsv(
    sentences: Sequence[Sentence],
    output_path: Path,
    include_header: bool = True,
) -> None:
    """Write sentences one word per row, numbered from 1.

    Args:
        sentences: Sentences to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    _write_lines(
        output_path,
        (
            word_fields(str(sentence_index), position, word)
            for sentence_index, sentence in enumerate(sentences, start=1)
            for position, word in enumerate(sentence, start=1)
        ),
        include_header,
    )


def write_words_tsv(
    words: Sequence[TaggedWordForm],
    output_path: Path,
    include_header: bool = True,
) -> None:
    """Write standalone word forms with an empty ``sentence_index`` column."""

    _write_lines(
        output_path,
        (word_fields("", position, word) for position, word in enumerate(words, start=1)),
        include_header,
    )
