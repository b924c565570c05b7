"""Sentence reader for the morphological LXX text (CCAT codes).

Each line is tab-delimited; the fourth field holds whitespace-separated tokens in
the pattern ``form lemma... lemmaTail-CODE``: a surface form, optionally with
trailing punctuation, then the lemma, whose last piece carries the CCAT code
after the first dash. Sentences may span lines.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable, Iterator

from greek_sources.decoders.ccat import CcatDecoder
from greek_sources.errors import MalformedCode
from greek_sources.grammar.registry import GrammarRegistry
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import Sentence, TaggedWordForm
from greek_sources.segmentation import SentenceAccumulator, punctuation_mark
from greek_sources.text.normalize import fold_accent_variants, rewrite_spelling

logger = logging.getLogger(__name__)

MIN_FIELDS = 4
TOKENS_FIELD = 3

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"


@dataclass
class _PendingWord:
    """Form and lemma pieces collected until the token carrying the code."""

    form: str
    mark: str | None
    lemma: str = ""


def _emit_word(
    accumulator: SentenceAccumulator,
    decoder: CcatDecoder,
    word: _PendingWord,
    lemma_tail: str,
    pos_code: str,
) -> Iterator[Sentence]:
    lemma = fold_accent_variants((word.lemma + lemma_tail).replace("*", ""))

    try:
        tag = decoder.decode(pos_code, lemma)
    except MalformedCode as exc:
        accumulator.invalidate(f"malformed code '{pos_code}': {exc}")
    else:
        if tag is None:
            # Non-declinable Hebrew forms are not Greek.
            accumulator.invalidate(f"undecodable code '{pos_code}'")
        elif word.form.startswith(OPEN_BRACKET):
            accumulator.append(TaggedWordForm("(", "(", decoder.punctuation_tag("(")))
            accumulator.append(TaggedWordForm(word.form[1:], lemma, tag))
        elif word.form.endswith(CLOSE_BRACKET):
            accumulator.append(TaggedWordForm(word.form[:-1], lemma, tag))
            accumulator.append(TaggedWordForm(")", ")", decoder.punctuation_tag(")")))
        else:
            accumulator.append(TaggedWordForm(word.form, lemma, tag))

    if word.mark is not None:
        mark = TaggedWordForm(word.mark, word.mark, decoder.punctuation_tag(word.mark))
        sentence = accumulator.punctuate(mark)
        if sentence is not None:
            yield sentence


def parse_lxx_lines(
    lines: Iterable[str],
    decoder: CcatDecoder,
    accumulator: SentenceAccumulator | None = None,
    emit_trailing: bool = False,
) -> Iterator[Sentence]:
    """Yield tagged sentences from LXX text lines.

    Reading stops at the first empty line. By default a trailing sentence
    without a terminator at the end of input is dropped.

    Args:
        lines: Raw text lines.
        decoder: CCAT decoder bound to a grammar registry.
        accumulator: Accumulator to use; a fresh one is created when omitted.
        emit_trailing: Whether to emit a valid unterminated trailing sentence.

    Yields:
        Sentences whose every word decoded.
    """

    accumulator = accumulator if accumulator is not None else SentenceAccumulator()

    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            break
        line = line.strip()
        if not line:
            continue

        fields = line.split("\t")
        if len(fields) < MIN_FIELDS:
            logger.debug("Skipping line with %d fields: %r", len(fields), line)
            continue

        word: _PendingWord | None = None
        for token in fields[TOKENS_FIELD].split():
            dash_index = token.find("-")

            if dash_index != -1 and word is not None:
                yield from _emit_word(
                    accumulator,
                    decoder,
                    word,
                    lemma_tail=token[:dash_index],
                    pos_code=token[dash_index + 1 :],
                )
                word = None
            elif word is None:
                form, mark = punctuation_mark(fold_accent_variants(token))
                word = _PendingWord(form=rewrite_spelling(form), mark=mark)
            else:
                word.lemma += token

    trailing = accumulator.finish(emit_trailing)
    if trailing is not None:
        yield trailing


@dataclass(frozen=True)
class LxxSource:
    """LXX morphological text file read as a sequence of sentences."""

    path: Path
    emit_trailing: bool = False

    def sentences(
        self,
        registry: GrammarRegistry,
        accumulator: SentenceAccumulator | None = None,
    ) -> Iterator[Sentence]:
        """Open the file and yield its tagged sentences.

        Raises:
            FileNotFoundError: If the configured path does not exist.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"LXX file not found: {self.path}")

        decoder = CcatDecoder(InflectionResolver(registry))
        with self.path.open("r", encoding="utf-8") as handle:
            yield from parse_lxx_lines(handle, decoder, accumulator, self.emit_trailing)
