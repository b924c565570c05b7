"""Sentence reader for Tischendorf's morphological New Testament.

One word per line, space-delimited, with the form (plus trailing punctuation) in
field 4, the part-of-speech code in field 6 and the lemma in field 10.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from greek_sources.decoders.tischendorf import TischendorfDecoder
from greek_sources.errors import MalformedCode
from greek_sources.grammar.registry import GrammarRegistry
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import Sentence, TaggedWordForm
from greek_sources.segmentation import SentenceAccumulator, punctuation_mark
from greek_sources.text.normalize import normalize_apostrophe, repair_junctions, strip_brackets

logger = logging.getLogger(__name__)

MIN_FIELDS = 10
FORM_FIELD = 3
CODE_FIELD = 5
LEMMA_FIELD = 9

LEMMA_STRIP_RE = re.compile(r"[()]+")


def parse_tischendorf_lines(
    lines: Iterable[str],
    decoder: TischendorfDecoder,
    accumulator: SentenceAccumulator | None = None,
    emit_trailing: bool = True,
) -> Iterator[Sentence]:
    """Yield tagged sentences from Tischendorf lines.

    Reading stops at the first empty line. Words of an already rejected
    sentence are not decoded. By default a valid trailing sentence without a
    terminator is emitted at the end of input.

    Args:
        lines: Raw text lines.
        decoder: Tischendorf decoder bound to a grammar registry.
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

        fields = line.split(" ")
        if len(fields) < MIN_FIELDS:
            logger.debug("Skipping line with %d fields: %r", len(fields), line)
            continue

        # Square brackets mark editorial doubt, not parentheses.
        raw_form = strip_brackets(fields[FORM_FIELD])
        if not raw_form:
            logger.debug("Skipping line without form: %r", line)
            continue

        form, mark = punctuation_mark(raw_form)
        form = normalize_apostrophe(form)

        if accumulator.is_valid:
            lemma = LEMMA_STRIP_RE.sub("", fields[LEMMA_FIELD])
            pos_code = fields[CODE_FIELD]
            try:
                tag = decoder.decode(pos_code, lemma)
            except MalformedCode as exc:
                accumulator.invalidate(f"malformed code '{pos_code}': {exc}")
            else:
                if tag is None:
                    accumulator.invalidate(f"undecodable code '{pos_code}'")
                else:
                    accumulator.append(TaggedWordForm(repair_junctions(form), lemma, tag))

        if mark is not None:
            sentence = accumulator.punctuate(
                TaggedWordForm(mark, mark, decoder.punctuation_tag(mark))
            )
            if sentence is not None:
                yield sentence

    trailing = accumulator.finish(emit_trailing)
    if trailing is not None:
        yield trailing


@dataclass(frozen=True)
class TischendorfSource:
    """A Tischendorf book file read as a sequence of sentences."""

    path: Path
    emit_trailing: bool = True

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
            raise FileNotFoundError(f"Tischendorf file not found: {self.path}")

        decoder = TischendorfDecoder(InflectionResolver(registry))
        with self.path.open("r", encoding="utf-8") as handle:
            yield from parse_tischendorf_lines(handle, decoder, accumulator, self.emit_trailing)
