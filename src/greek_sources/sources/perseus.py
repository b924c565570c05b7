"""Sentence reader for the Perseus Ancient Greek treebank.

The treebank is a single XML document of ``<sentence>`` elements, each holding
``<word form="..." lemma="..." postag="..."/>`` children. Forms and lemmata are
in lower-case BETA code in the published files; Unicode editions exist as well.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterator

from lxml import etree

from greek_sources.decoders.perseus import PerseusDecoder, fold_high_dot
from greek_sources.errors import MalformedCode
from greek_sources.grammar.registry import GrammarRegistry
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import Sentence, TaggedWordForm, WordClass
from greek_sources.segmentation import SentenceAccumulator
from greek_sources.text.beta import BetaConverter
from greek_sources.text.normalize import (
    fold_accent_variants,
    normalize_beta,
    strip_hyphens,
    strip_numerics,
    strip_quotes,
)

logger = logging.getLogger(__name__)

SENTENCE_TAG = "sentence"
WORD_TAG = "word"

# Parts of speech whose lemma is the surface form itself.
FORM_AS_LEMMA_POS = frozenset({"u", "-"})

HYPHEN = "-"


class GreekEncoding(Enum):
    """Encoding of Greek literals in a Perseus file."""

    BETA = "beta"
    UNICODE = "unicode"


@dataclass
class _TreebankConverter:
    encoding: GreekEncoding
    converter: Callable[[str], str]

    def raw(self, text: str) -> str:
        if self.encoding is GreekEncoding.BETA:
            return normalize_beta(text)
        return text

    def to_unicode(self, raw: str) -> str:
        if self.encoding is GreekEncoding.BETA:
            return self.converter(raw)
        return raw


def _parse_sentence(
    element: etree._Element,
    decoder: PerseusDecoder,
    text: _TreebankConverter,
    accumulator: SentenceAccumulator,
) -> Sentence | None:
    previous_raw_form = ""
    before_hyphen = ""

    for word in element.iterfind(WORD_TAG):
        form_attr = word.get("form")
        if form_attr is None:
            logger.debug("Skipping word without form in sentence %s", element.get("id"))
            continue

        raw_form = text.raw(form_attr)
        if raw_form == previous_raw_form:
            continue
        if before_hyphen:
            raw_form = before_hyphen + raw_form
            before_hyphen = ""

        form = strip_quotes(fold_accent_variants(text.to_unicode(raw_form)))

        pos_code = word.get("postag")
        lemma_attr = word.get("lemma")
        if pos_code is None or lemma_attr is None:
            logger.debug("Skipping word '%s' without postag or lemma", form)
            continue

        if pos_code[:1] in FORM_AS_LEMMA_POS:
            lemma = form
        else:
            lemma = strip_hyphens(strip_numerics(text.to_unicode(text.raw(lemma_attr))))

        try:
            tag = decoder.decode(pos_code, lemma)
        except MalformedCode as exc:
            accumulator.invalidate(f"malformed code '{pos_code}': {exc}")
            continue

        if tag is None:
            if form == HYPHEN:
                # Glue the words on both sides of a detached hyphen.
                before_hyphen = previous_raw_form
            else:
                previous_raw_form = raw_form
            continue

        if tag.word_class is WordClass.PUNCTUATION:
            form = fold_high_dot(form)

        previous_raw_form = raw_form
        accumulator.append(TaggedWordForm(form, lemma, tag))

    return accumulator.close()


def iter_treebank_sentences(
    source: str | Path | BinaryIO,
    decoder: PerseusDecoder,
    encoding: GreekEncoding = GreekEncoding.BETA,
    converter: Callable[[str], str] | None = None,
    accumulator: SentenceAccumulator | None = None,
) -> Iterator[Sentence]:
    """Stream tagged sentences from a Perseus treebank document.

    Each ``<sentence>`` element is one sentence: its boundary closes the
    accumulator whether or not the last word was a terminator. Elements are
    released after processing, so memory stays flat on the full treebank.

    Args:
        source: Path or binary stream of the XML document.
        decoder: Perseus decoder bound to a grammar registry.
        encoding: Encoding of ``form`` and ``lemma`` attributes.
        converter: BETA to Unicode converter; a ``BetaConverter`` by default.
        accumulator: Accumulator to use; a fresh one is created when omitted.

    Yields:
        Non-empty sentences whose every tagged word decoded.
    """

    accumulator = accumulator if accumulator is not None else SentenceAccumulator()
    text = _TreebankConverter(encoding, converter if converter is not None else BetaConverter())

    for _, element in etree.iterparse(source, events=("end",), tag=SENTENCE_TAG):
        sentence = _parse_sentence(element, decoder, text, accumulator)
        element.clear()
        while element.getprevious() is not None:
            del element.getparent()[0]
        if sentence is not None:
            yield sentence


@dataclass(frozen=True)
class PerseusTreebankSource:
    """The Perseus treebank file read as a sequence of sentences."""

    path: Path
    encoding: GreekEncoding = GreekEncoding.BETA
    converter: Callable[[str], str] = field(default_factory=BetaConverter)

    def sentences(
        self,
        registry: GrammarRegistry,
        accumulator: SentenceAccumulator | None = None,
    ) -> Iterator[Sentence]:
        """Parse the treebank and yield its tagged sentences.

        Raises:
            FileNotFoundError: If the configured path does not exist.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Perseus treebank not found: {self.path}")

        decoder = PerseusDecoder(InflectionResolver(registry))
        with self.path.open("rb") as handle:
            yield from iter_treebank_sentences(
                handle,
                decoder,
                encoding=self.encoding,
                converter=self.converter,
                accumulator=accumulator,
            )
