"""Unit tests for the Perseus treebank sentence reader."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest

from greek_sources.decoders.perseus import PerseusDecoder
from greek_sources.grammar.registry import default_registry
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import WordClass
from greek_sources.segmentation import SentenceAccumulator
from greek_sources.sources.perseus import (
    GreekEncoding,
    PerseusTreebankSource,
    iter_treebank_sentences,
)

LOGOS = "\u03bb\u03cc\u03b3\u03bf\u03c2"
EK = "\u1f10\u03ba"
EKBALLO = "\u1f10\u03ba\u03b2\u03ac\u03bb\u03bb\u03c9"
ANO_TELEIA = "\u0387"
HIGH_DOT = "\u00b7"


def _decoder() -> PerseusDecoder:
    return PerseusDecoder(InflectionResolver(default_registry()))


def _treebank(*sentences: str) -> BytesIO:
    body = "".join(f'<sentence id="{idx}">{words}</sentence>' for idx, words in enumerate(sentences, 1))
    return BytesIO(f'<?xml version="1.0" encoding="UTF-8"?><treebank>{body}</treebank>'.encode("utf-8"))


def _word(form: str, lemma: str, postag: str) -> str:
    return f'<word form="{form}" lemma="{lemma}" postag="{postag}"/>'


def test_beta_sentence_is_converted() -> None:
    source = _treebank(
        _word("lo/gos", "lo/gos1", "n-s---mn-") + _word(".", "punc1", "u--------")
    )

    sentences = list(iter_treebank_sentences(source, _decoder()))

    assert len(sentences) == 1
    sentence = sentences[0]
    assert sentence.forms == (LOGOS, ".")
    assert sentence.words[0].lemma == LOGOS
    assert sentence.words[0].tag.inflection_names() == ("nom sg", "masc")
    assert sentence.words[1].lemma == "."
    assert sentence.words[1].tag.word_class is WordClass.PUNCTUATION


def test_each_element_is_one_sentence_without_terminator() -> None:
    source = _treebank(
        _word("lo/gos", "lo/gos", "n-s---mn-"),
        _word("lo/gos", "lo/gos", "n-s---mn-") + _word(",", ",", "u--------"),
    )

    sentences = list(iter_treebank_sentences(source, _decoder()))

    assert [sentence.forms for sentence in sentences] == [(LOGOS,), (LOGOS, ",")]


def test_repeated_form_is_skipped() -> None:
    source = _treebank(_word("lo/gos", "lo/gos", "n-s---mn-") * 2)

    sentence = next(iter_treebank_sentences(source, _decoder()))

    assert sentence.forms == (LOGOS,)


def test_detached_hyphen_glues_neighbouring_forms() -> None:
    source = _treebank(
        _word("e)k", "e)k", "r--------")
        + _word("-", "-", "---------")
        + _word("ba/llw", "e)k-ba/llw", "v1spia---")
    )

    sentence = next(iter_treebank_sentences(source, _decoder()))

    assert sentence.forms == (EK, EKBALLO)
    assert sentence.words[1].lemma == EKBALLO


def test_high_dot_punctuation_becomes_ano_teleia() -> None:
    source = _treebank(_word("lo/gos", "lo/gos", "n-s---mn-") + _word(":", "punc1", "u--------"))

    sentence = next(iter_treebank_sentences(source, _decoder()))

    assert sentence.forms[-1] == ANO_TELEIA
    assert sentence.words[-1].tag.text == ANO_TELEIA


def test_malformed_postag_discards_sentence() -> None:
    accumulator = SentenceAccumulator()
    source = _treebank(
        _word("lo/gos", "lo/gos", "n-s---mn"),
        _word("lo/gos", "lo/gos", "n-s---mn-"),
    )

    sentences = list(iter_treebank_sentences(source, _decoder(), accumulator=accumulator))

    assert len(sentences) == 1
    assert accumulator.discarded == 1
    assert accumulator.emitted == 1


def test_incomplete_and_untagged_words_are_skipped() -> None:
    source = _treebank(
        '<word form="lo/gos" postag="n-s---mn-"/>'
        + '<word lemma="lo/gos" postag="n-s---mn-"/>'
        + _word("a)/lfa", "a)/lfa", "---------")
        + _word("lo/gos", "lo/gos", "n-s---mn-"),
        _word("a)/lfa", "a)/lfa", "---------"),
    )

    sentences = list(iter_treebank_sentences(source, _decoder()))

    assert [sentence.forms for sentence in sentences] == [(LOGOS,)]


def test_unicode_encoding_skips_conversion() -> None:
    source = _treebank(
        _word(f"«{LOGOS}", f"{LOGOS}1", "n-s---mn-") + _word(HIGH_DOT, HIGH_DOT, "u--------")
    )

    sentence = next(
        iter_treebank_sentences(source, _decoder(), encoding=GreekEncoding.UNICODE)
    )

    assert sentence.forms == (LOGOS, ANO_TELEIA)
    assert sentence.words[0].lemma == LOGOS


def test_source_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "treebank.xml"
    path.write_bytes(_treebank(_word("lo/gos", "lo/gos", "n-s---mn-")).getvalue())

    sentences = list(PerseusTreebankSource(path).sentences(default_registry()))

    assert [sentence.forms for sentence in sentences] == [(LOGOS,)]


def test_source_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list(PerseusTreebankSource(tmp_path / "treebank.xml").sentences(default_registry()))
