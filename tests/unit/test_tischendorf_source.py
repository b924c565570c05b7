"""Unit tests for the Tischendorf sentence reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from greek_sources.decoders.tischendorf import TischendorfDecoder
from greek_sources.grammar.registry import default_registry
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import WordClass
from greek_sources.segmentation import SentenceAccumulator
from greek_sources.sources.tischendorf import TischendorfSource, parse_tischendorf_lines


def _decoder() -> TischendorfDecoder:
    return TischendorfDecoder(InflectionResolver(default_registry()))


def _line(form: str, code: str, lemma: str) -> str:
    return f"MT 1:1.1 1 {form} G0 {code} x x x {lemma}\n"


def test_sentence_is_emitted_at_terminator() -> None:
    lines = [
        _line("λόγος", "N-NSM", "λόγος"),
        _line("λέγει.", "V-PAI-3S", "λέγω"),
    ]

    sentences = list(parse_tischendorf_lines(lines, _decoder()))

    assert len(sentences) == 1
    assert sentences[0].forms == ("λόγος", "λέγει", ".")
    assert sentences[0].words[2].tag.word_class is WordClass.PUNCTUATION


def test_trailing_sentence_is_emitted_by_default() -> None:
    lines = [
        _line("λόγος.", "N-NSM", "λόγος"),
        _line("καὶ", "CONJ", "καί"),
    ]

    sentences = list(parse_tischendorf_lines(lines, _decoder()))
    dropped = list(parse_tischendorf_lines(lines, _decoder(), emit_trailing=False))

    assert [sentence.forms for sentence in sentences] == [("λόγος", "."), ("καὶ",)]
    assert len(dropped) == 1


def test_foreign_name_discards_sentence() -> None:
    accumulator = SentenceAccumulator()
    lines = [
        _line("Ἀβραάμ", "N-PRI", "Ἀβραάμ"),
        _line("λέγει.", "V-PAI-3S", "λέγω"),
        _line("λόγος.", "N-NSM", "λόγος"),
    ]

    sentences = list(parse_tischendorf_lines(lines, _decoder(), accumulator))

    assert [sentence.forms for sentence in sentences] == [("λόγος", ".")]
    assert accumulator.discarded == 1


def test_malformed_code_discards_sentence_and_continues() -> None:
    accumulator = SentenceAccumulator()
    lines = [
        _line("ἅγια", "A--APN-S", "ἅγιος"),
        _line("λόγος.", "N-NSM", "λόγος"),
        _line("λέγει.", "V-PAI-3S", "λέγω"),
    ]

    sentences = list(parse_tischendorf_lines(lines, _decoder(), accumulator))

    assert [sentence.forms for sentence in sentences] == [("λέγει", ".")]
    assert next(iter(accumulator.rejections)).startswith("malformed code 'A--APN-S'")


def test_form_and_lemma_cleanup() -> None:
    lines = [
        _line("[συνπάσχει]", "V-PAI-3S", "(συμπάσχω)"),
        _line("δ\u2019", "CONJ", "δέ"),
        _line("λόγος.", "N-NSM", "λόγος"),
    ]

    sentence = next(parse_tischendorf_lines(lines, _decoder()))

    assert sentence.forms == ("συμπάσχει", "δ\u1fbf", "λόγος", ".")
    assert sentence.words[0].lemma == "συμπάσχω"


def test_short_records_skipped_and_reading_stops_at_empty_line() -> None:
    lines = [
        "MT 1:1 too short\n",
        _line("λόγος.", "N-NSM", "λόγος"),
        "\n",
        _line("λέγει.", "V-PAI-3S", "λέγω"),
    ]

    sentences = list(parse_tischendorf_lines(lines, _decoder()))

    assert [sentence.forms for sentence in sentences] == [("λόγος", ".")]


def test_source_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "MT.txt"
    path.write_text(
        _line("λόγος", "N-NSM", "λόγος") + _line("λέγει", "V-PAI-3S", "λέγω"),
        encoding="utf-8",
    )

    sentences = list(TischendorfSource(path).sentences(default_registry()))

    assert [sentence.forms for sentence in sentences] == [("λόγος", "λέγει")]


def test_source_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list(TischendorfSource(tmp_path / "MT.txt").sentences(default_registry()))
