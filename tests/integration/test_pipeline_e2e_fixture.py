"""Integration tests running the pipeline and CLI on fixture corpora."""

from __future__ import annotations

from pathlib import Path

import pytest

from greek_sources.cli import main
from greek_sources.errors import UnknownInflectionKey
from greek_sources.grammar.registry import load_registry
from greek_sources.pipeline import SourceKind, run_pipeline

LXX_TEXT = (
    "Gen\t1\t1\tἐν ἐν-P ἀρχῇ ἀρχή-N1-DSF ἐποίησεν ποιέω-V1-AAI3S ὁ ὁ-RA-NSM θεός. θεός-N2-NSM\n"
    "Gen\t1\t2\tἡ ἡ-RA-NSF δὲ δέ-X γῆ γῆ-N1-NSF ἦν εἰμί-V9-PAZ\n"
    "Gen\t1\t2\tἀόρατος. ἀόρατος-A1B-NSF\n"
    "Gen\t1\t3\tκαὶ καί-C εἶπεν λέγω-V1-AAI3S ὁ ὁ-RA-NSM θεός θεός-N2-NSM\n"
)

TISCHENDORF_TEXT = (
    "MT 1:1.1 1 Βίβλος G976 N-NSF x x x βίβλος\n"
    "MT 1:1.2 1 γενέσεως G1078 N-GSF x x x γένεσις\n"
    "MT 1:1.3 1 Ἰησοῦ G2424 N-GSM x x x Ἰησοῦς\n"
    "MT 1:1.4 1 Δαυίδ. G1138 N-PRI x x x Δαυίδ\n"
    "MT 1:2.1 1 Ἀβραὰμ G11 N-PRI x x x Ἀβραάμ\n"
    "MT 1:2.2 1 ἐγέννησεν G1080 V-AAI-3S x x x γεννάω\n"
    "MT 1:2.3 1 τὸν G3588 T-ASM x x x ὁ\n"
    "MT 1:2.4 1 Ἰσαάκ· G2464 N-PRI x x x Ἰσαάκ\n"
    "MT 1:3.1 1 καὶ G2532 CONJ x x x καί\n"
    "MT 1:3.2 1 οὐ G3756 PRT x x x οὐ\n"
    "MT 1:3.3 1 λέγει G3004 V-PAI-3S x x x λέγω\n"
)

TREEBANK_XML = """<?xml version="1.0" encoding="UTF-8"?>
<treebank>
  <body>
    <sentence id="1">
      <word id="1" form="lo/gos" lemma="lo/gos1" postag="n-s---mn-"/>
      <word id="2" form="e)sti/" lemma="ei)mi/1" postag="v3spia---"/>
      <word id="3" form="." lemma="punc1" postag="u--------"/>
    </sentence>
    <sentence id="2">
      <word id="1" form="kai/" lemma="kai/1" postag="c--------"/>
      <word id="2" form="lo/gos" lemma="lo/gos1" postag="n-s---mn"/>
    </sentence>
  </body>
</treebank>
"""

MORPH_XML = """<analyses>
  <analysis><form>lo/gou</form><lemma>lo/gos</lemma><pos>noun</pos>
    <number>sg</number><gender>masc</gender><case>gen</case></analysis>
  <analysis><form>kai/</form><lemma>kai/</lemma><pos>conj</pos><dialect>doric</dialect></analysis>
</analyses>
"""


def test_lxx_pipeline_discards_rejected_sentence(tmp_path: Path) -> None:
    path = tmp_path / "gen.txt"
    path.write_text(LXX_TEXT, encoding="utf-8")

    result = run_pipeline(SourceKind.LXX, path)

    assert result.emitted == 1
    assert result.discarded == 1
    assert result.sentences[0].forms == ("ἐν", "ἀρχῇ", "ἐποίησεν", "ὁ", "θεός", ".")
    assert result.words == ()


def test_tischendorf_pipeline_emits_trailing_sentence(tmp_path: Path) -> None:
    path = tmp_path / "MT.txt"
    path.write_text(TISCHENDORF_TEXT, encoding="utf-8")

    result = run_pipeline("tischendorf", path)

    assert result.discarded == 2
    assert [sentence.forms for sentence in result.sentences] == [("καὶ", "οὐ", "λέγει")]
    assert result.sentences[0].words[1].tag.text == "οὐ"


def test_perseus_pipelines(tmp_path: Path) -> None:
    treebank = tmp_path / "treebank.xml"
    treebank.write_text(TREEBANK_XML, encoding="utf-8")
    morph = tmp_path / "greek.morph.xml"
    morph.write_text(MORPH_XML, encoding="utf-8")

    sentences = run_pipeline(SourceKind.PERSEUS, treebank)
    words = run_pipeline(SourceKind.PERSEUS_MORPH, morph, allowed_dialects=["attic"])

    assert sentences.emitted == 1
    assert sentences.discarded == 1
    assert len(sentences.sentences[0]) == 3
    assert len(words.words) == 1
    assert words.sentences == ()


def test_registry_mismatch_is_not_a_rejection(tmp_path: Path) -> None:
    registry_path = tmp_path / "registry.tsv"
    registry_path.write_text(
        "tag\tnoun\tnoun\ntag\t[PUNCTUATION]\tpunctuation\ninflection\tcase\tnom sg\n",
        encoding="utf-8",
    )
    path = tmp_path / "MT.txt"
    path.write_text(TISCHENDORF_TEXT, encoding="utf-8")

    with pytest.raises(UnknownInflectionKey, match="gender"):
        run_pipeline(SourceKind.TISCHENDORF, path, registry=load_registry(registry_path))


def test_unknown_source_and_missing_input(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        run_pipeline("vulgate", tmp_path / "x.txt")
    with pytest.raises(FileNotFoundError):
        run_pipeline(SourceKind.LXX, tmp_path / "x.txt")


def test_cli_writes_tsv_and_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "MT.txt"
    path.write_text(TISCHENDORF_TEXT, encoding="utf-8")
    output = tmp_path / "out" / "mt.tsv"
    output.parent.mkdir()

    exit_code = main(["--source", "tischendorf", "--input", str(path), "--output", str(output)])

    assert exit_code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("sentence_index\tposition\tform")
    assert len(lines) == 4
    report = (output.parent / "report.md").read_text(encoding="utf-8")
    assert "| sentences_emitted | 1 |" in report
    assert "Wrote 1 sentences" in capsys.readouterr().out


def test_cli_morph_words_without_header(tmp_path: Path) -> None:
    morph = tmp_path / "greek.morph.xml"
    morph.write_text(MORPH_XML, encoding="utf-8")
    output = tmp_path / "words.tsv"
    report = tmp_path / "words.md"

    exit_code = main(
        [
            "--source",
            "perseus-morph",
            "--input",
            str(morph),
            "--output",
            str(output),
            "--report",
            str(report),
            "--no-header",
        ]
    )

    assert exit_code == 0
    assert len(output.read_text(encoding="utf-8").splitlines()) == 2
    assert report.exists()


def test_cli_missing_input(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Input not found"):
        main(
            [
                "--source",
                "lxx",
                "--input",
                str(tmp_path / "missing.txt"),
                "--output",
                str(tmp_path / "out.tsv"),
            ]
        )
