"""Unit tests for form and lemma text transforms."""

from __future__ import annotations

import pytest

from greek_sources.text.normalize import (
    fold_accent_variants,
    normalize_apostrophe,
    normalize_beta,
    repair_junctions,
    rewrite_spelling,
    strip_brackets,
    strip_hyphens,
    strip_numerics,
    strip_quotes,
)

OXIA_LOGOS = "\u03bb\u1f79\u03b3\u03bf\u03c2"
TONOS_LOGOS = "\u03bb\u03cc\u03b3\u03bf\u03c2"
SMOOTH_ALPHA = "\u1f00"
GREEK_APOSTROPHE = "\u1fbf"
RIGHT_QUOTE = "\u2019"


def test_fold_accent_variants_maps_oxia_to_tonos() -> None:
    assert fold_accent_variants(OXIA_LOGOS) == TONOS_LOGOS
    assert fold_accent_variants("\u1f71\u1f7d") == "\u03ac\u03ce"
    assert fold_accent_variants(TONOS_LOGOS) == TONOS_LOGOS


def test_normalize_beta_uppercases_and_drops_length_markers() -> None:
    assert normalize_beta("a)/^nqrw_pos") == "A)/NQRWPOS"


def test_strip_numerics() -> None:
    assert strip_numerics("lo/gos1") == "lo/gos"
    assert strip_numerics("12") == ""


def test_strip_hyphens_drops_breathing_after_junction() -> None:
    assert strip_hyphens(f"συν-{SMOOTH_ALPHA}γω") == "συναγω"
    assert strip_hyphens("εκ-βαλλω") == "εκβαλλω"
    assert strip_hyphens("-") == "-"


@pytest.mark.parametrize(
    ("lemma", "expected"),
    [
        ("ἀπό-οἰκίζω", "ἀπόοικίζω"),
        ("πρό-εἰμι", "πρόειμι"),
        ("συν-εὐδοκέω", "συνευδοκέω"),
    ],
)
def test_strip_hyphens_folds_breathing_on_diphthong(lemma: str, expected: str) -> None:
    assert strip_hyphens(lemma) == expected


def test_rewrite_spelling_is_whole_word() -> None:
    assert rewrite_spelling(f"{SMOOTH_ALPHA}ντ") == f"{SMOOTH_ALPHA}ντ{GREEK_APOSTROPHE}"
    assert rewrite_spelling(f"{SMOOTH_ALPHA}ντι") == f"{SMOOTH_ALPHA}ντι"


def test_repair_junctions() -> None:
    assert repair_junctions("συνπασχει") == "συμπασχει"
    assert repair_junctions("συνσταυροω") == "συσταυροω"
    assert repair_junctions("λογος") == "λογος"


def test_normalize_apostrophe_only_at_end() -> None:
    assert normalize_apostrophe(f"δ{RIGHT_QUOTE}") == f"δ{GREEK_APOSTROPHE}"
    assert normalize_apostrophe(f"{RIGHT_QUOTE}δ") == f"{RIGHT_QUOTE}δ"


def test_brackets_and_quotes() -> None:
    assert strip_brackets("[λογος]") == "λογος"
    assert strip_quotes("«λογος»\r\n") == "λογος"
    assert strip_quotes("“λογος”") == "λογος"


@pytest.mark.parametrize(
    ("transform", "text"),
    [
        (fold_accent_variants, OXIA_LOGOS),
        (normalize_beta, "a)/^nqrw_pos"),
        (strip_numerics, "lo/gos12"),
        (strip_hyphens, f"κατα-{SMOOTH_ALPHA}γω"),
        (rewrite_spelling, f"{SMOOTH_ALPHA}ντ"),
        (repair_junctions, "συνμμνκ"),
        (normalize_apostrophe, f"δ{RIGHT_QUOTE}"),
        (strip_brackets, "[[λογος]"),
        (strip_quotes, " «λογος» "),
    ],
)
def test_transforms_are_idempotent(transform, text: str) -> None:
    once = transform(text)

    assert transform(once) == once
