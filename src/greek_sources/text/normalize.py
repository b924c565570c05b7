"""Stateless text transforms applied to forms and lemmata before decoding.

Every transform is total, deterministic and idempotent: applying it to its own
output returns that output unchanged.
"""

from __future__ import annotations

import re
from typing import Mapping

# Vowels with oxia (U+1F71..U+1F7D) folded to the same vowels with tonos.
ACCENT_VARIANTS = {
    "\u1f71": "\u03ac",
    "\u1f73": "\u03ad",
    "\u1f75": "\u03ae",
    "\u1f77": "\u03af",
    "\u1f79": "\u03cc",
    "\u1f7b": "\u03cd",
    "\u1f7d": "\u03ce",
}
_ACCENT_TRANSLATION = str.maketrans(ACCENT_VARIANTS)

BETA_MARKERS = ("^", "_")

NUMERICS_RE = re.compile(r"[0-9]+")

# Vowels with smooth or rough breathing after a compound junction.
JUNCTION_VOWELS = {
    "ἀ": "α",
    "ἁ": "α",
    "ἐ": "ε",
    "ἑ": "ε",
    "ἠ": "η",
    "ἡ": "η",
    "ἰ": "ι",
    "ἱ": "ι",
    "ὀ": "ο",
    "ὁ": "ο",
    "ὐ": "υ",
    "ὑ": "υ",
    "ὠ": "ω",
    "ὡ": "ω",
}

# Whole-word spelling fixes in the LXX text.
LXX_SPELLING = {
    "ἀντ": "ἀντ\u1fbf",
}

# Compound junctions the Tischendorf edition leaves unassimilated,
# e.g. 'συνπάσχει' for 'συμπάσχει'.
TISCHENDORF_JUNCTIONS = (
    ("νμ", "μμ"),
    ("νκ", "γκ"),
    ("συνπ", "συμπ"),
    ("συνσ", "συσ"),
    ("ἐνπ", "ἐμπ"),
    ("ἔνπ", "ἔμπ"),
    ("νλ", "λλ"),
)

GREEK_APOSTROPHE = "\u1fbf"
TYPOGRAPHIC_APOSTROPHE = "\u2019"

BRACKET_CHARS = "[]"
QUOTE_CHARS = " []\"“”«»\r\n"


def fold_accent_variants(text: str) -> str:
    """Replace oxia vowels with their canonical tonos equivalents.

    Args:
        text: Greek text in Unicode.

    Returns:
        Text where U+1F71..U+1F7D vowels are replaced by U+03AC..U+03CE.
    """

    return text.translate(_ACCENT_TRANSLATION)


def normalize_beta(beta: str) -> str:
    """Convert Perseus BETA text to the case and markers of standard BETA code.

    Perseus data is lower case and carries ``^``/``_`` length markers the
    converter does not understand.
    """

    normalized = beta.upper()
    for marker in BETA_MARKERS:
        normalized = normalized.replace(marker, "")
    return normalized


def strip_numerics(text: str) -> str:
    """Remove digit runs, such as homonym numbers on lemmata."""

    return NUMERICS_RE.sub("", text)


def strip_hyphens(text: str) -> str:
    """Remove in-word hyphens, dropping every breathing after the first one.

    Hyphenated lemmata such as ``σύν-ἀγω`` keep the breathing of the second
    member, which cannot appear inside a word. On a diphthong the breathing
    sits on the second vowel (``πρό-εἰμι``), so the whole tail past the first
    hyphen is folded. Strings of one character or less are returned unchanged.

    Args:
        text: Unicode lemma.

    Returns:
        The joined word.
    """

    if len(text) <= 1:
        return text

    chars: list[str] = []
    after_hyphen = False
    for char in text:
        if char == "-":
            after_hyphen = True
            continue
        if after_hyphen:
            char = JUNCTION_VOWELS.get(char, char)
        chars.append(char)
    return "".join(chars)


def rewrite_spelling(word: str, table: Mapping[str, str] = LXX_SPELLING) -> str:
    """Apply a whole-word spelling rewrite table."""

    return table.get(word, word)


def repair_junctions(word: str) -> str:
    """Assimilate compound junctions left unassimilated in the source.

    Replacements run until the word stops changing. Each replacement removes a
    ``ν``, so the loop terminates.
    """

    previous = None
    while previous != word:
        previous = word
        for wrong, right in TISCHENDORF_JUNCTIONS:
            word = word.replace(wrong, right)
    return word


def normalize_apostrophe(form: str) -> str:
    """Replace a trailing typographic apostrophe with the Greek apostrophe."""

    if form.endswith(TYPOGRAPHIC_APOSTROPHE):
        return form[:-1] + GREEK_APOSTROPHE
    return form


def strip_brackets(text: str) -> str:
    """Remove square brackets anywhere in ``text``."""

    for char in BRACKET_CHARS:
        text = text.replace(char, "")
    return text


def strip_quotes(text: str) -> str:
    """Trim brackets, quotation marks and whitespace from both ends."""

    return text.strip(QUOTE_CHARS)
