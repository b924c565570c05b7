"""Static code tables shared by the dash-separated code grammars.

Keys are source code characters (or short strings); values are registry keys.
Tables that differ between grammars live next to the decoder that uses them.
"""

from __future__ import annotations

CASE_CODES = {
    "N": "nom",
    "G": "gen",
    "D": "dat",
    "A": "acc",
    "V": "voc",
}

NUMBER_CODES = {
    "S": "sg",
    "P": "pl",
    "D": "dual",
}

GENDER_CODES = {
    "M": "masc",
    "F": "fem",
    "N": "neut",
}

PERSON_CODES = {
    "1S": "1st sg",
    "2S": "2nd sg",
    "3S": "3rd sg",
    "1P": "1st pl",
    "2P": "2nd pl",
    "3P": "3rd pl",
    "2D": "2nd dual",
    "3D": "3rd dual",
}

VOICE_CODES = {
    "A": "act",
    "Q": "act",  # impersonal active
    "X": "act",  # no voice stated
    "M": "mid",
    "D": "mid",  # middle deponent
    "P": "pass",
    "O": "pass",  # passive deponent
    "E": "mp",
    "N": "mp",  # middle or passive deponent
}

DEGREE_CODES = {
    "C": "comp",
    "S": "superl",
}

DEFAULT_DEGREE = "pos"

# Indeclinable noun blocks: proper name, numeral, letter, other.
INDECLINABLE_BLOCKS = frozenset({"PRI", "NUI", "LI", "OI"})

# Marks a sub-field the source itself leaves ambiguous.
AMBIGUOUS_MARK = "/"


def degree_key(code: str | None) -> str:
    """Return the degree registry key, defaulting to positive.

    Args:
        code: Degree sub-code, or ``None`` when the code has no degree field.

    Returns:
        ``comp``, ``superl`` or ``pos``.
    """

    if code is None:
        return DEFAULT_DEGREE
    return DEGREE_CODES.get(code, DEFAULT_DEGREE)
