"""BETA code to Unicode conversion for Perseus data.

The converter produces precombined (NFC) characters. It accepts upper-case BETA
as produced by ``normalize_beta``: capitals are marked with ``*`` and their
diacritics may precede the letter (``*)A`` for Ἀ).
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import unicodedata

logger = logging.getLogger(__name__)

BETA_LETTERS = {
    "A": "α",
    "B": "β",
    "G": "γ",
    "D": "δ",
    "E": "ε",
    "Z": "ζ",
    "H": "η",
    "Q": "θ",
    "I": "ι",
    "K": "κ",
    "L": "λ",
    "M": "μ",
    "N": "ν",
    "C": "ξ",
    "O": "ο",
    "P": "π",
    "R": "ρ",
    "S": "σ",
    "T": "τ",
    "U": "υ",
    "F": "φ",
    "X": "χ",
    "Y": "ψ",
    "W": "ω",
    "V": "ϝ",
}

COMBINING_SMOOTH = "\u0313"
COMBINING_ROUGH = "\u0314"
COMBINING_DIAERESIS = "\u0308"

BETA_DIACRITICS = {
    ")": COMBINING_SMOOTH,
    "(": COMBINING_ROUGH,
    "/": "\u0301",
    "\\": "\u0300",
    "=": "\u0342",
    "|": "\u0345",
    "+": COMBINING_DIAERESIS,
}

# Breathings and diaeresis precede accents in precombined Greek characters.
DIACRITIC_ORDER = {COMBINING_SMOOTH: 0, COMBINING_ROUGH: 0, COMBINING_DIAERESIS: 1}

BETA_PUNCTUATION = {
    ":": "\u0387",
    "'": "\u1fbf",
}

CAPITAL_MARK = "*"
FINAL_SIGMA = "ς"
MEDIAL_SIGMA = "σ"


def _combine(base: str, diacritics: list[str]) -> str:
    ordered = sorted(diacritics, key=lambda mark: DIACRITIC_ORDER.get(mark, 2))
    return unicodedata.normalize("NFC", base + "".join(ordered))


@dataclass(frozen=True)
class BetaConverter:
    """Convert BETA code strings to precombined Unicode Greek."""

    def __call__(self, beta: str) -> str:
        return self.convert(beta)

    def convert(self, beta: str) -> str:
        """Convert one BETA string.

        Characters that are neither BETA letters, diacritics nor known
        punctuation pass through unchanged.

        Args:
            beta: Upper-case BETA text.

        Returns:
            Unicode Greek text.
        """

        result: list[str] = []
        i = 0
        length = len(beta)

        while i < length:
            char = beta[i]

            if char == CAPITAL_MARK:
                j = i + 1
                diacritics: list[str] = []
                while j < length and beta[j] in BETA_DIACRITICS:
                    diacritics.append(BETA_DIACRITICS[beta[j]])
                    j += 1
                letter = beta[j].upper() if j < length else ""
                if letter not in BETA_LETTERS:
                    logger.debug("Dangling capital mark in BETA text '%s'", beta)
                    i = j
                    continue
                j += 1
                while j < length and beta[j] in BETA_DIACRITICS:
                    diacritics.append(BETA_DIACRITICS[beta[j]])
                    j += 1
                result.append(_combine(BETA_LETTERS[letter].upper(), diacritics))
                i = j
                continue

            letter = char.upper()
            if letter in BETA_LETTERS:
                j = i + 1
                diacritics = []
                while j < length and beta[j] in BETA_DIACRITICS:
                    diacritics.append(BETA_DIACRITICS[beta[j]])
                    j += 1
                base = BETA_LETTERS[letter]
                if base == MEDIAL_SIGMA and not self._letter_follows(beta, j):
                    base = FINAL_SIGMA
                result.append(_combine(base, diacritics))
                i = j
                continue

            result.append(BETA_PUNCTUATION.get(char, char))
            i += 1

        return "".join(result)

    @staticmethod
    def _letter_follows(beta: str, index: int) -> bool:
        """Return whether a BETA letter (possibly a capital) starts at ``index``."""

        if index >= len(beta):
            return False
        char = beta[index]
        return char == CAPITAL_MARK or char.upper() in BETA_LETTERS
