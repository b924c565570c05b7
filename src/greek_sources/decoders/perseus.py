"""Decoder for the 9-character ``postag`` codes of the Perseus treebank.

Each position holds one field: part of speech, person, number, tense, mood,
voice, gender, case and degree. The treebank writes ``-`` for fields that do not
apply, so every field falls back to a default value instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass

from greek_sources.decoders.base import require_code
from greek_sources.errors import MalformedCode
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import InflectionCategory, InflectionValue, Tag

TAG_CODE_LENGTH = 9

POS_INDEX = 0
PERSON_INDEX = 1
NUMBER_INDEX = 2
TENSE_INDEX = 3
MOOD_INDEX = 4
VOICE_INDEX = 5
GENDER_INDEX = 6
CASE_INDEX = 7
DEGREE_INDEX = 8

NUMBER_CODES = {"p": "pl", "d": "dual"}
CASE_CODES = {"v": "voc", "g": "gen", "d": "dat", "a": "acc"}
PERSON_CODES = {"1": "1st", "2": "2nd"}
TENSE_CODES = {
    "i": "imperf",
    "r": "perf",
    "l": "plup",
    "t": "futperf",
    "f": "fut",
    "a": "aor",
}
MOOD_CODES = {"i": "ind", "s": "subj", "o": "opt", "m": "imperat"}
VOICE_CODES = {"p": "pass", "m": "mid", "e": "mp"}
GENDER_CODES = {"f": "fem", "n": "neut"}
DEGREE_CODES = {"c": "comp", "s": "superl"}

DEFAULT_NUMBER = "sg"
DEFAULT_CASE = "nom"
DEFAULT_PERSON = "3rd"
DEFAULT_TENSE = "pres"
DEFAULT_MOOD = "inf"
DEFAULT_VOICE = "act"
DEFAULT_GENDER = "masc"
DEFAULT_DEGREE = "pos"

CLOSED_CLASS_KEYS = {
    "c": "conj",
    "r": "prep",
    "e": "exclam",
    "i": "exclam",
}

# Particles that behave as conjunctions, by lemma.
PARTICLE_OVERRIDES = {
    "μή": "conj",
}

HIGH_DOT = "\u00b7"
ANO_TELEIA = "\u0387"

# Forms accepted as punctuation when the part of speech is missing.
UNTAGGED_PUNCTUATION = frozenset({";", ".", ":", ANO_TELEIA})


def fold_high_dot(mark: str) -> str:
    """Replace the Latin middle dot with the Greek ano teleia."""

    return ANO_TELEIA if mark == HIGH_DOT else mark


@dataclass(frozen=True)
class PerseusDecoder:
    """Interpret Perseus treebank ``postag`` codes.

    For punctuation (``u``) and untagged (``-``) tokens the reader passes the
    surface form as the lemma, and the tag text is taken from it.
    """

    resolver: InflectionResolver

    def punctuation_tag(self, mark: str) -> Tag:
        return self.resolver.punctuation_tag(fold_high_dot(mark))

    def decode(self, pos_code: str, lemma: str) -> Tag | None:
        """Return the tag for a 9-character code.

        Args:
            pos_code: Treebank ``postag`` attribute.
            lemma: Converted lemma, or the form for punctuation/untagged tokens.

        Returns:
            The decoded tag, or ``None`` for untagged tokens that are not
            punctuation.

        Raises:
            MalformedCode: If the code is not exactly 9 characters long.
        """

        code = require_code(pos_code)
        if len(code) != TAG_CODE_LENGTH:
            raise MalformedCode(f"the tagCode '{pos_code}' is invalid")

        pos = code[POS_INDEX]

        if pos == "n":
            return self.resolver.tag("noun", [self._case(code), self._gender(code)])
        if pos == "v":
            return self.resolver.tag(
                "verb",
                [self._person(code), self._tense(code), self._mood(code), self._voice(code)],
            )
        if pos == "t":
            return self.resolver.tag(
                "part",
                [self._case(code), self._gender(code), self._tense(code), self._voice(code)],
            )
        if pos == "a":
            return self.resolver.tag(
                "adj", [self._case(code), self._gender(code), self._degree(code)]
            )
        if pos == "d":
            return self.resolver.tag("adv", [self._degree(code)])
        if pos == "l":
            return self.resolver.tag("article", [self._case(code), self._gender(code)])
        if pos == "p":
            return self.resolver.tag("pron", [self._case(code), self._gender(code)])
        if pos == "g":
            return self.resolver.tag(PARTICLE_OVERRIDES.get(lemma, "partic"), text=lemma)
        if pos in CLOSED_CLASS_KEYS:
            return self.resolver.tag(CLOSED_CLASS_KEYS[pos], text=lemma)
        if pos == "u":
            return self.punctuation_tag(lemma)
        if pos == "m":
            return self.resolver.tag("numeral")

        if lemma == HIGH_DOT or lemma in UNTAGGED_PUNCTUATION:
            return self.punctuation_tag(lemma)
        return None

    def _number(self, code: str) -> str:
        return NUMBER_CODES.get(code[NUMBER_INDEX], DEFAULT_NUMBER)

    def _case(self, code: str) -> InflectionValue:
        case = CASE_CODES.get(code[CASE_INDEX], DEFAULT_CASE)
        return self.resolver.resolve(InflectionCategory.CASE, f"{case} {self._number(code)}")

    def _person(self, code: str) -> InflectionValue:
        number = self._number(code)
        person = PERSON_CODES.get(code[PERSON_INDEX], DEFAULT_PERSON)
        if number == "dual" and person == "1st":
            # There is no first person dual.
            person = DEFAULT_PERSON
        return self.resolver.resolve(InflectionCategory.PERSON, f"{person} {number}")

    def _tense(self, code: str) -> InflectionValue:
        return self.resolver.resolve(
            InflectionCategory.TENSE, TENSE_CODES.get(code[TENSE_INDEX], DEFAULT_TENSE)
        )

    def _mood(self, code: str) -> InflectionValue:
        return self.resolver.resolve(
            InflectionCategory.MOOD, MOOD_CODES.get(code[MOOD_INDEX], DEFAULT_MOOD)
        )

    def _voice(self, code: str) -> InflectionValue:
        return self.resolver.resolve(
            InflectionCategory.VOICE, VOICE_CODES.get(code[VOICE_INDEX], DEFAULT_VOICE)
        )

    def _gender(self, code: str) -> InflectionValue:
        return self.resolver.resolve(
            InflectionCategory.GENDER, GENDER_CODES.get(code[GENDER_INDEX], DEFAULT_GENDER)
        )

    def _degree(self, code: str) -> InflectionValue:
        return self.resolver.resolve(
            InflectionCategory.DEGREE, DEGREE_CODES.get(code[DEGREE_INDEX], DEFAULT_DEGREE)
        )
