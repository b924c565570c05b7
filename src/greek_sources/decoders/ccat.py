"""Decoder for CCAT morphological codes (Packard notation) used by the LXX text.

Codes are dash-separated components such as ``N2-NSM``, ``V1-PAI3S`` or
``A1A-ASF-C``. The first letter of the first component selects the word class;
verbs and noun-like classes carry further fixed-position sub-codes.
"""

from __future__ import annotations

from dataclasses import dataclass

from greek_sources.decoders.base import require_code
from greek_sources.errors import MalformedCode, UnsupportedCode
from greek_sources.grammar.codes import (
    AMBIGUOUS_MARK,
    CASE_CODES,
    GENDER_CODES,
    INDECLINABLE_BLOCKS,
    NUMBER_CODES,
    PERSON_CODES,
    VOICE_CODES,
    degree_key,
)
from greek_sources.grammar.resolver import InflectionResolver
from greek_sources.models import InflectionCategory, InflectionValue, Tag

TENSE_CODES = {
    "P": "pres",
    "I": "imperf",
    "F": "fut",
    "A": "aor",
    "X": "perf",
    "Y": "plup",
}

MOOD_CODES = {
    "I": "ind",
    "S": "subj",
    "O": "opt",
    "D": "imperat",
    "N": "inf",
}

FINITE_MOODS = frozenset({"I", "S", "O", "D"})

# Two-letter noun blocks omit the gender; these lemmas resolve it.
LEMMA_GENDERS = {
    "φισων": "M",
    "γηων": "M",
    "τίγρις": "M",
    "γομορρα": "F",
    "σιδῶν": "F",
    "καππαδοκία": "F",
    "σοδομα": "N",
}

CLOSED_CLASS_KEYS = {
    "C": "conj",
    "X": "partic",
    "P": "prep",
    "I": "exclam",
}


@dataclass(frozen=True)
class CcatDecoder:
    """Interpret CCAT part-of-speech codes.

    ``decode`` returns ``None`` for un-hellenized Hebrew forms (single-letter
    class codes, missing noun blocks) and for noun blocks the source marks as
    ambiguous with ``/``.
    """

    resolver: InflectionResolver

    def punctuation_tag(self, mark: str) -> Tag:
        return self.resolver.punctuation_tag(mark)

    def decode(self, pos_code: str, lemma: str) -> Tag | None:
        """Return the tag for a CCAT code.

        Args:
            pos_code: Dash-separated CCAT code.
            lemma: Normalized lemma, used for closed classes and gender lookups.

        Returns:
            The decoded tag, or ``None`` for forms the source leaves undecodable.

        Raises:
            MalformedCode: If the code lacks required components.
            UnsupportedCode: If a class or sub-code character is unknown.
        """

        components = [part for part in require_code(pos_code).split("-") if part]
        if not components:
            raise MalformedCode(f"posCode '{pos_code}' has no components")

        pos_type = components[0]
        prefix = pos_type[0]

        if prefix == "V":
            return self._decode_verb(components, lemma)

        if prefix in ("N", "A", "R"):
            if len(components) < 2 or len(pos_type) < 2:
                return None  # possibly Hebrew

            inflections = self._noun_inflections(components[1], lemma)
            if inflections is None:
                return None

            if prefix == "N":
                return self.resolver.tag("noun", inflections)
            if prefix == "A":
                degree_code = components[2] if len(components) > 2 else None
                inflections.append(
                    self.resolver.resolve(InflectionCategory.DEGREE, degree_key(degree_code))
                )
                return self.resolver.tag("adj", inflections)
            if pos_type[1] == "A":
                return self.resolver.tag("article", inflections)
            return self.resolver.tag("pron", inflections)

        if prefix == "D":
            degree_code = components[1] if len(components) > 1 else None
            degree = self.resolver.resolve(InflectionCategory.DEGREE, degree_key(degree_code))
            return self.resolver.tag("adv", [degree])

        if prefix in CLOSED_CLASS_KEYS:
            return self.resolver.tag(CLOSED_CLASS_KEYS[prefix], text=lemma)

        if prefix == "M":
            return self.resolver.tag("numeral")

        raise UnsupportedCode(f"Unknown posCode '{pos_code}'")

    def _decode_verb(self, components: list[str], lemma: str) -> Tag | None:
        if len(components) < 2:
            raise MalformedCode("posCode should have at least 2 components.")

        verb_code = components[1]
        if len(verb_code) < 3:
            raise MalformedCode("posCode[1] as verb should have at least 3 subcomponents")

        tense_code, voice_code, mood_code = verb_code[0], verb_code[1], verb_code[2]
        tense = self.resolver.resolve_code(InflectionCategory.TENSE, tense_code, TENSE_CODES)
        voice = self.resolver.resolve_code(InflectionCategory.VOICE, voice_code, VOICE_CODES)

        if mood_code in FINITE_MOODS:
            mood = self.resolver.resolve_code(InflectionCategory.MOOD, mood_code, MOOD_CODES)
            if len(verb_code) < 5:
                raise MalformedCode("verb section should have at least 5 components.")
            person = self.resolver.resolve_code(
                InflectionCategory.PERSON, verb_code[3:], PERSON_CODES
            )
            return self.resolver.tag("verb", [tense, voice, mood, person])

        if mood_code == "N":
            mood = self.resolver.resolve_code(InflectionCategory.MOOD, mood_code, MOOD_CODES)
            return self.resolver.tag("verb", [tense, voice, mood])

        if mood_code == "P":
            if len(verb_code) < 6:
                raise MalformedCode("verb section should have at least 6 components.")
            noun_inflections = self._noun_inflections(verb_code[3:], lemma)
            if noun_inflections is None:
                return None
            return self.resolver.tag("part", [tense, voice, *noun_inflections])

        raise UnsupportedCode(f"Unsupported moodCode '{mood_code}'.")

    def _noun_inflections(self, block: str, lemma: str) -> list[InflectionValue] | None:
        """Decode a case/number/gender block, or ``None`` if it is undecodable."""

        if block in INDECLINABLE_BLOCKS:
            return []

        if len(block) < 3:
            if len(block) != 2 or lemma not in LEMMA_GENDERS:
                return None
            gender_code = LEMMA_GENDERS[lemma]
        else:
            gender_code = block[2]

        case_code, number_code = block[0], block[1]
        if AMBIGUOUS_MARK in (case_code, number_code):
            return None

        if case_code not in CASE_CODES:
            raise UnsupportedCode(f"Unsupported case code '{case_code}'.")
        if number_code not in NUMBER_CODES:
            raise UnsupportedCode(f"Unsupported number code '{number_code}'.")
        if gender_code == AMBIGUOUS_MARK:
            return None

        case = self.resolver.resolve(
            InflectionCategory.CASE, f"{CASE_CODES[case_code]} {NUMBER_CODES[number_code]}"
        )
        gender = self.resolver.resolve_code(InflectionCategory.GENDER, gender_code, GENDER_CODES)
        return [case, gender]
