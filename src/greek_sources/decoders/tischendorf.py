"""Decoder for the Tischendorf New Testament morphological codes.

Codes are dash-separated, e.g. ``N-NSM``, ``V-PAI-3S``, ``V-2AAP-NSM``,
``A-APN-S``, ``ADV``, ``CONJ``. The whole first component names the class.
"""

from __future__ import annotations

from dataclasses import dataclass

from greek_sources.decoders.base import require_code
from greek_sources.errors import MalformedCode, UnsupportedCode
from greek_sources.grammar.codes import (
    CASE_CODES,
    GENDER_CODES,
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
    "R": "perf",
    "L": "plup",
    "X": "pres",  # no tense stated
}

MOOD_CODES = {
    "I": "ind",
    "S": "subj",
    "O": "opt",
    "M": "imperat",
    "N": "inf",
}

NUMBER_CODES = {
    "S": "sg",
    "P": "pl",
}

PERSON_CODES_NO_DUAL = {code: key for code, key in PERSON_CODES.items() if "dual" not in key}

FINITE_MOODS = frozenset({"I", "S", "O", "M"})
PARTICIPLE_MOODS = frozenset({"P", "R"})

# Present, imperfect and perfect do not distinguish middle from passive.
MEDIOPASSIVE_TENSES = frozenset({"P", "I", "R"})

NOUN_LIKE_CLASSES = {
    "N": "noun",
    "A": "adj",
    "T": "article",
    "P": "pron",
    "R": "pron",
    "C": "pron",
    "D": "pron",
    "K": "pron",
    "I": "pron",
    "X": "pron",
    "Q": "pron",
}

CLOSED_CLASS_KEYS = {
    "CONJ": "conj",
    "COND": "conj",
    "PREP": "prep",
    "INJ": "exclam",
}

# Particles mislabelled in the source, by lemma.
PARTICLE_OVERRIDES = {
    "οὐ": "adv",
    "μή": "conj",
}

# Hebrew words that are in common Greek use, with their canonical spelling.
HEBREW_EXCLAMATIONS = {
    "ἀμήν": "ἀμήν",
    "ὡσαννά": "ὡσαννά",
    "ἁλληλουϊά": "ἁλληλούϊα",
    "ἁλληλούια": "ἁλληλούϊα",
    "ἁλληλούϊα": "ἁλληλούϊα",
}

INDECLINABLE_BLOCKS = frozenset({"NUI", "LI", "OI"})
FOREIGN_NAME_BLOCK = "PRI"


@dataclass(frozen=True)
class TischendorfDecoder:
    """Interpret Tischendorf part-of-speech codes.

    ``decode`` returns ``None`` for foreign proper names (``PRI``), Aramaic
    words and Hebrew words outside the small exclamation table.
    """

    resolver: InflectionResolver

    def punctuation_tag(self, mark: str) -> Tag:
        return self.resolver.punctuation_tag(mark)

    def decode(self, pos_code: str, lemma: str) -> Tag | None:
        """Return the tag for a Tischendorf code.

        Args:
            pos_code: Dash-separated code.
            lemma: Lemma with editorial brackets removed.

        Returns:
            The decoded tag, or ``None`` for out-of-scope foreign words.

        Raises:
            MalformedCode: If the code lacks required components.
            UnsupportedCode: If a class or sub-code is unknown.
        """

        components = require_code(pos_code).split("-")
        pos_type = components[0]

        if pos_type == "V":
            return self._decode_verb(components)

        if pos_type in NOUN_LIKE_CLASSES:
            if len(components) < 2:
                raise MalformedCode("posCode should have at least 2 components.")

            inflections = self._noun_inflections(components[1])
            if inflections is None:
                return None

            if pos_type == "A":
                if not inflections:
                    # An indeclinable adjective is a numeral.
                    return self.resolver.tag("numeral")
                degree_code = components[2] if len(components) > 2 else None
                inflections.append(
                    self.resolver.resolve(InflectionCategory.DEGREE, degree_key(degree_code))
                )
            return self.resolver.tag(NOUN_LIKE_CLASSES[pos_type], inflections)

        if pos_type in ("S", "F"):
            if len(components) < 2:
                raise MalformedCode("posCode should have at least 2 components.")
            block = components[1]
            if len(block) < 3:
                raise MalformedCode(f"Pronoun block '{block}' should have at least 3 characters.")
            inflections = self._noun_inflections(block[-3:])
            if inflections is None:
                return None
            return self.resolver.tag("pron", inflections)

        if pos_type == "ADV":
            degree_code = components[1] if len(components) > 1 else None
            degree = self.resolver.resolve(InflectionCategory.DEGREE, degree_key(degree_code))
            return self.resolver.tag("adv", [degree])

        if pos_type in CLOSED_CLASS_KEYS:
            return self.resolver.tag(CLOSED_CLASS_KEYS[pos_type], text=lemma)

        if pos_type == "PRT":
            return self.resolver.tag(PARTICLE_OVERRIDES.get(lemma, "partic"), text=lemma)

        if pos_type == "HEB":
            text = HEBREW_EXCLAMATIONS.get(lemma)
            if text is None:
                return None
            return self.resolver.tag("exclam", text=text)

        if pos_type == "ARAM":
            return None

        raise UnsupportedCode(f"Unknown posCode '{pos_code}'")

    def _decode_verb(self, components: list[str]) -> Tag | None:
        if len(components) < 2:
            raise MalformedCode("posCode should have at least 2 components.")

        verb_code = components[1].lstrip("2")
        if len(verb_code) < 3:
            raise MalformedCode("posCode[1] as verb should have at least 3 subcomponents")

        tense_code, voice_code, mood_code = verb_code[0], verb_code[1], verb_code[2]
        tense = self.resolver.resolve_code(InflectionCategory.TENSE, tense_code, TENSE_CODES)
        voice = self._voice(voice_code, tense_code)

        if mood_code in FINITE_MOODS:
            mood = self.resolver.resolve_code(InflectionCategory.MOOD, mood_code, MOOD_CODES)
            if len(components) < 3:
                raise MalformedCode("posCode should have at least 3 components.")
            person = self.resolver.resolve_code(
                InflectionCategory.PERSON, components[2], PERSON_CODES_NO_DUAL
            )
            return self.resolver.tag("verb", [tense, voice, mood, person])

        if mood_code == "N":
            mood = self.resolver.resolve_code(InflectionCategory.MOOD, mood_code, MOOD_CODES)
            return self.resolver.tag("verb", [tense, voice, mood])

        if mood_code in PARTICIPLE_MOODS:
            if len(components) < 3:
                raise MalformedCode("posCode should have at least 3 components.")
            noun_inflections = self._noun_inflections(components[2])
            if noun_inflections is None:
                return None
            return self.resolver.tag("part", [tense, voice, *noun_inflections])

        raise UnsupportedCode(f"Unsupported moodCode '{mood_code}'.")

    def _voice(self, voice_code: str, tense_code: str) -> InflectionValue:
        key = VOICE_CODES.get(voice_code)
        if key is None:
            raise UnsupportedCode(f"Unsupported voice code '{voice_code}'.")
        if key in ("mid", "pass") and tense_code in MEDIOPASSIVE_TENSES:
            key = "mp"
        return self.resolver.resolve(InflectionCategory.VOICE, key)

    def _noun_inflections(self, block: str) -> list[InflectionValue] | None:
        """Decode a case/number/gender block, or ``None`` for foreign names."""

        if block == FOREIGN_NAME_BLOCK:
            return None
        if block in INDECLINABLE_BLOCKS:
            return []
        if len(block) != 3:
            raise MalformedCode(f"Invalid inflection block '{block}', should have length 3.")

        gender_code: str | None
        if block[0] in "123":
            # Personal pronouns carry person instead of gender.
            case_code, number_code, gender_code = block[1], block[2], None
        else:
            case_code, number_code, gender_code = block[0], block[1], block[2]

        if case_code not in CASE_CODES:
            raise UnsupportedCode(f"Unsupported case code '{case_code}'.")
        if number_code not in NUMBER_CODES:
            raise UnsupportedCode(f"Unsupported number code '{number_code}'.")

        inflections = [
            self.resolver.resolve(
                InflectionCategory.CASE, f"{CASE_CODES[case_code]} {NUMBER_CODES[number_code]}"
            )
        ]
        if gender_code is not None:
            inflections.append(
                self.resolver.resolve_code(InflectionCategory.GENDER, gender_code, GENDER_CODES)
            )
        return inflections
