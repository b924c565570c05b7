"""Reference grammar registry holding word classes, inflections and interned tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from greek_sources.models import (
    InflectionCategory,
    InflectionType,
    InflectionValue,
    Tag,
    WordClass,
)

TAG_TYPE_KEYS: dict[str, WordClass] = {
    "noun": WordClass.NOUN,
    "verb": WordClass.VERB,
    "part": WordClass.PARTICIPLE,
    "adj": WordClass.ADJECTIVE,
    "pron": WordClass.PRONOUN,
    "article": WordClass.ARTICLE,
    "adv": WordClass.ADVERB,
    "conj": WordClass.CONJUNCTION,
    "partic": WordClass.PARTICLE,
    "prep": WordClass.PREPOSITION,
    "exclam": WordClass.EXCLAMATION,
    "numeral": WordClass.NUMERAL,
    "[PUNCTUATION]": WordClass.PUNCTUATION,
}

CASE_NAMES = ("nom", "gen", "dat", "acc", "voc")
NUMBER_NAMES = ("sg", "pl", "dual")

INFLECTION_KEYS: dict[InflectionCategory, tuple[str, ...]] = {
    InflectionCategory.CASE: tuple(
        f"{case} {number}" for number in NUMBER_NAMES for case in CASE_NAMES
    ),
    InflectionCategory.GENDER: ("masc", "fem", "neut"),
    InflectionCategory.PERSON: (
        "1st sg",
        "2nd sg",
        "3rd sg",
        "1st pl",
        "2nd pl",
        "3rd pl",
        "2nd dual",
        "3rd dual",
    ),
    InflectionCategory.TENSE: ("pres", "imperf", "fut", "aor", "perf", "plup", "futperf"),
    InflectionCategory.MOOD: ("ind", "subj", "opt", "imperat", "inf"),
    InflectionCategory.VOICE: ("act", "mid", "pass", "mp"),
    InflectionCategory.DEGREE: ("pos", "comp", "superl"),
}


@dataclass
class GrammarRegistry:
    """Canonical word classes and inflection values plus a tag interning factory.

    The registry is read-only after construction apart from its tag cache,
    which only ever grows with values equal to what ``get_tag`` would build.
    """

    tag_types: dict[str, WordClass]
    inflection_types: dict[str, InflectionType]
    _order: dict[InflectionValue, int] = field(default_factory=dict, init=False, repr=False)
    _tags: dict[tuple[WordClass, frozenset[InflectionValue], str | None], Tag] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        position = 0
        for inflection_type in self.inflection_types.values():
            for value in inflection_type.inflections.values():
                self._order[value] = position
                position += 1

    def get_tag(
        self,
        word_class: WordClass,
        inflections: Iterable[InflectionValue] | None = None,
        text: str | None = None,
    ) -> Tag:
        """Return the interned tag for a class, inflection set and literal text.

        Inflections are deduplicated and ordered by registry definition order, so
        the same set always yields the identical ``Tag`` object.

        Args:
            word_class: Word class of the tag.
            inflections: Inflection values, in any order.
            text: Literal text for closed classes.

        Returns:
            Interned tag instance.
        """

        values = frozenset(inflections or ())
        key = (word_class, values, text)
        cached = self._tags.get(key)
        if cached is not None:
            return cached

        ordered = tuple(sorted(values, key=lambda value: self._order.get(value, len(self._order))))
        tag = Tag(word_class=word_class, inflections=ordered, text=text)
        self._tags[key] = tag
        return tag

    @property
    def tag_count(self) -> int:
        """Return the number of distinct tags interned so far."""

        return len(self._tags)


def _build_inflection_types(
    keys: dict[InflectionCategory, Iterable[str]],
) -> dict[str, InflectionType]:
    inflection_types: dict[str, InflectionType] = {}
    for category, names in keys.items():
        inflection_types[category.value] = InflectionType(
            key=category.value,
            category=category,
            inflections={name: InflectionValue(category, name) for name in names},
        )
    return inflection_types


def default_registry() -> GrammarRegistry:
    """Build the Greek grammar registry expected by all bundled decoders."""

    return GrammarRegistry(
        tag_types=dict(TAG_TYPE_KEYS),
        inflection_types=_build_inflection_types(INFLECTION_KEYS),
    )


def load_registry(path: Path) -> GrammarRegistry:
    """Load a registry from a three-column TSV file.

    Rows are ``tag<TAB>key<TAB>word_class`` (word class given by its
    ``WordClass`` value, e.g. ``noun``) or ``inflection<TAB>category<TAB>name``.
    An optional ``kind key value`` header row, blank lines and ``#`` comments are
    ignored.

    Args:
        path: TSV file path.

    Returns:
        Registry populated from the file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If a row names an unknown kind, word class or category.
    """

    if not path.exists():
        raise FileNotFoundError(f"Grammar registry file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        raw_lines = [line.rstrip("\n") for line in handle]

    lines = [line for line in raw_lines if line.strip() and not line.lstrip().startswith("#")]
    if lines and [cell.strip() for cell in lines[0].split("\t")] == ["kind", "key", "value"]:
        lines = lines[1:]

    tag_types: dict[str, WordClass] = {}
    inflection_keys: dict[InflectionCategory, list[str]] = {}
    errors: list[str] = []

    for idx, line in enumerate(lines, start=1):
        cells = [cell.strip() for cell in line.split("\t")]
        if len(cells) < 3:
            errors.append(f"Row {idx}: expected 3 columns, got {len(cells)}")
            continue
        kind, key, value = cells[:3]
        if kind == "tag":
            try:
                tag_types[key] = WordClass(value)
            except ValueError:
                errors.append(f"Row {idx}: unknown word class '{value}'")
        elif kind == "inflection":
            try:
                category = InflectionCategory(key)
            except ValueError:
                errors.append(f"Row {idx}: unknown inflection category '{key}'")
                continue
            names = inflection_keys.setdefault(category, [])
            if value not in names:
                names.append(value)
        else:
            errors.append(f"Row {idx}: unknown row kind '{kind}'")

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Registry file {path} has {len(errors)} errors:\n{preview}{more}")

    return GrammarRegistry(
        tag_types=tag_types,
        inflection_types=_build_inflection_types(inflection_keys),
    )
