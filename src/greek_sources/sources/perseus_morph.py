"""Word-level reader for the Perseus morphology database (``greek.morph.xml``).

Each ``<analysis>`` record names a form, its lemma and part of speech, followed
by one child element per inflection::

    <analysis>
      <form>lo/gou</form><lemma>lo/gos</lemma><pos>noun</pos>
      <number>sg</number><gender>masc</gender><case>gen</case>
      <dialect>attic epic</dialect>
    </analysis>

Child names match the registry keys directly, so no code table is involved.
Number has no category of its own and is merged into case or person.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator

from lxml import etree

from greek_sources.grammar.registry import GrammarRegistry
from greek_sources.models import InflectionCategory, InflectionValue, TaggedWordForm, WordClass
from greek_sources.text.beta import BetaConverter
from greek_sources.text.normalize import fold_accent_variants, normalize_beta, strip_numerics

logger = logging.getLogger(__name__)

ANALYSIS_TAG = "analysis"
HEADER_FIELDS = frozenset({"form", "lemma", "pos"})

DEGREE_WORD_CLASSES = frozenset({WordClass.ADJECTIVE, WordClass.ADVERB})
DEFAULT_DEGREE = "pos"


def _is_compound(beta: str) -> bool:
    # Hyphenated compounds lose their junction spelling (κατά-ἕζομαι for καθέζομαι).
    return len(beta) > 1 and "-" in beta


def _lookup(registry: GrammarRegistry, category_key: str, key: str) -> InflectionValue | None:
    inflection_type = registry.inflection_types.get(category_key)
    if inflection_type is None:
        return None
    return inflection_type.inflections.get(key)


def _release(element: etree._Element) -> None:
    element.clear()
    while element.getprevious() is not None:
        del element.getparent()[0]


@dataclass
class _AnalysisFields:
    number: str = ""
    case: str = ""
    person: str = ""
    dialects: tuple[str, ...] | None = None
    inflections: list[InflectionValue] = field(default_factory=list)


def _read_fields(
    element: etree._Element,
    registry: GrammarRegistry,
    read_dialects: bool,
) -> _AnalysisFields:
    fields = _AnalysisFields()
    for child in element:
        name = child.tag
        value = (child.text or "").strip()
        if name in HEADER_FIELDS:
            continue
        if name == "number":
            fields.number = value
        elif name == "case":
            fields.case = value
        elif name == "person":
            fields.person = value
        elif name == "dialect":
            if read_dialects:
                fields.dialects = tuple(value.split())
        else:
            inflection = _lookup(registry, name, value)
            if inflection is not None:
                fields.inflections.append(inflection)
    return fields


def _number_inflection(
    registry: GrammarRegistry,
    fields: _AnalysisFields,
) -> tuple[bool, InflectionValue | None]:
    """Merge number into case or person.

    Returns:
        Tuple ``(ok, inflection)``; ``ok`` is ``False`` when the record must be
        skipped.
    """

    if not fields.number:
        return True, None
    if fields.case:
        inflection = _lookup(registry, InflectionCategory.CASE.value, f"{fields.case} {fields.number}")
    elif fields.person:
        inflection = _lookup(
            registry, InflectionCategory.PERSON.value, f"{fields.person} {fields.number}"
        )
    else:
        return False, None
    return inflection is not None, inflection


def iter_morph_words(
    source: str | Path | BinaryIO,
    registry: GrammarRegistry,
    converter: Callable[[str], str] | None = None,
    allowed_dialects: Iterable[str] = (),
) -> Iterator[TaggedWordForm]:
    """Stream tagged word forms from a Perseus morphology document.

    Records are skipped when their form or lemma is a hyphenated compound, when
    their part of speech or merged number key is unknown to the registry, or
    when they carry number without case or person. Unknown inflection children
    are ignored.

    Args:
        source: Path or binary stream of the XML document.
        registry: Grammar registry whose keys the record elements use.
        converter: BETA to Unicode converter; a ``BetaConverter`` by default.
        allowed_dialects: When non-empty, records naming dialects pass only if
            one of them is allowed. Records without dialects always pass.

    Yields:
        Tagged word forms with lower-case Unicode form and lemma.
    """

    convert = converter if converter is not None else BetaConverter()
    allowed = frozenset(allowed_dialects)
    skipped = 0

    for _, element in etree.iterparse(source, events=("end",), tag=ANALYSIS_TAG):
        word = _analysis_word(element, registry, convert, allowed)
        _release(element)
        if word is None:
            skipped += 1
            continue
        yield word

    logger.debug("Skipped %d morphology records", skipped)


def _analysis_word(
    element: etree._Element,
    registry: GrammarRegistry,
    convert: Callable[[str], str],
    allowed: frozenset[str],
) -> TaggedWordForm | None:
    beta_form = normalize_beta(element.findtext("form") or "")
    beta_lemma = normalize_beta(element.findtext("lemma") or "")
    if not beta_form or _is_compound(beta_form) or _is_compound(beta_lemma):
        return None

    word_class = registry.tag_types.get((element.findtext("pos") or "").strip())
    if word_class is None:
        return None

    fields = _read_fields(element, registry, read_dialects=bool(allowed))
    if fields.dialects is not None and allowed and not allowed.intersection(fields.dialects):
        return None

    ok, number_inflection = _number_inflection(registry, fields)
    if not ok:
        return None
    inflections = list(fields.inflections)
    if number_inflection is not None:
        inflections.append(number_inflection)

    form = strip_numerics(convert(beta_form)).lower()
    lemma = strip_numerics(convert(beta_lemma)).lower()

    if word_class.is_closed:
        tag = registry.get_tag(word_class, text=lemma)
    else:
        if word_class in DEGREE_WORD_CLASSES and not any(
            value.category is InflectionCategory.DEGREE for value in inflections
        ):
            positive = _lookup(registry, InflectionCategory.DEGREE.value, DEFAULT_DEGREE)
            if positive is not None:
                inflections.append(positive)
        tag = registry.get_tag(word_class, inflections)

    return TaggedWordForm(form, lemma, tag)


def iter_morph_forms(
    source: str | Path | BinaryIO,
    converter: Callable[[str], str] | None = None,
) -> Iterator[str]:
    """Stream every form of a morphology document, untagged and normalized."""

    convert = converter if converter is not None else BetaConverter()
    for _, element in etree.iterparse(source, events=("end",), tag=ANALYSIS_TAG):
        beta_form = normalize_beta(element.findtext("form") or "")
        _release(element)
        yield strip_numerics(fold_accent_variants(convert(beta_form)))


@dataclass(frozen=True)
class PerseusMorphSource:
    """The Perseus morphology file read as tagged or untagged word forms."""

    path: Path
    allowed_dialects: frozenset[str] = frozenset()
    converter: Callable[[str], str] = field(default_factory=BetaConverter)

    def _require_path(self) -> None:
        if not self.path.exists():
            raise FileNotFoundError(f"Perseus morphology file not found: {self.path}")

    def words(self, registry: GrammarRegistry) -> Iterator[TaggedWordForm]:
        """Yield tagged word forms.

        Raises:
            FileNotFoundError: If the configured path does not exist.
        """

        self._require_path()
        with self.path.open("rb") as handle:
            yield from iter_morph_words(
                handle,
                registry,
                converter=self.converter,
                allowed_dialects=self.allowed_dialects,
            )

    def forms(self) -> Iterator[str]:
        """Yield every form without tags.

        Raises:
            FileNotFoundError: If the configured path does not exist.
        """

        self._require_path()
        with self.path.open("rb") as handle:
            yield from iter_morph_forms(handle, converter=self.converter)
