"""Inflection resolution against the grammar registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from greek_sources.errors import UnknownInflectionKey, UnknownTagType, UnsupportedCode
from greek_sources.grammar.registry import GrammarRegistry
from greek_sources.models import InflectionCategory, InflectionValue, Tag, WordClass


@dataclass(frozen=True)
class InflectionResolver:
    """Stateless lookups of word classes and inflection values by symbolic key.

    Every lookup goes through the registry; a key the registry does not define
    raises ``UnknownInflectionKey`` (or ``UnknownTagType``), which signals a
    decoder/registry mismatch rather than bad input.
    """

    registry: GrammarRegistry

    def resolve(self, category: InflectionCategory, key: str) -> InflectionValue:
        """Return the registry value named ``key`` in ``category``.

        Raises:
            UnknownInflectionKey: If the category or key is absent from the registry.
        """

        inflection_type = self.registry.inflection_types.get(category.value)
        if inflection_type is None:
            raise UnknownInflectionKey(category.value, key)
        value = inflection_type.inflections.get(key)
        if value is None:
            raise UnknownInflectionKey(category.value, key)
        return value

    def resolve_code(
        self,
        category: InflectionCategory,
        code: str,
        table: Mapping[str, str],
    ) -> InflectionValue:
        """Translate a source code through ``table`` and resolve the result.

        Args:
            category: Category the code belongs to.
            code: Source-specific code, one character or a short string.
            table: Mapping of source codes to registry keys.

        Returns:
            Registry inflection value.

        Raises:
            UnsupportedCode: If ``code`` is not in ``table``.
            UnknownInflectionKey: If the mapped key is absent from the registry.
        """

        key = table.get(code)
        if key is None:
            raise UnsupportedCode(f"Unsupported {category.value} code '{code}'.")
        return self.resolve(category, key)

    def word_class(self, key: str) -> WordClass:
        """Return the word class registered under ``key``.

        Raises:
            UnknownTagType: If the registry has no such tag type.
        """

        word_class = self.registry.tag_types.get(key)
        if word_class is None:
            raise UnknownTagType(key)
        return word_class

    def tag(
        self,
        word_class_key: str,
        inflections: Iterable[InflectionValue] = (),
        text: str | None = None,
    ) -> Tag:
        """Build an interned tag from a registry word-class key."""

        return self.registry.get_tag(self.word_class(word_class_key), inflections, text)

    def punctuation_tag(self, mark: str) -> Tag:
        """Return the punctuation tag carrying ``mark`` as its literal text."""

        return self.tag("[PUNCTUATION]", text=mark)
