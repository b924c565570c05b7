"""Decoder capability shared by the per-source code grammars."""

from __future__ import annotations

from typing import Protocol

from greek_sources.errors import MalformedCode
from greek_sources.models import Tag


class WordClassDecoder(Protocol):
    """Turns a source part-of-speech code and lemma into a tag.

    ``decode`` returns ``None`` for tokens the source itself marks as out of
    scope (foreign words, ambiguous analyses) and raises ``MalformedCode`` (or
    its subclass ``UnsupportedCode``) for codes that break the grammar.
    """

    def decode(self, pos_code: str, lemma: str) -> Tag | None: ...

    def punctuation_tag(self, mark: str) -> Tag: ...


def require_code(pos_code: str | None) -> str:
    """Return ``pos_code`` stripped of surrounding whitespace.

    Raises:
        MalformedCode: If the code is missing or blank.
    """

    if pos_code is None or not pos_code.strip():
        raise MalformedCode("posCode is empty")
    return pos_code.strip()
