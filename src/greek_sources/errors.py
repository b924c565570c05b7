"""Exception taxonomy for code decoding and registry lookups."""

from __future__ import annotations


class MalformedCode(ValueError):
    """A part-of-speech code violates the structural grammar of its source.

    Decoding of the offending token is aborted; the enclosing sentence is
    rejected but the stream continues.
    """


class UnsupportedCode(MalformedCode):
    """A structurally valid code uses an unknown class or sub-code character."""


class UnknownInflectionKey(LookupError):
    """A decoder asked the registry for a key the registry does not define.

    This is a mismatch between decoder and registry data, not bad input, and is
    never converted into a sentence rejection.
    """

    def __init__(self, category: str, key: str) -> None:
        super().__init__(f"Unknown {category} key '{key}' in grammar registry")
        self.category = category
        self.key = key


class UnknownTagType(UnknownInflectionKey):
    """A decoder asked the registry for a word-class key it does not define."""

    def __init__(self, key: str) -> None:
        super().__init__("tag type", key)
