"""Decoders and sentence readers for morphologically annotated Greek corpora."""

from .errors import MalformedCode, UnknownInflectionKey, UnknownTagType, UnsupportedCode
from .models import (
    InflectionCategory,
    InflectionValue,
    Sentence,
    Tag,
    TaggedWordForm,
    WordClass,
)

__all__ = [
    "InflectionCategory",
    "InflectionValue",
    "MalformedCode",
    "Sentence",
    "Tag",
    "TaggedWordForm",
    "UnknownInflectionKey",
    "UnknownTagType",
    "UnsupportedCode",
    "WordClass",
]
