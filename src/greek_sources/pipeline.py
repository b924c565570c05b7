"""Top-level orchestration from a corpus file to validated tagged output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import Iterable

from greek_sources.grammar.registry import GrammarRegistry, default_registry
from greek_sources.models import Sentence, TaggedWordForm
from greek_sources.segmentation import SentenceAccumulator
from greek_sources.sources.lxx import LxxSource
from greek_sources.sources.perseus import GreekEncoding, PerseusTreebankSource
from greek_sources.sources.perseus_morph import PerseusMorphSource
from greek_sources.sources.tischendorf import TischendorfSource
from greek_sources.validation import validate_sentences, validate_words

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    """Corpus formats the pipeline can read."""

    LXX = "lxx"
    PERSEUS = "perseus"
    PERSEUS_MORPH = "perseus-morph"
    TISCHENDORF = "tischendorf"


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`run_pipeline`.

    Attributes:
        source: Corpus format that was read.
        sentences: Emitted sentences; empty for word-level sources.
        words: Tagged word forms of word-level sources; empty otherwise.
        emitted: Number of sentences emitted.
        discarded: Number of sentences discarded because a token failed.
        rejections: Rejection reason counts over discarded sentences.
        tag_count: Distinct tags interned by the registry during the run.
    """

    source: SourceKind
    sentences: tuple[Sentence, ...] = ()
    words: tuple[TaggedWordForm, ...] = ()
    emitted: int = 0
    discarded: int = 0
    rejections: dict[str, int] = field(default_factory=dict)
    tag_count: int = 0

    def all_words(self) -> Iterable[TaggedWordForm]:
        """Iterate over every word form, sentence words first."""

        for sentence in self.sentences:
            yield from sentence
        yield from self.words


def run_pipeline(
    source: SourceKind | str,
    path: Path,
    registry: GrammarRegistry | None = None,
    encoding: GreekEncoding = GreekEncoding.BETA,
    allowed_dialects: Iterable[str] = (),
) -> PipelineResult:
    """Read one corpus file, decode it and validate the result.

    Args:
        source: Corpus format, as a ``SourceKind`` or its value.
        path: Input file path.
        registry: Grammar registry; the bundled default when omitted.
        encoding: Encoding of Perseus treebank literals.
        allowed_dialects: Dialect filter for the Perseus morphology file.

    Returns:
        ``PipelineResult`` with the decoded output and accumulator statistics.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If ``source`` is unknown or the output fails validation.
    """

    kind = SourceKind(source)
    registry = registry if registry is not None else default_registry()
    logger.info("Reading %s corpus from %s", kind.value, path)

    if kind is SourceKind.PERSEUS_MORPH:
        morph = PerseusMorphSource(path, allowed_dialects=frozenset(allowed_dialects))
        words = tuple(morph.words(registry))
        validate_words(words)
        logger.info("Read %d tagged words (%d distinct tags)", len(words), registry.tag_count)
        return PipelineResult(source=kind, words=words, tag_count=registry.tag_count)

    accumulator = SentenceAccumulator()
    if kind is SourceKind.LXX:
        reader = LxxSource(path)
    elif kind is SourceKind.TISCHENDORF:
        reader = TischendorfSource(path)
    else:
        reader = PerseusTreebankSource(path, encoding=encoding)

    sentences = tuple(reader.sentences(registry, accumulator))
    validate_sentences(sentences)
    logger.info(
        "Emitted %d sentences, discarded %d (%d distinct tags)",
        accumulator.emitted,
        accumulator.discarded,
        registry.tag_count,
    )

    return PipelineResult(
        source=kind,
        sentences=sentences,
        emitted=accumulator.emitted,
        discarded=accumulator.discarded,
        rejections=dict(accumulator.rejections),
        tag_count=registry.tag_count,
    )
