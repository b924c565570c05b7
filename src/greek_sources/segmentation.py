"""Sentence accumulation over a stream of decoded tokens.

The accumulator owns one mutable buffer per reader pass. Word forms are appended
while the buffer is valid; a failed decode invalidates the buffer, and the
remaining tokens up to the next sentence terminator are consumed without being
kept. On a terminator the buffer is either emitted as an immutable ``Sentence``
or discarded, and accumulation restarts with an empty, valid buffer.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
import logging

from greek_sources.models import Sentence, TaggedWordForm

logger = logging.getLogger(__name__)

ANO_TELEIA = "\u0387"
HIGH_DOT = "\u00b7"
GREEK_QUESTION_MARK = "\u037e"
ELLIPSIS = "\u2026"

SENTENCE_TERMINATORS = frozenset({".", ";", ANO_TELEIA, "!", ELLIPSIS})
PUNCTUATION_MARKS = SENTENCE_TERMINATORS | {","}

# Alternative code points folded to the canonical mark.
PUNCTUATION_ALIASES = {
    HIGH_DOT: ANO_TELEIA,
    GREEK_QUESTION_MARK: ";",
}


class AccumulatorState(Enum):
    """Outcome of the accumulator's most recent transition."""

    ACCUMULATING = "accumulating"
    EMIT = "emit"
    DISCARD = "discard"


def punctuation_mark(form: str) -> tuple[str, str | None]:
    """Split a trailing punctuation character off a surface form.

    Args:
        form: Form as written in the source, possibly ending in punctuation.

    Returns:
        Tuple ``(form_without_mark, mark)``; ``mark`` is ``None`` when the form
        does not end in punctuation. Alias code points are folded, so a form
        ending in U+00B7 yields the ano teleia.
    """

    if not form:
        return form, None
    last = form[-1]
    mark = PUNCTUATION_ALIASES.get(last, last)
    if mark in PUNCTUATION_MARKS:
        return form[:-1], mark
    return form, None


class SentenceAccumulator:
    """Single-owner builder grouping tagged word forms into sentences.

    Attributes:
        terminators: Punctuation marks that end a sentence.
        emitted: Number of sentences emitted so far.
        discarded: Number of sentences discarded so far.
        rejections: Count of rejection reasons over discarded sentences.
    """

    def __init__(self, terminators: frozenset[str] = SENTENCE_TERMINATORS) -> None:
        self.terminators = terminators
        self.emitted = 0
        self.discarded = 0
        self.rejections: Counter[str] = Counter()
        self.state = AccumulatorState.ACCUMULATING
        self._buffer: list[TaggedWordForm] = []
        self._valid = True
        self._reason: str | None = None

    @property
    def is_valid(self) -> bool:
        """Return whether every token of the current sentence decoded."""

        return self._valid

    @property
    def pending(self) -> int:
        """Return the number of word forms held for the current sentence."""

        return len(self._buffer)

    def append(self, word: TaggedWordForm) -> None:
        """Append a decoded word form unless the current sentence is invalid."""

        self.state = AccumulatorState.ACCUMULATING
        if self._valid:
            self._buffer.append(word)

    def invalidate(self, reason: str) -> None:
        """Mark the current sentence as rejected.

        Only the first reason of a sentence is recorded.
        """

        self.state = AccumulatorState.ACCUMULATING
        if self._valid:
            self._valid = False
            self._reason = reason
            self._buffer.clear()

    def punctuate(self, mark: TaggedWordForm) -> Sentence | None:
        """Append a punctuation word form and end the sentence on a terminator.

        Args:
            mark: Tagged punctuation whose ``form`` is the mark itself.

        Returns:
            The emitted sentence when ``mark`` terminates a valid sentence,
            otherwise ``None``.
        """

        self.append(mark)
        if mark.form in self.terminators:
            return self.close()
        return None

    def close(self) -> Sentence | None:
        """End the current sentence at a boundary and reset the buffer.

        Returns:
            The sentence if it is valid and non-empty, otherwise ``None``.
        """

        sentence: Sentence | None = None
        if not self._valid:
            self.state = AccumulatorState.DISCARD
            self.discarded += 1
            reason = self._reason or "rejected"
            self.rejections[reason] += 1
            logger.debug("Discarded sentence: %s", reason)
        elif self._buffer:
            self.state = AccumulatorState.EMIT
            self.emitted += 1
            sentence = Sentence(tuple(self._buffer))
        else:
            self.state = AccumulatorState.ACCUMULATING

        self._buffer.clear()
        self._valid = True
        self._reason = None
        return sentence

    def finish(self, emit_trailing: bool) -> Sentence | None:
        """Handle end of input.

        Args:
            emit_trailing: Whether a valid, unterminated trailing sentence is
                emitted or dropped.

        Returns:
            The trailing sentence when emitted, otherwise ``None``.
        """

        if not self._valid or (emit_trailing and self._buffer):
            return self.close()

        self._buffer.clear()
        self._valid = True
        self._reason = None
        self.state = AccumulatorState.ACCUMULATING
        return None
