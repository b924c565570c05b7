"""Markdown report generation for decoding run summaries."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from greek_sources.pipeline import PipelineResult
from greek_sources.validation import collect_word_class_counts


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _count_rows(counts: Mapping[str, int]) -> list[tuple[str, str]]:
    return [
        (_escape_cell(key), str(counts[key]))
        for key in sorted(counts, key=lambda item: (-counts[item], item))
    ]


def build_report_md(result: PipelineResult) -> str:
    """Build the markdown report for one pipeline run.

    Args:
        result: Pipeline output and accumulator statistics.

    Returns:
        Full markdown content with summary tables.
    """

    word_class_counts = collect_word_class_counts(result.all_words())
    word_total = sum(word_class_counts.values())

    summary_rows = [
        ("source", result.source.value),
        ("sentences_emitted", str(result.emitted)),
        ("sentences_discarded", str(result.discarded)),
        ("words", str(word_total)),
        ("distinct_tags", str(result.tag_count)),
    ]

    sections = [
        "# Decoding Report",
        "",
        "## Summary",
        _markdown_table(["metric", "value"], summary_rows),
        "",
        "## Words per word class",
        _markdown_table(["word_class", "count"], _count_rows(word_class_counts)),
        "",
        "## Rejection reasons",
        _markdown_table(["reason", "sentences"], _count_rows(result.rejections)),
    ]

    return "\n".join(sections) + "\n"
