"""CLI entrypoint for decoding Greek corpus files into tagged TSV."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from greek_sources.grammar.registry import default_registry, load_registry
from greek_sources.io.tsv_io import write_sentences_tsv, write_words_tsv
from greek_sources.pipeline import PipelineResult, SourceKind, run_pipeline
from greek_sources.reporting.report_md import build_report_md
from greek_sources.sources.perseus import GreekEncoding
from greek_sources.validation import collect_word_class_counts

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the decode command.
    """

    parser = argparse.ArgumentParser(
        description="Decode a morphologically tagged Greek corpus into TSV."
    )
    parser.add_argument(
        "--source",
        required=True,
        choices=[kind.value for kind in SourceKind],
        help="Corpus format of the input file.",
    )
    parser.add_argument("--input", required=True, type=Path, help="Path to the corpus file.")
    parser.add_argument("--output", required=True, type=Path, help="Destination TSV output path.")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Markdown report output path (default: report.md next to TSV).",
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="Grammar registry TSV (default: built-in Greek registry).",
    )
    parser.add_argument(
        "--encoding",
        choices=[encoding.value for encoding in GreekEncoding],
        default=GreekEncoding.BETA.value,
        help="Encoding of Perseus treebank literals.",
    )
    parser.add_argument(
        "--dialect",
        action="append",
        default=[],
        help="Allowed dialect for Perseus morphology records; repeatable.",
    )
    parser.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    parser.add_argument("--verbose", action="store_true", help="Log skipped and rejected records.")
    return parser


def _print_output_analysis(result: PipelineResult) -> None:
    """Print sentence statistics and word-class counts."""

    if result.sentences or result.discarded:
        print(f"Sentences: emitted={result.emitted}, discarded={result.discarded}")

    counts = collect_word_class_counts(result.all_words())
    if not counts:
        print("No words decoded; skipping output analysis.")
        return

    rows = [
        [word_class, str(count)]
        for word_class, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]
    print("\nWord classes in output TSV:")
    print(_format_table(["word_class", "count"], rows))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if not args.input.exists():
        raise SystemExit(f"Input not found: {args.input}")
    if args.registry is not None and not args.registry.exists():
        raise SystemExit(f"Registry not found: {args.registry}")

    registry = load_registry(args.registry) if args.registry is not None else default_registry()
    report_path = args.report if args.report is not None else args.output.parent / "report.md"

    result = run_pipeline(
        args.source,
        args.input,
        registry=registry,
        encoding=GreekEncoding(args.encoding),
        allowed_dialects=args.dialect,
    )

    include_header = not args.no_header
    if result.source is SourceKind.PERSEUS_MORPH:
        write_words_tsv(result.words, output_path=args.output, include_header=include_header)
        written = f"{len(result.words)} words"
    else:
        write_sentences_tsv(
            result.sentences, output_path=args.output, include_header=include_header
        )
        written = f"{len(result.sentences)} sentences"
    report_path.write_text(build_report_md(result), encoding="utf-8")

    print(f"Wrote {written} to {args.output}")
    print(f"Wrote report to {report_path}")
    _print_output_analysis(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
