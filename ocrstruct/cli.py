"""Command-line interface for structuring extracted text files.

Provides subcommands for turning one text file into structured JSON and
for summarizing a folder of text files into a CSV report.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from ocrstruct.builders.invoice import build_invoice_structured
from ocrstruct.builders.preview import build_text_preview
from ocrstruct.builders.universal import build_universal_structured
from ocrstruct.utils.config import AppConfig, load_config
from ocrstruct.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_PATTERNS = ("*.txt", "*.TXT")
_FORMATS = ("universal", "invoice", "preview")
_CSV_COLUMNS = [
    "filename",
    "status",
    "document_type",
    "item_count",
    "total",
    "validation_passed",
    "warning_count",
    "error",
]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all text files in a directory.

    Args:
        input_dir: Directory to scan.

    Returns:
        Sorted list of text file paths.
    """
    files: list[Path] = []
    for pattern in _SUPPORTED_PATTERNS:
        files.extend(input_dir.glob(pattern))
    return sorted(set(files))


def _read_text(file_path: Path) -> str:
    return file_path.read_text(encoding="utf-8", errors="replace")


def structure_file(
    file_path: Path, output_format: str = "universal", config: AppConfig | None = None
) -> dict[str, object]:
    """Structure one text file and return the JSON-ready result.

    Args:
        file_path: Path to a UTF-8 text file.
        output_format: One of ``universal``, ``invoice`` or ``preview``.
        config: Application configuration. Loaded from disk when ``None``.

    Returns:
        The structured document as plain JSON types.
    """
    config = config or load_config()
    text = _read_text(file_path)
    if output_format == "invoice":
        result = build_invoice_structured(text, config.parsing)
    elif output_format == "preview":
        result = build_text_preview(text, None, config.parsing)
    else:
        result = build_universal_structured(
            text, None, config.parsing, config.validation
        )
    return result.model_dump(mode="json")


def _summarize_file(file_path: Path, config: AppConfig) -> dict[str, object]:
    structured = build_universal_structured(
        _read_text(file_path), None, config.parsing, config.validation
    )
    warnings = structured.validation.warnings if structured.validation else []
    return {
        "filename": file_path.name,
        "status": "success",
        "document_type": structured.document_type,
        "item_count": len(structured.items),
        "total": structured.summary.total,
        "validation_passed": not warnings,
        "warning_count": len(warnings),
        "error": None,
    }


def process_folder(
    input_dir: Path,
    output_csv: Path,
    verbose: bool = False,
    config: AppConfig | None = None,
) -> dict[str, int]:
    """Structure every text file in a folder and write a CSV summary.

    Args:
        input_dir: Directory containing ``.txt`` files.
        output_csv: Path for the output CSV file.
        verbose: Whether to print per-file progress.
        config: Application configuration. Loaded from disk when ``None``.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    config = config or load_config()
    files = _find_documents(input_dir)
    if not files:
        logger.warning("No text files found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d text files to structure", len(files))

    rows: list[dict[str, object]] = []
    successful = 0
    failed = 0
    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")
        try:
            rows.append(_summarize_file(file_path, config))
            successful += 1
        except OSError as exc:
            logger.error("Failed to read %s: %s", file_path.name, exc)
            rows.append({"filename": file_path.name, "status": "failed", "error": str(exc)})
            failed += 1

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write per-file summary rows to a CSV file.

    Args:
        rows: List of result dictionaries.
        output_path: Path for the output CSV file.
    """
    if not rows:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Batch Structuring Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="OCR Text Structuring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    batch_parser = subparsers.add_parser("batch", help="Summarize a folder of text files")
    batch_parser.add_argument("input_dir", type=Path, help="Directory with .txt files")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    extract_parser = subparsers.add_parser("extract", help="Structure one text file")
    extract_parser.add_argument("file", type=Path, help="Text file to structure")
    extract_parser.add_argument(
        "-f",
        "--format",
        choices=_FORMATS,
        default="universal",
        dest="output_format",
        help="Output shape (default: universal)",
    )
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, sys.stderr)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, args.verbose, config)
    elif args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        result = structure_file(args.file, args.output_format, config)
        output_str = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str, encoding="utf-8")
            print(f"Output written to {args.output}")
        else:
            print(output_str)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
