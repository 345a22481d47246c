"""Entry-point for command-line find/replace on DOCX packages."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from docx_replace.model.document import Docx
from docx_replace.parser.docx_loader import read_docx_file
from docx_replace.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)


def apply_edits(docx: Docx, args: argparse.Namespace) -> None:
    """Run every substitution requested on the command line against ``docx``."""
    for old, new in args.replace or []:
        docx.replace(old, new, args.limit)
    for old, new in args.link or []:
        docx.replace_link(old, new, args.limit)
    for old, new in args.header or []:
        docx.replace_header(old, new)
    for old, new in args.footer or []:
        docx.replace_footer(old, new)
    for name, source in args.image or []:
        if name not in docx.images:
            LOGGER.warning("Image %s not found; available: %s", name, ", ".join(docx.image_names()) or "none")
            continue
        docx.replace_image(name, source)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Load a DOCX file, apply the requested edits and write the result."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_verbose()

    input_path = Path(args.docx_file).resolve()
    if not input_path.exists():
        raise FileNotFoundError(f"DOCX file not found: {input_path}")
    output_path = Path(args.output).resolve()

    LOGGER.info("Editing %s", input_path.name)
    with read_docx_file(input_path) as loaded:
        for kind, error in loaded.errors.items():
            LOGGER.warning("Skipped unreadable %s parts: %s", kind.value, error)
        docx = loaded.editable()
        apply_edits(docx, args)
        # Render fully before touching the output, which may be the input file.
        payload = docx.to_bytes()
    output_path.write_bytes(payload)
    LOGGER.info("Wrote %s", output_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replace text, links, headers, footers and images in a DOCX file")
    parser.add_argument("docx_file", help="Path to the input .docx file")
    parser.add_argument("output", help="Path of the .docx file to write")
    parser.add_argument("--replace", nargs=2, action="append", metavar=("OLD", "NEW"), help="Replace body text")
    parser.add_argument("--link", nargs=2, action="append", metavar=("OLD", "NEW"), help="Replace hyperlink targets")
    parser.add_argument("--header", nargs=2, action="append", metavar=("OLD", "NEW"), help="Replace text in all headers")
    parser.add_argument("--footer", nargs=2, action="append", metavar=("OLD", "NEW"), help="Replace text in all footers")
    parser.add_argument("--image", nargs=2, action="append", metavar=("NAME", "PATH"), help="Swap an embedded image")
    parser.add_argument("--limit", type=int, default=-1, help="Maximum replacements per --replace/--link (default: all)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


if __name__ == "__main__":  # pragma: no cover
    main()
