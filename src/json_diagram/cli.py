"""Command-line interface: print the laid-out diagram model of a document."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from json_diagram.api import graph_to_dict
from json_diagram.convert import DocumentFormat
from json_diagram.layout.config import DisplayOptions, Orientation, ThemeName
from json_diagram.session import DiagramSession

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-diagram",
        description="Convert a JSON or XML document into a diagram node/edge model.",
    )
    parser.add_argument("input", help="Input .json or .xml file ('-' for stdin)")
    parser.add_argument(
        "--format",
        choices=[f.value for f in DocumentFormat],
        help="Document type (default: from the file extension, else json)",
    )
    parser.add_argument(
        "--orientation",
        choices=[o.value for o in Orientation],
        default=Orientation.LEFT_TO_RIGHT.value,
    )
    parser.add_argument("--theme", choices=[t.value for t in ThemeName], default="light")
    parser.add_argument("--no-counts", action="store_true", help="Hide child counts")
    parser.add_argument("--no-icons", action="store_true", help="Hide expand/collapse icons")
    parser.add_argument("--search", metavar="QUERY", help="Highlight leaves matching QUERY")
    parser.add_argument("-o", "--output", help="Write the model to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _detect_format(path: str, explicit: str | None) -> DocumentFormat:
    if explicit:
        return DocumentFormat(explicit)
    if Path(path).suffix.lower() == ".xml":
        return DocumentFormat.XML
    return DocumentFormat.JSON


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read().removeprefix("\ufeff")
    return Path(path).read_text(encoding="utf-8-sig")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        text = _read_input(args.input)
    except OSError as exc:
        print(f"error: cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    options = DisplayOptions(
        show_counts=not args.no_counts,
        show_expand_icons=not args.no_icons,
        orientation=Orientation(args.orientation),
        theme=ThemeName(args.theme),
    )
    session = DiagramSession(
        options=options, document_format=_detect_format(args.input, args.format)
    )
    if not session.load(text):
        print(f"error: invalid {session.format.upper()} content", file=sys.stderr)
        return 1

    state = session.search(args.search) if args.search else None
    model = graph_to_dict(session.graph)
    if state is not None:
        model["search"] = {"query": state.query, "matches": list(state.matches)}
    model["orientation"] = session.options.orientation.value

    rendered = json.dumps(model, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(rendered + "\n", encoding="utf-8")
        logger.debug("wrote diagram model to %s", args.output)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
