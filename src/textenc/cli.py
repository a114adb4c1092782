"""Command-line interface for textenc."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import textenc
from textenc.exceptions import UnknownEncodingError, UnresolvableCharsetNameError
from textenc.line_endings import LineEnding, line_start
from textenc.pipeline.orchestrator import resolve_candidates
from textenc.pipeline.validity import filter_by_validity
from textenc.registry import DEFAULT_CANDIDATES, EncodingInfo

_LINE_ENDING_NAMES = [e.short_name.lower() for e in LineEnding]


def _parse_candidates(value: str) -> tuple[str, ...]:
    names = tuple(n.strip() for n in value.split(",") if n.strip())
    if not names:
        msg = "at least one encoding name is required"
        raise argparse.ArgumentTypeError(msg)
    return names


def _parse_encoding(value: str) -> EncodingInfo:
    try:
        return textenc.get_encoding(value)
    except UnresolvableCharsetNameError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _report(
    label: str,
    data: bytes,
    args: argparse.Namespace,
    stored: EncodingInfo | None = None,
) -> bool:
    """Print the detection (and check) result for one input.

    :returns: False if the input could not be decoded or has incompatible
        characters.
    """
    try:
        result = textenc.decode(
            data,
            args.candidates,
            stored_encoding=stored,
            scan_declaration=args.declaration,
        )
    except UnknownEncodingError as e:
        print(f"textenc: {label}: unknown encoding ({e})", file=sys.stderr)
        return False

    if args.minimal:
        print(result.encoding.name)
    elif args.all:
        valid = filter_by_validity(data, resolve_candidates(args.candidates))
        names = ", ".join(f"{e.name} [{e.localized_name}]" for e in valid) or "(none)"
        print(f"{label}: {result.encoding.name} ({result.method.value}); decodable: {names}")
    else:
        print(f"{label}: {result.encoding.name} ({result.method.value})")

    if args.check is None:
        return True
    incompatibles = textenc.scan_incompatible_characters(
        result.text, args.check, args.line_ending
    )
    for item in incompatibles:
        column = item.location - line_start(result.text, item.location) + 1
        print(
            f"{label}:{item.line_number}:{column}: "
            f"{item.character!r} -> {item.converted!r}"
        )
    return not incompatibles


def main(argv: list[str] | None = None) -> None:
    """Run the ``textenc`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Detect the text encoding of files and check round-trip safety."
    )
    parser.add_argument("files", nargs="*", help="Files to examine")
    parser.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Also list every candidate that decodes the input",
    )
    parser.add_argument(
        "-c",
        "--candidates",
        type=_parse_candidates,
        default=DEFAULT_CANDIDATES,
        help="Comma-separated encodings to try, in order of preference",
    )
    parser.add_argument(
        "--no-declaration",
        dest="declaration",
        action="store_false",
        help="Ignore encoding declarations such as <meta charset=...>",
    )
    parser.add_argument(
        "--no-attribute",
        dest="attribute",
        action="store_false",
        help="Ignore the encoding stored in the extended file attribute",
    )
    parser.add_argument(
        "--check",
        type=_parse_encoding,
        default=None,
        metavar="ENCODING",
        help="List characters that cannot be saved in ENCODING",
    )
    parser.add_argument(
        "--line-ending",
        type=LineEnding.from_name,
        default=None,
        metavar="{" + ",".join(_LINE_ENDING_NAMES) + "}",
        help="Line ending substituted before --check",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log detection decisions"
    )
    parser.add_argument(
        "--version", action="version", version=f"textenc {textenc.__version__}"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(levelname)s: %(message)s"
        )

    ok = True
    if args.files:
        for filepath in args.files:
            try:
                data = Path(filepath).read_bytes()
                stored = (
                    textenc.read_encoding_attribute(filepath) if args.attribute else None
                )
            except OSError as e:
                print(f"textenc: {filepath}: {e}", file=sys.stderr)
                ok = False
                continue
            ok = _report(filepath, data, args, stored) and ok
    else:
        data = sys.stdin.buffer.read()
        ok = _report("stdin", data, args)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
