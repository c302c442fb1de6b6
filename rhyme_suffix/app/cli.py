"""Command-line entry point: print the ranked rhyme union for some suffixes.

Exit status
-----------
0   Success; the comma-separated union was printed.
1   No usable suffix, or a malformed option. Nothing was fetched.
2   Extraction or merging failed; the cause is printed on stderr.
3   The search ran but found no matches.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

from ..config import EXTRACTION_STRATEGIES, Settings
from ..errors import InvalidInputError
from ..utils.logging_config import configure_logging
from ..utils.observability import get_logger
from .app import RhymeSuffixApp
from .services.result_formatter import format_no_matches, format_union
from .services.search_service import prepare_suffixes

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2
EXIT_NO_MATCHES = 3

USAGE = (
    "rhyme-suffix <suffix1> [suffix2 ... suffix5] "
    "[--limit=N] [--corpus=PATH] [--debug]"
)

AppFactory = Callable[[Settings], RhymeSuffixApp]

_logger = get_logger(__name__).bind(component="cli")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidInputError(message)


def _parse_limit(value: str) -> int:
    try:
        return max(1, int(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"--limit expects an integer, got {value!r}")


_VALUE_OPTIONS = ("--limit", "--corpus", "--strategy", "--log-level")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="rhyme-suffix",
        usage=USAGE,
        description=(
            "Find Spanish words ending in each suffix, rank them by corpus "
            "frequency and print the merged list."
        ),
        allow_abbrev=False,
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this message and exit.")
    parser.add_argument(
        "--limit",
        type=_parse_limit,
        default=None,
        help="Maximum words kept per suffix (default: 20, minimum 1).",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=None,
        help="Word-frequency file with '<word> <count>' lines.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Save a screenshot and HTML dump for every query term.",
    )
    parser.add_argument(
        "--strategy",
        choices=EXTRACTION_STRATEGIES,
        default=None,
        help="Extraction strategy (default: structured).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for diagnostics on stderr (default: WARNING).",
    )
    return parser


def split_arguments(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Separate ``--`` options from suffixes, keeping suffixes in input order.

    Anything not starting with ``--`` is a suffix, including single-dash
    words such as ``-hora``. A value option written without ``=`` takes
    the next argument as its value.
    """

    options: List[str] = []
    suffixes: List[str] = []
    expects_value = False
    for value in argv:
        if expects_value:
            options.append(value)
            expects_value = False
        elif value.startswith("--"):
            options.append(value)
            expects_value = value in _VALUE_OPTIONS
        else:
            suffixes.append(value)
    return options, suffixes


def parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    """Parse ``argv``; unknown ``--`` flags are ignored with a warning."""

    options, suffixes = split_arguments(argv)
    namespace, unknown = _build_parser().parse_known_args(options)
    if unknown:
        _logger.warning("Ignoring unknown options", context={"options": unknown})
    namespace.suffixes = suffixes
    return namespace


def run(
    argv: Sequence[str],
    *,
    app_factory: Optional[AppFactory] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    try:
        args = parse_arguments(argv)
    except InvalidInputError as exc:
        print(f"Usage: {USAGE}", file=err)
        print(f"error: {exc}", file=err)
        return EXIT_USAGE

    configure_logging(args.log_level, default="WARNING")

    settings = Settings.from_env()
    suffixes = prepare_suffixes(args.suffixes, settings.max_suffixes)
    if not suffixes:
        print(f"Usage: {USAGE}   e.g. rhyme-suffix ando endo --limit=10", file=err)
        return EXIT_USAGE

    settings = settings.with_overrides(corpus_path=args.corpus, strategy=args.strategy)

    try:
        app = (app_factory or RhymeSuffixApp)(settings)
        result = app.search(suffixes, limit=args.limit, debug=args.debug)
    except Exception as exc:
        _logger.debug("Search aborted", context={"error": repr(exc)}, exc_info=True)
        print(f"Extraction/union failed: {exc}", file=err)
        return EXIT_FAILURE

    if not result.has_matches:
        print(format_no_matches(), file=out)
        return EXIT_NO_MATCHES

    print(format_union(result.union), file=out)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    raise SystemExit(main())
