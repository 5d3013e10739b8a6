"""cborseq command-line interface.

Usage:
    cbor dump [FILE]      print every item as pretty JSON
    cbor head [FILE]      write the first decodable item as raw CBOR
    cbor version
    cat data.cbor | python3 -m cborseq dump

Without FILE both commands read standard input.  Both write to standard
output in binary mode: dump emits UTF-8 text, head emits CBOR bytes.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from . import CborSeqError, __version__, dump_sequence, head_sequence
from ._constants import PROG
from ._source import open_input

_COMMANDS = ("dump", "head", "version")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Utilities for working with CBOR data",
    )
    parser.add_argument("--version", action="version",
                        version="{} {}".format(PROG, __version__))
    sub = parser.add_subparsers(dest="command")

    # ── dump ──
    dump_p = sub.add_parser("dump", help="converts the input CBOR data to JSON")
    dump_p.add_argument("file", nargs="?", metavar="FILE",
                        help="CBOR sequence to read (default: stdin)")

    # ── head ──
    head_p = sub.add_parser(
        "head", help="prints the first item of the input CBOR sequence to stdout")
    head_p.add_argument("file", nargs="?", metavar="FILE",
                        help="CBOR sequence to read (default: stdin)")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _cmd_dump(args: argparse.Namespace) -> None:
    with open_input(args.file) as fp:
        dump_sequence(fp, sys.stdout.buffer)


def _cmd_head(args: argparse.Namespace) -> None:
    with open_input(args.file) as fp:
        head_sequence(fp, sys.stdout.buffer)


def main(argv: Optional[List[str]] = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()

    # No subcommand, or one we don't know: show help, not an error.
    if not argv or (argv[0] not in _COMMANDS and not argv[0].startswith("-")):
        parser.print_help()
        return

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    if args.command == "version":
        print(f"{PROG} {__version__}")
        return

    try:
        if args.command == "dump":
            _cmd_dump(args)
        elif args.command == "head":
            _cmd_head(args)
    except CborSeqError as e:
        print(f"{PROG}: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except BrokenPipeError:
        # Downstream closed early (`cbor dump f | head`).  Point stdout at
        # devnull so the interpreter's final flush doesn't fail again.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return


if __name__ == "__main__":
    main()
