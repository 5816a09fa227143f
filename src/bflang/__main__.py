from __future__ import annotations

import argparse
import sys

from typing import List, Optional

from .api import CompileOptions, compile_string
from .errors import BFLangError
from .lexer import lex
from .memory import TAPE_CELLS
from .nodes import render
from .parser import parse


def _break_after(text: str, chars: str = ';{}') -> str:
    for ch in chars:
        text = text.replace(ch, ch + '\n')
    return text


def _read_source(path: Optional[str]) -> str:
    if path is None or path == '-':
        return sys.stdin.read()
    with open(path, encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bflang",
        description="Compile a bflang program to Brainfuck (default) or inspect its tokens, tree or instructions.",
    )
    parser.add_argument("file", nargs="?", help="Source file (default: stdin)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--lex", action="store_true", help="Only scan the file into tokens, one per line")
    mode.add_argument("--parse", action="store_true", help="Only scan and parse; print the statement tree")
    mode.add_argument("--str", action="store_true", dest="mnemonics", help="Print instruction mnemonics instead of Brainfuck")
    parser.add_argument("--tape-size", type=int, default=TAPE_CELLS, help=f"Tape cells available (default {TAPE_CELLS})")
    parser.add_argument("--no-comments", action="store_true", help="Leave assignment comments out of the output")
    parser.add_argument("--threaded", action="store_true", help="Run scanner and code generator on their own threads")
    args = parser.parse_args(argv)

    try:
        source = _read_source(args.file)
    except OSError as e:
        sys.stderr.write(f"File Error: {e}\n")
        return 1

    if args.lex:
        for tok in lex(source):
            sys.stdout.write(f"{tok}\n")
        return 0

    if args.parse:
        result = parse(lex(source))
        if result.error is not None:
            sys.stderr.write(f"{result.error.report()}\n")
            return 1
        sys.stdout.write(_break_after(render(result.statements)))
        return 0

    options = CompileOptions(
        tape_size=args.tape_size,
        comments=not args.no_comments,
        threaded=args.threaded,
    )
    try:
        compiled = compile_string(source, options=options)
    except BFLangError as e:
        sys.stderr.write(f"{e}\n")
        return 1

    sys.stdout.write((compiled.listing if args.mnemonics else compiled.bf_code) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
