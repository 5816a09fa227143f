#!/usr/bin/env python3
"""Compile and run every examples/*.bfl and compare its output with the matching .out file."""

import os
import sys

from bflang import compile_file, run_bf


ROOT = os.path.abspath(os.path.dirname(__file__))


def _norm(s: str) -> str:
    return s.replace('\r\n', '\n')


def _check(path: str) -> bool:
    expected_path = path[:-len('.bfl')] + '.out'
    name = os.path.basename(path)
    if not os.path.exists(expected_path):
        print(f"? {name}: no .out file")
        return True

    with open(expected_path, encoding='utf-8', newline='') as f:
        expected = f.read()

    result = compile_file(path)
    if result.diagnostics:
        print(f"✗ {name}: compile errors")
        for d in result.diagnostics:
            print(f"    {d}")
        return False

    output = run_bf(result.bf_code).output
    if _norm(output) != _norm(expected):
        print(f"✗ {name}: expected {expected!r}, got {output!r}")
        return False

    print(f"✓ {name}")
    return True


def main() -> int:
    paths = sorted(
        os.path.join(ROOT, n) for n in os.listdir(ROOT) if n.endswith('.bfl')
    )
    failed = [p for p in paths if not _check(p)]
    print(f"\n{len(paths) - len(failed)}/{len(paths)} examples passed")
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
