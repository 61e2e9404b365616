#!/usr/bin/env python3
"""
check_latex.py
Run chktex over the math in a markdown file.

Notes:
  - Needs chktex on the PATH (usually part of TeX Live).
  - Output line numbers refer to the synthetic document; each of its lines
    ends with "% Source line N" pointing back into FILE.

Usage:
  python3 scripts/check_latex.py src/book.md
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List

script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from book_builder.latex_check import extract_math_from_file, run_chktex, to_latex  # noqa: E402
from book_builder.tools import ToolError  # noqa: E402


def main(argv: List[str]) -> int:
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "check_latex.py"
    if not argv or not argv[0]:
        print(f"Usage: {prog} FILE", file=sys.stderr)
        return 1

    path = Path(argv[0])
    try:
        state = extract_math_from_file(path)
    except OSError as e:
        print(f"Can't open {path}: {e.strerror or e}", file=sys.stderr)
        return 1

    if state.unclosed:
        print(f"[WARN] {path}:{state.open_line}: display math opened here is never closed", file=sys.stderr)

    try:
        out = run_chktex(to_latex(state))
    except ToolError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if out:
        sys.stdout.write(out if out.endswith("\n") else out + "\n")
    return 0


def cli() -> int:
    """Console script entry point."""
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
