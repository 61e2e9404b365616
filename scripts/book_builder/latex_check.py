#!/usr/bin/env python3
r"""
LaTeX checking for math embedded in markdown.

Pulls every math expression out of a markdown file into one synthetic LaTeX
document and runs chktex over it:

- A line starting with `$$` opens or closes a display block and becomes
  `\[` or `\]`.
- Lines inside a display block are copied as-is.
- Outside a block, each unescaped `$...$` span on the line is copied.

Every copied line ends with `% Source line N` so chktex's line numbers can be
traced back to the markdown.

chktex manual: https://www.nongnu.org/chktex/ChkTeX.pdf
"""
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .tools import run_tool

# Add exclusions by appending "-n#" where # is the warning number
CHKTEX_COMMAND = ["chktex", "-q"]

BLOCK_DELIMITER = re.compile(r"^\$\$")
INLINE_SPAN = re.compile(r"(^|[^\\])(\$.+?\$)")

# Known false positives, skipped silently
IGNORED_SPANS = [
    re.compile(r"\$\[1,r\)\$"),
]


@dataclass
class ExtractionState:
    in_math: bool = False
    fragments: List[str] = field(default_factory=list)
    open_line: Optional[int] = None

    @property
    def unclosed(self) -> bool:
        """True if the scan ended inside a display block."""
        return self.in_math


def _tag(text: str, line_number: int) -> str:
    return f"{text} % Source line {line_number}"


def _is_ignored(span: str) -> bool:
    return any(p.search(span) for p in IGNORED_SPANS)


def scan_line(state: ExtractionState, line: str, line_number: int) -> None:
    """Feed one source line (without its newline) into the extraction state."""
    if BLOCK_DELIMITER.match(line):
        state.in_math = not state.in_math
        if state.in_math:
            state.open_line = line_number
            state.fragments.append(r"\[")
        else:
            state.open_line = None
            state.fragments.append(r"\]")
        return

    if state.in_math:
        state.fragments.append(_tag(line, line_number))
        return

    for m in INLINE_SPAN.finditer(line):
        span = m.group(2)
        if not _is_ignored(span):
            state.fragments.append(_tag(span, line_number))


def extract_math(lines: Iterable[str]) -> ExtractionState:
    state = ExtractionState()
    for n, line in enumerate(lines, 1):
        scan_line(state, line.rstrip("\r\n"), n)
    return state


def extract_math_from_file(path: Path) -> ExtractionState:
    """Raises OSError if the file can't be opened."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return extract_math(f)


def to_latex(state: ExtractionState) -> str:
    """The synthetic LaTeX document. Empty if nothing was extracted."""
    return "".join(f"{frag}\n" for frag in state.fragments)


def run_chktex(latex: str, command: Optional[List[str]] = None) -> str:
    """Run chktex over `latex` (as stdin) and return its output untouched."""
    # chktex exits non-zero when it has printed warnings
    return run_tool(list(command or CHKTEX_COMMAND), input_text=latex, check=False)
