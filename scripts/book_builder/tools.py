#!/usr/bin/env python3
"""
External tool execution.
Every wrapped script (link checker, spellchecker, unpacker, chktex) goes
through run_tool(). Calls block until the tool exits; there is no timeout.
"""
import subprocess
from pathlib import Path
from typing import List, Optional

from .config import BuildConfig


class ToolError(RuntimeError):
    """An external tool could not be started or exited non-zero."""

    def __init__(self, cmd: List[str], msg: str, returncode: Optional[int] = None, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        text = f"Command failed: {' '.join(cmd)}\n{msg}"
        if stderr.strip():
            text += "\n" + stderr.rstrip()
        super().__init__(text)


def run_tool(cmd: List[str], cwd: Optional[Path] = None, input_text: Optional[str] = None,
             check: bool = True) -> str:
    """
    Run `cmd`, returning its stdout.

    Raises ToolError if the tool can't be started, or (with check=True) if it
    exits non-zero.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            input=input_text,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise ToolError(cmd, f"Could not run: {e}") from e

    if check and proc.returncode != 0:
        raise ToolError(cmd, f"Process failed with code {proc.returncode}", proc.returncode, proc.stderr or "")
    return proc.stdout or ""


# ----------------------------
# Wrapped build scripts
# ----------------------------

def check_links(cfg: BuildConfig) -> str:
    """Internal cross-reference check. Output is one broken link per line."""
    return run_tool(cfg.command(cfg.links_command), cwd=cfg.root)


def spellcheck(cfg: BuildConfig) -> str:
    """Spellcheck the source against the custom word list. Output is one misspelling per line."""
    return run_tool(cfg.command(cfg.spellcheck_command), cwd=cfg.root)


def unpack(cfg: BuildConfig) -> str:
    """Split the source document into per-page documents."""
    return run_tool(cfg.command(cfg.unpack_command), cwd=cfg.root)
