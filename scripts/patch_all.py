#!/usr/bin/env python3
"""
patch_all.py
Apply one git commit to every release branch.

Each branch is switched to and the commit cherry-picked onto it. A failed
cherry-pick is aborted and the next branch is tried; the branch that was
checked out at the start is restored at the end.

Usage:
  python3 scripts/patch_all.py <commit>
"""

from __future__ import annotations

import os
import subprocess
import sys
from typing import List, Sequence

BRANCHES = ["altair", "bellatrix", "capella"]


def _git(*args: str, capture: bool = False) -> subprocess.CompletedProcess:
    # Only capture when we need the output; git's own messages go to the terminal
    if capture:
        return subprocess.run(["git", *args], stdout=subprocess.PIPE, text=True)
    return subprocess.run(["git", *args], text=True)


def current_branch() -> str:
    return _git("branch", "--show-current", capture=True).stdout.strip()


def patch_branch(branch: str, commit: str) -> bool:
    """Cherry-pick `commit` onto `branch`. Returns False (after aborting) on failure."""
    print(f"*** Patching {branch}")
    ok = _git("switch", branch).returncode == 0 and _git("cherry-pick", commit).returncode == 0
    if not ok:
        print(f"*** Cherry pick failed on {branch}")
        print("*** Aborting")
        _git("cherry-pick", "--abort")
    return ok


def patch_all(commit: str, branches: Sequence[str] = BRANCHES) -> List[str]:
    """Patch every branch in order, then switch back. Returns the branches that failed."""
    start = current_branch()
    failed = [branch for branch in branches if not patch_branch(branch, commit)]
    if _git("switch", start).returncode != 0:
        raise RuntimeError(f"Could not switch back to {start}")
    return failed


def main(argv: List[str]) -> int:
    if not argv:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "patch_all.py"
        print(f"Usage: {prog} <commit>")
        return 1

    try:
        failed = patch_all(argv[0])
    except RuntimeError as e:
        print(f"*** {e}")
        return 1

    if failed:
        print(f"*** Not patched: {', '.join(failed)}")
    return 0


def cli() -> int:
    """Console script entry point."""
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
