#!/usr/bin/env python3
"""
Build reporter.
Prints progress in the build log format and keeps a record of what was said.
"""
from typing import List, Optional


class BuildPanic(RuntimeError):
    """A fatal build error. Raised by Reporter.panic()."""


class Reporter:
    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.infos: List[str] = []
        self.warnings: List[str] = []

    def _emit(self, text: str) -> None:
        if not self.quiet:
            print(text)

    def info(self, msg: str) -> None:
        self.infos.append(msg)
        self._emit(f"--> {msg}")

    def warn(self, msg: str) -> None:
        self.warnings.append(msg)
        self._emit(f"   [WARN] {msg}")

    def warn_block(self, header: str, text: str) -> None:
        """Warn with a header line followed by each line of `text`."""
        self.warn(header)
        for line in text.splitlines():
            self.warn(line)

    def panic(self, msg: str, cause: Optional[BaseException] = None) -> None:
        self._emit(f"[FATAL] {msg}")
        if cause is not None:
            for line in str(cause).splitlines():
                self._emit(f"        {line}")
            raise BuildPanic(f"{msg} {cause}") from cause
        raise BuildPanic(msg)

    def panic_on_build(self, msg: str, cause: Optional[BaseException] = None) -> None:
        """Same as panic(); named for the page-generation phase."""
        self.panic(msg, cause)
