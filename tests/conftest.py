import os
import sys
from pathlib import Path

import pytest

# Scripts live outside a package; make them importable
SCRIPTS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts")
if SCRIPTS_DIR not in sys.path:
    sys.path.insert(0, SCRIPTS_DIR)

from book_builder.config import BuildConfig  # noqa: E402
from book_builder.reporter import Reporter  # noqa: E402


@pytest.fixture
def reporter():
    return Reporter(quiet=True)


@pytest.fixture
def book_root(tmp_path):
    """A minimal book checkout: src/book.md plus an empty src/md/."""
    src = tmp_path / "src"
    (src / "md").mkdir(parents=True)
    (src / "book.md").write_text("# Book\n\nSome text.\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def cfg(book_root):
    return BuildConfig(root=Path(book_root))

