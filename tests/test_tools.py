import sys

import pytest

from book_builder import tools
from book_builder.tools import ToolError, run_tool


def test_run_tool_returns_stdout():
    assert run_tool([sys.executable, "-c", "print('ok')"]) == "ok\n"


def test_run_tool_passes_stdin():
    code = "import sys; sys.stdout.write(sys.stdin.read().upper())"
    assert run_tool([sys.executable, "-c", code], input_text="abc") == "ABC"


def test_run_tool_nonzero_exit_raises_with_stderr():
    code = "import sys; sys.stderr.write('broken\\n'); sys.exit(3)"
    with pytest.raises(ToolError) as exc:
        run_tool([sys.executable, "-c", code])
    assert exc.value.returncode == 3
    assert "Process failed with code 3" in str(exc.value)
    assert "broken" in str(exc.value)


def test_run_tool_unchecked_returns_output_despite_exit_code():
    code = "import sys; print('warnings'); sys.exit(2)"
    assert run_tool([sys.executable, "-c", code], check=False) == "warnings\n"


def test_run_tool_missing_executable(tmp_path):
    with pytest.raises(ToolError, match="Could not run"):
        run_tool([str(tmp_path / "does-not-exist")])


def test_wrapped_scripts_run_from_root(monkeypatch, cfg):
    calls = []
    monkeypatch.setattr(tools, "run_tool", lambda cmd, cwd=None: calls.append((cmd, cwd)) or "")
    tools.check_links(cfg)
    tools.spellcheck(cfg)
    tools.unpack(cfg)
    assert calls == [
        (["bin/build/links.awk", "src/book.md", "src/book.md"], cfg.root),
        (["bin/build/spellcheck.sh", "src/book.md", "bin/build/spellcheck_my_words.txt"], cfg.root),
        (["bin/build/update.sh"], cfg.root),
    ]
