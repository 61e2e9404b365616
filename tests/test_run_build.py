import pytest

import book_builder
from book_builder import lint, tools


@pytest.fixture
def quiet_tools(monkeypatch):
    monkeypatch.setattr(tools, "check_links", lambda cfg: "")
    monkeypatch.setattr(tools, "spellcheck", lambda cfg: "")
    monkeypatch.setattr(tools, "unpack", lambda cfg: "")
    monkeypatch.setattr(lint, "lint_source_markdown", lambda path: None)
    monkeypatch.setattr(lint, "lint_split_markdown", lambda paths: None)


def test_full_build_writes_pages(quiet_tools, book_root, capsys):
    page = book_root / "src" / "md" / "intro.md"
    page.write_text("---\npath: /intro/\n---\n# Intro\n", encoding="utf-8")

    assert book_builder.run_with_args(["--root", str(book_root)]) == 0
    assert (book_root / "public" / "intro" / "index.html").exists()
    assert "[SUCCESS] Build finished." in capsys.readouterr().out


def test_skip_pages_and_out_dir(quiet_tools, book_root):
    (book_root / "src" / "md" / "intro.md").write_text("---\npath: /intro/\n---\n# Intro\n", encoding="utf-8")
    assert book_builder.run_with_args(["--root", str(book_root), "--out-dir", "site", "--skip-pages"]) == 0
    assert not (book_root / "site").exists()


def test_unpack_failure_exits_nonzero(quiet_tools, monkeypatch, book_root, capsys):
    def fail(cfg):
        raise tools.ToolError(["bin/build/update.sh"], "Process failed with code 1", 1)

    monkeypatch.setattr(tools, "unpack", fail)
    assert book_builder.run_with_args(["--root", str(book_root)]) == 1
    out = capsys.readouterr().out
    assert "[FATAL] Failed to unpack book source." in out
    assert "[FAILED] Build aborted." in out


def test_bad_config_exits_nonzero(book_root, capsys):
    conf = book_root / "build.yaml"
    conf.write_text("bogus: 1\n", encoding="utf-8")
    assert book_builder.run_with_args(["--root", str(book_root), "--config", str(conf)]) == 1
    assert "Unknown config keys" in capsys.readouterr().out


def test_run_build_main_reads_sys_argv(quiet_tools, monkeypatch, book_root):
    import run_build

    (book_root / "src" / "md" / "intro.md").write_text("---\npath: /intro/\n---\n# Intro\n", encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["run-build", "--root", str(book_root)])
    assert run_build.main() == 0
    assert (book_root / "public" / "intro" / "index.html").exists()
