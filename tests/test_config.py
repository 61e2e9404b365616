import pytest

from book_builder.config import BuildConfig, ConfigError, load_config


def test_defaults(tmp_path):
    cfg = load_config(tmp_path)
    assert cfg.root == tmp_path.resolve()
    assert cfg.source_path == tmp_path.resolve() / "src" / "book.md"
    assert cfg.command(cfg.links_command) == ["bin/build/links.awk", "src/book.md", "src/book.md"]
    assert cfg.command(cfg.spellcheck_command) == [
        "bin/build/spellcheck.sh", "src/book.md", "bin/build/spellcheck_my_words.txt",
    ]
    assert cfg.command(cfg.unpack_command) == ["bin/build/update.sh"]


def test_yaml_overrides(tmp_path):
    conf = tmp_path / "build.yaml"
    conf.write_text(
        "source_markdown: book/main.md\n"
        "unpack_command: make unpack\n"
        "links_command: [./links, '{source}']\n",
        encoding="utf-8",
    )
    cfg = load_config(tmp_path, conf)
    assert cfg.source_markdown == "book/main.md"
    assert cfg.unpack_command == ["make", "unpack"]
    assert cfg.command(cfg.links_command) == ["./links", "book/main.md"]
    assert cfg.output_dir == "public"


def test_empty_file_keeps_defaults(tmp_path):
    conf = tmp_path / "build.yaml"
    conf.write_text("", encoding="utf-8")
    assert load_config(tmp_path, conf) == BuildConfig(root=tmp_path.resolve())


@pytest.mark.parametrize("text, message", [
    ("nonsense_key: 1\n", "Unknown config keys"),
    ("- a\n- b\n", "must be a mapping"),
    ("source_markdown: [a, b]\n", "must be a string"),
    ("unpack_command: {a: 1}\n", "must be a list or string"),
    ("source_markdown: [unclosed\n", "Malformed config"),
])
def test_bad_config(tmp_path, text, message):
    conf = tmp_path / "build.yaml"
    conf.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path, conf)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="Can't read config"):
        load_config(tmp_path, tmp_path / "nope.yaml")


def test_lint_ignore_only_affects_split_files(cfg, book_root):
    md = book_root / "src" / "md"
    (md / "annotated.md").write_text("# Annotated\n", encoding="utf-8")
    (md / "part1.md").write_text("# Part 1\n", encoding="utf-8")
    assert [p.name for p in cfg.content_files()] == ["annotated.md", "part1.md"]
    assert [p.name for p in cfg.split_files()] == ["part1.md"]
