#!/usr/bin/env python3
"""
Build configuration.
Defaults for source paths, wrapped tool commands and output locations,
optionally overridden from a YAML file and the command line.
"""
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import List, Optional

import yaml

# --- SOURCE LAYOUT ---
SOURCE_MARKDOWN = "src/book.md"
SPLIT_MARKDOWN_DIR = "src/md"
SPLIT_MARKDOWN_IGNORE = ["annotated.md"]  # Relative to SPLIT_MARKDOWN_DIR
OUTPUT_DIR = "public"

# --- WRAPPED TOOLS ---
# "{source}" and "{wordlist}" are substituted before running.
LINKS_COMMAND = ["bin/build/links.awk", "{source}", "{source}"]
SPELLCHECK_COMMAND = ["bin/build/spellcheck.sh", "{source}", "{wordlist}"]
SPELLCHECK_WORDLIST = "bin/build/spellcheck_my_words.txt"
UNPACK_COMMAND = ["bin/build/update.sh"]


class ConfigError(ValueError):
    """Raised for an unreadable or malformed config file."""


@dataclass
class BuildConfig:
    root: Path
    source_markdown: str = SOURCE_MARKDOWN
    split_markdown_dir: str = SPLIT_MARKDOWN_DIR
    split_markdown_ignore: List[str] = field(default_factory=lambda: list(SPLIT_MARKDOWN_IGNORE))
    output_dir: str = OUTPUT_DIR
    links_command: List[str] = field(default_factory=lambda: list(LINKS_COMMAND))
    spellcheck_command: List[str] = field(default_factory=lambda: list(SPELLCHECK_COMMAND))
    spellcheck_wordlist: str = SPELLCHECK_WORDLIST
    unpack_command: List[str] = field(default_factory=lambda: list(UNPACK_COMMAND))

    @property
    def source_path(self) -> Path:
        return self.root / self.source_markdown

    @property
    def split_dir(self) -> Path:
        return self.root / self.split_markdown_dir

    @property
    def out_dir(self) -> Path:
        return self.root / self.output_dir

    def command(self, template: List[str]) -> List[str]:
        """Fill in {source} and {wordlist} placeholders."""
        return [
            part.format(source=self.source_markdown, wordlist=self.spellcheck_wordlist)
            for part in template
        ]

    def content_files(self) -> List[Path]:
        """Every split markdown document, sorted. Pages are generated from these."""
        return sorted(p for p in self.split_dir.glob("**/*.md") if p.is_file())

    def split_files(self) -> List[Path]:
        """Split documents to lint: content_files() minus the lint ignore list."""
        ignored = {(self.split_dir / name).resolve() for name in self.split_markdown_ignore}
        return [p for p in self.content_files() if p.resolve() not in ignored]


_LIST_KEYS = {"split_markdown_ignore", "links_command", "spellcheck_command", "unpack_command"}


def load_config(root: Path, path: Optional[Path] = None) -> BuildConfig:
    """
    Build a BuildConfig for `root`, applying overrides from a YAML file.

    The file is a flat mapping of BuildConfig field names (except `root`).
    Command entries may be given as a list or as a single string.
    """
    cfg = BuildConfig(root=Path(root).resolve())
    if path is None:
        return cfg

    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Can't read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config {path}: {e}") from e

    if raw is None:
        return cfg
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(BuildConfig)} - {"root"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    overrides = {}
    for key, value in raw.items():
        if key in _LIST_KEYS:
            if isinstance(value, str):
                value = value.split()
            if not isinstance(value, list):
                raise ConfigError(f"Config key '{key}' must be a list or string")
            value = [str(v) for v in value]
        elif not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' must be a string")
        overrides[key] = value

    return replace(cfg, **overrides)
