#!/usr/bin/env python3
"""
Page generation.
One page per split markdown file that declares a `path` in its front matter,
all rendered through the same template.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List

import yaml
from tqdm import tqdm

from . import page_renderer
from .config import BuildConfig
from .reporter import Reporter

PAGE_TEMPLATE: Callable[[str, dict, str], str] = page_renderer.render_page_html


@dataclass
class ContentNode:
    source: Path
    frontmatter: dict
    body: str

    @property
    def path(self) -> str:
        return str(self.frontmatter["path"])


@dataclass
class QueryResult:
    nodes: List[ContentNode] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class Page:
    path: str
    template: Callable[[str, dict, str], str]
    source: Path
    output: Path


def split_frontmatter(text: str) -> tuple:
    """
    Split a markdown document into (frontmatter dict, body).
    Documents without a leading `---` block get an empty dict.
    Raises yaml.YAMLError on malformed front matter.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        return {}, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == "---":
            data = yaml.safe_load("".join(lines[1:idx])) or {}
            if not isinstance(data, dict):
                raise yaml.YAMLError("front matter is not a mapping")
            return data, "".join(lines[idx + 1:])

    raise yaml.YAMLError("unterminated front matter")


def query_pages(files: List[Path]) -> QueryResult:
    """Collect every file whose front matter has a `path`. Errors are collected, not raised."""
    result = QueryResult()
    for f in files:
        try:
            frontmatter, body = split_frontmatter(f.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            result.errors.append(f"{f}: {e}")
            continue
        if frontmatter.get("path"):
            result.nodes.append(ContentNode(f, frontmatter, body))
    return result


def _output_file(out_dir: Path, page_path: str) -> Path:
    """Where a page is written. Raises ValueError if `page_path` leaves out_dir."""
    root = out_dir.resolve()
    rel = page_path.strip("/")
    target = ((root / rel / "index.html") if rel else (root / "index.html")).resolve()
    if root not in target.parents:
        raise ValueError(f"Page path {page_path!r} points outside {root}")
    return target


def create_pages(reporter: Reporter, cfg: BuildConfig) -> List[Page]:
    """Register and write one page per queried node. Raises BuildPanic on a query error."""
    reporter.info("Creating pages...")
    result = query_pages(cfg.content_files())
    if result.errors:
        for err in result.errors:
            reporter.warn(err)
        reporter.panic_on_build("Error while running page query.")

    targets = {}
    for node in result.nodes:
        try:
            targets[node.source] = _output_file(cfg.out_dir, node.path)
        except ValueError as e:
            reporter.panic_on_build(f"Invalid page path in {node.source}.", e)

    pages = []
    for node in tqdm(result.nodes, desc="Pages", unit="page", disable=reporter.quiet):
        html_content = PAGE_TEMPLATE(node.path, node.frontmatter, node.body)
        ok, msg = page_renderer.validate_page_html(html_content, node.path)
        if not ok:
            reporter.warn(msg)

        out_file = targets[node.source]
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(html_content, encoding="utf-8")
        pages.append(Page(path=node.path, template=PAGE_TEMPLATE, source=node.source, output=out_file))

    reporter.info(f"Created {len(pages)} pages")
    return pages
