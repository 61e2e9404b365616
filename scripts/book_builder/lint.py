#!/usr/bin/env python3
"""
Markdown lint checking.

Two rule sets share one baseline: SOURCE_RULES for the single book source,
SPLIT_RULES for the per-page files produced by unpacking it. Rules are written
as a markdownlint-style mapping (rule id -> False/True/options) and applied
through the PyMarkdown API.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pymarkdown.api import PyMarkdownApi
from tqdm import tqdm

RuleSettings = Union[bool, Dict[str, Union[bool, int, str]]]

BASE_RULES: Dict[str, RuleSettings] = {
    "default": True,

    # Start unordered lists with two spaces of indentation
    "MD007": {"indent": 2, "start_indented": True},

    # We don't want any trailing spaces
    "MD009": {"strict": True},

    # Some headings end in ! or ?
    "MD026": {"punctuation": ".,;:"},

    # Emphasis style
    "MD049": {"style": "underscore"},

    # We have long lines
    "MD013": False,

    # We have inline html
    "MD033": False,

    # Spaces inside emphasis markers - gives false positives
    "MD037": False,

    # Spaces inside code spans are sometimes useful
    "MD038": False,

    # We mix code block notations since we sometimes don't want pretty-printing
    "MD046": False,
}

SOURCE_RULES: Dict[str, RuleSettings] = {
    **BASE_RULES,
    # Duplicate headings and multiple top-level titles end up on different pages after splitting
    "MD024": False,
    "MD025": False,
}

SPLIT_RULES: Dict[str, RuleSettings] = {
    **BASE_RULES,
    # Trailing blank lines are hard to avoid when splitting
    "MD012": False,
    # The first line is an inserted <div>, not a heading
    "MD041": False,
}


@dataclass
class LintViolation:
    path: str
    line: int
    column: int
    rule_id: str
    rule_name: str
    description: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.path}:{self.line}:{self.column}: {self.rule_id}/{self.rule_name} {self.description}"
        # PyMarkdown hands the detail over already bracketed: " [Expected: ...]"
        if self.detail and self.detail.strip():
            text += f" {self.detail.strip()}"
        return text


def _new_api() -> PyMarkdownApi:
    return PyMarkdownApi()


def configure_api(api: PyMarkdownApi, rules: Dict[str, RuleSettings]) -> PyMarkdownApi:
    """Translate a markdownlint-style rule mapping into PyMarkdown API calls."""
    for rule, settings in rules.items():
        if rule == "default":
            # PyMarkdown's default rule set is already on
            continue
        rule_id = rule.lower()
        if settings is False:
            api.disable_rule_by_identifier(rule_id)
            continue
        api.enable_rule_by_identifier(rule_id)
        if settings is True:
            continue
        for key, value in settings.items():
            name = f"plugins.{rule_id}.{key}"
            if isinstance(value, bool):
                api.set_boolean_property(name, value)
            elif isinstance(value, int):
                api.set_integer_property(name, value)
            else:
                api.set_string_property(name, str(value))
    return api


def lint_files(paths: Iterable[Path], rules: Dict[str, RuleSettings]) -> Dict[str, List[LintViolation]]:
    """
    Lint each file with `rules`.

    Returns a mapping of path -> violations, with an entry (possibly empty)
    for every input file. PyMarkdownApiException propagates to the caller.
    """
    paths = [Path(p) for p in paths]
    results: Dict[str, List[LintViolation]] = {}
    for path in tqdm(paths, desc="Linting", unit="file", disable=len(paths) < 2):
        api = configure_api(_new_api(), rules)
        scan = api.scan_path(str(path))
        results[str(path)] = [
            LintViolation(
                path=str(path),
                line=f.line_number,
                column=f.column_number,
                rule_id=f.rule_id,
                rule_name=f.rule_name,
                description=f.rule_description,
                detail=f.extra_error_information,
            )
            for f in scan.scan_failures
        ]
    return results


def format_report(results: Dict[str, List[LintViolation]]) -> Optional[str]:
    """One line per violation, or None if every file is clean."""
    lines = [str(v) for path in sorted(results) for v in results[path]]
    return "\n".join(lines) if lines else None


def lint_source_markdown(path: Path) -> Optional[str]:
    return format_report(lint_files([path], SOURCE_RULES))


def lint_split_markdown(paths: Iterable[Path]) -> Optional[str]:
    return format_report(lint_files(paths, SPLIT_RULES))
