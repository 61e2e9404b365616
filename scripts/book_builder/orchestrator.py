#!/usr/bin/env python3
"""
Pre-build checks and unpacking.

Runs once before any page is generated, in this fixed order:

1.  **Links**: internal cross-reference check over the book source.
2.  **Source lint**: lint the book source with SOURCE_RULES.
3.  **Spellcheck**: against the custom word list.
4.  **Unpack**: split the source into per-page files. Failure ABORTS the build.
5.  **Split lint**: lint the split files with SPLIT_RULES, only if the source
    lint came back clean. Most split-file issues are inherited from the
    source, so linting them again would just repeat the noise.

Every stage except unpack downgrades its failures to warnings.
"""
import datetime
from dataclasses import dataclass, field
from typing import List

from pymarkdown.api import PyMarkdownApiException

from . import lint, tools
from .config import BuildConfig
from .reporter import Reporter
from .tools import ToolError

STATUS_OK = "OK"
STATUS_WARN = "WARN"
STATUS_FAIL = "FAIL"
STATUS_SKIP = "SKIP"

# Failures a non-fatal stage turns into warnings
STAGE_ERRORS = (ToolError, OSError, PyMarkdownApiException)

SKIP_SPLIT_LINT_MSG = "Skipping lint checking of split markdown due to earlier errors."


@dataclass
class StageResult:
    name: str
    status: str
    lines: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return self.status == STATUS_OK


def _report_output(reporter: Reporter, name: str, header: str, out: str) -> StageResult:
    if out.strip():
        reporter.warn_block(header, out.rstrip("\n"))
        return StageResult(name, STATUS_WARN, out.rstrip("\n").splitlines())
    return StageResult(name, STATUS_OK)


def _report_failure(reporter: Reporter, name: str, header: str, err: Exception) -> StageResult:
    reporter.warn_block(header, str(err))
    return StageResult(name, STATUS_FAIL, str(err).splitlines())


# ----------------------------
# Stages
# ----------------------------

def check_links_stage(reporter: Reporter, cfg: BuildConfig) -> StageResult:
    reporter.info("Checking internal links...")
    try:
        out = tools.check_links(cfg)
    except STAGE_ERRORS as e:
        return _report_failure(reporter, "links", "Unable to check internal links:", e)
    return _report_output(reporter, "links", "Found some bad internal links:", out)


def source_lint_stage(reporter: Reporter, cfg: BuildConfig) -> StageResult:
    reporter.info("Lint checking source markdown...")
    try:
        out = lint.lint_source_markdown(cfg.source_path)
    except STAGE_ERRORS as e:
        return _report_failure(reporter, "source-lint", "Unable to lint check source markdown:", e)
    return _report_output(reporter, "source-lint", "Found some linting issues:", out or "")


def spellcheck_stage(reporter: Reporter, cfg: BuildConfig) -> StageResult:
    reporter.info("Performing spellcheck...")
    try:
        out = tools.spellcheck(cfg)
    except STAGE_ERRORS as e:
        return _report_failure(reporter, "spellcheck", "Unable to perform spellcheck:", e)
    return _report_output(reporter, "spellcheck", "Found some misspellings:", out)


def unpack_stage(reporter: Reporter, cfg: BuildConfig) -> StageResult:
    reporter.info("Unpacking book source...")
    try:
        tools.unpack(cfg)
    except STAGE_ERRORS as e:
        reporter.panic("Failed to unpack book source.", e)
    return StageResult("unpack", STATUS_OK)


def split_lint_stage(reporter: Reporter, cfg: BuildConfig, source_lint_ok: bool) -> StageResult:
    if not source_lint_ok:
        reporter.warn(SKIP_SPLIT_LINT_MSG)
        return StageResult("split-lint", STATUS_SKIP, [SKIP_SPLIT_LINT_MSG])

    reporter.info("Lint checking split markdown...")
    try:
        out = lint.lint_split_markdown(cfg.split_files())
    except STAGE_ERRORS as e:
        return _report_failure(reporter, "split-lint", "Unable to lint check split markdown:", e)
    return _report_output(reporter, "split-lint", "Found some linting issues:", out or "")


# ----------------------------
# Main Orchestrator
# ----------------------------

def on_pre_init(reporter: Reporter, cfg: BuildConfig) -> List[StageResult]:
    """Run every pre-build stage in order. Raises BuildPanic if unpacking fails."""
    results = []

    results.append(check_links_stage(reporter, cfg))

    source_lint = source_lint_stage(reporter, cfg)
    results.append(source_lint)

    results.append(spellcheck_stage(reporter, cfg))
    results.append(unpack_stage(reporter, cfg))
    results.append(split_lint_stage(reporter, cfg, source_lint_ok=source_lint.clean))

    if not reporter.quiet:
        print_summary(results)
    return results


def print_summary(results: List[StageResult]) -> None:
    print("\n" + "=" * 30)
    print(f" PRE-BUILD SUMMARY ({datetime.datetime.now().strftime('%H:%M:%S')})")
    print("=" * 30)
    print(f"{'Stage':<15} | {'Status':<6}")
    print("-" * 30)
    for res in results:
        print(f"{res.name:<15} | {res.status:<6}")
    print("-" * 30)
