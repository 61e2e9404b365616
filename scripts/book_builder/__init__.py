#!/usr/bin/env python3
"""
Book Builder Package
====================

Checks, unpacks and renders the book before the site is generated.

Modules:
    - config: Paths and wrapped tool commands (optionally from YAML)
    - reporter: Build log output and fatal errors
    - tools: External tool execution (links, spellcheck, unpack)
    - lint: Markdown lint rule sets and PyMarkdown invocation
    - latex_check: Math extraction and chktex invocation
    - orchestrator: The pre-build stage pipeline
    - pages: Page query and generation
    - page_renderer: The page template

Usage:
    from book_builder import run, load_config
    run(load_config(Path(".")))
"""

__version__ = "1.0.0"

from pathlib import Path
from typing import List, Optional

from .config import BuildConfig, ConfigError, load_config
from .reporter import BuildPanic, Reporter
from .tools import ToolError, run_tool
from .lint import SOURCE_RULES, SPLIT_RULES, format_report, lint_files
from .latex_check import extract_math, extract_math_from_file, run_chktex, to_latex
from .orchestrator import StageResult, on_pre_init
from .pages import Page, create_pages, query_pages


def run(cfg: BuildConfig, skip_pages: bool = False, reporter: Optional[Reporter] = None) -> int:
    """
    Run the pre-build pipeline, then generate pages.

    Returns 0 on success (warnings included) and 1 if the build was aborted.
    """
    reporter = reporter or Reporter()
    try:
        on_pre_init(reporter, cfg)
        if skip_pages:
            print("   [Pages] Skipped (--skip-pages).")
        else:
            create_pages(reporter, cfg)
    except BuildPanic:
        print("\n[FAILED] Build aborted.")
        return 1

    if reporter.warnings:
        print(f"\n[WARNING] Build finished with {len(reporter.warnings)} warning lines.")
    else:
        print("\n[SUCCESS] Build finished.")
    return 0


def run_with_args(argv: Optional[List[str]] = None) -> int:
    """
    Run the build with command-line arguments.
    This is the CLI entry point.
    """
    import argparse

    parser = argparse.ArgumentParser(
        description="Check, unpack and render the book.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/run_build.py                        # Full build from the current directory
    python scripts/run_build.py --config build.yaml    # Override paths and commands
    python scripts/run_build.py --skip-pages           # Checks and unpacking only
        """
    )
    parser.add_argument("--root", default=".", type=Path, help="Repository root")
    parser.add_argument("--config", type=Path, help="YAML file overriding build settings")
    parser.add_argument("--out-dir", help="Output directory, relative to the root")
    parser.add_argument("--skip-pages", action="store_true", help="Skip page generation")
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.root, args.config)
    except ConfigError as e:
        print(f"[ERROR] {e}")
        return 1
    if args.out_dir:
        cfg.output_dir = args.out_dir

    print(f"Build Roots:\n  Repo: {cfg.root}\n  Out:  {cfg.out_dir}")
    return run(cfg, skip_pages=args.skip_pages)


__all__ = [
    # Main entry points
    'run',
    'run_with_args',
    # Config
    'BuildConfig',
    'ConfigError',
    'load_config',
    # Reporting
    'BuildPanic',
    'Reporter',
    # Tools
    'ToolError',
    'run_tool',
    # Lint
    'SOURCE_RULES',
    'SPLIT_RULES',
    'format_report',
    'lint_files',
    # LaTeX
    'extract_math',
    'extract_math_from_file',
    'run_chktex',
    'to_latex',
    # Pipeline
    'StageResult',
    'on_pre_init',
    # Pages
    'Page',
    'create_pages',
    'query_pages',
]
