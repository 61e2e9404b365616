#!/usr/bin/env python3
"""
Book Build
==========

Runs the pre-build checks (links, lint, spellcheck), unpacks the book source
into per-page markdown, and renders one HTML page per unpacked file.

Usage:
    python run_build.py                       # Build from the current directory
    python run_build.py --root ../book        # Build another checkout
    python run_build.py --config build.yaml   # Override paths and commands
"""

import sys
import os

# Ensure the scripts directory is in the path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)


def main():
    """Main entry point for the build."""
    from book_builder import run_with_args
    return run_with_args()


if __name__ == "__main__":
    sys.exit(main())
