"""
Quiver File Runner
==================
Evaluate a file of Quiver statements, one per line, in a single session.

Blank lines and lines starting with '#' are skipped.

Usage:
    python run.py <filename.quiver>
    python run.py examples/categories.quiver --verbose
"""
import argparse
import logging
import os
import sys
from typing import Callable, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from quiver.controller import Controller
from quiver.errors import QuiverError
from quiver.shell import format_result


def run_file(
    filepath: str,
    controller: Optional[Controller] = None,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Evaluate a .quiver source file.

    Args:
        filepath: Path to the .quiver file
        controller: Session to evaluate into (a fresh one by default)
        output_fn: Where results are written

    Returns:
        0 if every line succeeded, 1 otherwise
    """
    if not os.path.exists(filepath):
        output_fn(f"Error: File not found: {filepath}")
        return 1

    controller = controller or Controller()
    with open(filepath, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    output_fn(f"─── Running: {os.path.basename(filepath)} ───")
    failures = 0
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            result = controller.evaluate(line)
        except QuiverError as e:
            output_fn(f"  ⚠ L{number}: {type(e).__name__}: {e}")
            failures += 1
            continue
        except Exception as e:
            output_fn(f"  ⚠ L{number}: Error: {type(e).__name__}: {e}")
            failures += 1
            continue
        output_fn(format_result(result))
        if not result.successful:
            failures += 1

    env = controller.environment
    output_fn(f"─── {len(env.objects)} objects, {len(env.arrows)} arrows ───")
    if failures:
        output_fn(f"✘ {failures} line(s) failed")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a Quiver source file")
    parser.add_argument("filepath", help="Path to a .quiver file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return run_file(args.filepath)


if __name__ == "__main__":
    sys.exit(main())
