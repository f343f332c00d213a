"""
Quiver REPL
===========
Interactive Read-Eval-Print Loop for Quiver.
Draw arrows between objects, name and compose them, and ask for routes.

Usage:
    python repl.py
    python repl.py --verbose --draw-command "my-renderer --ascii"
    python repl.py --version
"""
import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from quiver import __version__
from quiver.config import ShellConfig
from quiver.shell import Shell


BANNER = """
  QUIVER {version}
  ──────────────────────────────
  Type .help for syntax, .exit or Ctrl+D to quit
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiver",
        description="Interactive shell for drawing and composing arrows",
    )
    parser.add_argument("--version", action="version", version=f"quiver {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log tokens, trees and commands for every line")
    parser.add_argument("--draw-command", default=None,
                        help="External command used by .show (receives source-target pairs)")
    parser.add_argument("--prompt", default=None, help="Input prompt")
    parser.add_argument("--no-banner", action="store_true", help="Skip the welcome banner")
    return parser


def configure(args: argparse.Namespace) -> ShellConfig:
    """Merge command-line flags over environment settings."""
    config = ShellConfig.from_env()
    if args.verbose:
        config.log_level = "DEBUG"
    if args.draw_command is not None:
        config.draw_command = args.draw_command
    if args.prompt is not None:
        config.prompt = args.prompt
    if args.no_banner:
        config.show_banner = False
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = configure(args)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    shell = Shell(config=config, banner=BANNER.format(version=__version__))
    shell.launch()
    return 0


if __name__ == "__main__":
    sys.exit(main())
