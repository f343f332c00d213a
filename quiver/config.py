"""
Quiver Shell Configuration
==========================
Settings for the interactive shell and file runner.

Values come from the environment (QUIVER_*) and can be overridden by
command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class ShellConfig:
    """Configuration for a Quiver shell session."""

    prompt: str = "> "
    draw_command: str = ""      # External renderer, given "source-target" pairs as args
    log_level: str = "WARNING"  # Passed to logging.basicConfig
    show_banner: bool = True

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ShellConfig":
        environ = os.environ if environ is None else environ
        return cls(
            prompt=environ.get("QUIVER_PROMPT", cls.prompt),
            draw_command=environ.get("QUIVER_DRAW_COMMAND", cls.draw_command),
            log_level=environ.get("QUIVER_LOG_LEVEL", cls.log_level).upper(),
        )
