"""
Quiver Shell
============
Line-at-a-time front end around a Controller.

Quiver statements are evaluated and their Result printed; lines starting
with '.' are diagnostic commands (.help, .list, .show, .reset, .exit).
Input and output go through injectable functions so the loop can be
driven from tests or from a file.
"""
import logging
import shlex
import subprocess
from typing import Callable, Optional

from .config import ShellConfig
from .controller import Controller, Result
from .errors import (
    QuiverError, LexError, ParseError, InterpretError, ControllerError,
)

logger = logging.getLogger(__name__)


HELP_TEXT = """
  Statements
    a -> b            draw an arrow from object a to object b
    a -> b -> c       draw a chain of arrows
    f: a -> b         draw an arrow named f
    g . f             compose arrows (f first, then g)
    h: g . f          name a composition
    a -- c            find a route from a to c
    a                 describe an object or arrow
    s1; s2            several statements on one line

  Commands
    .list     objects and arrows
    .show     render the graph
    .reset    forget every arrow
    .help     this text
    .exit     leave
"""

ERROR_LABELS = [
    (LexError, "Lex Error"),
    (ParseError, "Parse Error"),
    (InterpretError, "Interpret Error"),
    (ControllerError, "Controller Error"),
]


def format_result(result: Result) -> str:
    icon = "✔" if result.successful else "✘"
    lines = result.message.splitlines() or [""]
    return "\n".join(f"  {icon} {line}".rstrip() for line in lines)


class Shell:
    """
    Interactive Quiver session.

    Usage:
        shell = Shell()
        shell.launch()          # blocks until .exit, EOF or halt()
    """

    def __init__(
        self,
        controller: Optional[Controller] = None,
        config: Optional[ShellConfig] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
        banner: str = "",
    ):
        self.controller = controller or Controller()
        self.config = config or ShellConfig()
        self.input_fn = input_fn or input
        self.output_fn = output_fn or (lambda s: print(s))
        self.runner = runner or subprocess.run
        self.banner = banner
        self._halted = True
        self._diagnostics: dict[str, Callable[[], None]] = {
            ".help": self._help,
            ".list": self._list,
            ".show": self._show,
            ".reset": self._reset,
            ".exit": self.halt,
            ".quit": self.halt,
        }

    @property
    def halted(self) -> bool:
        return self._halted

    def halt(self):
        """Stop the loop after the current line."""
        self._halted = True

    def launch(self):
        """Read and handle lines until halted or input runs out."""
        if self.banner and self.config.show_banner:
            self.output_fn(self.banner)

        self._halted = False
        try:
            while not self._halted:
                try:
                    line = self.input_fn(self.config.prompt)
                except (EOFError, KeyboardInterrupt):
                    self.output_fn("")
                    break
                self.handle(line)
        finally:
            self._halted = True

    def handle(self, line: str) -> Optional[Result]:
        """Handle one line. Returns the Result for evaluated statements."""
        line = line.strip()
        if not line:
            return None

        if line.startswith("."):
            self._run_diagnostic(line)
            return None

        try:
            result = self.controller.evaluate(line)
        except QuiverError as e:
            self.output_fn(f"  ⚠ {self._error_label(e)}: {e}")
            return None
        except Exception as e:
            logger.debug("unexpected error evaluating %r", line, exc_info=True)
            self.output_fn(f"  ⚠ Error: {type(e).__name__}: {e}")
            return None

        self.output_fn(format_result(result))
        return result

    # ─────────────────────────────────────────────────────────
    #  Diagnostics
    # ─────────────────────────────────────────────────────────

    @staticmethod
    def _error_label(error: QuiverError) -> str:
        for kind, label in ERROR_LABELS:
            if isinstance(error, kind):
                return label
        return "Error"

    def _run_diagnostic(self, line: str):
        command = line.split()[0].lower()
        action = self._diagnostics.get(command)
        if action is None:
            self.output_fn(f"  ⚠ Unknown command: {command} (try .help)")
            return
        action()

    def _help(self):
        self.output_fn(HELP_TEXT)

    def _list(self):
        env = self.controller.environment
        if not env.arrows:
            self.output_fn("  (no arrows)")
            return
        self.output_fn("  ─── Objects ───")
        self.output_fn(f"    {', '.join(env.objects)}")
        self.output_fn("  ─── Arrows ───")
        for arrow in env.arrows:
            self.output_fn(f"    {arrow}")

    def _show(self):
        pairs = self.controller.environment.edge_pairs()
        if not pairs:
            self.output_fn("  (no arrows)")
            return
        if not self.config.draw_command:
            self.output_fn(f"  {' '.join(pairs)}")
            return

        argv = shlex.split(self.config.draw_command) + pairs
        logger.debug("rendering with %s", argv)
        try:
            completed = self.runner(argv, check=False)
        except OSError as e:
            self.output_fn(f"  ⚠ Could not run {argv[0]}: {e}")
            return
        if completed.returncode != 0:
            self.output_fn(f"  ⚠ {argv[0]} exited with status {completed.returncode}")

    def _reset(self):
        self.controller.reset()
        self.output_fn("  ∅ Environment cleared.")
