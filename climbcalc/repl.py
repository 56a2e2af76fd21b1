# --------------------------
# REPL, Help
# --------------------------

from __future__ import annotations

import logging
import sys
from typing import Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from climbcalc.config import Settings
from climbcalc.errors import CalculatorError
from climbcalc.operators import precedence_table
from climbcalc.parser import parse

logger = logging.getLogger(__name__)

_HELP_TOPICS: Dict[str, str] = {
    'general': (
        "Calculator REPL help:\n"
        "Evaluates integer expressions with prefix, infix and postfix operators and parentheses.\n"
        "Examples:\n"
        "  2+3*4    -> 14\n"
        "  (2+3)*4  -> 20\n"
        "  10-3-2   -> 5\n"
        "  3- -5    -> 8\n"
        "  ~0       -> -1\n"
        "Commands:\n"
        "  :help, help [topic]    show help (topics: general, operators)\n"
        "  :operators             list operators by precedence\n"
        "  :tree <expr>           show how an expression is grouped\n"
        "  :exit, :quit           exit\n"
    ),
    'operators': (
        "Operators (higher precedence binds tighter):\n"
        + "\n".join(precedence_table()) +
        "\nNotes:\n"
        "  - All infix operators are left-associative: 10-3-2 == (10-3)-2.\n"
        "  - Comparisons (< > = ~) yield 1 or 0.\n"
        "  - '~' is bitwise not before an operand and not-equal between operands.\n"
        "  - '!' is logical not before an operand; postfix factorial is not implemented.\n"
        "  - / and % truncate toward zero; dividing by zero is an error.\n"
    ),
}



def help_text(topic: Optional[str] = None) -> str:
    """Help for a topic; the general page when topic is empty."""
    key = (topic or 'general').strip().lower()
    if key in _HELP_TOPICS:
        return _HELP_TOPICS[key]
    return f"No help available for topic '{topic}'. Topics: {', '.join(sorted(_HELP_TOPICS))}"


class REPL:
    """Read-Eval-Print Loop for the calculator."""

    # ':' commands, mapped to handlers taking the text after the command name.
    COMMANDS: Dict[str, str] = {
        'help': '_cmd_help',
        'operators': '_cmd_operators',
        'tree': '_cmd_tree',
        'exit': '_cmd_exit',
        'quit': '_cmd_exit',
    }

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.failed = False

    def _make_session(self) -> PromptSession:
        return PromptSession(history=FileHistory(self.settings.history_file))

    def _dispatch(self, text: str) -> Optional[Tuple[bool, str]]:
        """Run text as a command if it is one. Returns (ok, output), or None for an expression."""
        words = text.split(None, 1)
        if not words:
            return None
        rest = words[1] if len(words) > 1 else ''
        if words[0].lower() == 'help':
            return self._cmd_help(rest)
        if not text.startswith(':'):
            return None
        words = text[1:].split(None, 1)
        if not words:
            return False, "No command specified. Use :help for available commands."
        handler = self.COMMANDS.get(words[0].lower())
        if handler is None:
            return False, f"Unknown command: {words[0]}"
        return getattr(self, handler)(words[1] if len(words) > 1 else '')

    def _cmd_help(self, rest: str) -> Tuple[bool, str]:
        return True, help_text(rest)

    def _cmd_operators(self, rest: str) -> Tuple[bool, str]:
        return True, help_text('operators')

    def _cmd_tree(self, rest: str) -> Tuple[bool, str]:
        if not rest.strip():
            return False, "Usage: :tree <expression>"
        try:
            return True, str(parse(rest.strip()))
        except CalculatorError as e:
            return False, f"Error: {e}"

    def _cmd_exit(self, rest: str) -> Tuple[bool, str]:
        raise EOFError()

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output).

        Raises EOFError for :exit and :quit.
        """
        # The lexer treats '\n' and '\r' as operator characters, so they must go first.
        text = line.strip()
        cmd_out = self._dispatch(text)
        if cmd_out is not None:
            return cmd_out

        try:
            tree = parse(text)
            logger.debug("Parsed %r as %s", text, tree)
            result = tree.evaluate()
        except CalculatorError as e:
            logger.debug("Rejected %r: %s", text, e)
            return False, f"Error: {e}"
        except Exception as e:
            logger.error("Unexpected error evaluating %r: %s", text, e)
            return False, f"Unhandled error: {e}"
        if self.settings.show_tree:
            return True, f"{tree}\n{result}"
        return True, str(result)

    def repl_loop(self) -> None:
        """Interactive loop with persistent line history. Errors are printed to stderr."""
        print("Interactive Calculator REPL. Type :help for help. Ctrl-D or :exit to quit.")
        logger.info("Session started (history: %s)", self.settings.history_file)
        session = self._make_session()
        while True:
            try:
                line = session.prompt(self.settings.prompt)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            keep_going, ok, out = self._step(line)
            if out is not None:
                print(out, file=sys.stdout if ok else sys.stderr)
            if not keep_going:
                break
        logger.info("Session ended")

    def run_lines(self, lines: List[str]) -> List[Tuple[bool, str]]:
        """Evaluate lines non-interactively with the same session policy as repl_loop.

        Returns (ok, output) for every line that produced output.
        """
        outputs: List[Tuple[bool, str]] = []
        for line in lines:
            keep_going, ok, out = self._step(line)
            if out is not None:
                outputs.append((ok, out))
            if not keep_going:
                break
        return outputs

    def _step(self, line: str) -> Tuple[bool, bool, Optional[str]]:
        """Handle one input line. Returns (keep_going, ok, output or None)."""
        if not line.strip():
            return True, True, None
        try:
            ok, out = self.evaluate_line(line)
        except EOFError:
            return False, True, "Exiting."
        if not ok:
            self.failed = True
            if self.settings.stop_on_error:
                return False, ok, out
        return True, ok, out
