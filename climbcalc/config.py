"""
Settings for the calculator REPL.

Values come from, in increasing priority: built-in defaults, CLIMBCALC_* environment
variables (a .env file in the working directory is loaded first), and command-line flags.
"""

import argparse
import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

ENV_PREFIX = "CLIMBCALC_"

DEFAULT_HISTORY_FILE = os.path.expanduser("~/.climbcalc_history")


class Settings(BaseModel):
    """Validated REPL configuration."""
    prompt: str = "> "
    history_file: str = DEFAULT_HISTORY_FILE
    log_level: str = "WARNING"
    stop_on_error: bool = False
    show_tree: bool = False

    @field_validator('prompt')
    @classmethod
    def prompt_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError('Prompt cannot be empty')
        return v

    @field_validator('history_file')
    @classmethod
    def expand_history_file(cls, v: str) -> str:
        return os.path.expanduser(v)

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climbcalc",
        description="Interactive integer calculator with prefix, infix and postfix operators.",
    )
    parser.add_argument(
        "--prompt",
        type=str,
        help="Prompt shown before each line (default: '> ').",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        help=f"File used for line history (default: {DEFAULT_HISTORY_FILE}).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level, e.g. DEBUG or INFO (default: WARNING).",
    )
    parser.add_argument(
        "--stop-on-error",
        action="store_true",
        default=None,
        help="End the session after the first reported error.",
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        default=None,
        help="Print the parsed expression tree before each result.",
    )
    return parser


def _from_env(environ: Dict[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    return values


def load_settings(argv: Optional[List[str]] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    """Build Settings from defaults, environment and argv.

    Raises pydantic.ValidationError when a supplied value is invalid.
    """
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)
    values = _from_env(environ)
    args = build_arg_parser().parse_args(argv)
    for name, value in vars(args).items():
        if value is not None:
            values[name] = value
    return Settings(**values)
