# --------------------------
# Entry point
# --------------------------

import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from climbcalc.config import load_settings
from climbcalc.repl import REPL


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings(argv)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    repl = REPL(settings)
    if sys.stdin.isatty():
        repl.repl_loop()
    else:
        for ok, out in repl.run_lines(sys.stdin.read().splitlines()):
            print(out, file=sys.stdout if ok else sys.stderr)
    return 1 if repl.failed and settings.stop_on_error else 0


if __name__ == '__main__':
    raise SystemExit(main())
