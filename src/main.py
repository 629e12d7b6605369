"""`python -m main` from inside `src/`, same as the `blog-sync` script."""

from __future__ import annotations

import sys

# Rich tables and ellipses need utf-8 on Windows consoles.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
