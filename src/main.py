"""Script de ejecución: `python src/main.py tags`.

Same entry-point as the `pokedex-d2` console script.
"""

from __future__ import annotations

import sys

# Rich prints box-drawing characters and "★"; cp1252 consoles choke on them.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
