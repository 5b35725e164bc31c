"""Development entry point (without an editable install).

Runs the CLI with:
- `python -m main ...`

The code lives under `src/`, so without `pip install -e .` Python cannot find
`cli`, `core`, etc.; this puts `src/` on the path first.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
