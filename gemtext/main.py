from __future__ import annotations
import sys
from gemtext.app import run_app


def main() -> int:
    """Module entrypoint for `python -m gemtext.main` or `python -m gemtext`."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
