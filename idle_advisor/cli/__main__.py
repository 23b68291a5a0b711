"""Module execution entrypoint for `python -m idle_advisor.cli`."""

from __future__ import annotations

import sys

from idle_advisor.cli import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
