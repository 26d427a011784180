#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from loancomment.comment_cli import run_comment  # noqa: E402


def main() -> int:
    return run_comment(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
