#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

CORE_SRC = Path(__file__).resolve().parent / "src"
if str(CORE_SRC) not in sys.path:
    sys.path.insert(0, str(CORE_SRC))

from viewbinding_codegen.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
