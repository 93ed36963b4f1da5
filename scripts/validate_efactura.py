#!/usr/bin/env python3
"""Run ``roefactura validate`` straight from a source checkout.

When the package has not been installed (``pip install .``) Python does not
find the ``src`` directory on its own, so it is put on ``sys.path`` before the
command is imported.
"""

from __future__ import annotations

import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_SRC_PATH = _PROJECT_ROOT / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from roefactura.commands.validate import main  # noqa: E402

if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
