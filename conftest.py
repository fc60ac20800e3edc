from __future__ import annotations

import sys
from pathlib import Path


# Tests import ``gridtd`` straight from the source tree, installed or not.
SRC_DIR = Path(__file__).resolve().parent / "src"
if SRC_DIR.is_dir() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
