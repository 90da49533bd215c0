# agenda/util/console.py
from __future__ import annotations
import sys
from typing import Any

def eprint(*args: Any) -> None:
    print("[agenda]", *args, file=sys.stderr)
