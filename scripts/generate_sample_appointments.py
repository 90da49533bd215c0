#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

# Ensure repo root is on sys.path when executed as a script.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


from agenda.tools.bench import synthetic_appointments


def _die(msg: str, rc: int = 2) -> int:
    print(f"[agenda-samples] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="agenda-samples",
        description="Write a deterministic appointments export usable as `agenda.cli --in` input.",
    )
    ap.add_argument("--out", default="build/sample_appointments.json", help="Output JSON path")
    ap.add_argument("--n", type=int, default=40, help="Number of appointments")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die(f"--n must be >= 0 (got {ns.n})")

    data = {"data": synthetic_appointments(int(ns.n), int(ns.seed))}

    outp = Path(ns.out)
    outp.parent.mkdir(parents=True, exist_ok=True)
    outp.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8", newline="\n")
    print(f"[agenda-samples] OK: wrote: {outp} (n={ns.n}, seed={ns.seed})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
