#!/usr/bin/env python3
"""Throughput of the buffered MD5 hasher for different update sizes."""
from __future__ import annotations

import argparse
import os
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5stream.md5 import Hasher


def bench_updates(total: int, chunk: int) -> None:
    data = os.urandom(total)
    start = time.time()
    h = Hasher()
    for off in range(0, total, chunk):
        h.update(data[off : off + chunk])
    h.digest()
    elapsed = time.time() - start
    rate = total / elapsed / 1024 if elapsed else 0.0
    print(f"updates: total={total} chunk={chunk} time={elapsed:.3f}s rate={rate:.1f} KiB/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--total", type=int, default=1 << 18)
    ap.add_argument("--chunks", type=int, nargs="+", default=[1, 64, 1000, 1 << 16])
    args = ap.parse_args()

    for chunk in args.chunks:
        bench_updates(args.total, chunk)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
