#!/usr/bin/env python3
"""Accuracy checks for the buffered MD5 hasher against hashlib."""
from __future__ import annotations

import argparse
import hashlib
import random
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5stream.md5 import Hasher, md5_hex


def check_md5_vectors() -> bool:
    vectors = [
        b"",
        b"a",
        b"abc",
        b"message digest",
        b"abcdefghijklmnopqrstuvwxyz",
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    ]
    ok = True
    for msg in vectors:
        ours = md5_hex(msg)
        ref = hashlib.md5(msg).hexdigest()
        if ours != ref:
            print(f"MD5 mismatch: {msg!r} ours={ours} ref={ref}")
            ok = False
    print(f"md5_vectors: {'PASS' if ok else 'FAIL'}")
    return ok


def check_random_splits(samples: int, max_len: int, seed: int) -> bool:
    rng = random.Random(seed)
    bad = 0
    for _ in range(samples):
        n = rng.randrange(max_len + 1)
        msg = bytes(rng.getrandbits(8) for _ in range(n))
        h = Hasher()
        pos = 0
        while pos < n:
            step = rng.randrange(1, 130)
            h.update(msg[pos : pos + step])
            pos += step
        if h.digest() != hashlib.md5(msg).digest():
            print(f"split mismatch: len={n}")
            bad += 1
    print(f"random_splits: samples={samples} bad={bad} {'PASS' if bad == 0 else 'FAIL'}")
    return bad == 0


def check_text(samples: int, seed: int) -> bool:
    rng = random.Random(seed)
    ok = True
    for _ in range(samples):
        s = "".join(chr(rng.choice((rng.randrange(32, 127), rng.randrange(0xA0, 0x3000)))) for _ in range(rng.randrange(200)))
        if Hasher().digest(s) != hashlib.md5(s.encode("utf-8")).digest():
            print(f"text mismatch: {s!r}")
            ok = False
    print(f"utf8_text: samples={samples} {'PASS' if ok else 'FAIL'}")
    return ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--samples", type=int, default=200)
    ap.add_argument("--max-len", type=int, default=1000)
    ap.add_argument("--seed", type=int, default=1321)
    args = ap.parse_args()

    ok = check_md5_vectors()
    ok = check_random_splits(args.samples, args.max_len, args.seed) and ok
    ok = check_text(args.samples, args.seed) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
