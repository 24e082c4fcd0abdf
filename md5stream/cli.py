from __future__ import annotations

import argparse
import base64
import hashlib
import logging
import sys
from pathlib import Path
from typing import List

from .md5 import Hasher, md5_hex
from .streams import md5_stream, resolve_chunk_size


def _format(digest: bytes, b64: bool) -> str:
    if b64:
        return base64.b64encode(digest).decode("ascii")
    return digest.hex()


def cmd_verify_core(_: argparse.Namespace) -> int:
    vectors = [
        b"",
        b"a",
        b"abc",
        b"message digest",
        b"abcdefghijklmnopqrstuvwxyz",
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        b"1234567890" * 8,
        b"The quick brown fox jumps over the lazy dog",
    ]
    ok_all = True
    for m in vectors:
        ours = md5_hex(m)
        ref = hashlib.md5(m).hexdigest()
        status = "OK" if ours == ref else "FAIL"
        print(f"MD5('{m[:20] + (b'...' if len(m) > 20 else b'')}') -> {status}")
        if ours != ref:
            print(f"  ours={ours}\n  ref ={ref}")
            ok_all = False
    # every length around the padding and block boundaries, fed in two halves
    for n in range(0, 130):
        msg = bytes(range(n))
        h = Hasher()
        h.update(msg[: n // 3])
        ours = h.hexdigest(msg[n // 3 :])
        if ours != hashlib.md5(msg).hexdigest():
            print(f"MD5(len={n}, split={n // 3}) -> FAIL")
            ok_all = False
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_sum(ns: argparse.Namespace) -> int:
    chunk_size = resolve_chunk_size(ns.chunk_size)
    status = 0
    for name in ns.files or ["-"]:
        try:
            if name == "-":
                digest = md5_stream(sys.stdin.buffer, chunk_size)
            else:
                with Path(name).open("rb") as fp:
                    digest = md5_stream(fp, chunk_size)
        except OSError as e:
            print(f"md5stream: {name}: {e.strerror or e}", file=sys.stderr)
            status = 1
            continue
        print(f"{_format(digest, ns.base64)}  {name}")
    return status


def cmd_string(ns: argparse.Namespace) -> int:
    for text in ns.text:
        digest = Hasher().digest(text)
        print(f"{_format(digest, ns.base64)}  {text!r}")
    return 0


def cmd_check(ns: argparse.Namespace) -> int:
    chunk_size = resolve_chunk_size(ns.chunk_size)
    try:
        listing = Path(ns.listing).read_text(encoding="utf-8")
    except OSError as e:
        print(f"md5stream: {ns.listing}: {e.strerror or e}", file=sys.stderr)
        return 1
    failed = 0
    for line in listing.splitlines():
        if not line.strip():
            continue
        expected, _, name = line.partition("  ")
        try:
            with Path(name).open("rb") as fp:
                digest = md5_stream(fp, chunk_size)
        except OSError as e:
            print(f"{name}: FAILED open or read ({e.strerror or e})")
            failed += 1
            continue
        expected = expected.strip()
        # 32 hex chars or 24 base64 chars, as written by `sum [--base64]`
        b64 = len(expected) != 32
        ok = _format(digest, b64) == (expected if b64 else expected.lower())
        if not ok:
            failed += 1
        if not ns.quiet or not ok:
            print(f"{name}: {'OK' if ok else 'FAILED'}")
    if failed:
        print(f"md5stream: WARNING: {failed} computed checksum(s) did NOT match", file=sys.stderr)
    return 0 if failed == 0 else 1


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="md5stream")
    p.add_argument("--verbose", "-v", action="store_true", help="log buffer and finalize passes")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", help="check the MD5 implementation against hashlib")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("sum", help="print the MD5 of files ('-' reads stdin)")
    s2.add_argument("files", nargs="*")
    s2.add_argument("--chunk-size", type=int, default=None, help="read size (or set MD5STREAM_CHUNK_SIZE)")
    s2.add_argument("--base64", action="store_true", help="print base64 instead of hex")
    s2.set_defaults(func=cmd_sum)

    s3 = sub.add_parser("string", help="print the MD5 of UTF-8 encoded strings")
    s3.add_argument("text", nargs="+")
    s3.add_argument("--base64", action="store_true", help="print base64 instead of hex")
    s3.set_defaults(func=cmd_string)

    s4 = sub.add_parser("check", help="verify '<digest>  <file>' lines (hex or base64) as written by `sum`")
    s4.add_argument("listing")
    s4.add_argument("--chunk-size", type=int, default=None)
    s4.add_argument("--quiet", "-q", action="store_true", help="only report failures")
    s4.set_defaults(func=cmd_check)

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
