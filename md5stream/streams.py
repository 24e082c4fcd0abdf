from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .md5 import Hasher

DEFAULT_CHUNK_SIZE = 1 << 16


def resolve_chunk_size(explicit: Optional[int] = None) -> int:
    """
    Pick the read size used when hashing streams.

    Search order:
    1) `explicit` (if provided)
    2) env var `MD5STREAM_CHUNK_SIZE`
    3) `DEFAULT_CHUNK_SIZE`
    """
    if explicit is not None:
        size = explicit
    else:
        env = os.getenv("MD5STREAM_CHUNK_SIZE")
        if not env:
            return DEFAULT_CHUNK_SIZE
        try:
            size = int(env, 0)
        except ValueError:
            raise ValueError(f"MD5STREAM_CHUNK_SIZE must be an integer, got {env!r}") from None
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return size


def md5_stream(fp: BinaryIO, chunk_size: Optional[int] = None) -> bytes:
    size = resolve_chunk_size(chunk_size)
    hasher = Hasher()
    while True:
        chunk = fp.read(size)
        if not chunk:
            break
        hasher.update(chunk)
    return hasher.digest()


def md5_file(path: Union[str, Path], chunk_size: Optional[int] = None) -> str:
    with Path(path).expanduser().open("rb") as fp:
        return md5_stream(fp, chunk_size).hex()
