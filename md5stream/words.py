from __future__ import annotations

import base64
from typing import List, Optional

import numpy as np

from .core import MASK32


def pack_byte(words: List[int], i: int, byte: int) -> None:
    """OR byte ``i`` of a big-endian word stream into ``words``.

    Byte ``i`` lives in word ``i >> 2`` at bit offset ``24 - 8 * (i % 4)``.
    ``words`` is grown with zero words as needed.
    """
    idx = i >> 2
    if idx >= len(words):
        words.extend([0] * (idx + 1 - len(words)))
    words[idx] |= (byte & 0xFF) << (24 - (i % 4) * 8)


class WordArray:
    """An array of 32-bit words with an exact count of significant bytes.

    ``sig_bytes`` may be smaller than ``4 * len(words)`` when the last word
    is only partially filled.
    """

    def __init__(self, words: Optional[List[int]] = None, sig_bytes: Optional[int] = None) -> None:
        self.words: List[int] = [] if words is None else [w & MASK32 for w in words]
        if sig_bytes is None:
            sig_bytes = len(self.words) * 4
        if not 0 <= sig_bytes <= len(self.words) * 4:
            raise ValueError(f"sig_bytes={sig_bytes} out of range for {len(self.words)} words")
        self.sig_bytes = sig_bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "WordArray":
        buf = bytes(data)
        n = len(buf)
        words = np.frombuffer(buf + b"\x00" * (-n % 4), dtype=">u4").tolist()
        return cls(words, n)

    @classmethod
    def from_latin1(cls, text: str) -> "WordArray":
        words: List[int] = []
        for i, ch in enumerate(text):
            pack_byte(words, i, ord(ch))
        return cls(words, len(text))

    @classmethod
    def from_text(cls, text: str) -> "WordArray":
        # UTF-8 first, then one byte per Latin-1 slot
        return cls.from_latin1(text.encode("utf-8").decode("latin-1"))

    def clamp(self) -> "WordArray":
        n = self.sig_bytes
        del self.words[(n + 3) // 4 :]
        if n % 4:
            self.words[n >> 2] &= (MASK32 << (32 - (n % 4) * 8)) & MASK32
        return self

    def concat(self, other: "WordArray") -> "WordArray":
        self.clamp()
        tail = other.clone().clamp()
        partial = self.sig_bytes % 4
        if partial:
            head = self.words.pop().to_bytes(4, "big")[:partial]
            merged = WordArray.from_bytes(head + tail.to_bytes())
            self.words.extend(merged.words)
        else:
            self.words.extend(tail.words)
        self.sig_bytes += tail.sig_bytes
        return self

    def splice(self, count: int) -> List[int]:
        removed = self.words[:count]
        del self.words[:count]
        return removed

    def clone(self) -> "WordArray":
        return WordArray(list(self.words), self.sig_bytes)

    def to_bytes(self) -> bytes:
        return np.asarray(self.words, dtype=">u4").tobytes()[: self.sig_bytes]

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    def __len__(self) -> int:
        return self.sig_bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordArray):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    # mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WordArray({self.to_hex()!r}, sig_bytes={self.sig_bytes})"
