from __future__ import annotations

import logging
from typing import List, Optional, Union

from .buffered import BlockTransform, BufferedBlockAlgorithm, Data
from .core import MASK32, MD5_IV, RC, STEPS, T, swap32, u32, wt_index
from .words import WordArray

log = logging.getLogger(__name__)

MASK64 = (1 << 64) - 1

# message-word index per round, precomputed from wt_index
_WT = tuple(wt_index(t) for t in range(64))


class FinalizedError(RuntimeError):
    """Raised when a finalized hash state is used again without reset()."""


class MD5(BlockTransform):
    """MD5 compression function, padding and digest output.

    Input words are big-endian, so every block is byte-swapped before the
    little-endian MD5 arithmetic runs on it.
    """

    block_size = 16
    min_buffer_size = 0

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.hash: List[int] = list(MD5_IV)
        self.finalized = False

    def process_block(self, words: List[int], offset: int) -> None:
        if offset % 16:
            raise ValueError(f"offset {offset} is not aligned to a 16-word block")
        if len(words) - offset < 16:
            raise ValueError("m must have 16 words")

        for i in range(offset, offset + 16):
            words[i] = swap32(words[i])
        m = words[offset : offset + 16]

        a, b, c, d = self.hash
        for t in range(64):
            a = STEPS[t](a, b, c, d, m[_WT[t]], RC[t], T[t])
            a, b, c, d = d, a, b, c

        h = self.hash
        self.hash = [u32(h[0] + a), u32(h[1] + b), u32(h[2] + c), u32(h[3] + d)]

    def finalize(self, buffer: BufferedBlockAlgorithm) -> WordArray:
        """Pad the buffered tail, hash it and return the 16-byte digest.

        One-shot: the buffer is drained, so a second call raises
        :class:`FinalizedError` until :meth:`reset` is called.
        """
        if self.finalized:
            raise FinalizedError("MD5 state already finalized; call reset() first")

        data = buffer.data.clamp()
        words = data.words
        n_bits_total = (buffer.n_data_bytes * 8) & MASK64
        n_bits_left = data.sig_bytes * 8

        # last word of the block that still has room for the 64-bit length
        last = (((n_bits_left + 64) >> 9) << 4) + 15
        if len(words) <= last:
            words.extend([0] * (last + 1 - len(words)))

        words[n_bits_left >> 5] |= 0x80 << (24 - n_bits_left % 32)
        words[last - 1] = swap32(n_bits_total & MASK32)
        words[last] = swap32(n_bits_total >> 32)
        data.sig_bytes = len(words) * 4

        log.debug("finalize: %d message bytes, %d padded bytes", buffer.n_data_bytes, data.sig_bytes)
        buffer.process(True, self)
        self.finalized = True

        return WordArray([swap32(h) for h in self.hash], 16)


class Hasher:
    """Incremental hasher over a :class:`BufferedBlockAlgorithm`.

    ``finalize`` is destructive: once it has run, ``update`` and
    ``finalize`` raise :class:`FinalizedError` until ``reset`` is called.
    """

    # digest size of the default MD5 transform
    digest_size = 16

    def __init__(self, transform: Optional[BlockTransform] = None) -> None:
        self.transform = transform if transform is not None else MD5()
        self.name = type(self.transform).__name__.lower()
        self.block_size = self.transform.block_size * 4
        self.buffer = BufferedBlockAlgorithm(self.transform.block_size, self.transform.min_buffer_size)
        self.reset()

    def reset(self) -> "Hasher":
        self.buffer.reset()
        self.transform.reset()
        self.finalized = False
        return self

    def _check_open(self) -> None:
        if self.finalized:
            raise FinalizedError("hasher already finalized; call reset() first")

    def update(self, data: Data) -> "Hasher":
        self._check_open()
        self.buffer.append(data)
        self.buffer.process(False, self.transform)
        return self

    def finalize(self, data: Optional[Data] = None) -> WordArray:
        self._check_open()
        if data is not None:
            self.buffer.append(data)
        digest = self.transform.finalize(self.buffer)
        self.finalized = True
        return digest

    def digest(self, data: Optional[Data] = None) -> bytes:
        return self.finalize(data).to_bytes()

    def hexdigest(self, data: Optional[Data] = None) -> str:
        return self.finalize(data).to_hex()

    def b64digest(self, data: Optional[Data] = None) -> str:
        return self.finalize(data).to_base64()


def md5_bytes(data: Union[bytes, str]) -> bytes:
    return Hasher().digest(data)


def md5_hex(data: Union[bytes, str]) -> str:
    return md5_bytes(data).hex()
