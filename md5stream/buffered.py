from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Union

from .words import WordArray

log = logging.getLogger(__name__)

Data = Union[str, bytes, bytearray, memoryview, WordArray]


class BlockTransform(ABC):
    """Per-block logic driven by a :class:`BufferedBlockAlgorithm`.

    ``block_size`` is counted in 32-bit words. ``min_buffer_size`` is the
    number of full blocks kept back when not flushing.
    """

    block_size: int = 16
    min_buffer_size: int = 0

    @abstractmethod
    def reset(self) -> None:
        ...

    @abstractmethod
    def process_block(self, words: List[int], offset: int) -> None:
        ...

    @abstractmethod
    def finalize(self, buffer: "BufferedBlockAlgorithm") -> WordArray:
        ...


def to_word_array(data: Data) -> WordArray:
    if isinstance(data, WordArray):
        return data
    if isinstance(data, str):
        return WordArray.from_text(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return WordArray.from_bytes(bytes(data))
    raise TypeError(f"cannot hash object of type {type(data).__name__}")


class BufferedBlockAlgorithm:
    """Accumulates input and hands whole blocks to a transform."""

    def __init__(self, block_size: int = 16, min_buffer_size: int = 0) -> None:
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        if min_buffer_size < 0:
            raise ValueError("min_buffer_size must be >= 0")
        self.block_size = block_size
        self.min_buffer_size = min_buffer_size
        self.reset()

    def reset(self) -> None:
        self.data = WordArray()
        self.n_data_bytes = 0

    def append(self, data: Data) -> None:
        chunk = to_word_array(data)
        self.data.concat(chunk)
        self.n_data_bytes += chunk.sig_bytes

    def process(self, flush: bool, transform: BlockTransform) -> WordArray:
        """Run every ready block through ``transform`` and drop it.

        Without ``flush`` only whole blocks beyond ``min_buffer_size`` are
        ready. With ``flush`` a trailing partial block counts as well.
        Returns the consumed words as a new :class:`WordArray`.
        """
        data = self.data
        words = data.words
        sig_bytes = data.sig_bytes
        block_size = self.block_size
        block_size_bytes = block_size * 4

        if flush:
            n_blocks_ready = math.ceil(sig_bytes / block_size_bytes)
        else:
            n_blocks_ready = max(sig_bytes // block_size_bytes - self.min_buffer_size, 0)

        n_words_ready = n_blocks_ready * block_size
        n_bytes_ready = min(n_words_ready * 4, sig_bytes)

        processed: List[int] = []
        if n_words_ready:
            if len(words) < n_words_ready:
                words.extend([0] * (n_words_ready - len(words)))
            for offset in range(0, n_words_ready, block_size):
                transform.process_block(words, offset)
            processed = data.splice(n_words_ready)
            data.sig_bytes -= n_bytes_ready
            log.debug(
                "processed %d block(s), %d byte(s); %d byte(s) left%s",
                n_blocks_ready,
                n_bytes_ready,
                data.sig_bytes,
                " (flush)" if flush else "",
            )
        return WordArray(processed, n_bytes_ready)
