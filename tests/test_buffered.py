import unittest
from typing import List

from md5stream.buffered import BlockTransform, BufferedBlockAlgorithm
from md5stream.words import WordArray


class RecordingTransform(BlockTransform):
    def __init__(self, block_size: int = 16, min_buffer_size: int = 0) -> None:
        self.block_size = block_size
        self.min_buffer_size = min_buffer_size
        self.reset()

    def reset(self) -> None:
        self.blocks: List[List[int]] = []

    def process_block(self, words: List[int], offset: int) -> None:
        self.blocks.append(list(words[offset : offset + self.block_size]))

    def finalize(self, buffer: BufferedBlockAlgorithm) -> WordArray:
        return buffer.process(True, self)


class TestBufferedBlockAlgorithm(unittest.TestCase):
    def test_append_counts_bytes(self) -> None:
        buf = BufferedBlockAlgorithm()
        buf.append(b"abc")
        buf.append("é")
        buf.append(bytearray(b"xy"))
        buf.append(WordArray.from_bytes(b"z"))
        self.assertEqual(buf.n_data_bytes, 3 + 2 + 2 + 1)
        self.assertEqual(buf.data.to_bytes(), b"abc" + "é".encode("utf-8") + b"xyz")

    def test_append_rejects_other_types(self) -> None:
        buf = BufferedBlockAlgorithm()
        with self.assertRaises(TypeError):
            buf.append(123)  # type: ignore[arg-type]

    def test_process_without_flush_keeps_partial_block(self) -> None:
        tr = RecordingTransform()
        buf = BufferedBlockAlgorithm()
        for n in (0, 1, 63, 64, 65, 127, 128, 200):
            buf.reset()
            tr.reset()
            data = bytes(i & 0xFF for i in range(n))
            buf.append(data)
            out = buf.process(False, tr)
            self.assertEqual(len(tr.blocks), n // 64)
            self.assertEqual(out.sig_bytes, (n // 64) * 64)
            self.assertEqual(out.to_bytes(), data[: (n // 64) * 64])
            self.assertEqual(buf.data.sig_bytes, n % 64)
            self.assertEqual(buf.data.to_bytes(), data[(n // 64) * 64 :])
            self.assertEqual(buf.n_data_bytes, n)

    def test_process_with_flush_consumes_everything(self) -> None:
        tr = RecordingTransform()
        buf = BufferedBlockAlgorithm()
        data = bytes(range(70))
        buf.append(data)
        out = buf.process(True, tr)
        self.assertEqual(len(tr.blocks), 2)
        self.assertEqual(out.sig_bytes, 70)
        self.assertEqual(out.to_bytes(), data)
        self.assertEqual(buf.data.sig_bytes, 0)
        self.assertEqual(buf.data.words, [])
        # the short tail block is zero filled up to the block boundary
        self.assertEqual(len(tr.blocks[1]), 16)
        self.assertEqual(tr.blocks[1][2:], [0] * 14)

    def test_min_buffer_size_holds_blocks_back(self) -> None:
        tr = RecordingTransform(block_size=4, min_buffer_size=2)
        buf = BufferedBlockAlgorithm(block_size=4, min_buffer_size=2)
        buf.append(bytes(16 * 5 + 3))
        out = buf.process(False, tr)
        self.assertEqual(len(tr.blocks), 3)
        self.assertEqual(out.sig_bytes, 48)
        self.assertEqual(buf.data.sig_bytes, 35)
        buf.process(True, tr)
        self.assertEqual(len(tr.blocks), 6)
        self.assertEqual(buf.data.sig_bytes, 0)

    def test_min_buffer_size_never_negative(self) -> None:
        tr = RecordingTransform(block_size=4, min_buffer_size=3)
        buf = BufferedBlockAlgorithm(block_size=4, min_buffer_size=3)
        buf.append(bytes(20))
        out = buf.process(False, tr)
        self.assertEqual(tr.blocks, [])
        self.assertEqual(out.sig_bytes, 0)
        self.assertEqual(buf.data.sig_bytes, 20)

    def test_returned_words_do_not_alias_buffer(self) -> None:
        tr = RecordingTransform()
        buf = BufferedBlockAlgorithm()
        buf.append(bytes(64))
        out = buf.process(False, tr)
        buf.append(b"\xff" * 64)
        self.assertEqual(out.to_bytes(), bytes(64))

    def test_blocks_in_order(self) -> None:
        tr = RecordingTransform(block_size=1)
        buf = BufferedBlockAlgorithm(block_size=1)
        buf.append(b"aaaabbbbcc")
        buf.process(False, tr)
        self.assertEqual(tr.blocks, [[0x61616161], [0x62626262]])
        self.assertEqual(buf.data.to_bytes(), b"cc")

    def test_bad_geometry(self) -> None:
        with self.assertRaises(ValueError):
            BufferedBlockAlgorithm(block_size=0)
        with self.assertRaises(ValueError):
            BufferedBlockAlgorithm(min_buffer_size=-1)


if __name__ == "__main__":
    unittest.main()
