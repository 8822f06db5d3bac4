from __future__ import annotations

import sys
from pathlib import Path
import unittest

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from halfp_common import HalfpError, as_words


class TestCommon(unittest.TestCase):
    def test_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(HalfpError, ValueError))

    def test_as_words_none(self) -> None:
        self.assertIsNone(as_words(None, np.uint16, 4))

    def test_as_words_shares_memory(self) -> None:
        buf = bytearray(4)
        words = as_words(buf, np.uint16, 2, writable=True)
        words[1] = 0xFFFF
        self.assertEqual(bytes(buf), b"\x00\x00\xff\xff")

    def test_as_words_reinterprets_float_array(self) -> None:
        values = np.array([1.0, -2.0], dtype=np.float32)
        words = as_words(values, np.uint32, 2)
        self.assertEqual(words.tolist(), [0x3F800000, 0xC0000000])

    def test_as_words_prefix(self) -> None:
        values = np.arange(8, dtype=np.uint16)
        words = as_words(values, np.uint16, 3)
        self.assertEqual(words.tolist(), [0, 1, 2])

    def test_as_words_zero_count(self) -> None:
        words = as_words(bytearray(), np.uint32, 0, writable=True)
        self.assertEqual(words.size, 0)

    def test_as_words_validation(self) -> None:
        with self.assertRaises(HalfpError):
            as_words(bytearray(3), np.uint16, 2)
        with self.assertRaises(HalfpError):
            as_words(b"\x00\x00", np.uint16, 1, writable=True)
        with self.assertRaises(HalfpError):
            as_words(bytearray(4), np.uint16, -1)
        with self.assertRaises(HalfpError):
            as_words(np.arange(8, dtype=np.uint16)[::2], np.uint16, 4)
