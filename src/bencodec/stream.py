"""
Byte source used by the decoder.

Wraps anything with a ``read(n)`` method and tracks how far the decoder
has read. It never reads ahead, so a stream holding several concatenated
items is left positioned right after the item just decoded.
"""
import io
from typing import Optional

from .exceptions import InputTooLarge

# Largest single read from the source
CHUNK_SIZE = 64 * 1024


class ByteReader:
    """
    Reads bytes on demand from a binary stream or an in-memory buffer.
    Text-mode sources are refused.

    ``limit`` caps how many bytes one item may consume; see reset_budget().
    """
    def __init__(self, source, limit: Optional[int] = None):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        if isinstance(source, io.TextIOBase) or not hasattr(source, "read"):
            raise TypeError(f"Cannot read bencode from object of type {type(source)}")
        self.source = source
        self.limit = limit
        self.offset = 0      # bytes consumed in total
        self._start = 0      # offset where the current item began

    def reset_budget(self):
        """Starts a new item: the size limit counts from the current offset."""
        self._start = self.offset

    def _check_budget(self, n: int):
        if self.limit is None:
            return
        used = self.offset - self._start
        if used + n > self.limit:
            raise InputTooLarge(
                f"item exceeds input limit of {self.limit} bytes", self.offset
            )

    def read_byte(self) -> bytes:
        """Returns the next byte, or b"" at end of input."""
        self._check_budget(1)
        b = self.source.read(1)
        if not isinstance(b, bytes):
            raise TypeError(f"bencode source must return bytes, got {type(b).__name__}")
        self.offset += len(b)
        return b

    def read_exact(self, n: int) -> bytes:
        """Reads n bytes, looping over short reads; fewer only at end of input."""
        self._check_budget(n)
        chunks = []
        remaining = n
        while remaining > 0:
            chunk = self.source.read(min(remaining, CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
            self.offset += len(chunk)
        return b"".join(chunks)
