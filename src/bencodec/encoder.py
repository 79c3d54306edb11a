"""
Bencode encoder for BitTorrent metainfo and tracker responses.

Output is always canonical: dictionary keys are written in ascending raw
byte order no matter how the dictionary was built or decoded.
"""
import logging
from typing import Iterator

from .exceptions import SinkError
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, from_python

logger = logging.getLogger(__name__)


def encode(obj) -> bytes:
    """Encodes a Bencode value or plain Python object into bencoded bytes."""
    return b"".join(iter_encode(obj))


def iter_encode(obj) -> Iterator[bytes]:
    """
    Yields the bencoded form of obj as a sequence of byte chunks.

    Walks the tree with an explicit stack, so nesting depth is bounded only
    by memory.
    """
    # pending values, plus raw chunks (closing markers, encoded keys) to emit as-is
    stack = [from_python(obj)]

    while stack:
        value = stack.pop()

        if isinstance(value, bytes):
            yield value

        elif isinstance(value, BencodeInt):
            yield encode_int(value.value)

        elif isinstance(value, BencodeString):
            # BencodeString wraps bytes
            yield str(len(value.value)).encode() + b":"
            yield value.value

        elif isinstance(value, BencodeList):
            yield b"l"
            stack.append(b"e")
            stack.extend(reversed(value.value))

        elif isinstance(value, BencodeDict):
            yield b"d"
            stack.append(b"e")
            for key, item in reversed(value.sorted_items()):
                stack.append(item)
                stack.append(encode_bytes(key))

        else:
            raise TypeError(f"Cannot bencode object of type {type(value)}")


def encode_to(obj, sink) -> int:
    """
    Writes the bencoded form of obj to a binary sink and returns the byte count.

    Raises SinkError if a write fails or the sink accepts fewer bytes than given.
    """
    written = 0
    for chunk in iter_encode(obj):
        if not chunk:
            continue
        try:
            n = sink.write(chunk)
        except (OSError, ValueError) as exc:
            # ValueError is what closed file objects raise
            logger.debug("Bencode sink write failed after %d bytes: %s", written, exc)
            raise SinkError(f"write to sink failed after {written} bytes: {exc}") from exc
        # sinks returning None are treated as fully written
        if n is not None and n < len(chunk):
            logger.debug("Bencode sink accepted %d of %d bytes", n, len(chunk))
            raise SinkError(f"short write: sink accepted {n} of {len(chunk)} bytes after {written} bytes")
        written += len(chunk)
    return written


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + bytes(b)


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    value = from_python(d)
    if not isinstance(value, BencodeDict):
        raise TypeError(f"encode_dict requires a dict, got {type(d)}")
    return encode(value)
