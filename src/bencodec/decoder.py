"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import logging
from typing import Iterator, Optional

from .config import DEFAULT_CONFIG, DecoderConfig
from .exceptions import (
    BencodeDecodeError,
    DepthExceeded,
    DuplicateKey,
    InputTooLarge,
    InvalidDictionaryKey,
    InvalidInteger,
    InvalidLeadByte,
    InvalidStringLength,
    TrailingData,
    UnexpectedEof,
    UnsortedKeys,
)
from .stream import ByteReader
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

DIGITS = b"0123456789"


class BencodeDecoder:
    """
    Decodes Bencoded items from a byte source into Bencode values.

    Each call to decode() reads exactly one item and leaves the source
    positioned right after it, so a stream of concatenated items can be
    drained by calling it repeatedly (or by iterating the decoder).
    """
    def __init__(self, source, config: Optional[DecoderConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG
        if isinstance(source, ByteReader):
            limit = self.config.max_input_size
            if limit is not None:
                if source.limit is None:
                    source.limit = limit
                elif source.limit != limit:
                    raise ValueError(
                        f"reader limit {source.limit} conflicts with max_input_size {limit}"
                    )
            self.reader = source
        else:
            self.reader = ByteReader(source, limit=self.config.max_input_size)
        self.depth = 0

    def decode(self) -> Optional[BencodeType]:
        """Decodes the next item, or returns None at a clean end of input."""
        self.reader.reset_budget()
        self.depth = 0
        try:
            lead = self.reader.read_byte()
            if not lead:
                return None
            return self._parse_value(lead)
        except (DepthExceeded, InputTooLarge) as exc:
            logger.warning("Refusing bencode input: %s", exc)
            raise
        except BencodeDecodeError as exc:
            logger.debug("Rejected bencode input: %s", exc)
            raise

    def __iter__(self) -> Iterator[BencodeType]:
        while True:
            value = self.decode()
            if value is None:
                return
            yield value

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _last(self) -> int:
        """Offset of the byte read most recently."""
        return self.reader.offset - 1

    def _next(self, where: str) -> bytes:
        ch = self.reader.read_byte()
        if not ch:
            raise UnexpectedEof(f"unexpected end of input in {where}", self.reader.offset)
        return ch

    def _enter(self, offset: int):
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise DepthExceeded(
                f"nesting deeper than {self.config.max_depth} levels", offset
            )

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, ch: bytes) -> BencodeType:
        if ch == b'i':
            return self._parse_int()

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string(ch)

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        raise InvalidLeadByte(f"invalid token {ch!r}", self._last())

    def _parse_int(self) -> BencodeInt:
        """Parses an integer; the leading 'i' is already consumed."""
        start = self._last()
        limit = self.config.max_int_digits

        ch = self._next("integer")
        negative = ch == b'-'
        if negative:
            ch = self._next("integer")

        digits = []
        while ch != b'e':
            if ch not in DIGITS:
                raise InvalidInteger(f"unexpected byte {ch!r} in integer", self._last())
            if digits and digits[0] == b'0':
                raise InvalidInteger("leading zero in integer", start)
            digits.append(ch)
            if len(digits) > limit:
                raise InvalidInteger(f"integer longer than {limit} digits", start)
            ch = self._next("integer")

        if not digits:
            raise InvalidInteger("empty integer", start)

        num = int(b"".join(digits))
        if negative:
            if num == 0:
                raise InvalidInteger("negative zero", start)
            num = -num
        return BencodeInt(num)

    def _parse_string(self, lead: bytes) -> BencodeString:
        """Parses a byte string; lead is the first digit of its length."""
        start = self._last()
        limit = self.config.max_length_digits

        # read length until ':'
        digits = [lead]
        ch = self._next("string length")
        while ch != b':':
            if ch not in DIGITS:
                raise InvalidStringLength(f"unexpected byte {ch!r} in string length", self._last())
            if lead == b'0':
                raise InvalidStringLength("leading zero in string length", start)
            digits.append(ch)
            if len(digits) > limit:
                raise InvalidStringLength(f"string length longer than {limit} digits", start)
            ch = self._next("string length")

        length = int(b"".join(digits))
        payload = self.reader.read_exact(length)
        if len(payload) < length:
            raise InvalidStringLength(
                f"declared length {length} but only {len(payload)} bytes remain", start
            )
        return BencodeString(payload)

    def _parse_list(self) -> BencodeList:
        """Parses a list; the leading 'l' is already consumed."""
        self._enter(self._last())
        items = []

        ch = self._next("list")
        while ch != b'e':
            items.append(self._parse_value(ch))
            ch = self._next("list")

        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary; the leading 'd' is already consumed."""
        self._enter(self._last())
        obj = {}
        previous = None

        ch = self._next("dictionary")
        while ch != b'e':
            # keys MUST be strings
            if not ch.isdigit():
                raise InvalidDictionaryKey(
                    f"dictionary key must be a byte string, found {ch!r}", self._last()
                )
            key_offset = self._last()
            key = self._parse_string(ch).value

            if key in obj:
                raise DuplicateKey(f"duplicate dictionary key {key!r}", key_offset)
            if previous is not None and key < previous and self.config.strict_key_order:
                raise UnsortedKeys(
                    f"dictionary key {key!r} sorts before {previous!r}", key_offset
                )

            ch = self._next("dictionary value")
            if ch == b'e':
                raise InvalidLeadByte(f"missing value for key {key!r}", self._last())
            obj[key] = self._parse_value(ch)
            previous = key

            ch = self._next("dictionary")

        self.depth -= 1
        return BencodeDict(obj)


def decode(source, config: Optional[DecoderConfig] = None) -> Optional[BencodeType]:
    """
    Decodes one item from bytes or a binary stream.

    Returns None when the source is already at end of input. A stream is left
    positioned after the item; trailing bytes in a bytes object are ignored.
    """
    return BencodeDecoder(source, config).decode()


def decode_all(source, config: Optional[DecoderConfig] = None) -> Iterator[BencodeType]:
    """Yields every item of a source holding concatenated Bencoded items."""
    yield from BencodeDecoder(source, config)


def decode_exact(data, config: Optional[DecoderConfig] = None) -> BencodeType:
    """Decodes data that must hold exactly one item and nothing after it."""
    decoder = BencodeDecoder(data, config)
    value = decoder.decode()
    if value is None:
        raise UnexpectedEof("empty input", 0)

    decoder.reader.reset_budget()
    if decoder.reader.read_byte():
        raise TrailingData("data after the end of the item", decoder._last())
    return value
