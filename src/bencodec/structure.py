"""
Data structures for representing Bencoded types.

Values are immutable once built: containers hold a tuple or a read-only
mapping, and attribute assignment is refused.
"""
from types import MappingProxyType
from typing import Any, Dict

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "from_python",
]


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("value",)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _set(self, value):
        object.__setattr__(self, "value", value)

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def to_python(self) -> Any:
        """Returns the plain Python equivalent (int, bytes, list or dict)."""
        raise NotImplementedError

    def to_str_dict(self) -> Dict[str, str]:
        raise TypeError(f"Expected BencodeDict, got {type(self).__name__}")


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self._set(int(value))

    def __int__(self):
        return self.value

    def __str__(self):
        return str(self.value)

    def to_python(self) -> int:
        return self.value


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self._set(bytes(value))

    def __len__(self):
        return len(self.value)

    def __str__(self):
        return _text(self.value)

    def to_python(self) -> bytes:
        return self.value


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode values, got {type(item).__name__}.")
        self._set(tuple(value))

    def __repr__(self):
        return f"BencodeList({list(self.value)!r})"

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __str__(self):
        return "[" + ", ".join(str(item) for item in self.value) + "]"

    def to_python(self) -> list:
        return [item.to_python() for item in self.value]


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Iteration follows the order the mapping was built in, which for decoded
    values is the on-wire order. The encoder always sorts.
    """
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (dict, MappingProxyType)):
            raise TypeError("BencodeDict requires a dict.")
        items = {}
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, bytes):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode values, got {type(v).__name__}.")
            items[k] = v
        self._set(MappingProxyType(items))

    def __eq__(self, other):
        if not isinstance(other, BencodeType):
            return NotImplemented
        return type(other) is BencodeDict and dict(self.value) == dict(other.value)

    def __hash__(self):
        return hash(("BencodeDict", frozenset(self.value.items())))

    def __repr__(self):
        return f"BencodeDict({dict(self.value)!r})"

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __contains__(self, key):
        return key in self.value

    def __getitem__(self, key):
        return self.value[key]

    def get(self, key, default=None):
        return self.value.get(key, default)

    def items(self):
        return self.value.items()

    def sorted_items(self):
        """Key/value pairs in canonical (raw byte) key order."""
        return sorted(self.value.items(), key=lambda kv: kv[0])

    def __str__(self):
        parts = [f"{_text(k)} {v}" for k, v in self.sorted_items()]
        return "{" + " ".join(parts) + "}"

    def to_python(self) -> dict:
        return {k: v.to_python() for k, v in self.value.items()}

    def to_str_dict(self) -> Dict[str, str]:
        """Flattens the dictionary into text keys and text renderings of values."""
        return {_text(k): str(v) for k, v in self.value.items()}


# ------------------------------------------------------------
#   Conversion from plain Python objects
# ------------------------------------------------------------

def _key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be str or bytes, got {type(key).__name__}")


def from_python(obj) -> BencodeType:
    """
    Builds a Bencode value tree from plain Python objects.

    str is stored as its UTF-8 bytes; existing Bencode values pass through.
    """
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type <class 'bool'>")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, (list, tuple)):
        return BencodeList([from_python(x) for x in obj])

    if isinstance(obj, dict):
        items = {}
        for key, value in obj.items():
            kb = _key_bytes(key)
            if kb in items:
                raise ValueError(f"Duplicate dictionary key after encoding: {kb!r}")
            items[kb] = from_python(value)
        return BencodeDict(items)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")
