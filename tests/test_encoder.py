import io

import pytest

from bencodec.decoder import decode
from bencodec.encoder import (
    encode,
    encode_bytes,
    encode_dict,
    encode_int,
    encode_list,
    encode_str,
    encode_to,
    iter_encode,
)
from bencodec.exceptions import BencodeEncodeError, SinkError
from bencodec.structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def test_primitives():
    assert encode_int(123) == b"i123e"
    assert encode_int(-5) == b"i-5e"
    assert encode_int(0) == b"i0e"
    assert encode_bytes(b"spam") == b"4:spam"
    assert encode_bytes(b"") == b"0:"
    assert encode_str("spam") == b"4:spam"
    assert encode_str("é") == b"2:\xc3\xa9"
    assert encode_list([b"spam", 3]) == b"l4:spami3ee"
    assert encode_dict({"spam": b"eggs", "cow": b"moo"}) == b"d3:cow3:moo4:spam4:eggse"


def test_encode_dict_requires_mapping():
    with pytest.raises(TypeError):
        encode_dict([1, 2])


def test_dictionary_keys_sorted_by_raw_bytes():
    value = BencodeDict({
        b"foo": BencodeInt(42),
        b"bar": BencodeString(b"spam"),
        b"Zed": BencodeInt(1),
    })
    assert encode(value) == b"d3:Zedi1e3:bar4:spam3:fooi42ee"


def test_nested_canonical_output():
    value = BencodeList([
        BencodeDict({b"b": BencodeInt(2), b"a": BencodeList([])}),
        BencodeString(b"x"),
    ])
    assert encode(value) == b"ld1:ale1:bi2ee1:xe"


def test_plain_python_objects():
    assert encode(42) == b"i42e"
    assert encode("spam") == b"4:spam"
    assert encode(b"\x00\xff") == b"2:\x00\xff"
    assert encode([1, "a", [b"b"]]) == b"li1e1:al1:bee"
    assert encode({"b": 1, b"a": [2]}) == b"d1:ali2ee1:bi1ee"
    assert encode((1, 2)) == b"li1ei2ee"


def test_mixed_bencode_and_plain_objects():
    assert encode([BencodeInt(1), 2]) == b"li1ei2ee"


@pytest.mark.parametrize("obj", [1.5, None, True, object(), {1: b"x"}, {"a": None}])
def test_unsupported_objects(obj):
    with pytest.raises(TypeError):
        encode(obj)


def test_colliding_keys():
    with pytest.raises(ValueError):
        encode({"a": 1, b"a": 2})


def test_iter_encode_matches_encode():
    value = BencodeDict({b"list": BencodeList([BencodeInt(1), BencodeString(b"two")])})
    assert b"".join(iter_encode(value)) == encode(value)


def test_encode_to_stream():
    sink = io.BytesIO()
    written = encode_to({"cow": "moo", "spam": ["a", 1]}, sink)
    assert sink.getvalue() == b"d3:cow3:moo4:spaml1:ai1eee"
    assert written == len(sink.getvalue())


def test_decode_then_encode_is_identity():
    raw = b"d3:bar4:spam3:fooi42ee"
    assert encode(decode(raw)) == raw


class FailingSink:
    def __init__(self, fail_after=0):
        self.calls = 0
        self.fail_after = fail_after

    def write(self, data):
        if self.calls >= self.fail_after:
            raise OSError("disk full")
        self.calls += 1
        return len(data)


class ShortSink:
    def write(self, data):
        return max(len(data) - 1, 0)


def test_sink_failure_is_reported():
    with pytest.raises(SinkError) as exc:
        encode_to([1, 2, 3], FailingSink(fail_after=2))
    assert isinstance(exc.value.__cause__, OSError)
    assert isinstance(exc.value, BencodeEncodeError)


def test_short_write_is_reported():
    with pytest.raises(SinkError):
        encode_to(b"spam", ShortSink())


def test_sink_returning_none():
    chunks = []

    class Collect:
        def write(self, data):
            chunks.append(data)

    assert encode_to([1], Collect()) == 5
    assert b"".join(chunks) == b"li1ee"


def test_closed_sink_is_reported():
    sink = io.BytesIO()
    sink.close()
    with pytest.raises(SinkError) as exc:
        encode_to([1], sink)
    assert isinstance(exc.value.__cause__, ValueError)


def test_sink_failure_not_logged_above_debug(caplog):
    with caplog.at_level("INFO", logger="bencodec.encoder"):
        with pytest.raises(SinkError):
            encode_to([1, 2, 3], FailingSink(fail_after=1))
    assert caplog.records == []


def test_deeply_nested_value():
    depth = 3000
    value = BencodeList([])
    for _ in range(depth):
        value = BencodeList([value])
    print("Encoding list nested", depth + 1, "levels deep")

    expected = b"l" * (depth + 1) + b"e" * (depth + 1)
    assert encode(value) == expected

    sink = io.BytesIO()
    assert encode_to(value, sink) == len(expected)
    assert sink.getvalue() == expected


def test_deeply_nested_dict():
    depth = 3000
    value = BencodeInt(7)
    for _ in range(depth):
        value = BencodeDict({b"k": value, b"a": BencodeString(b"")})
    encoded = encode(value)
    assert encoded.startswith(b"d1:a0:1:kd1:a0:1:k")
    assert encoded.endswith(b"i7e" + b"e" * depth)
