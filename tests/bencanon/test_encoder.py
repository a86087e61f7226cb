# -*- coding: utf-8
import pytest

from bencanon import (
    ByteString,
    Dict,
    EncodingError,
    Integer,
    List,
    decode,
    encode,
)


def test_python_data_encodes_like_values():
    """ plain python data is converted first, so it encodes exactly like the
        equivalent value tree
    """
    pairs = [
        ({}, Dict(), b"de"),
        ({b"foo": "bar"}, Dict({b"foo": ByteString(b"bar")}), b"d3:foo3:bare"),
        ((), List(), b"le"),
        ([1, "foo"], List([Integer(1), ByteString(b"foo")]), b"li1e3:fooe"),
        (-41, Integer(-41), b"i-41e"),
        ("aż", ByteString(b"a\xc5\xbc"), b"3:a\xc5\xbc"),
        (bytearray(b"\0"), ByteString(b"\0"), b"1:\0"),
    ]
    for data, value, encoded in pairs:
        assert encode(data) == encoded
        assert encode(value) == encoded
    assert isinstance(encode(Integer(1)), bytes)


def test_int_subclasses_are_written_as_decimal():
    class Hex(int):
        def __str__(self):
            return hex(self)

    value = Integer(Hex(255))
    assert type(value.value) is int
    assert encode(value) == b"i255e"
    assert encode([Hex(16)]) == b"li16ee"


def test_cyclic_values_raise():
    value = List()
    value.append(value)
    with pytest.raises(EncodingError):
        encode(value)

    inner = Dict()
    outer = List([inner])
    inner[b"loop"] = outer
    with pytest.raises(EncodingError):
        encode(outer)


def test_cyclic_python_data_raises():
    data = []
    data.append(data)
    with pytest.raises(EncodingError):
        encode(data)


def test_shared_values_are_not_cycles():
    shared = List([Integer(1)])
    assert encode(List([shared, shared])) == b"lli1eeli1eee"
    shared_data = [1]
    assert encode([shared_data, {b"k": shared_data}]) == b"lli1eed1:kli1eeee"



def test_unencodable_data():
    with pytest.raises(EncodingError):
        encode(1.38)
    with pytest.raises(EncodingError):
        encode(True)
    with pytest.raises(EncodingError):
        encode({1: b'bar'})
    with pytest.raises(EncodingError):
        encode([None])
    with pytest.raises(EncodingError):
        encode(2 ** 64)


def test_integers():
    assert encode(Integer(0)) == b"i0e"
    assert encode(Integer(1234)) == b"i1234e"
    assert encode(Integer(-123)) == b"i-123e"
    assert encode(Integer(2 ** 63 - 1)) == b"i9223372036854775807e"
    assert encode(Integer(-(2 ** 63))) == b"i-9223372036854775808e"


def test_bytestrings():
    assert encode(ByteString(b"")) == b"0:"
    assert encode(ByteString(b"abcd")) == b"4:abcd"
    assert encode(ByteString(b"\n\r\t\\/,")) == b"6:\n\r\t\\/,"
    assert encode(ByteString(b"\0" * 12)) == b"12:" + b"\0" * 12


def test_lists_keep_order():
    value = List([
        Integer(345),
        List([ByteString(b"inner"), Integer(999), List([Integer(10000)])]),
        ByteString(b"def"),
        List(),
    ])
    assert encode(value) == b"li345el5:inneri999eli10000eee3:deflee"


def test_dict_keys_are_sorted():
    value = Dict()
    value[b"item2"] = ByteString(b"value")
    value[b"inner"] = Dict([
        (b"inneritem2", Dict({b"core": Integer(50000)})),
        (b"inneritem1", Integer(888)),
    ])
    value[b"item1"] = Integer(123)
    assert encode(value) == (
        b"d5:innerd10:inneritem1i888e10:inneritem2d4:corei50000eee"
        b"5:item1i123e5:item25:valuee"
    )


def test_dict_keys_sort_by_byte_value():
    value = Dict({b"\xff": Integer(1), b"a": Integer(2), b"B": Integer(3), b"aa": Integer(4)})
    assert encode(value) == b"d1:Bi3e1:ai2e2:aai4e1:\xffi1ee"
    # space sorts before letters, as in "piece length" / "pieces"
    assert encode({b"pieces": b"", b"piece length": 1}) == b"d12:piece lengthi1e6:pieces0:e"


def test_insertion_order_does_not_matter(metainfo, metainfo_bytes):
    assert encode(metainfo) == metainfo_bytes
    reordered = Dict(reversed(list(metainfo.items())))
    assert encode(reordered) == metainfo_bytes


def test_canonical_idempotence(metainfo):
    encoded = encode(metainfo)
    assert encode(decode(encoded)) == encoded
    assert decode(encoded) == metainfo


def test_mixed_values_and_python_data():
    assert encode([Integer(1), b"x", {"k": List()}]) == b"li1e1:xd1:kleee"


def test_deep_values():
    value = List()
    for _ in range(5000):
        value = List([value])
    assert encode(value) == b"l" * 5001 + b"e" * 5001
