import random

import pytest

from lzarchive.lz import decode, decode_bytes, encode, encode_bytes


def test_empty_input_is_header_only():
    assert encode_bytes(b"") == b"\x00"
    assert decode_bytes(b"\x00") == b""


def test_single_byte_worked_example():
    # one 9-bit code: index bit 0, then 0x61; one bit left in the last byte
    assert encode_bytes(b"a") == b"\x01\x30\x80"
    assert decode_bytes(b"\x01\x30\x80") == b"a"


@pytest.mark.parametrize(
    "data",
    [
        b"a",
        b"aa",
        b"aaa",
        b"abababababab",
        b"hello, hello, hello world",
        bytes(range(256)),
        b"\x00" * 100,
        b"\xff\x00\xff\x00\xff",
        b"the quick brown fox jumps over the lazy dog" * 20,
    ],
)
def test_round_trip(data):
    assert decode_bytes(encode_bytes(data)) == data


def test_header_is_valid_bit_count():
    for data in (b"a", b"ab", b"abc", b"abcdefgh", b"xyzxyzxyz"):
        encoded = encode_bytes(data)
        assert 0 <= encoded[0] <= 7


def test_repetitive_data_shrinks():
    data = b"ab" * 2000
    encoded = encode_bytes(data)
    assert len(encoded) < len(data) // 4
    assert decode_bytes(encoded) == data


def test_large_random_data_round_trip_past_dictionary_reset():
    data = random.Random(7).randbytes(300_000)
    assert decode_bytes(encode_bytes(data)) == data


def test_low_entropy_large_round_trip():
    rng = random.Random(3)
    data = bytes(rng.choice(b"ACGT") for _ in range(120_000))
    encoded = encode_bytes(data)
    assert len(encoded) < len(data)
    assert decode_bytes(encoded) == data


def test_missing_header_raises():
    with pytest.raises(ValueError):
        decode_bytes(b"")


def test_bad_header_raises():
    with pytest.raises(ValueError):
        decode_bytes(b"\x08\x30\x80")


def test_header_without_body_raises():
    with pytest.raises(ValueError):
        decode_bytes(b"\x03")


def test_invalid_index_raises():
    with pytest.raises(ValueError):
        decode_bytes(b"\x00\xff\x80\x00")


def test_truncated_stream_raises():
    with pytest.raises(ValueError):
        decode_bytes(b"\x00\x30")


def test_file_round_trip(tmp_path):
    original = tmp_path / "sample.bin"
    payload = b"file contents, file contents, file contents\n" * 10
    original.write_bytes(payload)

    tmp = encode(original)
    assert tmp == tmp_path / "sample.bin.tmp"
    assert tmp.read_bytes() == encode_bytes(payload)

    original.unlink()
    restored = decode(original)
    assert restored == original
    assert original.read_bytes() == payload


def test_file_round_trip_with_str_path(tmp_path):
    original = tmp_path / "data.txt"
    original.write_bytes(b"abcabcabc")
    encode(str(original))
    original.write_bytes(b"")
    decode(str(original))
    assert original.read_bytes() == b"abcabcabc"


def test_encode_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        encode(tmp_path / "absent.bin")


def test_decode_missing_tmp_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        decode(tmp_path / "absent.bin")