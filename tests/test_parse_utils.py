import pytest

from cryoparse.parse_utils import (
    BinaryInputList,
    FileColumnReference,
    ParseError,
    hex_string_to_binary,
    hex_strings_to_binary,
    parse_file_column_reference,
)


def test_hex_with_prefix():
    assert hex_string_to_binary("0x1234ab") == bytes([0x12, 0x34, 0xAB])


def test_hex_without_prefix_matches_prefixed():
    assert hex_string_to_binary("deadbeef") == hex_string_to_binary("0xdeadbeef")


def test_empty_hex_is_empty_bytes():
    assert hex_string_to_binary("0x") == b""


@pytest.mark.parametrize("bad", ["0xzz", "123", "0x12 34", "hello"])
def test_invalid_hex_raises(bad):
    with pytest.raises(ParseError):
        hex_string_to_binary(bad)


def test_hex_strings_to_binary_round_trip():
    values = [b"\x00\x01", b"\xff", b""]
    encoded = ["0x" + v.hex() for v in values]
    assert hex_strings_to_binary(encoded) == values


def test_hex_strings_to_binary_propagates_errors():
    with pytest.raises(ParseError):
        hex_strings_to_binary(["0x00", "0xgg"])


def test_explicit_label_is_none():
    assert BinaryInputList.explicit().to_label() is None
    assert BinaryInputList.explicit().is_explicit


def test_parquet_label_after_double_underscore():
    key = BinaryInputList.parquet_column("data/ethereum__logs.parquet", "address")
    assert key.to_label() == "logs"
    assert not key.is_explicit


def test_parquet_label_without_double_underscore_is_stem():
    key = BinaryInputList.parquet_column("some/dir/blocks.parquet", "block_number")
    assert key.to_label() == "blocks"


def test_binary_input_list_hashable_and_equal():
    a = BinaryInputList.parquet_column("x.parquet", "c")
    b = BinaryInputList.parquet_column("x.parquet", "c")
    assert {a: 1}[b] == 1


def test_file_column_reference_with_column():
    ref = parse_file_column_reference("file.parquet:my_col", "default_col")
    assert ref == FileColumnReference(path="file.parquet", column="my_col")


def test_file_column_reference_default_column():
    ref = parse_file_column_reference("file.parquet", "transaction_hash")
    assert ref.path == "file.parquet"
    assert ref.column == "transaction_hash"


def test_file_column_reference_too_many_colons():
    with pytest.raises(ParseError):
        parse_file_column_reference("a:b:c", "col")