"""Shared parsing helpers: hex decoding and file column references."""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from pathlib import Path


class ParseError(Exception):
    """Raised when user input cannot be parsed."""


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def hex_string_to_binary(hex_string: str) -> bytes:
    """Decode a hex string, with or without a ``0x`` prefix."""
    try:
        return binascii.unhexlify(_strip_hex_prefix(hex_string))
    except (binascii.Error, ValueError) as exc:
        raise ParseError("could not parse data as hex") from exc


def hex_strings_to_binary(hex_strings: list[str]) -> list[bytes]:
    """Decode every hex string in a sequence."""
    return [hex_string_to_binary(value) for value in hex_strings]


@dataclass(frozen=True)
class BinaryInputList:
    """Origin of a list of binary inputs: explicit values or a parquet column."""

    path: str | None = None
    column: str | None = None

    @classmethod
    def explicit(cls) -> BinaryInputList:
        return cls()

    @classmethod
    def parquet_column(cls, path: str, column: str) -> BinaryInputList:
        return cls(path=path, column=column)

    @property
    def is_explicit(self) -> bool:
        return self.path is None

    def to_label(self) -> str | None:
        """Label derived from the file stem, after its last ``__``."""
        if self.path is None:
            return None
        stem = Path(self.path).stem
        if not stem:
            return None
        return stem.split("__")[-1]


@dataclass(frozen=True)
class FileColumnReference:
    """A file path together with the column to read from it."""

    path: str
    column: str


def parse_file_column_reference(path: str, default_column: str) -> FileColumnReference:
    """Split ``path[:column]`` into a reference, using a default column."""
    if ":" in path:
        pieces = path.split(":")
        if len(pieces) != 2:
            raise ParseError("could not parse path column")
        file_path, column = pieces
    else:
        file_path, column = path, default_column
    return FileColumnReference(path=file_path, column=column)