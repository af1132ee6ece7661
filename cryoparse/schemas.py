"""Output types for 256-bit integer columns."""

from __future__ import annotations

import enum
from typing import Iterable

from .parse_utils import ParseError


class U256Type(enum.Enum):
    """Column type used to store 256-bit unsigned integers."""

    BINARY = "binary"
    STRING = "string"
    F32 = "f32"
    F64 = "f64"
    U32 = "u32"
    U64 = "u64"
    DECIMAL128 = "decimal128"


_U256_NAMES = {
    "binary": U256Type.BINARY,
    "string": U256Type.STRING,
    "str": U256Type.STRING,
    "f32": U256Type.F32,
    "float32": U256Type.F32,
    "f64": U256Type.F64,
    "float64": U256Type.F64,
    "float": U256Type.F64,
    "u32": U256Type.U32,
    "uint32": U256Type.U32,
    "u64": U256Type.U64,
    "uint64": U256Type.U64,
    "decimal128": U256Type.DECIMAL128,
    "d128": U256Type.DECIMAL128,
}

DEFAULT_U256_TYPES = frozenset({U256Type.BINARY, U256Type.STRING, U256Type.F64})


def parse_u256_types(raw_types: Iterable[str] | None) -> set[U256Type]:
    """Parse ``--u256-types`` names; binary, string and f64 when none are given."""
    if raw_types is None:
        return set(DEFAULT_U256_TYPES)
    parsed = set()
    for raw in raw_types:
        try:
            parsed.add(_U256_NAMES[raw.lower()])
        except KeyError:
            raise ParseError("bad u256 type") from None
    return parsed