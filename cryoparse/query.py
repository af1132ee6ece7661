"""Dimensions of a query and swapping of aliased arguments."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable

from .arguments import Args
from .parse_utils import ParseError


class Dim(enum.Enum):
    """A dimension along which a query can be specified and partitioned."""

    BLOCK_NUMBER = "block_number"
    TRANSACTION_HASH = "transaction_hash"
    CALL_DATA = "call_data"
    ADDRESS = "address"
    CONTRACT = "contract"
    TO_ADDRESS = "to_address"
    SLOT = "slot"
    TOPIC0 = "topic0"
    TOPIC1 = "topic1"
    TOPIC2 = "topic2"
    TOPIC3 = "topic3"

    @property
    def arg_name(self) -> str:
        """Name of the ``Args`` field holding values for this dimension."""
        return _ARG_FIELDS[self]


_ARG_FIELDS = {
    Dim.BLOCK_NUMBER: "blocks",
    Dim.TRANSACTION_HASH: "txs",
    Dim.CALL_DATA: "call_data",
    Dim.ADDRESS: "address",
    Dim.CONTRACT: "contract",
    Dim.TO_ADDRESS: "to_address",
    Dim.SLOT: "slot",
    Dim.TOPIC0: "topic0",
    Dim.TOPIC1: "topic1",
    Dim.TOPIC2: "topic2",
    Dim.TOPIC3: "topic3",
}

_ADDRESS_DIMS = {Dim.ADDRESS, Dim.CONTRACT, Dim.TO_ADDRESS}


@dataclass(frozen=True)
class DatatypeSpec:
    """What a datatype requires and which arguments may stand in for others."""

    name: str
    required_parameters: tuple[Dim, ...] = ()
    arg_aliases: dict[Dim, Dim] = field(default_factory=dict)


def dim_is_some(args: Args, dim: Dim) -> bool:
    """Whether values were given for ``dim``."""
    return getattr(args, dim.arg_name) is not None


def dim_is_none(args: Args, dim: Dim) -> bool:
    """Whether no values were given for ``dim``."""
    return getattr(args, dim.arg_name) is None


def find_arg_aliases(args: Args, datatype_specs: Iterable[DatatypeSpec]) -> list[tuple[Dim, Dim]]:
    """Pairs (given, required) where a given argument stands in for a missing one."""
    swaps = []
    for spec in datatype_specs:
        if not spec.arg_aliases:
            continue
        for dim in spec.required_parameters:
            if not dim_is_none(args, dim):
                continue
            for alias, target in spec.arg_aliases.items():
                if target == dim and dim_is_some(args, alias):
                    swaps.append((alias, target))
    return swaps


def apply_arg_aliases(args: Args, arg_aliases: Iterable[tuple[Dim, Dim]]) -> Args:
    """Move values from each alias argument to the argument it stands in for."""
    for source, target in arg_aliases:
        if source == target or source not in _ADDRESS_DIMS or target not in _ADDRESS_DIMS:
            raise ParseError("invalid arg alias pairing")
        args = replace(
            args,
            **{target.arg_name: getattr(args, source.arg_name), source.arg_name: None},
        )
    return args