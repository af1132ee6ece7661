"""Call data, time dimension and ordering of query partitions."""

from __future__ import annotations

import enum
import random
from typing import Sequence, TypeVar

from .parse_utils import ParseError, hex_string_to_binary, hex_strings_to_binary

T = TypeVar("T")


class TimeDimension(enum.Enum):
    """Whether a query is laid out along blocks or along transactions."""

    BLOCKS = "blocks"
    TRANSACTIONS = "transactions"


def parse_call_datas(
    call_datas: list[str] | None,
    function: list[str] | None,
    inputs: list[str] | None,
) -> list[list[bytes]] | None:
    """Build the call data chunks from ``--call-data``, ``--function`` and ``--inputs``.

    Returns None when none of them is given, otherwise a list holding one
    chunk of call data values. With functions and inputs, every function
    selector is joined with every input.
    """
    if call_datas is None and function is None and inputs is None:
        return None
    if call_datas is not None:
        if function is not None:
            raise ParseError("cannot specify both call_data and function")
        if inputs is not None:
            raise ParseError("cannot specify both call_data and inputs")
        values = hex_strings_to_binary(call_datas)
    elif function is None:
        raise ParseError("must specify function if specifying inputs")
    elif inputs is None:
        values = hex_strings_to_binary(function)
    else:
        values = [
            hex_string_to_binary(selector) + hex_string_to_binary(argument)
            for selector in function
            for argument in inputs
        ]
    return [values]


def parse_time_dimension(transactions: object | None) -> TimeDimension:
    """Transactions when transaction chunks were given, otherwise blocks."""
    if transactions is not None:
        return TimeDimension.TRANSACTIONS
    return TimeDimension.BLOCKS


def order_partitions(partitions: Sequence[T], chunk_order: str | None) -> list[T]:
    """Return the partitions in the order named by ``--chunk-order``."""
    ordered = list(partitions)
    if chunk_order is None or chunk_order == "normal":
        return ordered
    if chunk_order == "reverse":
        ordered.reverse()
        return ordered
    if chunk_order == "random":
        random.shuffle(ordered)
        return ordered
    raise ParseError("invalid --chunk-order, use normal, reverse, or random")