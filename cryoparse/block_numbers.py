"""Block numbers, block ranges and the chunks built from them."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar

from .parse_utils import ParseError

U64_MAX = 2**64 - 1

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_UNSIGNED_PATTERN = re.compile(r"\+?\d+")

_SUFFIX_MULTIPLIERS = {"b": 1e9, "m": 1e6, "k": 1e3}

T = TypeVar("T")


class BlockFetcher(Protocol):
    """Anything that can report the latest block number."""

    def get_block_number(self) -> int:
        ...


class RangePosition(enum.Enum):
    """Where a block reference stands within a range."""

    FIRST = "first"
    LAST = "last"
    NONE = "none"


@dataclass(frozen=True)
class BlockChunk:
    """Either an explicit list of block numbers or an inclusive block range."""

    numbers: tuple[int, ...] = ()
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        if (self.start is None) != (self.end is None):
            raise ValueError("a block range needs both a start and an end")
        if self.start is not None and self.numbers:
            raise ValueError("a block range cannot also hold explicit numbers")

    @classmethod
    def from_numbers(cls, numbers: Sequence[int]) -> BlockChunk:
        return cls(numbers=tuple(numbers))

    @classmethod
    def from_range(cls, start: int, end: int) -> BlockChunk:
        return cls(start=start, end=end)

    @property
    def is_range(self) -> bool:
        return self.start is not None

    def max_value(self) -> int | None:
        """Largest block in the chunk, or None if it holds none."""
        if self.is_range:
            return self.end
        return max(self.numbers) if self.numbers else None


def _parse_float(text: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ParseError("Error parsing block ref")
    return float(text)


def _parse_u64(text: str, message: str) -> int:
    if not _UNSIGNED_PATTERN.fullmatch(text):
        raise ParseError(message)
    value = int(text)
    if value > U64_MAX:
        raise ParseError(message)
    return value


def _to_u64(value: float) -> int:
    """Saturating conversion of a float to an unsigned 64-bit integer."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= float(U64_MAX):
        return U64_MAX
    return int(value)


def _latest_block(fetcher: BlockFetcher, message: str) -> int:
    try:
        return int(fetcher.get_block_number())
    except Exception as exc:
        raise ParseError(message) from exc


def parse_block_number(
    block_ref: str, range_position: RangePosition, fetcher: BlockFetcher
) -> int:
    """Resolve one block reference such as ``15M``, ``latest`` or ``1000``."""
    if block_ref == "latest":
        return _latest_block(fetcher, "Error retrieving latest block number")
    if block_ref == "":
        if range_position is RangePosition.FIRST:
            return 0
        if range_position is RangePosition.LAST:
            return _latest_block(fetcher, "Error retrieving last block number")
        raise ParseError("invalid input")
    multiplier = _SUFFIX_MULTIPLIERS.get(block_ref[-1].lower())
    if multiplier is not None:
        return _to_u64(multiplier * _parse_float(block_ref[:-1]))
    return _to_u64(_parse_float(block_ref))


def parse_block_range(
    first_ref: str, second_ref: str, fetcher: BlockFetcher
) -> tuple[int, int]:
    """Resolve the two sides of ``first:second`` into inclusive block bounds."""
    relative_start = first_ref.startswith("-")
    if relative_start:
        end_block = parse_block_number(second_ref, RangePosition.LAST, fetcher)
        offset = _parse_u64(first_ref[1:], "start_block parse error")
        if offset > end_block:
            raise ParseError("start_block underflow")
        start_block = end_block - offset
    elif second_ref.startswith("+"):
        start_block = parse_block_number(first_ref, RangePosition.FIRST, fetcher)
        offset = _parse_u64(second_ref[1:], "start_block parse error")
        end_block = start_block + offset
        if end_block > U64_MAX:
            raise ParseError("end_block underflow")
    else:
        start_block = parse_block_number(first_ref, RangePosition.FIRST, fetcher)
        end_block = parse_block_number(second_ref, RangePosition.LAST, fetcher)

    if second_ref != "latest" and second_ref and not relative_start:
        if end_block == 0:
            raise ParseError("end_block underflow")
        end_block -= 1

    if relative_start:
        start_block += 1

    return start_block, end_block


def evenly_spaced_subset(items: Sequence[T], subset_length: int) -> list[T]:
    """Pick ``subset_length`` items spread evenly from first to last."""
    if subset_length <= 0 or not items:
        return []
    if subset_length >= len(items):
        return list(items)
    if subset_length == 1:
        return [items[0]]
    interval = (len(items) - 1) / (subset_length - 1)
    subset = []
    accumulator = 0.0
    for _ in range(subset_length):
        subset.append(items[math.floor(accumulator)])
        accumulator += interval
    return subset


def block_range_to_block_chunk(
    start_block: int,
    end_block: int,
    as_range: bool,
    skip: int | None,
    n_blocks: int | None,
) -> BlockChunk:
    """Turn inclusive bounds into a range chunk or a chunk of block numbers."""
    if end_block < start_block:
        raise ParseError("end_block should not be less than start_block")
    blocks = range(start_block, end_block + 1)
    if n_blocks is not None:
        return BlockChunk.from_numbers(evenly_spaced_subset(blocks, n_blocks))
    if as_range:
        return BlockChunk.from_range(start_block, end_block)
    if skip is not None:
        if skip <= 0:
            raise ParseError("block interval size must be positive")
        return BlockChunk.from_numbers(range(start_block, end_block + 1, skip))
    return BlockChunk.from_numbers(blocks)