"""Parsing block specifications into block chunks."""

from __future__ import annotations

import re
from typing import Iterable

from .block_numbers import (
    BlockChunk,
    BlockFetcher,
    RangePosition,
    block_range_to_block_chunk,
    parse_block_number,
    parse_block_range,
)
from .parse_utils import ParseError

U32_MAX = 2**32 - 1

_UNSIGNED = re.compile(r"\+?\d+")


def _parse_u32(text: str, message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ParseError(message)
    value = int(text)
    if value > U32_MAX:
        raise ParseError(message)
    return value


def parse_block_token(token: str, as_range: bool, fetcher: BlockFetcher) -> BlockChunk:
    """Parse one token such as ``15M``, ``100:200``, ``100:200/5`` or ``0:100:10``."""
    parts = token.replace("_", "").split(":")
    if len(parts) == 1:
        block = parse_block_number(parts[0], RangePosition.NONE, fetcher)
        return BlockChunk.from_numbers([block])
    if len(parts) == 2:
        first_ref, second_ref = parts
        pieces = second_ref.split("/")
        n_keep = None
        if len(pieces) == 2:
            second_ref, keep = pieces
            n_keep = _parse_u32(keep, "cannot parse block interval size")
        start_block, end_block = parse_block_range(first_ref, second_ref, fetcher)
        return block_range_to_block_chunk(start_block, end_block, as_range, None, n_keep)
    if len(parts) == 3:
        first_ref, second_ref, third_ref = parts
        start_block, end_block = parse_block_range(first_ref, second_ref, fetcher)
        range_size = _parse_u32(third_ref, "start_block parse error")
        return block_range_to_block_chunk(start_block, end_block, False, range_size, None)
    raise ParseError("blocks must be in format block_number or start_block:end_block")


def parse_block_inputs(inputs: str, fetcher: BlockFetcher) -> list[BlockChunk]:
    """Parse a space separated block specification.

    A single token that is a range stays a range; several tokens each
    become explicit block numbers.
    """
    parts = inputs.split(" ")
    if len(parts) == 1:
        return [parse_block_token(parts[0], True, fetcher)]
    return [parse_block_token(part, False, fetcher) for part in parts]


def apply_reorg_buffer(
    block_chunks: Iterable[BlockChunk], reorg_filter: int, fetcher: BlockFetcher
) -> list[BlockChunk]:
    """Keep only chunks whose blocks are at least ``reorg_filter`` blocks old."""
    chunks = list(block_chunks)
    if reorg_filter == 0:
        return chunks
    try:
        latest_block = int(fetcher.get_block_number())
    except Exception as exc:
        raise ParseError("reorg buffer parse error") from exc
    if reorg_filter > latest_block:
        raise ParseError("reorg buffer exceeds latest block")
    max_allowed = latest_block - reorg_filter
    kept = []
    for chunk in chunks:
        max_block = chunk.max_value()
        if max_block is not None and max_block <= max_allowed:
            kept.append(chunk)
    return kept