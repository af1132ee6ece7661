"""Data source options: RPC url and request concurrency."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .parse_utils import ParseError

DEFAULT_MAX_CONCURRENT_REQUESTS = 100
DEFAULT_MAX_CONCURRENT_CHUNKS = 4


@dataclass(frozen=True)
class ConcurrencySettings:
    """Limits on concurrent requests and chunks, and the request rate."""

    max_concurrent_requests: int
    max_concurrent_chunks: int | None
    requests_per_second: int | None


def parse_rpc_url(rpc: str | None, environ: Mapping[str, str] | None = None) -> str:
    """RPC url from ``--rpc`` or ``ETH_RPC_URL``, given an http scheme if it has none."""
    if environ is None:
        environ = os.environ
    url = rpc if rpc is not None else environ.get("ETH_RPC_URL")
    if url is None:
        raise ParseError("must provide --rpc or set ETH_RPC_URL")
    if not url.startswith("http"):
        url = "http://" + url
    return url


def parse_concurrency(
    max_concurrent_requests: int | None,
    max_concurrent_chunks: int | None,
    requests_per_second: int | None,
) -> ConcurrencySettings:
    """Apply defaults: 100 requests, 4 chunks (0 for unlimited), no rate limit when 0."""
    requests = (
        DEFAULT_MAX_CONCURRENT_REQUESTS
        if max_concurrent_requests is None
        else max_concurrent_requests
    )
    if max_concurrent_chunks is None:
        chunks: int | None = DEFAULT_MAX_CONCURRENT_CHUNKS
    elif max_concurrent_chunks == 0:
        chunks = None
    else:
        chunks = max_concurrent_chunks
    rate = requests_per_second if requests_per_second else None
    return ConcurrencySettings(
        max_concurrent_requests=requests,
        max_concurrent_chunks=chunks,
        requests_per_second=rate,
    )