"""Output options: format, compression, subdirectories and network names."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from pathlib import Path

from .arguments import Args
from .parse_utils import ParseError

_NETWORK_NAMES = {
    1: "ethereum",
    5: "goerli",
    10: "optimism",
    56: "bnb",
    69: "optimism_kovan",
    100: "gnosis",
    137: "polygon",
    420: "optimism_goerli",
    1101: "polygon_zkevm",
    1442: "polygon_zkevm_testnet",
    8453: "base",
    10200: "gnosis_chidao",
    17000: "holesky",
    42161: "arbitrum",
    42170: "arbitrum_nova",
    43114: "avalanche",
    80001: "polygon_mumbai",
    84531: "base_goerli",
    7777777: "zora",
    11155111: "sepolia",
}

_UNSIGNED = re.compile(r"\+?\d+")
_SIGNED = re.compile(r"[+-]?\d+")

# algorithm -> (level pattern, largest value the level type holds, valid level range)
_LEVELED = {
    "gzip": (_UNSIGNED, 2**8 - 1, range(0, 11)),
    "brotli": (_UNSIGNED, 2**32 - 1, range(0, 12)),
    "zstd": (_SIGNED, 2**31 - 1, range(1, 23)),
}

_PLAIN = {
    "uncompressed": "uncompressed",
    "snappy": "snappy",
    "lzo": "lzo",
    "lz4": "lz4_raw",
}


class FileFormat(enum.Enum):
    """Format of written output files."""

    PARQUET = "parquet"
    CSV = "csv"
    JSON = "json"


@dataclass(frozen=True)
class SubDir:
    """One level of output subdirectory: the datatype, the network, or a fixed name."""

    kind: str
    name: str | None = None

    @classmethod
    def datatype(cls) -> SubDir:
        return cls("datatype")

    @classmethod
    def network(cls) -> SubDir:
        return cls("network")

    @classmethod
    def custom(cls, name: str) -> SubDir:
        return cls("custom", name)


@dataclass(frozen=True)
class Compression:
    """Parquet compression algorithm and optional level."""

    algorithm: str
    level: int | None = None


def parse_subdirs(args: Args) -> list[SubDir]:
    """Subdirectory levels named by ``--subdirs``."""
    special = {"datatype": SubDir.datatype(), "network": SubDir.network()}
    return [special.get(arg, SubDir.custom(arg)) for arg in args.subdirs]


def parse_network_name(args: Args, chain_id: int) -> str:
    """Explicit network name, else the known name of the chain id."""
    if args.network_name is not None:
        return args.network_name
    return _NETWORK_NAMES.get(chain_id, f"network_{chain_id}")


def parse_output_format(args: Args) -> FileFormat:
    """Output format chosen by ``--csv`` / ``--json``; parquet by default."""
    if args.csv and args.json:
        raise ParseError("choose one of parquet, csv, or json")
    if args.csv:
        return FileFormat.CSV
    if args.json:
        return FileFormat.JSON
    return FileFormat.PARQUET


def _parse_level(algorithm: str, level_str: str) -> int:
    pattern, type_max, valid = _LEVELED[algorithm]
    if not pattern.fullmatch(level_str):
        raise ParseError("Invalid compression level")
    level = int(level_str)
    if abs(level) > type_max or level not in valid:
        raise ParseError("Invalid compression level")
    return level


def parse_compression(values: list[str]) -> Compression:
    """Parse ``--compression NAME [LEVEL]``."""
    if len(values) == 1:
        (algorithm,) = values
        if algorithm in _PLAIN:
            return Compression(_PLAIN[algorithm])
        if algorithm in _LEVELED:
            raise ParseError("Missing compression level")
    elif len(values) == 2:
        algorithm, level_str = values
        if algorithm in _LEVELED:
            return Compression(algorithm, _parse_level(algorithm, level_str))
    raise ParseError("Invalid compression algorithm")


def parse_row_group_size(
    row_group_size: int | None, n_row_groups: int | None, chunk_size: int | None
) -> int | None:
    """Rows per row group, given directly or derived from a number of groups."""
    if row_group_size is not None:
        return row_group_size
    if n_row_groups is not None and chunk_size is not None:
        if n_row_groups <= 0:
            raise ValueError("n_row_groups must be positive")
        return -(-chunk_size // n_row_groups)
    return None


def prepare_output_dir(output_dir: str | Path) -> Path:
    """Create the output directory and return its canonical path."""
    try:
        Path(output_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ParseError("could not create dir") from exc
    try:
        resolved = Path(output_dir).resolve(strict=True)
    except OSError as exc:
        raise ParseError("Failed to canonicalize output directory") from exc
    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ParseError(f"Error creating directory: {exc}") from exc
    return resolved