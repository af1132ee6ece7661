"""Command line arguments and their parser."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from .version import cryo_version

_NEGATIVE_VALUE = re.compile(r"^-\d")


@dataclass
class Args:
    """Command line arguments.

    Field defaults are empty values; command-line defaults are applied by
    the parser. Merging compares against the empty values.
    """

    datatype: list[str] = field(default_factory=list)
    blocks: list[str] | None = None
    txs: list[str] | None = None
    align: bool = False
    reorg_buffer: int = 0
    include_columns: list[str] | None = None
    exclude_columns: list[str] | None = None
    columns: list[str] | None = None
    u256_types: list[str] | None = None
    hex: bool = False
    sort: list[str] | None = None
    exclude_failed: bool = False
    rpc: str | None = None
    network_name: str | None = None
    requests_per_second: int | None = None
    max_retries: int = 0
    initial_backoff: int = 0
    max_concurrent_requests: int | None = None
    max_concurrent_chunks: int | None = None
    chunk_order: str | None = None
    dry: bool = False
    remember: bool = False
    verbose: bool = False
    no_verbose: bool = False
    chunk_size: int = 0
    n_chunks: int | None = None
    partition_by: list[str] | None = None
    output_dir: str = ""
    subdirs: list[str] = field(default_factory=list)
    file_suffix: str | None = None
    overwrite: bool = False
    csv: bool = False
    json: bool = False
    row_group_size: int | None = None
    n_row_groups: int | None = None
    no_stats: bool = False
    compression: list[str] = field(default_factory=list)
    report_dir: str | None = None
    no_report: bool = False
    address: list[str] | None = None
    to_address: list[str] | None = None
    from_address: list[str] | None = None
    call_data: list[str] | None = None
    function: list[str] | None = None
    inputs: list[str] | None = None
    slot: list[str] | None = None
    contract: list[str] | None = None
    topic0: list[str] | None = None
    topic1: list[str] | None = None
    topic2: list[str] | None = None
    topic3: list[str] | None = None
    event_signature: str | None = None
    inner_request_size: int = 0
    js_tracer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dictionary of every field."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Args:
        """Build from a dictionary holding every field; extra keys are ignored."""
        names = [f.name for f in fields(cls)]
        missing = [name for name in names if name not in data]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        values = {
            name: list(data[name]) if isinstance(data[name], list) else data[name]
            for name in names
        }
        return cls(**values)

    def merge_with_precedence(self, other: Args) -> Args:
        """Return these args overridden by every non-empty field of ``other``."""
        defaults = Args().to_dict()
        merged = self.to_dict()
        for key, value in other.to_dict().items():
            if defaults.get(key) != value:
                merged[key] = value
        return Args.from_dict(merged)


class _CryoArgumentParser(argparse.ArgumentParser):
    """Parser that reads values such as ``-1000:7000`` as values, not flags."""

    def _parse_optional(self, arg_string):
        if _NEGATIVE_VALUE.match(arg_string):
            return None
        return super()._parse_optional(arg_string)


def _unsigned(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: {text!r}")
    return value


def about_text() -> str:
    """One-line description of the program."""
    return "cryo extracts blockchain data to parquet, csv, or json"


def after_help_text() -> str:
    """Text listing the optional help subcommands."""
    return (
        "Optional Subcommands:\n"
        "      cryo help                      display help message\n"
        "      cryo help syntax               display block + tx specification syntax\n"
        "      cryo help datasets             display list of all datasets\n"
        "      cryo help <DATASET(S)>         display info about a dataset"
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``cryo`` command."""
    parser = _CryoArgumentParser(
        prog="cryo",
        description=about_text(),
        epilog=after_help_text(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"cryo {cryo_version()}")
    parser.add_argument(
        "datatype",
        nargs="*",
        default=[],
        help="datatype(s) to collect, use `cryo datasets` to see all available",
    )

    many = {"nargs": "+", "action": "extend"}
    any_number = {"nargs": "*", "action": "extend"}

    content = parser.add_argument_group("Content Options")
    content.add_argument("-b", "--blocks", help="Block numbers, see syntax below", **many)
    content.add_argument("-t", "--txs", help="Transaction hashes, see syntax below", **many)
    content.add_argument(
        "-a", "--align", action="store_true", help="Align chunk boundaries to regular intervals"
    )
    content.add_argument(
        "--reorg-buffer",
        type=_unsigned,
        default=0,
        metavar="N_BLOCKS",
        help="Reorg buffer, save blocks only when this old",
    )
    content.add_argument(
        "-i",
        "--include-columns",
        metavar="COLS",
        help="Columns to include alongside the defaults, use `all` for all",
        **any_number,
    )
    content.add_argument(
        "-e", "--exclude-columns", metavar="COLS", help="Columns to exclude", **any_number
    )
    content.add_argument(
        "--columns", metavar="COLS", help="Columns to use instead of the defaults", **any_number
    )
    content.add_argument(
        "--u256-types", help="Output datatype(s) of U256 integers [default: binary, string, f64]",
        **many,
    )
    content.add_argument(
        "--hex", action="store_true", help="Use hex string encoding for binary columns"
    )
    content.add_argument(
        "-s", "--sort", help="Column(s) to sort by, `none` for unordered", **any_number
    )
    content.add_argument(
        "--exclude-failed", action="store_true", help="Exclude items from failed transactions"
    )

    source = parser.add_argument_group("Source Options")
    source.add_argument("-r", "--rpc", help="RPC url [default: ETH_RPC_URL env var]")
    source.add_argument("--network-name", help="Network name [default: name of eth_getChainId]")

    acquisition = parser.add_argument_group("Acquisition Options")
    acquisition.add_argument(
        "-l", "--requests-per-second", type=_unsigned, metavar="limit",
        help="Ratelimit on requests per second",
    )
    acquisition.add_argument(
        "--max-retries", type=_unsigned, default=5, metavar="R",
        help="Max retries for provider errors",
    )
    acquisition.add_argument(
        "--initial-backoff", type=_unsigned, default=500, metavar="B",
        help="Initial retry backoff time (ms)",
    )
    acquisition.add_argument(
        "--max-concurrent-requests", type=_unsigned, metavar="M",
        help="Global number of concurrent requests",
    )
    acquisition.add_argument(
        "--max-concurrent-chunks", type=_unsigned, metavar="M",
        help="Number of chunks processed concurrently",
    )
    acquisition.add_argument(
        "--chunk-order", help="Chunk collection order (normal, reverse, or random)"
    )
    acquisition.add_argument("-d", "--dry", action="store_true", help="Dry run, collect no data")

    parser.add_argument(
        "--remember", action="store_true", help="Remember current command for future use"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Extra verbosity")
    parser.add_argument(
        "--no-verbose", action="store_true", help="Run quietly without printing information"
    )

    output = parser.add_argument_group("Output Options")
    output.add_argument(
        "-c", "--chunk-size", type=_unsigned, default=1000, help="Number of blocks per file"
    )
    output.add_argument(
        "--n-chunks", type=_unsigned, help="Number of files (alternative to --chunk-size)"
    )
    output.add_argument("--partition-by", action="append", help="Dimensions to partition by")
    output.add_argument("-o", "--output-dir", default=".", help="Directory for output files")
    output.add_argument(
        "--subdirs",
        nargs="+",
        action="extend",
        default=[],
        help="Subdirectories for output files: `datatype`, `network`, or custom string",
    )
    output.add_argument("--file-suffix", help=argparse.SUPPRESS)
    output.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing files instead of skipping"
    )
    output.add_argument("--csv", action="store_true", help="Save as csv instead of parquet")
    output.add_argument("--json", action="store_true", help="Save as json instead of parquet")
    output.add_argument(
        "--row-group-size", type=_unsigned, metavar="GROUP_SIZE",
        help="Number of rows per row group in parquet file",
    )
    output.add_argument(
        "--n-row-groups", type=_unsigned, help="Number of rows groups in parquet file"
    )
    output.add_argument(
        "--no-stats", action="store_true", help="Do not write statistics to parquet files"
    )
    output.add_argument(
        "--compression", nargs="+", default=["lz4"], metavar="NAME",
        help="Compression algorithm and level",
    )
    output.add_argument(
        "--report-dir", help="Directory to save summary report [default: {output_dir}/.cryo/reports]"
    )
    output.add_argument("--no-report", action="store_true", help="Avoid saving a summary report")

    dataset = parser.add_argument_group("Dataset-specific Options")
    dataset.add_argument("--address", help="Address(es)", **many)
    dataset.add_argument("--to-address", metavar="address", help="To Address(es)", **many)
    dataset.add_argument("--from-address", metavar="address", help="From Address(es)", **many)
    dataset.add_argument("--call-data", help="Call data(s) to use for eth_calls", **many)
    dataset.add_argument("--function", help="Function(s) to use for eth_calls", **many)
    dataset.add_argument("--inputs", help="Input(s) to use for eth_calls", **many)
    dataset.add_argument("--slot", help="Slot(s)", **many)
    dataset.add_argument("--contract", help="Contract address(es)", **many)
    dataset.add_argument("--topic0", "--event", dest="topic0", help="Topic0(s)", **many)
    dataset.add_argument("--topic1", help="Topic1(s)", **many)
    dataset.add_argument("--topic2", help="Topic2(s)", **many)
    dataset.add_argument("--topic3", help="Topic3(s)", **many)
    dataset.add_argument(
        "--event-signature", metavar="SIG", help="Event signature for log decoding"
    )
    dataset.add_argument(
        "--inner-request-size", type=_unsigned, default=1, metavar="BLOCKS",
        help="Blocks per request (eth_getLogs)",
    )
    dataset.add_argument("--js-tracer", metavar="tracer", help="JavaScript tracer")
    return parser


def parse_command_line(argv: list[str] | None = None) -> Args:
    """Parse command line words (without the program name) into ``Args``."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    namespace = parser.parse_args(list(argv))
    if len(namespace.compression) > 2:
        parser.error("--compression takes at most 2 values")
    values = vars(namespace)
    values.pop("version", None)
    return Args(**values)


def parse_str(command: str) -> Args:
    """Parse a whole command string, whose first word is the program name."""
    return parse_command_line(command.split()[1:])