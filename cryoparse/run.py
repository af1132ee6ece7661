"""Entry point: help subcommands, remembered commands and option checking."""

from __future__ import annotations

import sys
from pathlib import Path

from .arguments import Args, build_parser, parse_command_line
from .execution import parse_execution_env
from .file_output import (
    parse_compression,
    parse_output_format,
    parse_row_group_size,
    parse_subdirs,
    prepare_output_dir,
)
from .parse_utils import ParseError
from .remember import load_remembered_command, save_remembered_command
from .schemas import parse_u256_types
from .source import parse_concurrency, parse_rpc_url
from .version import cryo_version

_SYNTAX_HELP = """\
Block specification syntax
- can use numbers                    --blocks 5000 6000 7000
- can use ranges                     --blocks 12M:13M 15M:16M
- can use a parquet file             --blocks ./path/to/file.parquet[:COLUMN_NAME]
- can use multiple parquet files     --blocks ./path/to/files/*.parquet[:COLUMN_NAME]
- numbers can contain { _ . K M B }  5_000 5K 15M 15.5M
- omitting range end means latest    15.5M: == 15.5M:latest
- omitting range start means 0       :700 == 0:700
- minus on start means minus end     -1000:7000 == 6000:7000
- plus sign on end means plus start  15M:+1000 == 15M:15.001K
- can use every nth value            2000:5000:1000 == 2000 3000 4000
- can use n values total             100:200/5 == 100 124 149 174 199

Transaction specification syntax
- can use transaction hashes         --txs TX_HASH1 TX_HASH2 TX_HASH3
- can use a parquet file             --txs ./path/to/file.parquet[:COLUMN_NAME]
                                     (default column name is transaction_hash)
- can use multiple parquet files     --txs ./path/to/ethereum__logs*.parquet"""


def syntax_help() -> str:
    """Description of the block and transaction specification syntax."""
    return _SYNTAX_HELP


def handle_help(args: Args) -> str:
    """Text for ``cryo help [syntax | datasets | DATASET...]``."""
    topics = args.datatype[1:]
    if not topics:
        return build_parser().format_help()
    if len(topics) == 1 and topics[0] == "syntax":
        return syntax_help()
    if len(topics) == 1 and topics[0] == "datasets":
        raise ParseError("dataset catalogue is not available")
    raise ParseError("missing schema for datatype")


def resolve_args(args: Args, argv: list[str] | None = None) -> Args:
    """Apply a remembered command when no datatypes are given, and remember if asked.

    ``argv`` holds the command words, program name first; it is what gets saved
    by ``--remember``.
    """
    if argv is None:
        argv = sys.argv
    cryo_dir = Path(args.output_dir or ".") / ".cryo"

    if not args.datatype:
        remembered = load_remembered_command(cryo_dir)
        if remembered.cryo_version != cryo_version():
            print(
                "remembered command comes from different cryo version, proceed with caution",
                file=sys.stderr,
            )
            print(file=sys.stderr)
        print("remembering previous command: cryo " + " ".join(remembered.command[1:]))
        print()
        args = args.merge_with_precedence(remembered.args)

    if args.remember:
        print("remembering this command for future use")
        print()
        try:
            cryo_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ParseError("could not create remembered file") from exc
        save_remembered_command(cryo_dir, args, argv)

    return args


def _summary_lines(args: Args, rpc_url: str) -> list[str]:
    output_format = parse_output_format(args)
    compression = parse_compression(args.compression)
    u256_types = parse_u256_types(args.u256_types)
    concurrency = parse_concurrency(
        args.max_concurrent_requests, args.max_concurrent_chunks, args.requests_per_second
    )
    row_group_size = parse_row_group_size(args.row_group_size, args.n_row_groups, args.chunk_size)
    subdirs = parse_subdirs(args)
    output_dir = prepare_output_dir(args.output_dir or ".")

    compression_text = compression.algorithm
    if compression.level is not None:
        compression_text += f" {compression.level}"
    lines = [
        f"datatypes: {', '.join(args.datatype)}",
        f"rpc url: {rpc_url}",
        f"output dir: {output_dir}",
        f"output format: {output_format.value}",
        f"compression: {compression_text}",
        f"u256 types: {', '.join(sorted(t.value for t in u256_types))}",
        f"max concurrent requests: {concurrency.max_concurrent_requests}",
        f"max concurrent chunks: {concurrency.max_concurrent_chunks}",
        f"requests per second: {concurrency.requests_per_second}",
        f"chunk size: {args.chunk_size}",
    ]
    if row_group_size is not None:
        lines.append(f"row group size: {row_group_size}")
    if subdirs:
        lines.append("subdirs: " + ", ".join(s.name or s.kind for s in subdirs))
    if args.network_name is not None:
        lines.append(f"network: {args.network_name}")
    if args.dry:
        lines.append("dry run: no data collected")
    return lines


def main(argv: list[str] | None = None) -> int:
    """Run the command line; ``argv`` holds the words after the program name."""
    words = list(sys.argv[1:] if argv is None else argv)
    args = parse_command_line(words)
    try:
        if args.datatype[:1] == ["help"]:
            print(handle_help(args))
            return 0
        args = resolve_args(args, ["cryo", *words])
        try:
            rpc_url = parse_rpc_url(args.rpc)
        except ParseError as exc:
            print(exc)
            return 0
        settings = parse_execution_env(args, 0)
        lines = _summary_lines(args, rpc_url)
    except ParseError as exc:
        print(exc)
        return 1
    if settings.verbose > 0:
        print("\n".join(lines))
    return 0