# cryoparse

`cryoparse` turns the command line of a blockchain data extraction tool into
validated, structured settings: which datasets to collect, which blocks to
cover, how to chunk the work, and how and where output would be written.
Invalid input raises `cryoparse.parse_utils.ParseError` with a message that
describes the problem.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
cryoparse help
cryoparse help syntax
cryoparse blocks --blocks 15M:+1000 --csv --output-dir ./data --rpc localhost:8545
```

- `cryoparse help` prints the full option list.
- `cryoparse help syntax` prints the block and transaction specification syntax.
- Any other command checks its options and prints a summary of the resolved
  settings: datatypes, RPC url, output directory, output format, compression,
  u256 types, concurrency limits, chunk size and, where given, row group size,
  subdirectories, network name and dry run. `--no-verbose` suppresses the
  summary. The output directory is created if it does not exist.

The RPC url comes from `--rpc` or the `ETH_RPC_URL` environment variable; a
url without a scheme gets `http://` in front. If neither is set, the command
says so and exits with status 0. Any other invalid option prints its error
and exits with status 1.

### Remembered commands

`--remember` saves the current command in
`<output_dir>/.cryo/remembered_command.json`. Running later without any
datatypes reuses that command; arguments given on the new command line take
precedence over the remembered ones. A warning goes to stderr when the saved
command came from a different version.

## Block specification syntax

| Form | Meaning |
| --- | --- |
| `5000 6000 7000` | individual block numbers |
| `12M:13M` | a range, end exclusive |
| `5_000 5K 15M 15.5M 1B` | numbers with separators and suffixes (`k`, `m`, `b` in either case) |
| `15.5M:` or `15.5M:latest` | open end means the latest block |
| `:700` | open start means block 0 |
| `-1000:7000` | the 1000 blocks ending at 7000 |
| `15M:+1000` | 1000 blocks starting at 15M |
| `2000:5000:1000` | every 1000th block: 2000, 3000, 4000 |
| `100:200/5` | 5 evenly spaced blocks |

A single range token stays a range; when several tokens are given, each is
expanded into explicit block numbers.

## Library use

```python
from cryoparse.arguments import parse_str
from cryoparse.blocks import parse_block_inputs
from cryoparse.file_output import parse_compression, parse_output_format


class Head:
    def get_block_number(self) -> int:
        return 18_000_000


args = parse_str("cryo blocks --blocks 1000:1002 --csv")
fmt = parse_output_format(args)             # FileFormat.CSV
compression = parse_compression(["zstd", "3"])
chunks = parse_block_inputs("15M:", Head())  # one range up to the latest block
```

Modules:

- `cryoparse.arguments` — `Args`, `build_parser()`, `parse_command_line()`,
  `parse_str()`; `Args.merge_with_precedence()` for combining commands.
- `cryoparse.block_numbers` — `BlockChunk`, `RangePosition`, the
  `BlockFetcher` protocol, `parse_block_number()`, `parse_block_range()`,
  `block_range_to_block_chunk()`, `evenly_spaced_subset()`.
- `cryoparse.blocks` — `parse_block_token()`, `parse_block_inputs()`,
  `apply_reorg_buffer()`.
- `cryoparse.file_output` — `FileFormat`, `SubDir`, `Compression`,
  `parse_output_format()`, `parse_compression()`, `parse_subdirs()`,
  `parse_network_name()` (known chain ids map to names, others to
  `network_<id>`), `parse_row_group_size()`, `prepare_output_dir()`.
- `cryoparse.execution` — `ExecutionSettings`, `parse_execution_env()`.
- `cryoparse.query` — `Dim`, `DatatypeSpec`, `find_arg_aliases()`,
  `apply_arg_aliases()`.
- `cryoparse.partitions` — `TimeDimension`, `parse_call_datas()`,
  `parse_time_dimension()`, `order_partitions()`.
- `cryoparse.schemas` — `U256Type`, `parse_u256_types()`.
- `cryoparse.source` — `parse_rpc_url()`, `parse_concurrency()`,
  `ConcurrencySettings`.
- `cryoparse.remember` — saving and loading remembered commands.
- `cryoparse.parse_utils` — `ParseError`, hex decoding, file column references.
- `cryoparse.version` — `cryo_version()`: `git describe` output when
  available, otherwise the package version.

Block references that need the chain head (`latest`, open range ends, the
reorg buffer) are resolved through a `BlockFetcher` you supply: any object
with a `get_block_number()` method.

## What it does not do

- It does not connect to an RPC node or collect any data; commands stop after
  printing the resolved settings.
- It writes no parquet, csv or json files and no summary reports.
- It has no dataset catalogue or column schemas: `cryoparse help datasets`
  and `cryoparse help <DATASET>` report an error.
- It does not read block numbers or hashes from parquet files.