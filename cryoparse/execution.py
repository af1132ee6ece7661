"""Execution settings derived from command line arguments."""

from __future__ import annotations

import json
from dataclasses import dataclass

from .arguments import Args
from .parse_utils import ParseError


@dataclass(frozen=True)
class ExecutionSettings:
    """How a run behaves: verbosity, dry run, reporting and progress bar."""

    dry: bool
    verbose: int
    report: bool
    report_dir: str | None
    args: str
    bar: int | None = None


def parse_execution_env(args: Args, n_tasks: int) -> ExecutionSettings:
    """Build execution settings; ``bar`` holds the task count when output is shown."""
    try:
        args_str = json.dumps(args.to_dict())
    except (TypeError, ValueError) as exc:
        raise ParseError(str(exc)) from exc

    if args.no_verbose and args.verbose:
        raise ParseError("")
    if args.no_verbose:
        verbose = 0
    elif args.verbose:
        verbose = 2
    else:
        verbose = 1

    return ExecutionSettings(
        dry=args.dry,
        verbose=verbose,
        report=not args.no_report,
        report_dir=args.report_dir,
        args=args_str,
        bar=None if args.no_verbose else n_tasks,
    )