import json

import pytest

from cryoparse.arguments import Args
from cryoparse.execution import parse_execution_env
from cryoparse.parse_utils import ParseError


def test_default_verbosity():
    env = parse_execution_env(Args(), 7)
    assert env.verbose == 1
    assert env.bar == 7


def test_verbose_flag():
    assert parse_execution_env(Args(verbose=True), 3).verbose == 2


def test_no_verbose_disables_bar():
    env = parse_execution_env(Args(no_verbose=True), 3)
    assert env.verbose == 0
    assert env.bar is None


def test_conflicting_verbosity():
    with pytest.raises(ParseError):
        parse_execution_env(Args(verbose=True, no_verbose=True), 1)


def test_args_serialized_round_trip():
    args = Args(datatype=["blocks"], dry=True, blocks=["1:2"])
    env = parse_execution_env(args, 1)
    assert Args.from_dict(json.loads(env.args)) == args


def test_report_and_dry_flags():
    env = parse_execution_env(Args(dry=True, no_report=True, report_dir="reports"), 1)
    assert env.dry is True
    assert env.report is False
    assert env.report_dir == "reports"