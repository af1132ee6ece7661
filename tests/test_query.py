import pytest

from cryoparse.arguments import Args
from cryoparse.parse_utils import ParseError
from cryoparse.query import (
    DatatypeSpec,
    Dim,
    apply_arg_aliases,
    dim_is_none,
    dim_is_some,
    find_arg_aliases,
)

BALANCES = DatatypeSpec(
    name="balances",
    required_parameters=(Dim.ADDRESS,),
    arg_aliases={Dim.CONTRACT: Dim.ADDRESS, Dim.TO_ADDRESS: Dim.ADDRESS},
)


@pytest.mark.parametrize("dim", list(Dim))
def test_dim_presence_is_complementary(dim):
    empty = Args()
    assert dim_is_none(empty, dim)
    assert not dim_is_some(empty, dim)
    filled = Args(**{dim.arg_name: ["0x00"]})
    assert dim_is_some(filled, dim)
    assert not dim_is_none(filled, dim)


def test_find_alias_when_required_missing():
    args = Args(contract=["0xab"])
    assert find_arg_aliases(args, [BALANCES]) == [(Dim.CONTRACT, Dim.ADDRESS)]


def test_no_alias_when_required_given():
    args = Args(address=["0xab"], contract=["0xcd"])
    assert find_arg_aliases(args, [BALANCES]) == []


def test_no_alias_without_alias_table():
    spec = DatatypeSpec(name="blocks", required_parameters=(Dim.ADDRESS,))
    assert find_arg_aliases(Args(contract=["0xab"]), [spec]) == []


def test_apply_alias_moves_values():
    args = Args(contract=["0xab", "0xcd"])
    result = apply_arg_aliases(args, [(Dim.CONTRACT, Dim.ADDRESS)])
    assert result.address == ["0xab", "0xcd"]
    assert result.contract is None
    assert args.contract == ["0xab", "0xcd"]


def test_apply_found_aliases_round_trip():
    args = Args(to_address=["0xef"])
    result = apply_arg_aliases(args, find_arg_aliases(args, [BALANCES]))
    assert result.address == ["0xef"]
    assert result.to_address is None
    assert find_arg_aliases(result, [BALANCES]) == []


def test_invalid_alias_pairing():
    with pytest.raises(ParseError, match="invalid arg alias pairing"):
        apply_arg_aliases(Args(slot=["0x01"]), [(Dim.SLOT, Dim.ADDRESS)])