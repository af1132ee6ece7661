import pytest

from cryoparse.arguments import Args, parse_command_line
from cryoparse.parse_utils import ParseError
from cryoparse.remember import (
    REMEMBER_FILENAME,
    RememberedCommand,
    get_remembered_command_path,
    load_remembered_command,
    save_remembered_command,
)
from cryoparse.version import cryo_version


def test_path_uses_filename(tmp_path):
    assert get_remembered_command_path(tmp_path) == tmp_path / "remembered_command.json"
    assert get_remembered_command_path(str(tmp_path)).name == REMEMBER_FILENAME


def test_save_and_load_round_trip(tmp_path):
    argv = ["cryo", "blocks", "-b", "1:2", "--remember"]
    args = parse_command_line(argv[1:])
    assert args.remember is True
    save_remembered_command(tmp_path, args, argv)

    loaded = load_remembered_command(tmp_path)
    assert isinstance(loaded, RememberedCommand)
    assert loaded.command == ["cryo", "blocks", "-b", "1:2"]
    assert loaded.args.remember is False
    assert loaded.args.blocks == ["1:2"]
    assert loaded.args.datatype == ["blocks"]
    assert loaded.cryo_version == cryo_version()


def test_saved_args_otherwise_unchanged(tmp_path):
    args = Args(datatype=["logs"], chunk_size=1000, remember=True)
    save_remembered_command(tmp_path, args, ["cryo", "logs"])
    loaded = load_remembered_command(tmp_path)
    assert loaded.args == Args(datatype=["logs"], chunk_size=1000, remember=False)


def test_load_missing_file(tmp_path):
    with pytest.raises(ParseError, match="--remember"):
        load_remembered_command(tmp_path)


def test_load_invalid_json(tmp_path):
    get_remembered_command_path(tmp_path).write_text("not json", encoding="utf-8")
    with pytest.raises(ParseError, match="deserialize"):
        load_remembered_command(tmp_path)


def test_load_missing_args_field(tmp_path):
    get_remembered_command_path(tmp_path).write_text(
        '{"cryo_version": "x", "command": [], "args": {}}', encoding="utf-8"
    )
    with pytest.raises(ParseError):
        load_remembered_command(tmp_path)


def test_save_into_missing_directory(tmp_path):
    with pytest.raises(ParseError, match="create"):
        save_remembered_command(tmp_path / "absent", Args(), ["cryo"])