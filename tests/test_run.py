import json
from pathlib import Path

import pytest

from cryoparse.arguments import parse_command_line
from cryoparse.parse_utils import ParseError
from cryoparse.remember import load_remembered_command
from cryoparse.run import handle_help, main, resolve_args, syntax_help


def test_syntax_help_describes_ranges():
    text = syntax_help()
    assert text.startswith("Block specification syntax")
    assert "100:200/5 == 100 124 149 174 199" in text
    assert "Transaction specification syntax" in text


def test_handle_help_alone_gives_usage():
    args = parse_command_line(["help"])
    assert "usage: cryo" in handle_help(args)


def test_handle_help_syntax():
    args = parse_command_line(["help", "syntax"])
    assert handle_help(args) == syntax_help()


def test_handle_help_datasets_unavailable():
    args = parse_command_line(["help", "datasets"])
    with pytest.raises(ParseError):
        handle_help(args)


def test_handle_help_dataset_without_schema():
    args = parse_command_line(["help", "blocks"])
    with pytest.raises(ParseError, match="missing schema for datatype"):
        handle_help(args)


def test_resolve_args_without_remembered_command(tmp_path):
    args = parse_command_line(["-o", str(tmp_path)])
    with pytest.raises(ParseError, match="specify datasets to collect"):
        resolve_args(args, ["cryo", "-o", str(tmp_path)])


def test_resolve_args_remember_then_reuse(tmp_path):
    out = str(tmp_path)
    words = ["blocks", "-b", "1:2", "-o", out, "--remember"]
    first = resolve_args(parse_command_line(words), ["cryo", *words])
    assert first.datatype == ["blocks"]

    saved = load_remembered_command(Path(out) / ".cryo")
    assert saved.command == ["cryo", "blocks", "-b", "1:2", "-o", out]
    assert saved.args.remember is False

    second = resolve_args(parse_command_line(["-o", out, "--dry"]), ["cryo", "-o", out, "--dry"])
    assert second.datatype == ["blocks"]
    assert second.blocks == ["1:2"]
    assert second.dry is True


def test_resolve_args_warns_on_version_mismatch(tmp_path, capsys):
    out = str(tmp_path)
    words = ["blocks", "-o", out, "--remember"]
    resolve_args(parse_command_line(words), ["cryo", *words])
    path = Path(out) / ".cryo" / "remembered_command.json"
    data = json.loads(path.read_text())
    data["cryo_version"] = "v0.0.0-other"
    path.write_text(json.dumps(data))
    capsys.readouterr()

    resolved = resolve_args(parse_command_line(["-o", out]), ["cryo", "-o", out])
    captured = capsys.readouterr()
    assert "different cryo version" in captured.err
    assert "remembering previous command: cryo blocks -o" in captured.out
    assert resolved.datatype == ["blocks"]


def test_main_help_syntax(capsys):
    assert main(["help", "syntax"]) == 0
    assert "Block specification syntax" in capsys.readouterr().out


def test_main_help_unknown_dataset_fails(capsys):
    assert main(["help", "blocks"]) == 1
    assert "missing schema for datatype" in capsys.readouterr().out


def test_main_without_datatype_fails(tmp_path, capsys):
    assert main(["-o", str(tmp_path)]) == 1
    assert "specify a command to remember" in capsys.readouterr().out


def test_main_rejects_two_formats(tmp_path, capsys):
    code = main(["blocks", "--rpc", "localhost:8545", "-o", str(tmp_path), "--csv", "--json"])
    assert code == 1
    assert "choose one of parquet, csv, or json" in capsys.readouterr().out


def test_main_rejects_verbose_conflict(tmp_path):
    code = main(["blocks", "--rpc", "localhost", "-o", str(tmp_path), "-v", "--no-verbose"])
    assert code == 1


def test_main_missing_rpc(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("ETH_RPC_URL", raising=False)
    assert main(["blocks", "-o", str(tmp_path)]) == 0
    assert "must provide --rpc or set ETH_RPC_URL" in capsys.readouterr().out


def test_main_prints_summary(tmp_path, capsys):
    out = tmp_path / "data"
    code = main(["blocks", "--rpc", "localhost:8545", "-o", str(out), "--dry", "--csv"])
    text = capsys.readouterr().out
    assert code == 0
    assert "rpc url: http://localhost:8545" in text
    assert "output format: csv" in text
    assert "compression: lz4_raw" in text
    assert "dry run: no data collected" in text
    assert out.is_dir()


def test_main_quiet_prints_nothing(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("ETH_RPC_URL", "http://localhost:8545")
    assert main(["blocks", "-o", str(tmp_path), "--no-verbose"]) == 0
    assert capsys.readouterr().out == ""