"""Remembering a command as the default for an output directory.

Running with ``--remember`` saves the current command; it is used again
whenever the program is run without datatypes, and any further arguments
override the remembered ones.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, replace
from pathlib import Path

from .arguments import Args
from .parse_utils import ParseError
from .version import cryo_version

REMEMBER_FILENAME = "remembered_command.json"


@dataclass
class RememberedCommand:
    """A saved command with the version that saved it."""

    cryo_version: str
    command: list[str]
    args: Args


def get_remembered_command_path(cryo_dir: str | Path) -> Path:
    """Path of the remembered command file inside ``cryo_dir``."""
    return Path(cryo_dir) / REMEMBER_FILENAME


def save_remembered_command(
    cryo_dir: str | Path, args: Args, argv: list[str] | None = None
) -> None:
    """Save ``args`` and the command words as the remembered command."""
    if argv is None:
        argv = sys.argv
    payload = {
        "cryo_version": cryo_version(),
        "command": [word for word in argv if word != "--remember"],
        "args": replace(args, remember=False).to_dict(),
    }
    try:
        text = json.dumps(payload)
    except (TypeError, ValueError) as exc:
        raise ParseError("could not serialize remembered command") from exc
    path = get_remembered_command_path(cryo_dir)
    try:
        handle = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise ParseError("could not create remembered file") from exc
    with handle:
        try:
            handle.write(text)
        except OSError as exc:
            raise ParseError("could not write remembered command") from exc


def load_remembered_command(cryo_dir: str | Path) -> RememberedCommand:
    """Load the remembered command saved in ``cryo_dir``."""
    path = get_remembered_command_path(cryo_dir)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise ParseError(
            "either 1) specify datasets to collect or "
            "2) specify a command to remember with --remember"
        ) from exc
    with handle:
        try:
            contents = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError("could not read remembered file") from exc
    try:
        data = json.loads(contents)
        return RememberedCommand(
            cryo_version=str(data["cryo_version"]),
            command=[str(word) for word in data["command"]],
            args=Args.from_dict(data["args"]),
        )
    except (ValueError, KeyError, TypeError) as exc:
        raise ParseError("could not deserialize remembered file") from exc