"""Version string, preferring the git description of the source tree."""

from __future__ import annotations

import functools
import subprocess
from pathlib import Path

PACKAGE_VERSION = "0.1.0"


def get_git_description() -> str:
    """Return ``git describe --tags --always`` output; raise OSError on failure."""
    result = subprocess.run(
        ["git", "describe", "--tags", "--always"],
        capture_output=True,
        cwd=Path(__file__).resolve().parent,
        check=False,
    )
    if result.returncode != 0:
        raise OSError("Git command failed")
    return result.stdout.decode("utf-8").strip()


@functools.lru_cache(maxsize=None)
def cryo_version() -> str:
    """Git description if available, otherwise the package version."""
    try:
        return get_git_description()
    except OSError:
        return PACKAGE_VERSION