"""Locate the reformcal config file.

``REFORMCAL_CONFIG`` names the file outright.  Otherwise the directory
tree is searched upward from the working directory, the way git finds
``.git/``; in each directory ``reformcal.toml`` wins over the hidden
``.reformcal.toml``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAMES = ("reformcal.toml", ".reformcal.toml")
CONFIG_ENV_VAR = "REFORMCAL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """The config file for *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        named = Path(env_path)
        return named if named.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None
