"""Config file discovery.

Walk-up finder locates rollctl.toml the way git finds .git/.
Supports the ROLLCTL_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "rollctl.toml"
CONFIG_ENV_VAR = "ROLLCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for rollctl.toml.

    ROLLCTL_CONFIG, when set, wins outright: its file is returned if it
    exists, otherwise None (no fallback to walking up).
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent

