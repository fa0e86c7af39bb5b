"""Config file discovery.

Walk-up finder locates typedrpc.toml, similar to how git finds .git/.
The TYPEDRPC_CONFIG env var and the --config CLI flag take precedence.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "typedrpc.toml"
CONFIG_ENV_VAR = "TYPEDRPC_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for typedrpc.toml.

    Returns the path to the config file, or None if not found.
    An explicit TYPEDRPC_CONFIG wins; if it names a missing file, the
    result is None rather than a fallback to discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
