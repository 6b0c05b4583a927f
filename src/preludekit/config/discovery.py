"""Config file discovery.

Nothing here runs unless asked for. A config file is read only when
PRELUDEKIT_CONFIG names one, when a path is passed explicitly, or when a
caller opts into :func:`find_config`, a walk-up finder that locates the
nearest ``pyproject.toml`` carrying a ``[tool.preludekit]`` table,
similar to how git finds .git/.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "PRELUDEKIT_CONFIG"
TOOL_TABLE = "preludekit"

logger = logging.getLogger(__name__)


def read_tool_table(path: Path) -> dict[str, Any] | None:
    """Return the ``[tool.preludekit]`` table of *path*, or None if it has none."""
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    table = data.get("tool", {}).get(TOOL_TABLE)
    return table if isinstance(table, dict) else None


def env_config_path() -> Path | None:
    """The file named by PRELUDEKIT_CONFIG, or None when the variable is unset."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a configured pyproject.toml.

    Returns the path to the config file, or None if not found.
    Checks PRELUDEKIT_CONFIG env var first.
    """
    env_path = env_config_path()
    if env_path is not None:
        return env_path if env_path.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            try:
                if read_tool_table(candidate) is not None:
                    return candidate
            except tomllib.TOMLDecodeError:
                logger.debug("Skipping unparseable %s", candidate, exc_info=True)
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
