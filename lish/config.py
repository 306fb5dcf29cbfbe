from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_PROMPT = "lish$ "
SHELL_FILENAME = "<shell>"

_RC_NAME = "init.lisp"
_HISTORY_NAME = ".history"
_FALLBACK_HISTORY = ".lish_history"


def get_config_dir() -> Optional[Path]:
    raw = os.environ.get("LISH_CONFIG_DIR")
    if raw:
        return Path(raw).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lish"
    try:
        home = Path.home()
    except RuntimeError:
        return None
    return home / ".config" / "lish"


def get_rc_path() -> Optional[Path]:
    root = get_config_dir()
    return root / _RC_NAME if root is not None else None


def get_history_path() -> Path:
    root = get_config_dir()
    if root is None:
        return Path(_FALLBACK_HISTORY)
    return root / _HISTORY_NAME


def get_log_level() -> int:
    raw = os.environ.get("LISH_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(raw)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING
