"""Path helpers shared by the platform facades."""

from __future__ import annotations

import os


def expand_path(path: str) -> str:
    """Expand ``~`` and ``$VARS`` in a path and make it absolute."""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(path)))
