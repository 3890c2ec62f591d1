"""
Version helpers for suins-setup.

A static PEP 440 `__version__` plus a small helper that appends `git describe`
output when running from a checkout.
"""

from __future__ import annotations

import os
import subprocess
from typing import Optional

# Bump this when publishing
__version__ = "0.1.0"


def _git_describe() -> Optional[str]:
    here = os.path.dirname(os.path.abspath(__file__))
    root = os.path.dirname(here)
    if not os.path.isdir(os.path.join(root, ".git")):
        return None
    try:
        out = subprocess.run(
            ["git", "describe", "--tags", "--dirty", "--always"],
            cwd=root,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.stdout.strip() or None


def version() -> str:
    """Human-friendly string, e.g. '0.1.0 (v0.1.0-3-gabc1234)'."""
    git = _git_describe()
    return __version__ if not git else f"{__version__} ({git})"


__all__ = ["__version__", "version"]
