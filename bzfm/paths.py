"""
Path normalization for bookmark candidates.
"""
import os
from pathlib import Path


def home_dir() -> str:
    """Home directory of the current user."""
    return str(Path.home())


def expand_home(p: str) -> str:
    """
    Expand a leading ``~`` to the current user's home directory.

    Only ``~`` and ``~/...`` are expanded. Other forms such as
    ``~otheruser/docs`` are returned unchanged.

    Args:
        p: Path as typed by the user

    Returns:
        Path with the home shorthand expanded
    """
    if not p.startswith("~"):
        return p
    if p == "~":
        return home_dir()
    if p.startswith("~/"):
        return os.path.join(home_dir(), p[2:])
    return p


def resolve_path(p: str) -> str:
    """Expand ``~`` and make the path absolute against the working directory."""
    # abspath normalizes lexically; symlinks are left alone
    return os.path.abspath(expand_home(p))
