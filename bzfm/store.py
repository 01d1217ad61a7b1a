"""
Bookmark store backed by a plain-text file.

The store file holds one absolute path per line. Every mutating operation
reads the current list, transforms it and rewrites the whole file; nothing
is appended in place. The store path is always passed explicitly so the
functions here can be pointed at any file (tests use a temp directory).
"""
import os
import re
import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from bzfm.paths import expand_home, home_dir, resolve_path

logger = logging.getLogger(__name__)

BOOKMARK_ENV_VAR = "BZFM_BOOKMARKS_FILE"
DEFAULT_BOOKMARK_FILENAME = ".bzfm.txt"

# Undecodable filename bytes travel as surrogates and are written back as-is
STORE_ENCODING = "utf-8"
STORE_ERRORS = "surrogateescape"

_LINE_BREAK = re.compile(r"\r?\n")

PathLike = Union[str, Path]


class FilterKind(Enum):
    """Projection applied to the bookmark list when listing or selecting."""

    ALL = "all"
    FILES = "files"
    DIRS = "dirs"


class BookmarkFileError(Exception):
    """Raised when the bookmark file cannot be created."""

    def __init__(self, path: PathLike, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to create bookmark file: {self.path}. Reason: {reason}")


def default_bookmark_file() -> Path:
    """Default store location, ``~/.bzfm.txt``."""
    return Path(home_dir()) / DEFAULT_BOOKMARK_FILENAME


def resolve_bookmark_file(configured: Optional[str] = None) -> Path:
    """
    Locate the bookmark file and make sure it exists.

    Priority:
    1. ``configured`` (already merged from config files and BZFM_* env vars)
    2. The BZFM_BOOKMARKS_FILE environment variable
    3. ``~/.bzfm.txt``

    Args:
        configured: Explicit bookmark file location, if any

    Returns:
        Path to an existing (possibly empty) bookmark file

    Raises:
        BookmarkFileError: If the file does not exist and cannot be created
    """
    candidate = configured or os.environ.get(BOOKMARK_ENV_VAR)
    if candidate:
        path = Path(expand_home(candidate))
    else:
        path = default_bookmark_file()

    ensure_file_exists(path)
    return path


def ensure_file_exists(path: PathLike) -> None:
    """Create the bookmark file (and its parent directories) if missing."""
    path = Path(path)
    try:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
            logger.debug(f"Created empty bookmark file {path}")
    except OSError as e:
        raise BookmarkFileError(path, str(e)) from e


def read_bookmarks(path: PathLike) -> List[str]:
    """
    Read bookmarks from the store file.

    Returns an empty list if the file does not exist. Blank and
    whitespace-only lines are skipped.

    Args:
        path: The bookmark file

    Returns:
        Bookmarks in file order
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No bookmark file at {path}. Starting with an empty list.")
        return []

    with open(path, "r", encoding=STORE_ENCODING, errors=STORE_ERRORS, newline="") as f:
        content = f.read()

    bookmarks = [line.strip() for line in _LINE_BREAK.split(content)]
    bookmarks = [b for b in bookmarks if b]
    logger.debug(f"Loaded {len(bookmarks)} bookmarks from {path}")
    return bookmarks


def write_bookmarks(path: PathLike, bookmarks: List[str]) -> None:
    """
    Overwrite the store file with one bookmark per line.

    The content is encoded before anything touches the disk and lands in a
    temp file next to the store, which then replaces it. A failure at any
    point leaves the previous store intact.
    """
    path = Path(path)
    data = "".join(f"{b}{os.linesep}" for b in bookmarks).encode(STORE_ENCODING, STORE_ERRORS)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    logger.debug(f"Wrote {len(bookmarks)} bookmarks to {path}")


def dedup(bookmarks: List[str]) -> List[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen = set()
    result = []
    for bookmark in bookmarks:
        if bookmark not in seen:
            seen.add(bookmark)
            result.append(bookmark)
    return result


def _exists(p: str) -> bool:
    # os.path.exists reports False on permission errors too
    return os.path.exists(p)


def filter_existing(bookmarks: List[str]) -> List[str]:
    """Keep bookmarks that still exist on disk, without duplicates."""
    return dedup([b for b in bookmarks if _exists(b)])


def filter_files(bookmarks: List[str]) -> List[str]:
    """Keep bookmarks pointing at existing regular files."""
    return [b for b in bookmarks if os.path.isfile(b)]


def filter_dirs(bookmarks: List[str]) -> List[str]:
    """Keep bookmarks pointing at existing directories."""
    return [b for b in bookmarks if os.path.isdir(b)]


def filter_by_kind(bookmarks: List[str], kind: FilterKind) -> List[str]:
    """
    Apply a FilterKind to a bookmark list.

    ``FilterKind.ALL`` returns the list untouched; existence is not checked.
    """
    if kind is FilterKind.ALL:
        return list(bookmarks)
    if kind is FilterKind.FILES:
        return filter_files(bookmarks)
    if kind is FilterKind.DIRS:
        return filter_dirs(bookmarks)
    raise ValueError(f"Unknown filter kind: {kind!r}")


def add_bookmarks(path: PathLike, new_paths: List[str]) -> List[str]:
    """
    Add paths to the store.

    Each candidate is expanded and made absolute. Candidates that do not
    exist are dropped silently. Survivors are appended after the current
    entries; an already bookmarked path keeps its position.

    Args:
        path: The bookmark file
        new_paths: Paths as given on the command line

    Returns:
        The merged bookmark list that was written
    """
    existing = read_bookmarks(path)

    candidates = [resolve_path(p) for p in new_paths]
    accepted = [c for c in candidates if _exists(c)]
    if len(accepted) < len(candidates):
        logger.debug(f"Skipped {len(candidates) - len(accepted)} non-existent paths")

    merged = dedup(existing + accepted)
    write_bookmarks(path, merged)
    logger.info(f"Bookmark file {path} now holds {len(merged)} entries")
    return merged


def cleanup_bookmarks(path: PathLike) -> Tuple[List[str], int]:
    """
    Remove duplicate and vanished entries from the store.

    Returns:
        Tuple of (cleaned list, number of removed entries). The count covers
        duplicates and missing paths alike.
    """
    original = read_bookmarks(path)
    cleaned = filter_existing(dedup(original))
    removed_count = len(original) - len(cleaned)
    write_bookmarks(path, cleaned)
    logger.info(f"Cleanup removed {removed_count} entries from {path}")
    return cleaned, removed_count


def clear_bookmarks(path: PathLike) -> None:
    """Delete every bookmark."""
    write_bookmarks(path, [])
