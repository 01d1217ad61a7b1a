"""
BZFM - Fuzzy bookmark manager for files and directories

Keeps a plain-text list of filesystem paths and hands them to fzf for
interactive selection.

Design Principles:
- Single text file (~/.bzfm.txt), one absolute path per line
- Every mutation rewrites the whole file
- The selector is a plain subprocess speaking over stdin/stdout
- Output composes with pipes and shell functions

Example Usage:
    >>> from bzfm import FilterKind, add_bookmarks, read_bookmarks
    >>> from bzfm import resolve_bookmark_file, select_from_bookmarks
    >>> store = resolve_bookmark_file()
    >>> add_bookmarks(store, ["~/projects", "."])
    >>> select_from_bookmarks(read_bookmarks(store), FilterKind.DIRS)
"""

__version__ = "1.0.0"
__author__ = "BZFM Contributors"

# Paths
from bzfm.paths import expand_home, resolve_path

# Bookmark store
from bzfm.store import (
    BOOKMARK_ENV_VAR,
    BookmarkFileError,
    FilterKind,
    add_bookmarks,
    cleanup_bookmarks,
    clear_bookmarks,
    dedup,
    ensure_file_exists,
    filter_by_kind,
    filter_dirs,
    filter_existing,
    filter_files,
    read_bookmarks,
    resolve_bookmark_file,
    write_bookmarks,
)

# Selector
from bzfm.selector import (
    FzfSelector,
    SelectOptions,
    SelectorFailure,
    decorate,
    run_interactive_select,
    select_from_bookmarks,
)

# Configuration
from bzfm.config import BzfmConfig, get_config, init_config

__all__ = [
    # Paths
    "expand_home",
    "resolve_path",
    # Store
    "BOOKMARK_ENV_VAR",
    "BookmarkFileError",
    "FilterKind",
    "add_bookmarks",
    "cleanup_bookmarks",
    "clear_bookmarks",
    "dedup",
    "ensure_file_exists",
    "filter_by_kind",
    "filter_dirs",
    "filter_existing",
    "filter_files",
    "read_bookmarks",
    "resolve_bookmark_file",
    "write_bookmarks",
    # Selector
    "FzfSelector",
    "SelectOptions",
    "SelectorFailure",
    "decorate",
    "run_interactive_select",
    "select_from_bookmarks",
    # Config
    "BzfmConfig",
    "get_config",
    "init_config",
]
