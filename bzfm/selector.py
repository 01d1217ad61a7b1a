"""
Bridge between the bookmark list and the fzf interactive selector.

Bookmarks are decorated with a type tag, piped to fzf on stdin and the
lines fzf prints back are mapped to the original paths again.
"""
import os
import re
import shlex
import stat
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from bzfm.store import FilterKind, filter_by_kind, read_bookmarks

logger = logging.getLogger(__name__)

TAG_FILE = "[f]"
TAG_DIR = "[d]"
TAG_UNKNOWN = "[?]"

# fzf exits with 130 when the user aborts with Ctrl-C or Esc
EXIT_CANCELLED = 130

FZF_BASE_ARGS = ["--reverse", "--exact", "--no-sort", "--cycle"]

_TAGGED_LINE = re.compile(r"^(.*?)\s+\[[fd?]\]$")


class SelectorFailure(Exception):
    """Raised when the selector cannot be launched or exits abnormally."""

    def __init__(self, code: Optional[int] = None, reason: Optional[str] = None):
        self.code = code
        self.reason = reason
        if reason is not None:
            message = f"Failed to run fzf: {reason}"
        else:
            message = f"fzf exited with non-zero code: {code}"
        super().__init__(message)


@dataclass
class SelectOptions:
    """Options for one interactive selection."""

    multi: bool = False
    query: Optional[str] = None


class Selector(ABC):
    """Synchronous request/response interface to an interactive selector."""

    @abstractmethod
    def invoke(self, lines: List[str], options: SelectOptions) -> List[str]:
        """
        Offer ``lines`` to the user and return the chosen ones.

        Raises:
            SelectorFailure: If the selection could not be completed
        """


class FzfSelector(Selector):
    """Runs fzf as a subprocess, one process per invocation."""

    def __init__(self, command: str = "fzf"):
        self.command = command

    def build_args(self, options: SelectOptions) -> List[str]:
        # The command may carry its own flags, e.g. "fzf --height 40%"
        args = shlex.split(self.command) + FZF_BASE_ARGS
        if options.multi:
            args.append("-m")
        if options.query:
            args.extend(["-q", options.query])
        return args

    def invoke(self, lines: List[str], options: SelectOptions) -> List[str]:
        args = self.build_args(options)
        logger.debug(f"Running selector: {args} with {len(lines)} lines")

        try:
            # stderr is inherited so fzf can draw its interface on the terminal
            proc = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
            stdout, _ = proc.communicate("\n".join(lines))
        except OSError as e:
            raise SelectorFailure(reason=str(e)) from e

        code = proc.returncode
        if code == 0:
            return [line.strip() for line in stdout.splitlines() if line.strip()]
        if code == EXIT_CANCELLED:
            logger.debug("Selection cancelled by user")
            return []
        raise SelectorFailure(code=code)


def _kind_tag(p: str) -> str:
    try:
        mode = os.stat(p).st_mode
    except OSError:
        return TAG_UNKNOWN
    if stat.S_ISDIR(mode):
        return TAG_DIR
    if stat.S_ISREG(mode):
        return TAG_FILE
    return TAG_UNKNOWN


def decorate(entries: List[str]) -> List[str]:
    """
    Pad bookmarks to a common width and append a type tag.

    Example output::

        /path/to/dir   [d]
        /path/to/file  [f]
    """
    if not entries:
        return []

    width = max(len(p) for p in entries) + 2
    return [f"{p.ljust(width)}{_kind_tag(p)}" for p in entries]


def parse_selected_line(line: str) -> str:
    """Recover the bookmark path from a decorated line."""
    match = _TAGGED_LINE.match(line.strip())
    if match:
        return match.group(1)
    return line.strip()


def run_interactive_select(
    lines: List[str],
    options: Optional[SelectOptions] = None,
    selector: Optional[Selector] = None,
) -> List[str]:
    """
    Let the user pick among ``lines``.

    Args:
        lines: Lines to offer, written to the selector's stdin
        options: Multi-selection and initial query
        selector: Selector to use (default: fzf)

    Returns:
        Selected lines; empty if the user cancelled

    Raises:
        SelectorFailure: If the selector fails to start or exits with an
            unexpected code
    """
    if selector is None:
        selector = FzfSelector()
    return selector.invoke(lines, options or SelectOptions())


def select_from_bookmarks(
    bookmarks: List[str],
    kind: FilterKind = FilterKind.ALL,
    options: Optional[SelectOptions] = None,
    selector: Optional[Selector] = None,
) -> List[str]:
    """
    Interactively select bookmarks.

    The selector is not started when nothing survives the filter.

    Returns:
        Selected bookmark paths in the order the selector returned them
    """
    decorated = decorate(filter_by_kind(bookmarks, kind))
    if not decorated:
        logger.debug("Nothing to select from")
        return []

    selected = run_interactive_select(decorated, options, selector)
    return [parse_selected_line(line) for line in selected]


def list_bookmarks(path: Union[str, Path], kind: FilterKind = FilterKind.ALL) -> List[str]:
    """Bookmarks from ``path`` filtered by ``kind`` and decorated for display."""
    return decorate(filter_by_kind(read_bookmarks(path), kind))
