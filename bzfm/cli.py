#!/usr/bin/env python3
"""
BZFM - Fuzzy bookmark manager

Command-line interface. Paths are printed to stdout one per line so the
output can be consumed by shell functions; status messages go through rich.
"""
import sys
import shlex
import argparse
import logging
import subprocess
from pathlib import Path
from typing import Optional, List

from rich.console import Console
from rich.markup import escape

from bzfm import __version__
from bzfm.config import get_config, init_config
from bzfm.i18n import Messages, detect_locale
from bzfm.selector import FzfSelector, SelectOptions, SelectorFailure, list_bookmarks, select_from_bookmarks
from bzfm.shell import UnsupportedShellError, render_init_script
from bzfm.store import (
    BookmarkFileError,
    FilterKind,
    add_bookmarks,
    cleanup_bookmarks,
    clear_bookmarks,
    read_bookmarks,
    resolve_bookmark_file,
)

logger = logging.getLogger(__name__)


console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def filter_kind(args) -> FilterKind:
    """Map --files / --dirs to a FilterKind."""
    if getattr(args, "files", False):
        return FilterKind.FILES
    if getattr(args, "dirs", False):
        return FilterKind.DIRS
    return FilterKind.ALL


def bookmark_file() -> Path:
    return resolve_bookmark_file(get_config().bookmarks_file)


def selector():
    return FzfSelector(get_config().fzf_command)


def describe_error(error: Exception, messages: Messages) -> str:
    """Localized, human-readable description of an error."""
    if isinstance(error, BookmarkFileError):
        return messages.t("error.bookmark_file.create_failed", path=error.path, reason=error.reason)
    if isinstance(error, SelectorFailure):
        if error.reason is not None:
            return messages.t("error.fzf.failed", reason=error.reason)
        return messages.t("error.fzf.non_zero_exit", code=error.code)
    if isinstance(error, UnsupportedShellError):
        return messages.t("cli.init.unsupported_shell", shell=error.shell)
    return str(error)


def cmd_list(args):
    """List bookmarks with their type tags."""
    for line in list_bookmarks(bookmark_file(), filter_kind(args)):
        print(line)


def cmd_add(args):
    """Add paths to the bookmark file."""
    path = bookmark_file()
    updated = add_bookmarks(path, args.paths)

    if not args.quiet:
        console.print(f"{args.messages.t('cli.add.added_to')}: {escape(str(path))}", soft_wrap=True)
        console.print(f"{args.messages.t('cli.add.total_bookmarks')}: {len(updated)}")


def cmd_select(args):
    """Interactively select bookmarks."""
    bookmarks = read_bookmarks(bookmark_file())
    selected = select_from_bookmarks(
        bookmarks,
        filter_kind(args),
        SelectOptions(multi=bool(args.multi)),
        selector(),
    )
    for p in selected:
        print(p)


def cmd_query(args):
    """Select a single bookmark with fzf pre-filtered by a pattern."""
    bookmarks = read_bookmarks(bookmark_file())
    selected = select_from_bookmarks(
        bookmarks,
        filter_kind(args),
        SelectOptions(multi=False, query=args.pattern),
        selector(),
    )
    if selected:
        print(selected[0])


def cmd_fix(args):
    """Remove duplicate and missing entries."""
    _, removed_count = cleanup_bookmarks(bookmark_file())
    if not args.quiet:
        console.print(args.messages.t("cli.fix.removed_entries", count=removed_count))


def cmd_clear(args):
    """Delete all bookmarks."""
    clear_bookmarks(bookmark_file())
    if not args.quiet:
        console.print(args.messages.t("cli.clear.deleted"))


def cmd_edit(args):
    """Open the bookmark file in the configured editor."""
    path = bookmark_file()
    command = shlex.split(get_config().get_editor()) + [str(path)]
    logger.debug(f"Launching editor: {command}")
    result = subprocess.run(command)
    if result.returncode != 0:
        logger.warning(f"Editor exited with code {result.returncode}")


def cmd_init(args):
    """Print the shell integration script."""
    alias = None if args.no_cmd else (args.cmd or get_config().default_alias)

    try:
        script = render_init_script(args.shell, alias=alias)
    except UnsupportedShellError as e:
        err_console.print(escape(describe_error(e, args.messages)), style="red", soft_wrap=True)
        sys.exit(1)
    except OSError as e:
        err_console.print(f"Failed to read template file: {escape(str(e))}", style="red", soft_wrap=True)
        sys.exit(1)

    sys.stdout.write(script)


def build_parser(messages: Messages) -> argparse.ArgumentParser:
    """Build the argument parser with localized help text."""
    t = messages.t

    parser = argparse.ArgumentParser(
        prog="bzfm",
        description=t("cli.description"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bzfm add . ~/projects ~/.zshrc
  bzfm list --dirs
  bzfm select --files --multi | xargs -r $EDITOR
  bzfm query dotfiles
  bzfm fix

Shell integration:
  eval "$(bzfm init zsh)"      # ~/.zshrc
  bzfm init fish | source      # ~/.config/fish/config.fish

Configuration:
  Bookmark file: ~/.bzfm.txt or $BZFM_BOOKMARKS_FILE
  Config file: ~/.config/bzfm/config.toml
  Environment: BZFM_BOOKMARKS_FILE, BZFM_FZF_COMMAND, BZFM_LANG
        """
    )

    # Global options
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--file", help="Bookmark file (default: ~/.bzfm.txt)")
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_filter_options(sub):
        group = sub.add_mutually_exclusive_group()
        group.add_argument("--files", action="store_true", help=t("cli.option.files"))
        group.add_argument("--dirs", action="store_true", help=t("cli.option.dirs"))

    # list
    list_parser = subparsers.add_parser("list", help=t("cli.command.list.description"))
    add_filter_options(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # add
    add_parser = subparsers.add_parser("add", help=t("cli.command.add.description"))
    add_parser.add_argument("paths", nargs="+", help=t("cli.option.paths"))
    add_parser.set_defaults(func=cmd_add)

    # select
    select_parser = subparsers.add_parser("select", help=t("cli.command.select.description"))
    add_filter_options(select_parser)
    select_parser.add_argument("--multi", action="store_true", help=t("cli.option.multi"))
    select_parser.set_defaults(func=cmd_select)

    # query
    query_parser = subparsers.add_parser("query", help=t("cli.command.query.description"))
    add_filter_options(query_parser)
    query_parser.add_argument("pattern", help=t("cli.option.pattern"))
    query_parser.set_defaults(func=cmd_query)

    # fix
    fix_parser = subparsers.add_parser("fix", help=t("cli.command.fix.description"))
    fix_parser.set_defaults(func=cmd_fix)

    # clear
    clear_parser = subparsers.add_parser("clear", help=t("cli.command.clear.description"))
    clear_parser.set_defaults(func=cmd_clear)

    # edit
    edit_parser = subparsers.add_parser("edit", help=t("cli.command.edit.description"))
    edit_parser.set_defaults(func=cmd_edit)

    # init
    init_parser = subparsers.add_parser("init", help=t("cli.command.init.description"))
    init_parser.add_argument("shell", help=t("cli.option.shell"))
    init_parser.add_argument("--cmd", help=t("cli.option.cmd"))
    init_parser.add_argument("--no-cmd", action="store_true", help=t("cli.option.no_cmd"))
    init_parser.set_defaults(func=cmd_init)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    messages = Messages(detect_locale(explicit=get_config().lang))
    parser = build_parser(messages)
    args = parser.parse_args(argv)

    config = init_config(
        config_file=Path(args.config) if args.config else None,
        bookmarks_file=args.file,
        log_level="DEBUG" if args.verbose else None,
    )

    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
    )

    # The config file may have switched the language
    args.messages = Messages(detect_locale(explicit=config.lang))

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"Error: {escape(describe_error(e, args.messages))}", style="red", soft_wrap=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
