"""
Shell integration scripts for ``bzfm init``.

The shell code lives in ``share/init.<shell>``; only the alias block is
generated here.
"""
from pathlib import Path
from typing import Optional

SUPPORTED_SHELLS = ("zsh", "fish")
ALIAS_PLACEHOLDER = "# {ALIAS_BLOCK}"
ALIAS_DISABLED = "# alias disabled by --no-cmd"

TEMPLATE_DIR = Path(__file__).parent / "share"


class UnsupportedShellError(Exception):
    """Raised for an ``init`` target other than zsh or fish."""

    def __init__(self, shell: str):
        self.shell = shell
        super().__init__(f"Unsupported shell: {shell}. Expected 'zsh' or 'fish'.")


def render_alias_block(cmd_name: str, shell: str) -> str:
    """Shorthand function forwarding to bzfm."""
    if shell == "zsh":
        lines = [
            "# bzfm shorthand command",
            f"function {cmd_name}() {{",
            '  bzfm "$@"',
            "}",
            "",
        ]
    elif shell == "fish":
        lines = [
            "# bzfm shorthand command",
            f"function {cmd_name} --wraps bzfm",
            "  bzfm $argv",
            "end",
            "",
        ]
    else:
        raise UnsupportedShellError(shell)
    return "\n".join(lines)


def load_template(shell: str) -> str:
    return (TEMPLATE_DIR / f"init.{shell}").read_text(encoding="utf-8")


def render_init_script(shell: str, alias: Optional[str] = "bz") -> str:
    """
    Build the integration script for ``shell``.

    Args:
        shell: Target shell, case-insensitive
        alias: Name of the shorthand function, or None to skip it

    Returns:
        Script text ready to be evaluated by the shell

    Raises:
        UnsupportedShellError: If the shell is not zsh or fish
    """
    target = shell.lower()
    if target not in SUPPORTED_SHELLS:
        raise UnsupportedShellError(shell)

    block = render_alias_block(alias, target) if alias else ALIAS_DISABLED
    return load_template(target).replace(ALIAS_PLACEHOLDER, block, 1)
