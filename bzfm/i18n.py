"""
User-facing strings in English and Simplified Chinese.

The locale is detected once in ``cli.main`` and a ``Messages`` instance is
handed to the command handlers.
"""
import os
from typing import Dict, Mapping, Optional

EN_US = "en_us"
ZH_CN = "zh_cn"

_EN_US: Dict[str, str] = {
    "cli.description": "Fuzzy bookmark manager for files and directories.",
    "cli.option.files": "Only operate on file bookmarks",
    "cli.option.dirs": "Only operate on directory bookmarks",
    "cli.option.multi": "Allow multiple selection",
    "cli.option.pattern": "Initial query pattern passed to fzf",
    "cli.option.paths": "Paths to add",
    "cli.option.shell": "Target shell: zsh | fish",
    "cli.option.cmd": "Override the shorthand command alias",
    "cli.option.no_cmd": "Do not define any alias function",
    "cli.command.list.description": "List bookmarks",
    "cli.command.add.description": "Add path(s) to bookmarks",
    "cli.command.select.description": "Interactively select bookmark(s) using fzf",
    "cli.command.query.description": "Query bookmark matching a pattern using fzf",
    "cli.command.fix.description": "Remove bookmarks that no longer exist",
    "cli.command.clear.description": "Clear all bookmarks",
    "cli.command.edit.description": "Edit bookmark file using $EDITOR",
    "cli.command.init.description": "Generate shell integration script for zsh / fish",
    "cli.add.added_to": "Added to",
    "cli.add.total_bookmarks": "Total bookmarks",
    "cli.fix.removed_entries": "removed {count} entries",
    "cli.clear.deleted": "bookmarks deleted!",
    "cli.init.unsupported_shell": "Unsupported shell: {shell}. Expected 'zsh' or 'fish'.",
    "error.bookmark_file.create_failed": "Failed to create bookmark file: {path}. Reason: {reason}",
    "error.fzf.failed": "Failed to run fzf: {reason}",
    "error.fzf.non_zero_exit": "fzf exited with non-zero code: {code}",
}

_ZH_CN: Dict[str, str] = {
    "cli.description": "面向文件和目录的模糊书签管理工具。",
    "cli.option.files": "仅操作文件类型书签",
    "cli.option.dirs": "仅操作目录类型书签",
    "cli.option.multi": "允许多选",
    "cli.option.pattern": "作为初始查询传递给 fzf 的模式字符串",
    "cli.option.paths": "要添加的路径",
    "cli.option.shell": "目标 shell: zsh | fish",
    "cli.option.cmd": "自定义快捷命令名称",
    "cli.option.no_cmd": "不定义任何快捷命令",
    "cli.command.list.description": "列出书签",
    "cli.command.add.description": "添加路径到书签",
    "cli.command.select.description": "使用 fzf 交互选择书签",
    "cli.command.query.description": "使用 fzf 根据模式查询书签",
    "cli.command.fix.description": "移除已不存在的书签条目",
    "cli.command.clear.description": "清空所有书签",
    "cli.command.edit.description": "通过 $EDITOR 编辑书签文件",
    "cli.command.init.description": "集成脚本到 zsh / fish",
    "cli.add.added_to": "已添加到",
    "cli.add.total_bookmarks": "当前书签总数",
    "cli.fix.removed_entries": "已移除 {count} 条记录",
    "cli.clear.deleted": "所有书签已删除！",
    "cli.init.unsupported_shell": "不支持的 shell: {shell}。仅支持 'zsh' 或 'fish'。",
    "error.bookmark_file.create_failed": "无法创建书签文件: {path}。原因: {reason}",
    "error.fzf.failed": "执行 fzf 失败: {reason}",
    "error.fzf.non_zero_exit": "fzf 退出码非零: {code}",
}

CATALOGS: Dict[str, Dict[str, str]] = {
    EN_US: _EN_US,
    ZH_CN: _ZH_CN,
}


def detect_locale(environ: Optional[Mapping[str, str]] = None, explicit: Optional[str] = None) -> str:
    """
    Pick a locale.

    An explicit choice (config ``lang`` or BZFM_LANG) wins when a catalog
    exists for it; otherwise ``LANG=zh*`` selects Chinese and everything
    else English.
    """
    if environ is None:
        environ = os.environ

    wanted = (explicit or environ.get("BZFM_LANG") or "").lower()
    if wanted in CATALOGS:
        return wanted

    if environ.get("LANG", "").lower().startswith("zh"):
        return ZH_CN

    return EN_US


class Messages:
    """Message lookup for one locale."""

    def __init__(self, locale: str = EN_US):
        self.locale = locale if locale in CATALOGS else EN_US
        self._catalog = CATALOGS[self.locale]

    def t(self, key: str, **params) -> str:
        """Translate ``key`` and fill ``{name}`` placeholders from ``params``."""
        template = self._catalog.get(key) or _EN_US.get(key) or key
        for name, value in params.items():
            template = template.replace(f"{{{name}}}", str(value))
        return template
