"""
Configuration management for BZFM.

Settings come from dataclass defaults, the user config file
(~/.config/bzfm/config.toml), an optional explicit config file and
BZFM_* environment variables.
"""
import os
import tomli
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field


@dataclass
class BzfmConfig:
    """
    BZFM configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (BZFM_*)
    3. Config file given with --config
    4. User config file (~/.config/bzfm/config.toml)
    5. System defaults
    """

    # Store
    bookmarks_file: Optional[str] = field(default=None)  # None means ~/.bzfm.txt

    # External programs
    fzf_command: str = field(default="fzf")
    editor: Optional[str] = field(default=None)  # Falls back to $EDITOR, then vim

    # Display
    lang: Optional[str] = field(default=None)  # en_us, zh_cn; None detects from $LANG
    default_alias: str = field(default="bz")

    # Advanced
    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "BzfmConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Extra config file applied after the user config

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = cls.user_config_path()
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        if config_file and config_file.exists():
            config._merge(cls._load_toml(config_file))

        config._apply_env_vars()
        config._expand_paths()

        return config

    @staticmethod
    def user_config_path() -> Path:
        return Path.home() / ".config" / "bzfm" / "config.toml"

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with BZFM_ prefix."""
        prefix = "BZFM_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                # Every setting is a string; empty values are ignored
                if hasattr(self, config_key) and value:
                    setattr(self, config_key, value)

    def _expand_paths(self):
        """Expand environment variables in paths; ~ is left to the store."""
        value = self.bookmarks_file
        if isinstance(value, str):
            self.bookmarks_file = os.path.expandvars(value)

    def get_editor(self) -> str:
        """Editor command used by ``bzfm edit``."""
        return self.editor or os.environ.get("EDITOR") or "vim"


# Global configuration instance
_config: Optional[BzfmConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> BzfmConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = BzfmConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> BzfmConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Config file given on the command line
        **kwargs: Other configuration overrides; None values are ignored

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
