import os
import pytest

import bzfm.config


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME at a temp dir and drop BZFM_* settings from the environment."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("LANG", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    for key in list(os.environ):
        if key.startswith("BZFM_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(bzfm.config, "_config", None)
    return home


@pytest.fixture
def store_file(tmp_path):
    """Path of a bookmark file that does not exist yet."""
    return tmp_path / "bookmarks.txt"


@pytest.fixture
def sample_tree(tmp_path):
    """A small tree with a file, a directory and a path that does not exist."""
    root = tmp_path / "tree"
    root.mkdir()
    docs = root / "docs"
    docs.mkdir()
    notes = root / "notes.md"
    notes.write_text("# notes\n", encoding="utf-8")
    return {
        "root": root,
        "dir": str(docs),
        "file": str(notes),
        "missing": str(root / "gone"),
    }
