import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'fsmerger'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_fsmerger_caches
from helpers.fs import make_tree


@pytest.fixture(autouse=True)
def _isolated_fsmerger_env(tmp_path_factory, monkeypatch):
    """Fresh caches, no FSMERGER_* leakage and an empty user config dir per test."""
    for key in list(os.environ):
        if key.startswith("FSMERGER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    reset_fsmerger_caches()
    yield
    reset_fsmerger_caches()


@pytest.fixture
def user_config_dir(monkeypatch, tmp_path) -> Path:
    """The fsmerger user config directory, created and isolated under tmp_path."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    target = xdg / "fsmerger"
    target.mkdir(parents=True)
    return target


@pytest.fixture
def three_roots(tmp_path):
    """Three overlapping roots, lowest priority first.

    base:   a.txt, shared.txt, docs/guide.md
    middle: shared.txt, docs/api.md, only-middle/
    top:    shared.txt, docs/guide.md
    """
    base = make_tree(
        tmp_path / "base",
        {"a.txt": "base-a", "shared.txt": "base", "docs/guide.md": "base guide"},
    )
    middle = make_tree(
        tmp_path / "middle",
        {"shared.txt": "middle", "docs/api.md": "api", "only-middle/": None},
    )
    top = make_tree(
        tmp_path / "top",
        {"shared.txt": "top", "docs/guide.md": "top guide"},
    )
    return [base, middle, top]
