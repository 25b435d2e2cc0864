import shutil
import subprocess

from pathlib import Path
from typing import Optional

import pytest
from hypothesis import HealthCheck, settings

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile(
    "garchetype-tests",
    database=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("garchetype-tests")

GIT = shutil.which("git")

requires_git = pytest.mark.skipif(GIT is None, reason="git executable not available")

_GIT_FLAGS = [
    "-c", "user.name=Garchetype Tests",
    "-c", "user.email=tests@example.com",
    "-c", "commit.gpgsign=false",
    "-c", "tag.gpgsign=false",
    "-c", "init.defaultBranch=main",
]


@pytest.fixture(autouse=True)
def _isolate_git(monkeypatch, tmp_path):
    """Keep git from discovering repositories or config outside tmp_path."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    for name in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(name, raising=False)


def git(repo: Path, *args: str) -> str:
    """Run git with a fixed identity for tests and return stripped stdout."""
    result = subprocess.run(
        [GIT or "git", *_GIT_FLAGS, *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: Optional[str] = None) -> str:
    """Write a file, commit it and return the new HEAD hash."""
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message or f"add {name}")
    return git(repo, "rev-parse", "HEAD")


def init_repo(path: Path, files: Optional[dict] = None) -> Path:
    """Create a git repository on branch main with an initial commit."""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    for name, content in (files or {"README.md": "# test\n"}).items():
        commit_file(path, name, content)
    return path


def write_archetype(
    source_dir: Path,
    name: str = "hello-world",
    transformations: Optional[dict] = None,
    files: Optional[dict] = None,
    archetypes_folder: str = "archetypes",
) -> Path:
    """Lay out an archetype folder under ``source_dir/archetypes``."""
    archetype_dir = source_dir / archetypes_folder / name
    archetype_dir.mkdir(parents=True, exist_ok=True)
    for tname, content in (transformations or {"default": "inputs: []\n"}).items():
        (archetype_dir / f"transformations-{tname}.yaml").write_text(content, encoding="utf-8")
    for rel, content in (files or {}).items():
        target = archetype_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return archetype_dir
