"""Shared test fixtures for c2rust-clean tests."""

import json
import shutil
import stat
import subprocess
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import pytest

from c2rust_clean.logging_config import reset_logging
from c2rust_clean.models.config import Config, set_config
from c2rust_clean.services.config_store import InMemoryConfigStore

FAKE_CONFIG_TOOL = """\
#!{python}
import json
import os
import sys
from pathlib import Path

args = sys.argv[1:]
log = os.environ.get("FAKE_C2RUST_CONFIG_LOG")
if log:
    with open(log, "a", encoding="utf-8") as f:
        f.write(" ".join(args) + "\\n")

if args[:1] == ["--help"]:
    sys.exit(0)
if {fail_config}:
    print("permission denied: config store is read-only", file=sys.stderr)
    sys.exit(3)

store = Path.cwd() / ".c2rust" / "config.json"
data = json.loads(store.read_text(encoding="utf-8")) if store.exists() else {{}}
feature = args[args.index("--feature") + 1] if "--feature" in args else "default"
section = data.setdefault(feature, {{}})

if "--get" in args:
    key = args[args.index("--get") + 1]
    if key not in section:
        print(f"key not found: {{key}}", file=sys.stderr)
        sys.exit(1)
    print(section[key])
elif "--set" in args:
    i = args.index("--set")
    section[args[i + 1]] = args[i + 2]
    store.parent.mkdir(parents=True, exist_ok=True)
    store.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
else:
    print("unsupported arguments", file=sys.stderr)
    sys.exit(2)
"""

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@dataclass
class FakeConfigTool:
    """A c2rust-config stand-in that keeps settings in <root>/.c2rust/config.json."""

    path: Path
    log_file: Path

    def calls(self) -> list[str]:
        """Return the argument lines the tool was invoked with."""
        if not self.log_file.exists():
            return []
        return self.log_file.read_text(encoding="utf-8").splitlines()

    @staticmethod
    def stored(root: Path) -> dict[str, dict[str, str]]:
        """Return everything saved under `root`."""
        store = root / ".c2rust" / "config.json"
        if not store.exists():
            return {}
        return json.loads(store.read_text(encoding="utf-8"))


def _write_tool(path: Path, *, fail_config: bool) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        FAKE_CONFIG_TOOL.format(python=sys.executable, fail_config=fail_config),
        encoding="utf-8",
    )
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep logs out of the home directory and clear c2rust environment overrides."""
    log_dir = tmp_path_factory.mktemp("logs")
    monkeypatch.setenv("C2RUST_CLEAN_LOG_DIR", str(log_dir))
    for var in (
        "C2RUST_PROJECT_ROOT",
        "C2RUST_CONFIG",
        "C2RUST_DISABLE_AUTO_COMMIT",
        "C2RUST_CLEAN_VERBOSE",
        "FAKE_C2RUST_CONFIG_LOG",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    set_config(Config())
    yield
    reset_logging()
    set_config(Config())


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return an empty project directory with no root markers."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def fake_config_tool(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeConfigTool:
    """Install a working fake c2rust-config and point C2RUST_CONFIG at it."""
    tool = _write_tool(tmp_path / "bin" / "c2rust-config", fail_config=False)
    log_file = tmp_path / "c2rust-config.log"
    monkeypatch.setenv("C2RUST_CONFIG", str(tool))
    monkeypatch.setenv("FAKE_C2RUST_CONFIG_LOG", str(log_file))
    return FakeConfigTool(path=tool, log_file=log_file)


@pytest.fixture
def failing_config_tool(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Install a fake c2rust-config that answers --help but rejects every config call."""
    tool = _write_tool(tmp_path / "bin" / "c2rust-config-broken", fail_config=True)
    monkeypatch.setenv("C2RUST_CONFIG", str(tool))
    return tool


@pytest.fixture
def memory_store() -> InMemoryConfigStore:
    """Return an empty in-memory config store."""
    return InMemoryConfigStore()


@dataclass
class FakeFileSystem:
    """In-memory FileSystem for project root resolution tests."""

    dirs: set[Path] = field(default_factory=set)
    files: set[Path] = field(default_factory=set)

    def add_dir(self, path: str | Path) -> Path:
        p = Path(PurePosixPath(path))
        self.dirs.add(p)
        self.dirs.update(p.parents)
        return p

    def add_file(self, path: str | Path) -> Path:
        p = Path(PurePosixPath(path))
        self.files.add(p)
        self.dirs.update(p.parents)
        return p

    def exists(self, path: Path) -> bool:
        return path in self.dirs or path in self.files

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def parent(self, path: Path) -> Path | None:
        parent = path.parent
        return None if parent == path else parent


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Return an empty in-memory filesystem."""
    return FakeFileSystem()


def git(repo: Path, *args: str) -> str:
    """Run git in `repo` with a fixed identity and return stdout."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def config_repo(project_dir: Path) -> Path:
    """Return <project>/.c2rust initialised as a git repository with one commit."""
    config_dir = project_dir / ".c2rust"
    config_dir.mkdir()
    git(config_dir, "init", "-q")
    (config_dir / "README").write_text("c2rust configuration\n", encoding="utf-8")
    git(config_dir, "add", "README")
    git(config_dir, "commit", "-q", "-m", "initial")
    return config_dir


def commit_count(repo: Path) -> int:
    """Return the number of commits reachable from HEAD."""
    return int(git(repo, "rev-list", "--count", "HEAD").strip())
