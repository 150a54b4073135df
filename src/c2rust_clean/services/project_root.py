"""Project root detection.

The root is found by, in order:

1. ``C2RUST_PROJECT_ROOT``, when it names an existing directory;
2. the closest ancestor of the current directory (inclusive) holding a marker;
3. the current directory itself.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from c2rust_clean.logging_config import get_logger
from c2rust_clean.models.config import CONFIG_DIR_NAME
from c2rust_clean.services.config_loader import PROJECT_ROOT_ENV

logger = get_logger("c2rust_clean.services.project_root")


@dataclass(frozen=True)
class Marker:
    """A file or directory name that identifies a project root."""

    name: str
    directory_only: bool = False


# Checked in this order at every level of the walk
MARKERS: tuple[Marker, ...] = (
    Marker(CONFIG_DIR_NAME, directory_only=True),
    Marker(".git"),  # a file inside git worktrees
    Marker("Cargo.toml"),
    Marker("Makefile"),
    Marker("CMakeLists.txt"),
    Marker("configure"),
    Marker("configure.ac"),
)


class FileSystem(Protocol):
    """The filesystem queries the resolver needs."""

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def parent(self, path: Path) -> Path | None: ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def parent(self, path: Path) -> Path | None:
        parent = path.parent
        return None if parent == path else parent


LOCAL_FS = LocalFileSystem()


def find_marker(directory: Path, fs: FileSystem = LOCAL_FS) -> Marker | None:
    """Return the first marker present in `directory`, if any."""
    for marker in MARKERS:
        candidate = directory / marker.name
        if marker.directory_only:
            if fs.is_dir(candidate):
                return marker
        elif fs.exists(candidate):
            return marker
    return None


def search_upward(start: Path, fs: FileSystem = LOCAL_FS) -> Path | None:
    """Walk from `start` towards the filesystem root looking for a marker.

    Returns:
        The closest directory holding a marker, or None if there is none
    """
    current: Path | None = start
    while current is not None:
        marker = find_marker(current, fs)
        if marker is not None:
            logger.debug(f"Found marker '{marker.name}' at: {current}")
            return current
        current = fs.parent(current)
    return None


def resolve_root(
    current_dir: Path,
    env_root: str | None = None,
    fs: FileSystem = LOCAL_FS,
) -> Path:
    """Determine the project root for `current_dir`.

    Args:
        current_dir: Absolute path of the directory the tool was started in
        env_root: Value of the project root override, if set
        fs: Filesystem to probe

    Returns:
        The project root. Never raises; falls back to `current_dir`.
    """
    if env_root:
        override = Path(env_root)
        if not override.is_absolute():
            override = current_dir / override
        if fs.is_dir(override):
            logger.debug(f"Using {PROJECT_ROOT_ENV}: {override}")
            return override
        logger.warning(
            f"{PROJECT_ROOT_ENV} does not point to a directory: {override}, "
            "falling back to search"
        )

    found = search_upward(current_dir, fs)
    if found is not None:
        return found

    logger.debug("No project marker found, using current directory as root")
    return current_dir


def relative_dir(path: Path, root: Path) -> str:
    """Express `path` relative to `root`.

    Returns "." for the root itself and the absolute path when `path` lies
    outside the root.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    rel_str = relative.as_posix()
    return rel_str if rel_str not in ("", ".") else "."
