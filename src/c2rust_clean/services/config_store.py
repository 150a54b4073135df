"""Config store adapter over the external c2rust-config tool."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from c2rust_clean.exceptions import ConfigIOError, DependencyMissingError
from c2rust_clean.logging_config import get_logger, log_subprocess_result
from c2rust_clean.models.config import DEFAULT_CONFIG_TOOL

logger = get_logger("c2rust_clean.services.config_store")

KEY_CLEAN_DIR = "clean.dir"
KEY_CLEAN_CMD = "clean"

# stderr fragments c2rust-config uses when a key has no value
_KEY_ABSENT_MARKERS = ("not found", "no such key", "not set")


class ConfigStore(Protocol):
    """Key-value settings scoped by feature namespace."""

    def get(self, feature: str, key: str) -> str | None: ...

    def set(self, feature: str, key: str, value: str) -> None: ...


@dataclass
class C2RustConfigStore:
    """ConfigStore that shells out to `c2rust-config config --make`."""

    project_root: Path
    tool: str = DEFAULT_CONFIG_TOOL

    def check_dependencies(self) -> list[str]:
        """Check that the config tool runs and return list of missing ones."""
        try:
            subprocess.run(
                [self.tool, "--help"],
                capture_output=True,
                check=True,
            )
        except (subprocess.CalledProcessError, OSError):
            return [self.tool]
        return []

    def ensure_dependencies(self) -> None:
        """Ensure the config tool is installed."""
        missing = self.check_dependencies()
        if missing:
            raise DependencyMissingError(missing)

    def _run(self, feature: str, *args: str) -> subprocess.CompletedProcess[str]:
        cmd = [self.tool, "config", "--make", "--feature", feature, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
                cwd=self.project_root,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise DependencyMissingError([self.tool]) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError(f"Failed to execute {self.tool}: {e}") from e

        log_subprocess_result(
            logger,
            cmd,
            result.returncode,
            result.stdout,
            result.stderr,
            success=result.returncode == 0,
        )
        return result

    def get(self, feature: str, key: str) -> str | None:
        """Read `key` for `feature`.

        Returns:
            The stored value, or None when the key has no value

        Raises:
            DependencyMissingError: If the config tool cannot be run
            ConfigIOError: If the config tool fails for any other reason
        """
        result = self._run(feature, "--get", key)
        if result.returncode != 0:
            stderr = _failure_text(result)
            if any(marker in stderr.lower() for marker in _KEY_ABSENT_MARKERS):
                logger.debug(f"No stored value for {key} (feature {feature})")
                return None
            raise ConfigIOError(f"Failed to read {key}: {stderr}")

        value = (result.stdout or "").rstrip("\r\n")
        return value or None

    def set(self, feature: str, key: str, value: str) -> None:
        """Write `key` for `feature`.

        Raises:
            DependencyMissingError: If the config tool cannot be run
            ConfigIOError: If the config tool rejects the write
        """
        result = self._run(feature, "--set", key, value)
        if result.returncode != 0:
            raise ConfigIOError(f"Failed to save {key}: {_failure_text(result)}")
        logger.info(f"Saved {key}={value!r} (feature {feature})")


def _failure_text(result: subprocess.CompletedProcess[str]) -> str:
    stderr = (result.stderr or "").strip()
    return stderr or f"exit code {result.returncode}"


@dataclass
class InMemoryConfigStore:
    """ConfigStore held in a dict; used by tests."""

    data: dict[str, dict[str, str]] = field(default_factory=dict)

    def get(self, feature: str, key: str) -> str | None:
        return self.data.get(feature, {}).get(key)

    def set(self, feature: str, key: str, value: str) -> None:
        self.data.setdefault(feature, {})[key] = value
