"""Auto-commit of configuration changes into the .c2rust git repository."""

import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from c2rust_clean.exceptions import GitCommandError
from c2rust_clean.logging_config import get_logger, log_subprocess_result
from c2rust_clean.models.invocation import CommitOutcome

logger = get_logger("c2rust_clean.services.git")

COMMIT_MESSAGE_PREFIX = "Auto-save configuration changes"
FALLBACK_USER_NAME = "c2rust-clean"
FALLBACK_USER_EMAIL = "c2rust-clean@auto"


def commit_message(now: datetime | None = None) -> str:
    """Build the auto-commit message, stamped with local time."""
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return f"{COMMIT_MESSAGE_PREFIX} - {timestamp}"


@dataclass
class GitService:
    """Best-effort git operations on the configuration directory."""

    git: str = "git"

    def _run(self, repo_dir: Path, *args: str) -> str:
        """Run a git command in `repo_dir` and return its stdout.

        Raises:
            GitCommandError: If git is missing or exits non-zero
        """
        cmd = [self.git, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                cwd=repo_dir,
            )
        except OSError as e:
            raise GitCommandError(f"Failed to run git: {e}") from e

        log_subprocess_result(
            logger,
            cmd,
            result.returncode,
            result.stdout,
            result.stderr,
            success=result.returncode == 0,
        )
        if result.returncode != 0:
            subcommand = next((a for a in args if not a.startswith("-") and "=" not in a), "")
            detail = (result.stderr or result.stdout or "").strip()
            raise GitCommandError(
                f"git {subcommand} failed: {detail or f'exit code {result.returncode}'}"
            )
        return result.stdout

    def is_repository(self, config_dir: Path) -> bool:
        """Check whether `config_dir` holds its own git metadata."""
        exists = (config_dir / ".git").exists()
        logger.debug(f"Git repository in {config_dir}: {exists}")
        return exists

    def has_uncommitted_changes(self, config_dir: Path) -> bool:
        """Check for staged, unstaged, or untracked changes under `config_dir`.

        Raises:
            GitCommandError: If the status query fails
        """
        output = self._run(config_dir, "status", "--porcelain", "--untracked-files=all", "--", ".")
        has_changes = bool(output.strip())
        logger.debug(f"Uncommitted changes in {config_dir}: {has_changes}")
        return has_changes

    def _identity_args(self, config_dir: Path) -> list[str]:
        """Return `-c` overrides when git has no user identity configured."""
        args: list[str] = []
        fallbacks = (("user.name", FALLBACK_USER_NAME), ("user.email", FALLBACK_USER_EMAIL))
        for key, fallback in fallbacks:
            try:
                value = self._run(config_dir, "config", "--get", key).strip()
            except GitCommandError:
                value = ""
            if not value:
                args.extend(["-c", f"{key}={fallback}"])
        return args

    def commit_all(self, config_dir: Path, message: str) -> None:
        """Stage every change under `config_dir` and create one commit.

        Raises:
            GitCommandError: If staging or committing fails
        """
        self._run(config_dir, "add", "-A", "--", ".")
        identity = self._identity_args(config_dir)
        self._run(config_dir, *identity, "commit", "--no-verify", "-m", message)

    def maybe_commit(self, config_dir: Path, enabled: bool = True) -> CommitOutcome:
        """Commit pending changes in `config_dir`, never raising.

        Args:
            config_dir: The .c2rust directory
            enabled: False when auto-commit has been switched off

        Returns:
            COMMITTED, NO_CHANGES, SKIPPED (with reason) or WARNED (with error)
        """
        if not enabled:
            logger.debug("Auto-commit disabled, skipping")
            return CommitOutcome.skipped("auto-commit disabled")

        if not config_dir.is_dir() or not self.is_repository(config_dir):
            logger.debug(f"No git repository in {config_dir}, skipping auto-commit")
            return CommitOutcome.skipped(f"no git repository in {config_dir}")

        try:
            if not self.has_uncommitted_changes(config_dir):
                logger.debug("No uncommitted changes, skipping auto-commit")
                return CommitOutcome.no_changes()

            logger.info(f"Auto-committing changes in {config_dir}")
            message = commit_message()
            self.commit_all(config_dir, message)
        except GitCommandError as e:
            logger.warning(f"Auto-commit failed: {e}")
            return CommitOutcome.warned(str(e))

        logger.info(f"Committed changes with message: {message}")
        return CommitOutcome.committed(message)
