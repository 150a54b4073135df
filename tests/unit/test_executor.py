"""Tests for the command executor."""

import sys
from pathlib import Path

import pytest

from c2rust_clean.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    DirectoryNotFoundError,
    MissingRequiredArgumentError,
)
from c2rust_clean.services.executor import execute

PYTHON = sys.executable


class Capture:
    """Collects text forwarded to a sink."""

    def __init__(self) -> None:
        self.chunks: list[str] = []

    def __call__(self, text: str) -> None:
        self.chunks.append(text)

    @property
    def text(self) -> str:
        return "".join(self.chunks)


class TestExecute:
    """Tests for execute."""

    def test_streams_stdout_and_stderr(self, tmp_path: Path) -> None:
        """Test that both streams reach their own sink."""
        out, err = Capture(), Capture()
        script = "import sys; print('cleaning'); print('careful', file=sys.stderr)"

        result = execute(tmp_path, [PYTHON, "-c", script], stdout=out, stderr=err)

        assert result.exit_code == 0
        assert result.duration >= 0
        assert out.text == "cleaning\n"
        assert err.text == "careful\n"

    def test_runs_in_directory(self, tmp_path: Path) -> None:
        """Test that the command's working directory is the given directory."""
        out = Capture()

        execute(tmp_path, [PYTHON, "-c", "import os; print(os.getcwd())"], stdout=out)

        assert Path(out.text.strip()).resolve() == tmp_path.resolve()

    def test_large_output_on_both_streams(self, tmp_path: Path) -> None:
        """Test that filling both pipes at once does not deadlock the child."""
        out, err = Capture(), Capture()
        script = (
            "import sys\n"
            "for i in range(20000):\n"
            "    sys.stdout.write('o' * 50 + '\\n')\n"
            "    sys.stderr.write('e' * 50 + '\\n')\n"
        )

        execute(tmp_path, [PYTHON, "-c", script], stdout=out, stderr=err)

        assert out.text.count("\n") == 20000
        assert err.text.count("\n") == 20000

    def test_non_zero_exit(self, tmp_path: Path) -> None:
        """Test that a failing command raises with its exit code after streaming output."""
        out = Capture()
        script = "import sys; print('partial'); sys.exit(3)"

        with pytest.raises(CommandFailedError) as exc_info:
            execute(tmp_path, [PYTHON, "-c", script], stdout=out)

        assert exc_info.value.exit_code == 3
        assert "exit code 3" in str(exc_info.value)
        assert out.text == "partial\n"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    def test_killed_by_signal(self, tmp_path: Path) -> None:
        """Test that death by signal reports 128 + signal number."""
        script = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"

        with pytest.raises(CommandFailedError) as exc_info:
            execute(tmp_path, [PYTHON, "-c", script], stdout=Capture(), stderr=Capture())

        assert exc_info.value.exit_code == 128 + 15

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory fails before anything is spawned."""
        marker = tmp_path / "spawned"
        script = f"open({str(marker)!r}, 'w').close()"

        with pytest.raises(DirectoryNotFoundError):
            execute(tmp_path / "missing", [PYTHON, "-c", script])

        assert not marker.exists()

    def test_file_is_not_a_directory(self, tmp_path: Path) -> None:
        """Test that a regular file is rejected as a directory."""
        path = tmp_path / "file.txt"
        path.write_text("x")

        with pytest.raises(DirectoryNotFoundError):
            execute(path, [PYTHON, "-c", "pass"])

    def test_unknown_program(self, tmp_path: Path) -> None:
        """Test that an unknown program raises CommandSpawnError."""
        with pytest.raises(CommandSpawnError, match="no-such-clean-tool"):
            execute(tmp_path, ["no-such-clean-tool-xyz", "clean"])

    def test_empty_command(self, tmp_path: Path) -> None:
        """Test that an empty command is rejected."""
        with pytest.raises(MissingRequiredArgumentError):
            execute(tmp_path, [])

    def test_invalid_utf8_is_replaced(self, tmp_path: Path) -> None:
        """Test that undecodable bytes do not break streaming."""
        out = Capture()
        script = "import sys; sys.stdout.buffer.write(b'ok \\xff done\\n')"

        execute(tmp_path, [PYTHON, "-c", script], stdout=out)

        assert out.text == "ok \ufffd done\n"
