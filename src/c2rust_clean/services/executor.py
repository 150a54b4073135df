"""Run the clean command and stream its output."""

import codecs
import shlex
import subprocess
import sys
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import IO

from c2rust_clean.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    DirectoryNotFoundError,
    MissingRequiredArgumentError,
)
from c2rust_clean.logging_config import get_logger
from c2rust_clean.models.invocation import ExecutionResult

logger = get_logger("c2rust_clean.services.executor")

Sink = Callable[[str], None]

CHUNK_SIZE = 65536


def _stream_sink(stream: IO[str]) -> Sink:
    def write(text: str) -> None:
        stream.write(text)
        stream.flush()

    return write


def _pump(pipe: IO[bytes], sink: Sink) -> None:
    """Forward everything read from `pipe` to `sink` until EOF."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    read = getattr(pipe, "read1", pipe.read)
    try:
        while True:
            data = read(CHUNK_SIZE)
            if not data:
                break
            text = decoder.decode(data)
            if text:
                sink(text)
        tail = decoder.decode(b"", final=True)
        if tail:
            sink(tail)
    finally:
        pipe.close()


def _exit_code(returncode: int) -> int:
    # Negative return codes mean the child died from a signal
    return 128 - returncode if returncode < 0 else returncode


def execute(
    directory: Path,
    command: Sequence[str],
    stdout: Sink | None = None,
    stderr: Sink | None = None,
) -> ExecutionResult:
    """Execute `command` with `directory` as its working directory.

    Both output streams are drained by their own thread and forwarded to the
    sinks as the child produces them.

    Args:
        directory: Working directory for the command
        command: Program and arguments
        stdout: Receives decoded stdout text (defaults to sys.stdout)
        stderr: Receives decoded stderr text (defaults to sys.stderr)

    Returns:
        ExecutionResult with exit code 0 and the wall-clock duration

    Raises:
        DirectoryNotFoundError: If `directory` is not an existing directory
        MissingRequiredArgumentError: If `command` is empty
        CommandSpawnError: If the program cannot be started
        CommandFailedError: If the command exits non-zero
    """
    if not command:
        raise MissingRequiredArgumentError("CLEAN_CMD")
    if not directory.is_dir():
        raise DirectoryNotFoundError(directory)

    stdout_sink = stdout or _stream_sink(sys.stdout)
    stderr_sink = stderr or _stream_sink(sys.stderr)
    command_str = shlex.join(command)

    logger.info(f"Executing: {command_str} (cwd: {directory})")
    start = time.monotonic()
    try:
        proc = subprocess.Popen(
            list(command),
            cwd=directory,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.error(f"Failed to start {command_str}: {e}")
        raise CommandSpawnError(command_str, e.strerror or str(e)) from e

    pumps = [
        threading.Thread(target=_pump, args=(proc.stdout, stdout_sink), daemon=True),
        threading.Thread(target=_pump, args=(proc.stderr, stderr_sink), daemon=True),
    ]
    for pump in pumps:
        pump.start()

    try:
        returncode = proc.wait()
    except KeyboardInterrupt:
        # The child shares our process group and got the interrupt too
        logger.warning(f"Interrupted while running: {command_str}")
        proc.wait()
        raise
    finally:
        for pump in pumps:
            pump.join()

    duration = time.monotonic() - start
    exit_code = _exit_code(returncode)
    logger.info(f"Command finished with exit code {exit_code} in {duration:.2f}s")

    if exit_code != 0:
        raise CommandFailedError(exit_code, command_str)
    return ExecutionResult(exit_code=exit_code, duration=duration)
