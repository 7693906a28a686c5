"""Run shell commands and capture their output without raising."""

from __future__ import annotations

import asyncio
import os
import signal
from collections.abc import Mapping

from build_agent.errors import OutputLimitExceededError, ProcessError
from build_agent.types import ExecResult

DEFAULT_MAX_BUFFER = 10 * 1024 * 1024  # combined stdout + stderr
_CHUNK_SIZE = 64 * 1024


class _Capture:
    """Collects both streams against one shared byte budget."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.total = 0
        self.exceeded = False
        self.stdout = bytearray()
        self.stderr = bytearray()

    async def drain(
        self,
        stream: asyncio.StreamReader | None,
        sink: bytearray,
        proc: asyncio.subprocess.Process,
    ) -> None:
        if stream is None:
            return
        while not self.exceeded:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                return
            room = self.limit - self.total
            if len(chunk) > room:
                sink.extend(chunk[:max(room, 0)])
                self.total = self.limit
                self.exceeded = True
                _kill_tree(proc)
                return
            sink.extend(chunk)
            self.total += len(chunk)


def _kill_tree(proc: asyncio.subprocess.Process) -> None:
    """Kill the shell and everything it forked, so no process keeps the pipes open."""
    try:
        if hasattr(os, "killpg"):
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except (ProcessLookupError, OSError):
        pass


def join_command(command: str, args: list[str]) -> str:
    """Join without quoting; callers pre-quote arguments that need it."""
    return " ".join([command, *args])


async def exec_command(
    command: str,
    args: list[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    max_buffer: int = DEFAULT_MAX_BUFFER,
) -> ExecResult:
    """Run ``command`` with ``args`` through the platform shell.

    Failures (non-zero exit, spawn errors, signals, output over
    ``max_buffer`` bytes) are reported in the returned ExecResult.
    There is no timeout.
    """
    cmd = join_command(command, args or [])
    try:
        proc = await asyncio.create_subprocess_shell(
            cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=dict(env) if env is not None else None,
            start_new_session=True,
        )
    except OSError as err:
        return ExecResult(
            code=None,
            error=ProcessError(f"Failed to start: {cmd}: {err}", command=cmd, cause=err),
        )

    capture = _Capture(max_buffer)
    await asyncio.gather(
        capture.drain(proc.stdout, capture.stdout, proc),
        capture.drain(proc.stderr, capture.stderr, proc),
    )
    returncode = await proc.wait()

    stdout = capture.stdout.decode(errors="replace")
    stderr = capture.stderr.decode(errors="replace")

    if capture.exceeded:
        return ExecResult(
            code=None,
            error=OutputLimitExceededError(command=cmd, limit=max_buffer),
            stdout=stdout,
            stderr=stderr,
        )
    if returncode == 0:
        return ExecResult(code=0, error=None, stdout=stdout, stderr=stderr)
    if returncode < 0:
        error = ProcessError(
            f"Command terminated by signal {-returncode}: {cmd}",
            command=cmd,
            signal=-returncode,
        )
        return ExecResult(code=None, error=error, stdout=stdout, stderr=stderr)

    error = ProcessError(
        f"Command failed: {cmd}\n{stderr}".rstrip(),
        command=cmd,
        exit_code=returncode,
    )
    return ExecResult(code=returncode, error=error, stdout=stdout, stderr=stderr)
