"""Tests for the process executor."""

import asyncio
import os

import pytest

from build_agent.errors import OutputLimitExceededError, ProcessError
from build_agent.process import exec_command, join_command
from build_agent.types import ExecResult

pytestmark = pytest.mark.skipif(os.name == "nt", reason="uses POSIX shell commands")


class TestJoinCommand:
    def test_no_quoting(self):
        assert join_command("git", ["commit", "-m", '"a b"']) == 'git commit -m "a b"'

    def test_no_args(self):
        assert join_command("ls", []) == "ls"


class TestExecCommand:
    async def test_success(self):
        result = await exec_command("echo", ["hello"])
        assert isinstance(result, ExecResult)
        assert result.code == 0
        assert result.error is None
        assert result.stdout.strip() == "hello"
        assert result.ok

    async def test_failure_does_not_raise(self):
        result = await exec_command("false", [])
        assert result.code != 0
        assert isinstance(result.error, ProcessError)
        assert not result.ok

    async def test_exit_code_and_streams_captured(self):
        result = await exec_command("echo out; echo err >&2; exit 3")
        assert result.code == 3
        assert result.error.exit_code == 3
        assert result.stdout.strip() == "out"
        assert result.stderr.strip() == "err"

    async def test_unknown_command(self):
        result = await exec_command("definitely-not-a-real-command-xyz", [])
        assert result.code == 127
        assert result.error is not None

    async def test_signal_termination(self):
        result = await exec_command("kill", ["-9", "$$"])
        assert result.code is None
        assert result.error.signal == 9

    async def test_output_limit(self):
        result = await exec_command("head", ["-c", "50000", "/dev/zero"], max_buffer=1000)
        assert result.code is None
        assert isinstance(result.error, OutputLimitExceededError)
        assert len(result.stdout) == 1000

    async def test_limit_is_combined(self):
        result = await exec_command("printf 123456 && printf 123456 >&2", max_buffer=10)
        assert isinstance(result.error, OutputLimitExceededError)
        assert len(result.stdout) + len(result.stderr) == 10

    async def test_output_limit_with_forked_producer(self):
        # The shell forks `yes` instead of exec-ing it, so killing only the
        # shell would leave `yes` holding the pipes open
        result = await asyncio.wait_for(exec_command("yes; true", max_buffer=1000), timeout=10)
        assert isinstance(result.error, OutputLimitExceededError)
        assert len(result.stdout) == 1000

    async def test_output_limit_with_pipeline(self):
        result = await asyncio.wait_for(
            exec_command("yes | cat; echo done >&2", max_buffer=4096), timeout=10
        )
        assert result.code is None
        assert isinstance(result.error, OutputLimitExceededError)
        assert len(result.stdout) + len(result.stderr) == 4096

    async def test_output_limit_on_stderr_while_stdout_open(self):
        result = await asyncio.wait_for(
            exec_command("(sleep 30; echo late) & yes >&2", max_buffer=2048), timeout=10
        )
        assert isinstance(result.error, OutputLimitExceededError)
        assert len(result.stderr) == 2048
        assert result.stdout == ""

    async def test_uses_given_environment(self):
        env = {"PATH": os.environ["PATH"], "GREETING": "hi there"}
        result = await exec_command("echo", ["$GREETING"], env=env)
        assert result.stdout.strip() == "hi there"

    async def test_result_is_immutable(self):
        result = await exec_command("true", [])
        with pytest.raises(AttributeError):
            result.code = 1
