"""GitHub Actions agent speaking ``::command::`` workflow commands."""

from __future__ import annotations

import uuid
from collections.abc import MutableMapping
from typing import TextIO

from build_agent.agents.base import AgentConfig, BuildAgentBase, CommandStream, escape_value
from build_agent.types import AgentIdentity

_DATA_ESCAPES = (("%", "%25"), ("\r", "%0D"), ("\n", "%0A"))
_PROPERTY_ESCAPES = _DATA_ESCAPES + ((":", "%3A"), (",", "%2C"))


def format_command(command: str, properties: dict[str, str] | None = None, message: str = "") -> str:
    """Render one workflow command, e.g. ``::warning::message``."""
    line = f"::{command}"
    if properties:
        line += " " + ",".join(
            f"{key}={escape_value(str(val), _PROPERTY_ESCAPES)}" for key, val in properties.items()
        )
    return line + "::" + escape_value(message, _DATA_ESCAPES)


def format_file_entry(name: str, value: str) -> str:
    """Heredoc entry for the GITHUB_OUTPUT / GITHUB_ENV files."""
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: value contains the delimiter {delimiter}")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


class GitHubActionsAgent(BuildAgentBase):
    identity = AgentIdentity(
        agent_name="GitHub Actions",
        source_dir_variable="GITHUB_WORKSPACE",
        temp_dir_variable="RUNNER_TEMP",
        cache_dir_variable="RUNNER_TOOL_CACHE",
    )

    def __init__(
        self,
        env: MutableMapping[str, str] | None = None,
        config: AgentConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(env, config)
        self._out = CommandStream(format_command, stream)
        self.exit_code = 0

    def _append_file_command(self, variable: str, name: str, value: str) -> bool:
        path = self.env.get(variable)
        if not path:
            return False
        with open(path, "a", encoding="utf-8") as f:
            f.write(format_file_entry(name, value))
        return True

    def debug(self, message: str) -> None:
        self._out.command("debug", message=message)

    def info(self, message: str) -> None:
        self._out.write(message)

    def warn(self, message: str) -> None:
        self._out.command("warning", message=message)

    def error(self, message: str) -> None:
        self._out.command("error", message=message)

    def set_succeeded(self, message: str, done: bool = False) -> None:
        # A step succeeds unless it fails; only the message is reported
        if message:
            self.info(message)

    def set_failed(self, message: str, done: bool = False) -> None:
        self.exit_code = 1
        self.error(message)

    def set_output(self, name: str, value: str) -> None:
        if not self._append_file_command("GITHUB_OUTPUT", name, value):
            self._out.command("set-output", {"name": name}, value)

    def set_variable(self, name: str, value: str) -> None:
        self.env[name] = value
        if not self._append_file_command("GITHUB_ENV", name, value):
            self._out.command("set-env", {"name": name}, value)

    def update_build_number(self, version: str) -> None:
        # Run numbers cannot be changed from inside a workflow
        self.debug(f"Build number update not supported: {version}")
