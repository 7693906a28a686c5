"""Azure Pipelines agent speaking ``##vso[...]`` logging commands."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import TextIO

from build_agent.agents.base import AgentConfig, BuildAgentBase, CommandStream, escape_value
from build_agent.types import AgentIdentity

_DATA_ESCAPES = (("%", "%AZP25"), ("\r", "%0D"), ("\n", "%0A"))
_PROPERTY_ESCAPES = _DATA_ESCAPES + ((";", "%3B"), ("]", "%5D"))


def format_command(command: str, properties: dict[str, str] | None = None, message: str = "") -> str:
    """Render one logging command, e.g. ``##vso[task.debug]message``."""
    line = f"##vso[{command}"
    if properties:
        line += " " + ";".join(
            f"{key}={escape_value(str(val), _PROPERTY_ESCAPES)}" for key, val in properties.items()
        )
    return line + "]" + escape_value(message, _DATA_ESCAPES)


class AzurePipelinesAgent(BuildAgentBase):
    identity = AgentIdentity(
        agent_name="Azure Pipelines",
        source_dir_variable="BUILD_SOURCESDIRECTORY",
        temp_dir_variable="AGENT_TEMPDIRECTORY",
        cache_dir_variable="AGENT_TOOLSDIRECTORY",
    )

    def __init__(
        self,
        env: MutableMapping[str, str] | None = None,
        config: AgentConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(env, config)
        self._out = CommandStream(format_command, stream)

    def debug(self, message: str) -> None:
        self._out.command("task.debug", message=message)

    def info(self, message: str) -> None:
        self._out.write(message)

    def warn(self, message: str) -> None:
        self._out.command("task.logissue", {"type": "warning"}, message)

    def error(self, message: str) -> None:
        self._out.command("task.logissue", {"type": "error"}, message)

    def _complete(self, result: str, message: str, done: bool) -> None:
        properties = {"result": result}
        if done:
            properties["done"] = "true"
        self._out.command("task.complete", properties, message)

    def set_succeeded(self, message: str, done: bool = False) -> None:
        self._complete("Succeeded", message, done)

    def set_failed(self, message: str, done: bool = False) -> None:
        self.error(message)
        self._complete("Failed", message, done)

    def set_output(self, name: str, value: str) -> None:
        self._out.command("task.setvariable", {"variable": name, "isOutput": "true"}, value)

    def set_variable(self, name: str, value: str) -> None:
        # The agent exposes pipeline variables to later steps as NAME_WITH_UNDERSCORES
        self.env[name.replace(".", "_").upper()] = value
        self._out.command("task.setvariable", {"variable": name}, value)

    def update_build_number(self, version: str) -> None:
        self._out.command("build.updatebuildnumber", message=version)
