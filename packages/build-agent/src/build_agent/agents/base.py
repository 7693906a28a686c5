"""Build agent protocol and the shared base every host agent extends."""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Protocol, TextIO, runtime_checkable

from build_agent import fs
from build_agent.cache import ToolCache
from build_agent.errors import ExecutableNotFoundError, MissingRequiredInputError
from build_agent.locator import DEFAULT_PATH_EXT, look_path, path_variable_name
from build_agent.process import DEFAULT_MAX_BUFFER, exec_command
from build_agent.types import AgentIdentity, ExecResult
from build_agent.variables import (
    expand_references,
    input_key,
    input_variable_name,
    parse_bool,
    split_delimited,
)


@runtime_checkable
class BuildAgent(Protocol):
    """Interface shared by all CI host agents."""

    agent_name: str
    source_dir_variable: str
    temp_dir_variable: str
    cache_dir_variable: str

    @property
    def source_dir(self) -> str: ...

    @property
    def temp_dir(self) -> str: ...

    @property
    def cache_dir(self) -> str: ...

    def add_path(self, input_path: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    async def exec(self, command: str, args: list[str]) -> ExecResult: ...

    async def cache_tool_directory(self, source_dir: str, tool: str, version: str) -> str: ...

    async def find_local_tool(self, tool_name: str, version_spec: str) -> str | None: ...

    async def directory_exists(self, path: str) -> bool: ...

    async def file_exists(self, path: str) -> bool: ...

    async def remove_directory(self, path: str) -> None: ...

    def get_input(self, name: str, required: bool = False) -> str: ...

    def get_boolean_input(self, name: str, required: bool = False) -> bool: ...

    def get_delimited_input(self, name: str, delimiter: str, required: bool = False) -> list[str]: ...

    def get_list_input(self, name: str, required: bool = False) -> list[str]: ...

    def set_succeeded(self, message: str, done: bool = False) -> None: ...

    def set_failed(self, message: str, done: bool = False) -> None: ...

    def set_output(self, name: str, value: str) -> None: ...

    def get_variable(self, name: str) -> str: ...

    def get_variable_as_path(self, name: str) -> str: ...

    def get_expanded_string(self, pattern: str) -> str: ...

    def set_variable(self, name: str, value: str) -> None: ...

    def update_build_number(self, version: str) -> None: ...

    async def which(self, tool: str, check: bool = False) -> str: ...


@dataclass
class AgentConfig:
    max_buffer: int = DEFAULT_MAX_BUFFER
    path_ext: str = DEFAULT_PATH_EXT
    remove_retries: int = 3
    remove_retry_delay: float = 1.0
    platform: str = field(default_factory=lambda: sys.platform)


EscapeTable = tuple[tuple[str, str], ...]


def escape_value(value: str, table: EscapeTable) -> str:
    for raw, escaped in table:
        value = value.replace(raw, escaped)
    return value


class CommandStream:
    """Writes host commands as lines to a text stream.

    ``format_command(command, properties, message)`` renders one command in
    the host's syntax. Without an explicit stream, the current ``sys.stdout``
    is used at write time.
    """

    def __init__(
        self,
        format_command: Callable[[str, dict[str, str] | None, str], str],
        stream: TextIO | None = None,
    ) -> None:
        self._format = format_command
        self._stream = stream

    def write(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def command(self, command: str, properties: dict[str, str] | None = None, message: str = "") -> None:
        self.write(self._format(command, properties, message))


class BuildAgentBase(ABC):
    """Host-independent behavior.

    Subclasses set ``identity`` and implement the host-native channels:
    ``debug``/``info``/``warn``/``error``, ``set_succeeded``/``set_failed``,
    ``set_output``, ``set_variable`` and ``update_build_number``.

    All variable reads and PATH updates go through ``self.env``, which is
    ``os.environ`` unless another mapping is injected.
    """

    identity: AgentIdentity

    def __init__(
        self,
        env: MutableMapping[str, str] | None = None,
        config: AgentConfig | None = None,
    ) -> None:
        self.env: MutableMapping[str, str] = os.environ if env is None else env
        self.config = config or AgentConfig()

    # -- identity -----------------------------------------------------------

    @property
    def agent_name(self) -> str:
        return self.identity.agent_name

    @property
    def source_dir_variable(self) -> str:
        return self.identity.source_dir_variable

    @property
    def temp_dir_variable(self) -> str:
        return self.identity.temp_dir_variable

    @property
    def cache_dir_variable(self) -> str:
        return self.identity.cache_dir_variable

    @property
    def source_dir(self) -> str:
        return self.get_variable_as_path(self.source_dir_variable).replace("\\", "/")

    @property
    def temp_dir(self) -> str:
        return self.get_variable_as_path(self.temp_dir_variable)

    @property
    def cache_dir(self) -> str:
        return self.get_variable_as_path(self.cache_dir_variable)

    # -- host-native channels -------------------------------------------------

    @abstractmethod
    def debug(self, message: str) -> None: ...

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def warn(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def set_succeeded(self, message: str, done: bool = False) -> None: ...

    @abstractmethod
    def set_failed(self, message: str, done: bool = False) -> None: ...

    @abstractmethod
    def set_output(self, name: str, value: str) -> None: ...

    @abstractmethod
    def set_variable(self, name: str, value: str) -> None: ...

    @abstractmethod
    def update_build_number(self, version: str) -> None: ...

    # -- PATH -----------------------------------------------------------------

    def add_path(self, input_path: str) -> None:
        """Prepend ``input_path`` to the PATH-equivalent variable."""
        env_name = path_variable_name(self.config.platform)
        delimiter = ";" if env_name == "Path" else ":"
        current = self.env.get(env_name, "")
        new_path = input_path + delimiter + current if current else input_path
        self.debug(f"new Path: {new_path}")
        self.env[env_name] = new_path
        self.env["Path"] = new_path
        self.info(f"Updated PATH: {self.env[env_name]}")

    async def which(self, tool: str, check: bool = False) -> str:
        """Resolve ``tool`` on PATH. ``check`` is reserved and has no effect."""
        self.debug(f"looking for tool '{tool}' in PATH")
        tool_path = look_path(
            tool, self.env, platform=self.config.platform, path_ext=self.config.path_ext
        )
        if tool_path:
            self.debug(f"found tool '{tool}' in PATH: {tool_path}")
            return tool_path
        raise ExecutableNotFoundError(tool)

    # -- variables and inputs -------------------------------------------------

    def get_variable(self, name: str) -> str:
        # Values are logged in full at debug level
        value = (self.env.get(name) or "").strip()
        self.debug(f"getVariable - {name}: {value}")
        return value

    def get_variable_as_path(self, name: str) -> str:
        value = self.get_variable(name)
        if not value:
            return ""
        return os.path.abspath(os.path.normpath(value))

    def get_expanded_string(self, pattern: str) -> str:
        expanded = expand_references(pattern, self.env)
        self.debug(f"getExpandedString - {pattern}: {expanded}")
        return expanded

    def get_input(self, name: str, required: bool = False) -> str:
        value = self.get_variable(input_variable_name(name))
        if required and not value:
            raise MissingRequiredInputError(input_key(name))
        return value

    def get_boolean_input(self, name: str, required: bool = False) -> bool:
        return parse_bool(self.get_input(name, required))

    def get_delimited_input(self, name: str, delimiter: str, required: bool = False) -> list[str]:
        return split_delimited(self.get_input(name, required), delimiter)

    def get_list_input(self, name: str, required: bool = False) -> list[str]:
        return self.get_delimited_input(name, "\n", required)

    # -- filesystem and tool cache --------------------------------------------

    async def directory_exists(self, path: str) -> bool:
        return await fs.directory_exists(path)

    async def file_exists(self, path: str) -> bool:
        return await fs.file_exists(path)

    async def remove_directory(self, path: str) -> None:
        await fs.remove_directory(
            path, retries=self.config.remove_retries, delay=self.config.remove_retry_delay
        )

    def tool_cache(self) -> ToolCache:
        """A ToolCache over the cache root currently configured in ``env``."""
        return ToolCache(
            self.cache_dir,
            self,
            remove_retries=self.config.remove_retries,
            remove_retry_delay=self.config.remove_retry_delay,
        )

    async def cache_tool_directory(self, source_dir: str, tool: str, version: str) -> str:
        return await self.tool_cache().cache_tool_directory(source_dir, tool, version)

    async def find_local_tool(self, tool_name: str, version_spec: str) -> str | None:
        return await self.tool_cache().find_local_tool(tool_name, version_spec)

    # -- processes --------------------------------------------------------------

    async def exec(self, command: str, args: list[str]) -> ExecResult:
        return await exec_command(
            command, args, env=self.env, max_buffer=self.config.max_buffer
        )
