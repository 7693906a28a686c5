"""Core types shared by every build agent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ExecResult:
    """Outcome of one process invocation. Returned, never raised."""

    code: int | None = 0
    error: Exception | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0 and self.error is None


@dataclass(frozen=True)
class AgentIdentity:
    """Per-host names of the variables backing the well-known directories."""

    agent_name: str
    source_dir_variable: str
    temp_dir_variable: str
    cache_dir_variable: str


class AgentLogger(Protocol):
    """Host-native logging channels."""

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
