"""Error hierarchy for build agents."""

from __future__ import annotations


class BuildAgentError(Exception):
    """Base error for all library errors."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class MissingRequiredInputError(BuildAgentError):
    """A required input resolved to an empty value."""

    def __init__(self, name: str):
        super().__init__(f"Input required and not supplied: {name}")
        self.name = name


class InvalidParameterError(BuildAgentError):
    """A required argument was empty or not recognised."""

    def __init__(self, parameter: str, message: str | None = None):
        super().__init__(message or f"{parameter} is a required parameter")
        self.parameter = parameter


class ExecutableNotFoundError(BuildAgentError):
    """No directory on PATH holds the requested executable."""

    def __init__(self, tool: str):
        super().__init__(f"Unable to locate executable file: {tool}")
        self.tool = tool


# Result-only errors: stored in ExecResult.error, never raised by the executor

class ProcessError(BuildAgentError):
    def __init__(
        self,
        message: str,
        *,
        command: str,
        exit_code: int | None = None,
        signal: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.command = command
        self.exit_code = exit_code
        self.signal = signal


class OutputLimitExceededError(ProcessError):
    def __init__(self, *, command: str, limit: int):
        super().__init__(
            f"Combined stdout/stderr exceeded {limit} bytes: {command}",
            command=command,
        )
        self.limit = limit
