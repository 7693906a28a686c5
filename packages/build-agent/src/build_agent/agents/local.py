"""Agent for running outside any CI host, e.g. on a developer machine."""

from __future__ import annotations

import logging

from build_agent.agents.base import BuildAgentBase
from build_agent.types import AgentIdentity

logger = logging.getLogger(__name__)


class LocalBuildAgent(BuildAgentBase):
    """Reports through the standard logging module."""

    identity = AgentIdentity(
        agent_name="Local",
        source_dir_variable="AGENT_SOURCE_DIR",
        temp_dir_variable="AGENT_TEMP_DIR",
        cache_dir_variable="AGENT_TOOLS_DIR",
    )

    def debug(self, message: str) -> None:
        logger.debug(message)

    def info(self, message: str) -> None:
        logger.info(message)

    def warn(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)

    def set_succeeded(self, message: str, done: bool = False) -> None:
        logger.info("%s%s", message, " (done)" if done else "")

    def set_failed(self, message: str, done: bool = False) -> None:
        logger.error("%s%s", message, " (done)" if done else "")

    def set_output(self, name: str, value: str) -> None:
        logger.info("%s: %s", name, value)

    def set_variable(self, name: str, value: str) -> None:
        logger.info("%s: %s", name, value)
        self.env[name] = value

    def update_build_number(self, version: str) -> None:
        logger.info("Build number: %s", version)
