"""Concrete build agents, one per supported CI host."""

from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping

from build_agent.agents.azure import AzurePipelinesAgent
from build_agent.agents.base import AgentConfig, BuildAgent, BuildAgentBase
from build_agent.agents.github import GitHubActionsAgent
from build_agent.agents.local import LocalBuildAgent
from build_agent.errors import InvalidParameterError

_AGENTS: dict[str, type[BuildAgentBase]] = {
    "azure": AzurePipelinesAgent,
    "github": GitHubActionsAgent,
    "local": LocalBuildAgent,
}

AGENT_NAMES = tuple(_AGENTS)


def detect_agent_name(env: Mapping[str, str] | None = None) -> str:
    """Pick the agent for the host this process runs on."""
    env = os.environ if env is None else env
    if env.get("TF_BUILD", "").strip().lower() in ("true", "1"):
        return "azure"
    if env.get("GITHUB_ACTIONS", "").strip().lower() == "true":
        return "github"
    return "local"


def create_agent(
    name: str | None = None,
    env: MutableMapping[str, str] | None = None,
    config: AgentConfig | None = None,
) -> BuildAgentBase:
    """Create the agent registered as ``name``, or the detected one."""
    name = name or detect_agent_name(env)
    cls = _AGENTS.get(name.lower())
    if cls is None:
        raise InvalidParameterError(
            "agent", f"Unknown build agent '{name}', expected one of: {', '.join(AGENT_NAMES)}"
        )
    return cls(env=env, config=config)


__all__ = [
    "AGENT_NAMES",
    "AgentConfig",
    "AzurePipelinesAgent",
    "BuildAgent",
    "BuildAgentBase",
    "GitHubActionsAgent",
    "LocalBuildAgent",
    "create_agent",
    "detect_agent_name",
]
