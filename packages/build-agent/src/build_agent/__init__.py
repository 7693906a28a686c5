"""Build agent abstraction over CI hosts."""

from build_agent.types import AgentIdentity, AgentLogger, ExecResult
from build_agent.errors import (
    BuildAgentError,
    ExecutableNotFoundError,
    InvalidParameterError,
    MissingRequiredInputError,
    OutputLimitExceededError,
    ProcessError,
)
from build_agent.cache import ToolCache
from build_agent.locator import look_path
from build_agent.process import exec_command
from build_agent.versions import clean_version
from build_agent.agents import (
    AGENT_NAMES,
    AgentConfig,
    AzurePipelinesAgent,
    BuildAgent,
    BuildAgentBase,
    GitHubActionsAgent,
    LocalBuildAgent,
    create_agent,
    detect_agent_name,
)
