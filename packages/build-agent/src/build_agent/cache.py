"""Versioned tool directory cache under a host-provided cache root.

Layout: ``<cache_root>/<tool>/<cleaned version>/`` holds a verbatim copy of
the tool directory. Re-caching a version replaces the previous copy.

There is no locking. Two concurrent ``cache_tool_directory`` calls for the
same tool and version race on remove-then-copy and the last writer wins;
callers that need exclusivity must serialize externally.
"""

from __future__ import annotations

import os

from build_agent import fs
from build_agent.errors import InvalidParameterError
from build_agent.types import AgentLogger
from build_agent.versions import cache_key


class ToolCache:
    """Stores and finds tool directories by exact version."""

    def __init__(
        self,
        cache_root: str,
        logger: AgentLogger,
        remove_retries: int = 3,
        remove_retry_delay: float = 1.0,
    ) -> None:
        self.cache_root = cache_root
        self._log = logger
        self._remove_retries = remove_retries
        self._remove_retry_delay = remove_retry_delay

    async def cache_tool_directory(self, source_dir: str, tool: str, version: str) -> str:
        """Copy ``source_dir`` into the cache. Returns "" when no cache root is set."""
        if not tool:
            raise InvalidParameterError("tool")
        if not version:
            raise InvalidParameterError("version")
        if not source_dir:
            raise InvalidParameterError("source_dir")

        if not self.cache_root:
            self._log.debug("cache root not set")
            return ""

        version = cache_key(version)
        dest_path = os.path.join(self.cache_root, tool, version)
        if await fs.directory_exists(dest_path):
            self._log.debug(f"Destination directory {dest_path} already exists, removing")
            await fs.remove_directory(
                dest_path, retries=self._remove_retries, delay=self._remove_retry_delay
            )

        self._log.debug(f"Copying {source_dir} to {dest_path}")
        await fs.copy_directory(source_dir, dest_path)

        self._log.debug(f"Caching {tool}@{version} from {source_dir}")
        return dest_path

    async def find_local_tool(self, tool_name: str, version_spec: str) -> str | None:
        """Exact-version lookup. Version ranges are not resolved here."""
        if not tool_name:
            raise InvalidParameterError("tool_name")
        if not version_spec:
            raise InvalidParameterError("version_spec")

        if not self.cache_root:
            self._log.debug("cache root not set")
            return None

        version = cache_key(version_spec)
        self._log.info(f"Looking for local tool {tool_name}@{version}")
        tool_path = os.path.join(self.cache_root, tool_name, version)
        if not await fs.directory_exists(tool_path):
            self._log.info(f"Directory {tool_path} not found")
            return None

        self._log.info(f"Found tool {tool_name}@{version} at {tool_path}")
        return tool_path
