"""Shared fixtures for build agent tests."""

import os

import pytest

from build_agent.agents import AgentConfig, LocalBuildAgent


def _make_executable(path, body="#!/bin/sh\necho ok\n"):
    path.write_text(body)
    path.chmod(0o755)
    return path


@pytest.fixture
def make_executable():
    """Write a shell script and mark it executable."""
    return _make_executable


@pytest.fixture
def env():
    """Isolated environment store that still lets the shell find system tools."""
    return {"PATH": os.environ.get("PATH", "/usr/bin:/bin")}


@pytest.fixture
def config():
    return AgentConfig(remove_retry_delay=0)


@pytest.fixture
def agent(env, config):
    return LocalBuildAgent(env=env, config=config)
