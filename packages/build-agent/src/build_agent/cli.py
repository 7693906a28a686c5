"""CLI entry point for the build agent."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from build_agent.agents import AGENT_NAMES, BuildAgentBase, create_agent
from build_agent.errors import BuildAgentError


def _fail(agent: BuildAgentBase, err: Exception) -> None:
    agent.set_failed(str(err), done=True)
    sys.exit(1)


@click.group()
@click.option(
    "--agent",
    "agent_name",
    type=click.Choice(AGENT_NAMES),
    default=None,
    help="CI host to act as (detected from the environment by default)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging for the local agent")
@click.pass_context
def main(ctx: click.Context, agent_name: str | None, verbose: bool):
    """Locate tools, manage the tool cache and run commands as a CI build agent."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    ctx.obj = create_agent(agent_name)


@main.command()
@click.pass_obj
def info(agent: BuildAgentBase):
    """Show the agent and its well-known directories."""
    click.echo(f"Agent: {agent.agent_name}")
    click.echo(f"Source: {agent.source_dir}")
    click.echo(f"Temp: {agent.temp_dir}")
    click.echo(f"Cache: {agent.cache_dir}")


@main.command()
@click.argument("tool")
@click.pass_obj
def which(agent: BuildAgentBase, tool: str):
    """Print the absolute path of TOOL found on PATH."""
    try:
        click.echo(asyncio.run(agent.which(tool)))
    except BuildAgentError as e:
        _fail(agent, e)


@main.command("find-tool")
@click.argument("name")
@click.argument("version")
@click.pass_obj
def find_tool(agent: BuildAgentBase, name: str, version: str):
    """Print the cached directory of NAME at exactly VERSION."""
    try:
        path = asyncio.run(agent.find_local_tool(name, version))
    except (BuildAgentError, OSError) as e:
        _fail(agent, e)
        return
    if path is None:
        click.echo(f"{name}@{version} is not cached", err=True)
        sys.exit(1)
    click.echo(path)


@main.command("cache-tool")
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("name")
@click.argument("version")
@click.pass_obj
def cache_tool(agent: BuildAgentBase, source_dir: str, name: str, version: str):
    """Copy SOURCE_DIR into the tool cache as NAME at VERSION."""
    try:
        path = asyncio.run(agent.cache_tool_directory(source_dir, name, version))
    except (BuildAgentError, OSError) as e:
        _fail(agent, e)
        return
    if not path:
        click.echo("Tool cache directory is not configured", err=True)
        sys.exit(1)
    click.echo(path)


@main.command("exec", context_settings={"ignore_unknown_options": True})
@click.argument("command")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def exec_cmd(agent: BuildAgentBase, command: str, args: tuple[str, ...]):
    """Run COMMAND with ARGS through the shell and relay its output."""
    result = asyncio.run(agent.exec(command, list(args)))
    if result.stdout:
        click.echo(result.stdout, nl=False)
    if result.stderr:
        click.echo(result.stderr, nl=False, err=True)
    if result.error is not None:
        agent.set_failed(str(result.error), done=True)
        sys.exit(result.code or 1)


if __name__ == "__main__":
    main()
