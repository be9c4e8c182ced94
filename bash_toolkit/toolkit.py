"""Bash toolkit factory.

Creates a bash tool (plus read_file/write_file) over a single sandbox
backend, with a description generated from the tools discovered on it.

Example::

    from bash_toolkit import BashToolkitConfig, create_bash_toolkit

    async with await create_bash_toolkit(
        BashToolkitConfig(files={"src/index.ts": "export const x = 1;"})
    ) as toolkit:
        result = await toolkit.bash.run({"command": "ls -la"})
"""

from __future__ import annotations

import asyncio
import logging
import posixpath
from typing import Any

from .discovery import DiscoveredTools, discover_available_tools
from .files import load_files
from .prompt import resolve_tool_prompt
from .sandbox.base import Sandbox
from .sandbox.detect import BackendKind, wrap_sandbox
from .sandbox.docker import create_docker_shell
from .tools.bash import create_bash_tool
from .tools.read_file import create_read_file_tool
from .tools.tool import Tool
from .tools.write_file import create_write_file_tool
from .types import BashToolkitConfig, FileEntry, SandboxProviderOptions
from .utils import maybe_await

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "/workspace"
REMOTE_SANDBOX_DESTINATION = "/vercel/sandbox/workspace"


class BashToolkit:
    """Tools bound to one sandbox, plus the metadata used to describe them.

    Use as an async context manager to stop a sandbox the toolkit created
    itself on exit. A sandbox supplied by the caller is never stopped
    implicitly.
    """

    def __init__(
        self,
        bash: Tool,
        read_file: Tool,
        write_file: Tool,
        sandbox: Sandbox,
        backend_kind: BackendKind,
        destination: str,
        discovered_tools: DiscoveredTools,
        owns_sandbox: bool = False,
    ) -> None:
        self.bash = bash
        self.read_file = read_file
        self.write_file = write_file
        self.sandbox = sandbox
        self.backend_kind = backend_kind
        self.destination = destination
        self.discovered_tools = discovered_tools
        self._owns_sandbox = owns_sandbox

    @property
    def tools(self) -> dict[str, Tool]:
        return {"bash": self.bash, "read_file": self.read_file, "write_file": self.write_file}

    @property
    def description(self) -> str:
        return self.bash.description

    @property
    def owns_sandbox(self) -> bool:
        return self._owns_sandbox

    async def stop(self) -> None:
        """Stop the sandbox, if it supports teardown."""
        await _stop_sandbox(self.sandbox)

    async def __aenter__(self) -> BashToolkit:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_sandbox:
            await self.stop()


async def _stop_sandbox(sandbox: Any) -> None:
    stop = getattr(sandbox, "stop", None)
    if callable(stop):
        await maybe_await(stop())


async def _write_initial_files(sandbox: Sandbox, files: dict[str, str]) -> None:
    """Write files in one batch when the sandbox supports it."""
    if not files:
        return

    write_files = getattr(sandbox, "write_files", None)
    if callable(write_files):
        await maybe_await(
            write_files([FileEntry(path=path, content=content) for path, content in files.items()])
        )
        return

    for path, content in files.items():
        await maybe_await(sandbox.write_file(path, content))


async def _create_default_backend(config: BashToolkitConfig, destination: str) -> Any:
    options = SandboxProviderOptions(cwd=destination)
    if config.sandbox_provider is not None:
        return await config.sandbox_provider(options)
    return await create_docker_shell(options, config.docker)


async def create_bash_toolkit(config: BashToolkitConfig | None = None) -> BashToolkit:
    """Create a bash toolkit for AI agents.

    Loads the initial files, wraps or creates the sandbox, then writes the
    files and discovers available tools concurrently before building the
    tools.

    Args:
        config: Optional toolkit configuration.

    Raises:
        ConstructionError: If no sandbox is supplied and the default one cannot be created.
    """
    config = config or BashToolkitConfig()

    supplied = config.sandbox
    default_destination = DEFAULT_DESTINATION
    if supplied is not None:
        sandbox, kind = wrap_sandbox(supplied)
        if kind is BackendKind.REMOTE_SANDBOX:
            default_destination = REMOTE_SANDBOX_DESTINATION
    destination = config.destination or default_destination

    loaded = load_files(config.files, config.upload_directory)
    files_with_destination = {
        posixpath.join(destination, relative): content for relative, content in loaded.items()
    }

    owns_sandbox = supplied is None
    if owns_sandbox:
        sandbox, kind = wrap_sandbox(await _create_default_backend(config, destination))

    virtual_shell = kind is BackendKind.VIRTUAL_SHELL
    filenames = list(loaded)

    setup = (
        asyncio.ensure_future(_write_initial_files(sandbox, files_with_destination)),
        asyncio.ensure_future(discover_available_tools(sandbox, virtual_shell=virtual_shell)),
    )
    try:
        _, discovered = await asyncio.gather(*setup)
    except BaseException:
        # The sibling task must finish before the sandbox goes away.
        for task in setup:
            task.cancel()
        await asyncio.gather(*setup, return_exceptions=True)
        if owns_sandbox:
            await _stop_sandbox(sandbox)
        raise

    prompt_options = config.prompt_options
    tool_prompt = resolve_tool_prompt(
        prompt_options.tool_prompt if prompt_options else None,
        discovered,
        filenames,
        virtual_shell,
    )
    logger.debug(
        "Created bash toolkit on %s sandbox at %s with %d files",
        kind.value,
        destination,
        len(filenames),
    )

    return BashToolkit(
        bash=create_bash_tool(
            sandbox,
            destination,
            files=filenames,
            tool_prompt=tool_prompt,
            extra_instructions=config.extra_instructions,
            max_output_length=config.max_output_length,
            on_before_bash_call=config.on_before_bash_call,
            on_after_bash_call=config.on_after_bash_call,
        ),
        read_file=create_read_file_tool(sandbox, destination),
        write_file=create_write_file_tool(sandbox, destination),
        sandbox=sandbox,
        backend_kind=kind,
        destination=destination,
        discovered_tools=discovered,
        owns_sandbox=owns_sandbox,
    )
