"""Bash tool -- run shell commands in the sandbox.

Each call runs the same linear pipeline: before hook, backend execution,
independent stdout/stderr truncation, after hook. All state is local to
the call, so concurrent calls do not interfere.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from ..hooks import AfterBashCallHook, BeforeBashCallHook, run_after_hook, run_before_hook
from ..output import truncate_output
from ..prompt import build_bash_description
from ..sandbox.base import Sandbox
from ..types import CommandResult
from .tool import Tool


class BashInput(BaseModel):
    """Input schema for the bash tool."""

    command: str = Field(description="The bash command to execute")


async def execute_bash_command(
    sandbox: Sandbox,
    command: str,
    max_output_length: int | None = None,
    on_before_bash_call: BeforeBashCallHook | None = None,
    on_after_bash_call: AfterBashCallHook | None = None,
) -> CommandResult:
    """Run one command through the hook and truncation pipeline.

    Args:
        sandbox: The normalized sandbox.
        command: Command requested by the agent.
        max_output_length: Per-stream character cap (default: 30,000).
        on_before_bash_call: Optional hook that may replace the command.
        on_after_bash_call: Optional hook that may replace the result.

    Returns:
        The final command result.
    """
    command = await run_before_hook(on_before_bash_call, command)

    raw = CommandResult.from_raw(await sandbox.execute_command(command))
    stdout, _ = truncate_output(raw.stdout, max_output_length, "stdout")
    stderr, _ = truncate_output(raw.stderr, max_output_length, "stderr")
    result = CommandResult(stdout=stdout, stderr=stderr, exit_code=raw.exit_code)

    return await run_after_hook(on_after_bash_call, command, result)


def create_bash_tool(
    sandbox: Sandbox,
    cwd: str,
    files: Sequence[str] = (),
    tool_prompt: str = "",
    extra_instructions: str | None = None,
    max_output_length: int | None = None,
    on_before_bash_call: BeforeBashCallHook | None = None,
    on_after_bash_call: AfterBashCallHook | None = None,
) -> Tool:
    """Create the bash tool.

    The description is built once here and stays fixed for the tool's
    lifetime.

    Args:
        sandbox: The normalized sandbox commands run in.
        cwd: Working directory shown in the description.
        files: File manifest shown in the description.
        tool_prompt: Rendered tools section for the description.
        extra_instructions: Free text appended to the description.
        max_output_length: Per-stream character cap (default: 30,000).
        on_before_bash_call: Optional hook that may replace the command.
        on_after_bash_call: Optional hook that may replace the result.

    Returns:
        A Tool instance for bash.
    """

    async def handler(input: BashInput) -> dict[str, Any]:
        result = await execute_bash_command(
            sandbox,
            input.command,
            max_output_length=max_output_length,
            on_before_bash_call=on_before_bash_call,
            on_after_bash_call=on_after_bash_call,
        )
        return result.model_dump()

    return Tool(
        id="bash",
        description=build_bash_description(cwd, files, tool_prompt, extra_instructions),
        input_schema=BashInput,
        func=handler,
    )
