"""Read file tool -- read file contents from the sandbox.

Relative paths resolve against the toolkit's working directory.
"""

from __future__ import annotations

import posixpath
from typing import Any

from pydantic import BaseModel, Field

from ..sandbox.base import Sandbox
from .tool import Tool


class ReadFileInput(BaseModel):
    """Input schema for the read_file tool."""

    path: str = Field(description="Path to the file to read (relative to the working directory)")


def create_read_file_tool(sandbox: Sandbox, cwd: str) -> Tool:
    """Create the read_file tool.

    Args:
        sandbox: The normalized sandbox to read from.
        cwd: Working directory relative paths resolve against.

    Returns:
        A Tool instance for read_file.
    """

    async def handler(input: ReadFileInput) -> dict[str, Any]:
        resolved = posixpath.join(cwd, input.path)
        content = await sandbox.read_file(resolved)
        return {"content": content, "path": resolved}

    return Tool(
        id="read_file",
        description=(
            "Read the contents of a file from the sandbox. Returns the file content as text. "
            "Relative paths are resolved against the working directory."
        ),
        input_schema=ReadFileInput,
        func=handler,
    )
