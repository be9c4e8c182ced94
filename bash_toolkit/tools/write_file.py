"""Write file tool -- create or overwrite files in the sandbox.

Relative paths resolve against the toolkit's working directory.
"""

from __future__ import annotations

import posixpath
from typing import Any

from pydantic import BaseModel, Field

from ..sandbox.base import Sandbox
from .tool import Tool


class WriteFileInput(BaseModel):
    """Input schema for the write_file tool."""

    path: str = Field(description="Path to the file to write (relative to the working directory)")
    content: str = Field(description="Content to write to the file")


def create_write_file_tool(sandbox: Sandbox, cwd: str) -> Tool:
    """Create the write_file tool.

    Args:
        sandbox: The normalized sandbox to write to.
        cwd: Working directory relative paths resolve against.

    Returns:
        A Tool instance for write_file.
    """

    async def handler(input: WriteFileInput) -> dict[str, Any]:
        resolved = posixpath.join(cwd, input.path)
        await sandbox.write_file(resolved, input.content)
        return {"success": True, "path": resolved}

    return Tool(
        id="write_file",
        description=(
            "Write content to a file in the sandbox. Creates the file if it does not exist, "
            "or overwrites it if it does. Relative paths are resolved against the working "
            "directory."
        ),
        input_schema=WriteFileInput,
        func=handler,
    )
