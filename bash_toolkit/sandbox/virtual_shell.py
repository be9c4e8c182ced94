"""Virtual shell backend.

Adapts a shell object exposing a single ``exec(command)`` method to the
uniform ``Sandbox`` contract. When the shell also exposes a file-system
accessor (``fs.read_file`` / ``fs.write_file``) file operations delegate to
it; otherwise they are synthesized as shell commands (``cat`` for reads,
``mkdir -p`` followed by a heredoc for writes).
"""

from __future__ import annotations

import posixpath
import shlex
from typing import Any, Protocol, runtime_checkable

from ..errors import BackendExecutionError
from ..types import CommandResult, FileEntry
from ..utils import maybe_await

# Heredoc delimiter used for shell-synthesized writes
HEREDOC_DELIMITER = "BASH_TOOL_EOF"


@runtime_checkable
class VirtualShellLike(Protocol):
    """Minimal interface of a virtual shell: one command entry point."""

    async def exec(self, command: str) -> Any: ...


def _file_system(shell: Any) -> Any | None:
    """Return the shell's file-system accessor when it offers read and write."""
    fs = getattr(shell, "fs", None)
    if fs is None:
        return None
    if callable(getattr(fs, "read_file", None)) and callable(getattr(fs, "write_file", None)):
        return fs
    return None


def build_write_command(path: str, content: str) -> str:
    """Build a heredoc command that writes ``content`` to ``path``.

    The quoted delimiter disables expansion inside the body. A trailing
    newline is added when ``content`` lacks one.
    """
    body = content if content.endswith("\n") else content + "\n"
    return f"cat > {shlex.quote(path)} << '{HEREDOC_DELIMITER}'\n{body}{HEREDOC_DELIMITER}"


class VirtualShellSandbox:
    """Uniform ``Sandbox`` over a virtual shell."""

    def __init__(self, shell: VirtualShellLike) -> None:
        self._shell = shell
        self._fs = _file_system(shell)

    @property
    def shell(self) -> VirtualShellLike:
        return self._shell

    async def execute_command(self, command: str) -> CommandResult:
        return CommandResult.from_raw(await maybe_await(self._shell.exec(command)))

    async def read_file(self, path: str) -> str:
        if self._fs is not None:
            return await maybe_await(self._fs.read_file(path))

        result = await self.execute_command(f"cat {shlex.quote(path)}")
        if result.exit_code != 0:
            raise BackendExecutionError(
                f"Failed to read file: {path}",
                path=path,
                stderr=result.stderr,
                exit_code=result.exit_code,
            )
        return result.stdout

    async def write_file(self, path: str, content: str) -> None:
        if self._fs is not None:
            await maybe_await(self._fs.write_file(path, content))
            return

        parent = posixpath.dirname(path)
        if parent:
            mkdir = await self.execute_command(f"mkdir -p {shlex.quote(parent)}")
            if mkdir.exit_code != 0:
                raise BackendExecutionError(
                    f"Failed to create directory: {parent}",
                    path=path,
                    stderr=mkdir.stderr,
                    exit_code=mkdir.exit_code,
                )

        result = await self.execute_command(build_write_command(path, content))
        if result.exit_code != 0:
            raise BackendExecutionError(
                f"Failed to write file: {path}",
                path=path,
                stderr=result.stderr,
                exit_code=result.exit_code,
            )

    async def write_files(self, files: list[FileEntry]) -> None:
        for f in files:
            await self.write_file(f.path, f.content)

    async def stop(self) -> None:
        stop = getattr(self._shell, "stop", None)
        if callable(stop):
            await maybe_await(stop())
