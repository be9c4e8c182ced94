"""Uniform sandbox contract.

Every backend (virtual shell, remote sandbox, custom object) is normalized
to this interface before the rest of the toolkit touches it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..types import CommandResult


@runtime_checkable
class Sandbox(Protocol):
    """Protocol for a backend the bash toolkit can drive.

    ``write_files`` and ``stop`` are optional for custom implementations;
    callers look them up with ``getattr`` before use.
    """

    async def execute_command(self, command: str) -> CommandResult: ...

    async def read_file(self, path: str) -> str: ...

    async def write_file(self, path: str, content: str) -> None: ...
