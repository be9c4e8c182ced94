"""Shared pytest configuration and fixtures."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from bash_toolkit.discovery import PROBE_COMMAND

DEFAULT_LISTING = (
    "/usr/bin:\ncat\ngrep\nsed\nawk\nhead\ntail\nsort\ncut\n/usr/local/bin:\njq\nyq"
)


class FakeShell:
    """In-memory virtual shell that records every command it receives.

    Responses are matched by command prefix; anything else succeeds with
    empty output. The discovery probe answers with ``listing``.
    """

    def __init__(self, listing: str = DEFAULT_LISTING, responses=None):
        self.listing = listing
        self.responses = dict(responses or {})
        self.commands: list[str] = []
        self.stopped = False

    async def exec(self, command):
        self.commands.append(command)
        if command == PROBE_COMMAND:
            return {"stdout": self.listing, "stderr": "", "exitCode": 0}
        for prefix, response in self.responses.items():
            if command.startswith(prefix):
                return response
        return {"stdout": "", "stderr": "", "exitCode": 0}

    async def stop(self):
        self.stopped = True

    def non_probe_commands(self) -> list[str]:
        return [c for c in self.commands if c != PROBE_COMMAND]


def make_finished(stdout: str = "", stderr: str = "", exit_code: int = 0):
    """Build a finished remote command whose streams are async methods."""
    return SimpleNamespace(
        exit_code=exit_code,
        stdout=AsyncMock(return_value=stdout),
        stderr=AsyncMock(return_value=stderr),
    )


def make_remote_client(listing: str = DEFAULT_LISTING, sandbox_id: str = "sbx_test123"):
    """Build a remote sandbox client with AsyncMock methods.

    ``run_command`` answers the discovery probe with ``listing`` and any
    other command with empty successful output.
    """

    async def run_command(cmd, args):
        if args == ["-c", PROBE_COMMAND]:
            return make_finished(stdout=listing)
        return make_finished()

    return SimpleNamespace(
        sandbox_id=sandbox_id,
        run_command=AsyncMock(side_effect=run_command),
        read_file=AsyncMock(return_value=None),
        write_files=AsyncMock(return_value=None),
        stop=AsyncMock(return_value=None),
    )


@pytest.fixture
def fake_shell():
    """A recording virtual shell with the default tool listing."""
    return FakeShell()


@pytest.fixture
def remote_client():
    """A remote sandbox client with the default tool listing."""
    return make_remote_client()
