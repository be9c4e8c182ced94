"""Remote sandbox backend.

Adapts a VM-backed sandbox client (identified by ``sandbox_id`` and a
``run_command`` entry point) to the uniform ``Sandbox`` contract. Commands
run through ``bash -c``; file reads come back as byte streams and file
writes always go through the client's batch ``write_files`` primitive.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, runtime_checkable

from ..errors import SandboxFileNotFoundError
from ..types import CommandResult, FileEntry
from ..utils import maybe_await

# Shell used to run commands on the remote sandbox
REMOTE_SHELL = "bash"


@runtime_checkable
class RemoteSandboxLike(Protocol):
    """Minimal interface of the remote sandbox client methods we use."""

    sandbox_id: str

    async def run_command(self, cmd: str, args: list[str]) -> Any: ...

    async def read_file(self, path: str) -> Any: ...

    async def write_files(self, files: list[dict[str, Any]]) -> None: ...


async def _read_output(finished: Any, name: str) -> str:
    """Read a captured output stream from a finished remote command.

    The client exposes ``stdout``/``stderr`` as (async) methods; plain
    string attributes are accepted too.
    """
    stream = getattr(finished, name, "")
    if callable(stream):
        stream = await maybe_await(stream())
    return stream or ""


async def _drain_stream(stream: Any) -> str:
    """Fully drain a readable byte source and decode it as UTF-8 text.

    Invalid byte sequences become U+FFFD instead of raising.
    """
    if isinstance(stream, bytes | bytearray):
        return bytes(stream).decode("utf-8", errors="replace")
    if isinstance(stream, str):
        return stream

    chunks: list[bytes] = []
    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))
    elif hasattr(stream, "read"):
        data = await maybe_await(stream.read())
        chunks.append(data.encode("utf-8") if isinstance(data, str) else bytes(data))
    else:
        for chunk in stream:
            chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))

    return b"".join(chunks).decode("utf-8", errors="replace")


class RemoteSandbox:
    """Uniform ``Sandbox`` over a remote VM-backed sandbox client."""

    def __init__(self, client: RemoteSandboxLike) -> None:
        self._client = client

    @property
    def client(self) -> RemoteSandboxLike:
        return self._client

    @property
    def sandbox_id(self) -> str:
        return self._client.sandbox_id

    async def execute_command(self, command: str) -> CommandResult:
        finished = await self._client.run_command(REMOTE_SHELL, ["-c", command])
        stdout, stderr = await asyncio.gather(
            _read_output(finished, "stdout"),
            _read_output(finished, "stderr"),
        )
        return CommandResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=finished.exit_code,
        )

    async def read_file(self, path: str) -> str:
        stream = await self._client.read_file(path)
        if stream is None:
            raise SandboxFileNotFoundError(path)
        return await _drain_stream(stream)

    async def write_file(self, path: str, content: str) -> None:
        await self.write_files([FileEntry(path=path, content=content)])

    async def write_files(self, files: list[FileEntry]) -> None:
        await self._client.write_files(
            [{"path": f.path, "content": f.content.encode("utf-8")} for f in files]
        )

    async def stop(self) -> None:
        stop = getattr(self._client, "stop", None)
        if callable(stop):
            await maybe_await(stop())
