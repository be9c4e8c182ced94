"""Tests for the remote sandbox adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from conftest import make_finished, make_remote_client

from bash_toolkit.errors import SandboxFileNotFoundError
from bash_toolkit.sandbox.remote import RemoteSandbox
from bash_toolkit.types import FileEntry


class AsyncChunks:
    """Async iterator over byte chunks."""

    def __init__(self, chunks):
        self._chunks = list(chunks)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._chunks:
            raise StopAsyncIteration
        return self._chunks.pop(0)


class TestRemoteExecuteCommand:
    """Tests for RemoteSandbox.execute_command."""

    @pytest.mark.asyncio
    async def test_runs_command_through_bash(self):
        """Commands run as bash -c <command> without escaping."""
        client = make_remote_client()
        client.run_command = AsyncMock(
            return_value=make_finished(stdout="hi\n", stderr="warn", exit_code=3)
        )
        sandbox = RemoteSandbox(client)

        result = await sandbox.execute_command("echo 'hi' | cat")

        client.run_command.assert_awaited_once_with("bash", ["-c", "echo 'hi' | cat"])
        assert result.stdout == "hi\n"
        assert result.stderr == "warn"
        assert result.exit_code == 3

    @pytest.mark.asyncio
    async def test_accepts_plain_string_streams(self):
        """Output given as plain attributes is used directly."""
        client = make_remote_client()
        client.run_command = AsyncMock(
            return_value=SimpleNamespace(stdout="out", stderr=None, exit_code=0)
        )
        result = await RemoteSandbox(client).execute_command("ls")
        assert result.stdout == "out"
        assert result.stderr == ""


class TestRemoteReadFile:
    """Tests for RemoteSandbox.read_file."""

    @pytest.mark.asyncio
    async def test_drains_async_stream(self):
        """Async byte streams are concatenated and decoded."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=AsyncChunks([b"hello ", "wörld".encode()]))

        content = await RemoteSandbox(client).read_file("/workspace/a.txt")

        client.read_file.assert_awaited_once_with("/workspace/a.txt")
        assert content == "hello wörld"

    @pytest.mark.asyncio
    async def test_accepts_bytes(self):
        """A bytes payload is decoded."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=b"data")
        assert await RemoteSandbox(client).read_file("/f") == "data"

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced(self):
        """Non-UTF-8 bytes are replaced rather than failing the read."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=b"\xff\xfeabc")
        assert await RemoteSandbox(client).read_file("/f") == "\ufffd\ufffdabc"

    @pytest.mark.asyncio
    async def test_invalid_utf8_across_chunks(self):
        """Replacement also applies to chunked streams."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=AsyncChunks([b"ok ", b"\xff"]))
        assert await RemoteSandbox(client).read_file("/f") == "ok \ufffd"

    @pytest.mark.asyncio
    async def test_accepts_sync_iterable(self):
        """A sync iterable of chunks is concatenated."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=[b"a", b"b"])
        assert await RemoteSandbox(client).read_file("/f") == "ab"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self):
        """A None stream means the file does not exist."""
        client = make_remote_client()
        client.read_file = AsyncMock(return_value=None)

        with pytest.raises(SandboxFileNotFoundError, match="File not found: /missing") as exc:
            await RemoteSandbox(client).read_file("/missing")
        assert exc.value.path == "/missing"
        assert isinstance(exc.value, FileNotFoundError)


class TestRemoteWriteFiles:
    """Tests for RemoteSandbox.write_file and write_files."""

    @pytest.mark.asyncio
    async def test_write_file_uses_batch_primitive(self):
        """A single write goes through write_files with byte content."""
        client = make_remote_client()
        await RemoteSandbox(client).write_file("/workspace/a.txt", "hello")
        client.write_files.assert_awaited_once_with(
            [{"path": "/workspace/a.txt", "content": b"hello"}]
        )

    @pytest.mark.asyncio
    async def test_write_files_sends_one_batch(self):
        """Multiple entries are sent in one call."""
        client = make_remote_client()
        await RemoteSandbox(client).write_files(
            [FileEntry(path="/a", content="1"), FileEntry(path="/b", content="2")]
        )
        client.write_files.assert_awaited_once_with(
            [{"path": "/a", "content": b"1"}, {"path": "/b", "content": b"2"}]
        )


class TestRemoteStop:
    """Tests for RemoteSandbox.stop."""

    @pytest.mark.asyncio
    async def test_delegates_to_client(self):
        """stop() calls the client's stop."""
        client = make_remote_client()
        await RemoteSandbox(client).stop()
        client.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_without_stop(self):
        """stop() is a no-op when the client cannot stop."""
        client = make_remote_client()
        del client.stop
        await RemoteSandbox(client).stop()
