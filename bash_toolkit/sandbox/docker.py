"""Docker shell backend.

Default backend used when no sandbox is supplied. Starts a long-lived
container running ``sleep infinity`` and executes each command through
``docker exec ... sh -c``. It exposes only ``exec`` and ``stop``, so the
toolkit treats it as a virtual shell and synthesizes file I/O as shell
commands.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import uuid

from dotenv import load_dotenv

from ..errors import ConstructionError
from ..types import CommandResult, DockerShellConfig, SandboxProviderOptions

load_dotenv()

logger = logging.getLogger(__name__)

# Default image when neither config nor environment names one
DEFAULT_IMAGE = "debian:bookworm-slim"

# Default container network mode
DEFAULT_NETWORK = "none"

# Default command timeout in seconds
DEFAULT_TIMEOUT_SECONDS = 300

# Environment variables overriding the defaults above
IMAGE_ENV = "BASH_TOOLKIT_DOCKER_IMAGE"
NETWORK_ENV = "BASH_TOOLKIT_DOCKER_NETWORK"

# Exit code reported for commands killed on timeout
TIMEOUT_EXIT_CODE = 137
TIMEOUT_NOTE = "\n[Process killed: timeout exceeded]"


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def _run_docker(args: list[str], timeout: float | None = None) -> CommandResult:
    """Run a ``docker`` CLI command and capture its output.

    On timeout the process is killed and whatever output it produced is
    kept, with exit code 137 and a note appended to stderr.
    """
    timeout_seconds = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS

    proc = await asyncio.create_subprocess_exec(
        "docker",
        *args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        proc.kill()
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=5)
        except (asyncio.TimeoutError, OSError):
            stdout, stderr = b"", b""
        logger.warning("docker %s timed out after %ss", args[0], timeout_seconds)
        return CommandResult(
            stdout=_decode(stdout),
            stderr=_decode(stderr) + TIMEOUT_NOTE,
            exit_code=TIMEOUT_EXIT_CODE,
        )

    return CommandResult(
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        exit_code=proc.returncode if proc.returncode is not None else 1,
    )


class DockerShell:
    """Shell running inside a dedicated Docker container."""

    def __init__(self, cwd: str, config: DockerShellConfig | None = None) -> None:
        self._config = config or DockerShellConfig()
        self._cwd = cwd
        self._image = self._config.image or os.getenv(IMAGE_ENV, DEFAULT_IMAGE)
        self._network = self._config.network or os.getenv(NETWORK_ENV, DEFAULT_NETWORK)
        self._container_name = f"bash-toolkit-{uuid.uuid4().hex[:8]}"
        self._container_id: str | None = None

    @property
    def container_name(self) -> str:
        return self._container_name

    @property
    def container_id(self) -> str | None:
        return self._container_id

    async def start(self) -> None:
        """Create the container. The working directory is created by Docker."""
        if shutil.which("docker") is None:
            raise ConstructionError(
                "Docker is not installed. Either install it "
                "(https://docs.docker.com/get-docker/) or provide your own sandbox "
                "via the sandbox option."
            )

        args = [
            "run",
            "-d",
            "--name",
            self._container_name,
            "-w",
            self._cwd,
            "--network",
            self._network,
        ]

        if self._config.memory:
            args.extend(["--memory", self._config.memory])
        if self._config.cpus:
            args.extend(["--cpus", self._config.cpus])

        if self._config.env:
            for key, value in self._config.env.items():
                args.extend(["-e", f"{key}={value}"])

        args.extend([self._image, "sleep", "infinity"])

        result = await _run_docker(args, timeout=60)
        if result.exit_code != 0:
            raise ConstructionError(
                f"Failed to create Docker container: {result.stderr.strip()}"
            )
        self._container_id = result.stdout.strip()[:12]
        logger.info(
            "Started container %s (%s) from %s",
            self._container_name,
            self._container_id,
            self._image,
        )

    async def exec(self, command: str) -> CommandResult:
        if not self._container_id:
            raise RuntimeError("Docker shell not started. Call start() first.")

        return await _run_docker(
            ["exec", "-w", self._cwd, self._container_name, "sh", "-c", command],
            timeout=self._config.timeout,
        )

    async def stop(self) -> None:
        if not self._container_id:
            return
        try:
            await _run_docker(["rm", "-f", self._container_name], timeout=30)
            logger.info("Removed container %s", self._container_name)
        finally:
            self._container_id = None


async def create_docker_shell(
    options: SandboxProviderOptions,
    config: DockerShellConfig | None = None,
) -> DockerShell:
    """Sandbox provider that starts a ``DockerShell`` rooted at ``options.cwd``.

    Raises:
        ConstructionError: If Docker is unavailable or the container fails to start.
    """
    shell = DockerShell(options.cwd, config)
    await shell.start()
    return shell
