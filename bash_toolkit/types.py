"""Shared types for the bash toolkit.

Defines the command result returned by every backend, file entries for
batch writes, and the configuration accepted by ``create_bash_toolkit()``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# -- Input/output types -------------------------------------------------------


class CommandResult(BaseModel):
    """Result of a command execution."""

    model_config = ConfigDict(frozen=True)

    stdout: str = Field(default="", description="Standard output")
    stderr: str = Field(default="", description="Standard error")
    exit_code: int = Field(
        default=0,
        validation_alias=AliasChoices("exit_code", "exitCode"),
        description="Process exit code (0 = success)",
    )

    @classmethod
    def from_raw(cls, data: Any) -> "CommandResult":
        """Create a CommandResult from a backend or hook return value.

        Accepts an existing CommandResult, a dict, or any object exposing
        ``stdout``, ``stderr`` and ``exit_code`` attributes.
        """
        if isinstance(data, CommandResult):
            return data
        if isinstance(data, dict):
            return cls.model_validate(data)
        return cls.model_validate(data, from_attributes=True)


class FileEntry(BaseModel):
    """A single file for a batch write."""

    path: str = Field(description="Absolute path of the file inside the sandbox")
    content: str = Field(description="File content as text")


# -- Configuration types -------------------------------------------------------


class UploadDirectory(BaseModel):
    """A local directory whose files are copied into the sandbox."""

    source: str = Field(description="Local directory to read files from")
    include: str = Field(
        default="**/*", description='Glob pattern selecting files to upload (default: "**/*")'
    )


class PromptOptions(BaseModel):
    """Options controlling the generated tool description."""

    tool_prompt: str | None = Field(
        default=None,
        description=(
            "Tools section override. None auto-generates it from discovered tools, "
            "an empty string removes the section, any other string is used verbatim."
        ),
    )


class SandboxProviderOptions(BaseModel):
    """Options passed to a sandbox provider when no sandbox is supplied.

    ``cwd`` is resolved before the provider runs, so it is the configured
    ``destination`` or ``/workspace``. A provider returning a remote sandbox
    keeps that directory; set ``destination`` explicitly to use the remote
    sandbox workspace.
    """

    cwd: str = Field(description="Working directory for commands inside the sandbox")


class DockerShellConfig(BaseModel):
    """Configuration for the default Docker-backed shell."""

    image: str | None = Field(
        default=None,
        description=(
            "Docker image to use "
            '(default: $BASH_TOOLKIT_DOCKER_IMAGE or "debian:bookworm-slim")'
        ),
    )
    network: str | None = Field(
        default=None,
        description='Network mode (default: $BASH_TOOLKIT_DOCKER_NETWORK or "none")',
    )
    memory: str | None = Field(default=None, description='Memory limit (e.g., "512m", "2g")')
    cpus: str | None = Field(default=None, description='CPU limit (e.g., "1", "0.5")')
    env: dict[str, str] | None = Field(
        default=None, description="Environment variables to set in the container"
    )
    timeout: int | None = Field(
        default=None, description="Per-command timeout in seconds (default: 300)"
    )


SandboxProvider = Callable[[SandboxProviderOptions], Awaitable[Any]]


class BashToolkitConfig(BaseModel):
    """Configuration for the ``create_bash_toolkit()`` factory."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    files: dict[str, str] | None = Field(
        default=None, description="Inline files as relative path -> content"
    )
    upload_directory: UploadDirectory | None = Field(
        default=None, description="Local directory to upload into the destination"
    )
    destination: str | None = Field(
        default=None,
        description=(
            "Absolute working directory inside the sandbox "
            '(default: "/vercel/sandbox/workspace" for remote sandboxes, "/workspace" otherwise)'
        ),
    )
    extra_instructions: str | None = Field(
        default=None, description="Free text appended to the bash tool description"
    )
    max_output_length: int | None = Field(
        default=None,
        gt=0,
        description="Maximum stdout/stderr characters before truncation (default: 30000)",
    )
    on_before_bash_call: Callable[..., Any] | None = Field(
        default=None, description="Hook called with the command before it runs"
    )
    on_after_bash_call: Callable[..., Any] | None = Field(
        default=None, description="Hook called with the command and truncated result"
    )
    prompt_options: PromptOptions | None = Field(
        default=None, description="Tool description options"
    )
    sandbox: Any = Field(
        default=None,
        description="Pre-built backend (virtual shell, remote sandbox or custom Sandbox)",
    )
    sandbox_provider: SandboxProvider | None = Field(
        default=None,
        description="Async factory used to build a backend when no sandbox is supplied",
    )
    docker: DockerShellConfig | None = Field(
        default=None, description="Default Docker shell configuration"
    )

    @field_validator("destination")
    @classmethod
    def _destination_is_absolute(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("/"):
            raise ValueError(f'destination must be an absolute path, got "{value}"')
        return value
