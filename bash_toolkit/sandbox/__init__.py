"""Sandbox backends and the uniform contract they are normalized to."""

from .base import Sandbox
from .detect import (
    BackendKind,
    detect_backend,
    is_remote_sandbox,
    is_virtual_shell,
    wrap_sandbox,
)
from .docker import DockerShell, create_docker_shell
from .remote import RemoteSandbox, RemoteSandboxLike
from .virtual_shell import VirtualShellLike, VirtualShellSandbox

__all__ = [
    "Sandbox",
    "BackendKind",
    "detect_backend",
    "is_remote_sandbox",
    "is_virtual_shell",
    "wrap_sandbox",
    "RemoteSandbox",
    "RemoteSandboxLike",
    "VirtualShellSandbox",
    "VirtualShellLike",
    "DockerShell",
    "create_docker_shell",
]
