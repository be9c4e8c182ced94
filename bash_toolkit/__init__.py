"""Bash toolkit -- a bash tool for AI agents over pluggable sandboxes.

Wraps a virtual shell, a remote VM-backed sandbox, or a custom backend in
one uniform contract, discovers the command-line tools it offers, and
exposes bash/read_file/write_file tools with a generated description.
"""

__version__ = "0.1.0"

# Main entry point
from .toolkit import BashToolkit, create_bash_toolkit

# Discovery and prompt composition
from .discovery import (
    BASH_TOOLS,
    TOOLS_BY_FORMAT,
    BashToolInfo,
    DiscoveredTools,
    FileFormat,
    ToolCategory,
    detect_format,
    discover_available_tools,
    get_tools_by_category,
    get_tools_for_format,
)
from .prompt import build_bash_description, format_tool_prompt, resolve_tool_prompt

# Errors
from .errors import (
    BackendExecutionError,
    BashToolkitError,
    ConstructionError,
    SandboxFileNotFoundError,
)

# Files
from .files import load_files

# Hooks
from .hooks import (
    AfterBashCallInput,
    AfterBashCallResult,
    BeforeBashCallInput,
    BeforeBashCallResult,
)

# Output
from .output import DEFAULT_MAX_OUTPUT_LENGTH, truncate_output

# Sandboxes
from .sandbox import (
    BackendKind,
    DockerShell,
    RemoteSandbox,
    Sandbox,
    VirtualShellSandbox,
    create_docker_shell,
    detect_backend,
    is_remote_sandbox,
    is_virtual_shell,
    wrap_sandbox,
)

# Tool factories
from .tools import (
    Tool,
    create_bash_tool,
    create_read_file_tool,
    create_write_file_tool,
    execute_bash_command,
)

# Types
from .types import (
    BashToolkitConfig,
    CommandResult,
    DockerShellConfig,
    FileEntry,
    PromptOptions,
    SandboxProvider,
    SandboxProviderOptions,
    UploadDirectory,
)

__all__ = [
    # Main entry point
    "create_bash_toolkit",
    "BashToolkit",
    # Types
    "BashToolkitConfig",
    "CommandResult",
    "DockerShellConfig",
    "FileEntry",
    "PromptOptions",
    "SandboxProvider",
    "SandboxProviderOptions",
    "UploadDirectory",
    # Sandboxes
    "Sandbox",
    "BackendKind",
    "detect_backend",
    "is_remote_sandbox",
    "is_virtual_shell",
    "wrap_sandbox",
    "RemoteSandbox",
    "VirtualShellSandbox",
    "DockerShell",
    "create_docker_shell",
    # Discovery
    "BASH_TOOLS",
    "TOOLS_BY_FORMAT",
    "BashToolInfo",
    "DiscoveredTools",
    "FileFormat",
    "ToolCategory",
    "detect_format",
    "discover_available_tools",
    "get_tools_by_category",
    "get_tools_for_format",
    # Prompt
    "build_bash_description",
    "format_tool_prompt",
    "resolve_tool_prompt",
    # Hooks
    "BeforeBashCallInput",
    "BeforeBashCallResult",
    "AfterBashCallInput",
    "AfterBashCallResult",
    # Output
    "DEFAULT_MAX_OUTPUT_LENGTH",
    "truncate_output",
    # Files
    "load_files",
    # Errors
    "BashToolkitError",
    "ConstructionError",
    "SandboxFileNotFoundError",
    "BackendExecutionError",
    # Tool factories
    "Tool",
    "create_bash_tool",
    "create_read_file_tool",
    "create_write_file_tool",
    "execute_bash_command",
]
