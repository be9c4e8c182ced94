"""Capability discovery.

Probes a sandbox once for the command-line tools installed in its binary
directories and classifies them against a static table. Discovery is
advisory: any probe failure yields an empty result instead of an error.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Literal

from pydantic import BaseModel, Field

from .sandbox.base import Sandbox
from .types import CommandResult

logger = logging.getLogger(__name__)

ToolCategory = Literal["text", "json", "yaml", "csv-tsv", "other"]

FileFormat = Literal["json", "yaml", "csv"]

# Lists every binary directory in one round trip. A missing directory must
# not fail the probe.
PROBE_COMMAND = "ls /usr/bin /usr/local/bin 2>/dev/null || true"


class BashToolInfo(BaseModel):
    """A known command-line tool and its category."""

    name: str = Field(description="Executable name")
    category: ToolCategory = Field(description="What kind of data the tool is suited for")


class DiscoveredTools(BaseModel):
    """Tools found on a sandbox by the discovery probe."""

    available: frozenset[str] = Field(
        default=frozenset(), description="Discovered tools present in the classification table"
    )
    unrecognized: frozenset[str] = Field(
        default=frozenset(), description="Discovered binaries missing from the table"
    )
    more_available: bool = Field(
        default=False,
        description="Whether the sandbox likely offers tools beyond the classified ones",
    )


def _tools(category: ToolCategory, *names: str) -> list[BashToolInfo]:
    return [BashToolInfo(name=name, category=category) for name in names]


BASH_TOOLS: list[BashToolInfo] = [
    *_tools(
        "text",
        "awk",
        "cat",
        "cut",
        "diff",
        "find",
        "grep",
        "head",
        "less",
        "paste",
        "rg",
        "sed",
        "sort",
        "tail",
        "tee",
        "tr",
        "uniq",
        "wc",
        "xargs",
    ),
    *_tools("json", "jq"),
    *_tools("yaml", "yq"),
    *_tools("csv-tsv", "mlr", "xsv"),
    *_tools(
        "other",
        "base64",
        "curl",
        "file",
        "git",
        "gzip",
        "md5sum",
        "node",
        "python3",
        "sha256sum",
        "sqlite3",
        "tar",
        "tree",
        "unzip",
        "wget",
        "zip",
    ),
]

_KNOWN_TOOLS = frozenset(tool.name for tool in BASH_TOOLS)

# Per-format hint ordering. Only tools that were discovered are shown.
TOOLS_BY_FORMAT: dict[FileFormat, list[str]] = {
    "json": ["jq", "grep", "sed"],
    "yaml": ["yq", "grep", "sed"],
    "csv": ["yq", "awk", "cut"],
}

# Hints that only hold for virtual shells, whose yq also reads CSV.
VIRTUAL_SHELL_ONLY: dict[FileFormat, frozenset[str]] = {
    "csv": frozenset({"yq"}),
}

FORMAT_LABELS: dict[FileFormat, str] = {
    "json": "JSON",
    "yaml": "YAML",
    "csv": "CSV/TSV",
}

_EXTENSION_FORMATS: dict[str, FileFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".csv": "csv",
    ".tsv": "csv",
}


def get_tools_by_category(category: ToolCategory) -> list[str]:
    """Return the names of all known tools in a category, in table order."""
    return [tool.name for tool in BASH_TOOLS if tool.category == category]


def get_tools_for_format(fmt: FileFormat, virtual_shell: bool = False) -> list[str]:
    """Return the hint tools for a file format in their fixed order.

    Args:
        fmt: The file format.
        virtual_shell: Whether the sandbox is a virtual shell.
    """
    excluded = frozenset() if virtual_shell else VIRTUAL_SHELL_ONLY.get(fmt, frozenset())
    return [name for name in TOOLS_BY_FORMAT[fmt] if name not in excluded]


def detect_format(filename: str) -> FileFormat | None:
    """Detect a file's format from its extension (case-insensitive)."""
    _, ext = posixpath.splitext(filename)
    return _EXTENSION_FORMATS.get(ext.lower())


def parse_listing(output: str) -> set[str]:
    """Parse ``ls`` output for one or more directories into a set of names.

    Directory header lines (``/usr/bin:``) and blank lines are skipped;
    duplicates across directories collapse.
    """
    names: set[str] = set()
    for line in output.split("\n"):
        entry = line.strip()
        if not entry or entry.endswith(":"):
            continue
        names.add(entry)
    return names


async def discover_available_tools(
    sandbox: Sandbox, virtual_shell: bool = False
) -> DiscoveredTools:
    """Probe a sandbox for installed command-line tools.

    Args:
        sandbox: The normalized sandbox to probe.
        virtual_shell: Whether the sandbox is a virtual shell. Virtual shells
            provide built-ins that are not listed on disk.

    Returns:
        The discovered tools, or an empty result if the probe failed.
    """
    try:
        result = CommandResult.from_raw(await sandbox.execute_command(PROBE_COMMAND))
    except Exception as e:
        logger.warning("Tool discovery failed, continuing without tool hints: %s", e)
        return DiscoveredTools()

    if result.exit_code != 0:
        logger.warning(
            "Tool discovery probe exited with code %s, continuing without tool hints",
            result.exit_code,
        )
        return DiscoveredTools()

    names = parse_listing(result.stdout)
    available = frozenset(names & _KNOWN_TOOLS)
    unrecognized = frozenset(names - _KNOWN_TOOLS)
    logger.debug(
        "Discovered %d known tools and %d other binaries", len(available), len(unrecognized)
    )
    return DiscoveredTools(
        available=available,
        unrecognized=unrecognized,
        more_available=bool(available) and (virtual_shell or bool(unrecognized)),
    )
