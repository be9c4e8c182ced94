"""Bash tool description composition.

Pure functions that turn the working directory, file manifest, discovered
tools and caller overrides into the description an LLM sees for the bash
tool. Sections are separated by exactly one blank line and the result has
no trailing newline, so identical inputs always produce identical text.
"""

from __future__ import annotations

from collections.abc import Sequence

from .discovery import (
    FORMAT_LABELS,
    TOOLS_BY_FORMAT,
    DiscoveredTools,
    detect_format,
    get_tools_for_format,
)

# Maximum number of files listed before collapsing the rest
MAX_LISTED_FILES = 8

PREAMBLE = "Execute bash commands in the sandbox environment."

COMMON_OPERATIONS = """Common operations:
  ls -la              # List files with details
  find . -name '*.ts' # Find files by pattern
  grep -r 'pattern' . # Search file contents
  cat <file>          # View file contents"""


def format_tool_prompt(
    discovered: DiscoveredTools,
    filenames: Sequence[str] = (),
    virtual_shell: bool = False,
) -> str:
    """Render the tools section from discovered tools.

    Lists every discovered tool alphabetically, then one hint line per file
    format present in ``filenames`` naming the discovered tools suited to it.

    Args:
        discovered: Result of tool discovery.
        filenames: File manifest used to pick format hints.
        virtual_shell: Whether the sandbox is a virtual shell.

    Returns:
        The tools section, or an empty string when no tools were discovered.
    """
    if not discovered.available:
        return ""

    line = f"Available tools: {', '.join(sorted(discovered.available))}"
    if discovered.more_available:
        line += ", and more"
    lines = [line]

    formats = {detect_format(name) for name in filenames}
    for fmt in TOOLS_BY_FORMAT:
        if fmt not in formats:
            continue
        tools = [
            name
            for name in get_tools_for_format(fmt, virtual_shell)
            if name in discovered.available
        ]
        if tools:
            lines.append(f"For {FORMAT_LABELS[fmt]}: {', '.join(tools)}")

    return "\n".join(lines)


def resolve_tool_prompt(
    tool_prompt: str | None,
    discovered: DiscoveredTools,
    filenames: Sequence[str] = (),
    virtual_shell: bool = False,
) -> str:
    """Apply a caller's ``tool_prompt`` override.

    ``None`` renders the section from ``discovered``; any string, including
    the empty string, is returned unchanged.
    """
    if tool_prompt is not None:
        return tool_prompt
    return format_tool_prompt(discovered, filenames, virtual_shell)


def _format_files(files: Sequence[str]) -> str:
    listed = [f"  {name}" for name in files[:MAX_LISTED_FILES]]
    if len(files) > MAX_LISTED_FILES:
        listed.append(f"  ... and {len(files) - MAX_LISTED_FILES} more files")
    return "Available files:\n" + "\n".join(listed)


def build_bash_description(
    cwd: str,
    files: Sequence[str] = (),
    tool_prompt: str = "",
    extra_instructions: str | None = None,
) -> str:
    """Build the bash tool description.

    Args:
        cwd: Absolute working directory inside the sandbox.
        files: File manifest (relative paths), listed in the given order.
        tool_prompt: Rendered tools section; omitted when empty.
        extra_instructions: Free text appended as the final paragraph.
    """
    sections = [
        PREAMBLE,
        f"WORKING DIRECTORY: {cwd}\n"
        "All commands execute from this directory. Use relative paths from here.",
    ]
    if files:
        sections.append(_format_files(files))
    if tool_prompt:
        sections.append(tool_prompt)
    sections.append(COMMON_OPERATIONS)
    if extra_instructions:
        sections.append(extra_instructions)
    return "\n\n".join(sections)
