"""Output utilities for the bash toolkit.

Provides functions for truncating large command output and detecting
binary content.
"""

from __future__ import annotations

from typing import Literal

# Default maximum output characters
DEFAULT_MAX_OUTPUT_LENGTH = 30_000


def truncate_output(
    output: str,
    max_chars: int | None = None,
    stream: Literal["stdout", "stderr"] = "stdout",
) -> tuple[str, bool]:
    """Truncate output that exceeds the maximum character limit.

    Keeps the first ``max_chars`` characters and appends a marker naming
    the stream and how many characters were dropped. Output exactly at the
    limit is returned unchanged.

    Args:
        output: The output string to potentially truncate.
        max_chars: Maximum character limit (default: 30,000).
        stream: Stream name used in the truncation marker.

    Returns:
        A tuple of (text, truncated) where truncated is True if output was truncated.
    """
    max_c = max_chars if max_chars is not None else DEFAULT_MAX_OUTPUT_LENGTH
    if len(output) <= max_c:
        return output, False

    removed = len(output) - max_c
    text = f"{output[:max_c]}\n\n[{stream} truncated: {removed} characters removed]"

    return text, True


def is_binary(data: bytes) -> bool:
    """Detect binary content by checking for null bytes in the first 8KB.

    Args:
        data: The raw bytes to check.

    Returns:
        True if binary content is detected.
    """
    check_length = min(len(data), 8192)
    return any(data[i] == 0 for i in range(check_length))
