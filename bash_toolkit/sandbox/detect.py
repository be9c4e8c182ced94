"""Backend detection and normalization.

Backends share no base class, so the shape of a supplied object is
classified once, here, by structural checks. Checks run in a fixed order
(remote sandbox first, virtual shell second) because some objects satisfy
both shapes by naming coincidence; the first match wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from .base import Sandbox
from .remote import RemoteSandbox
from .virtual_shell import VirtualShellSandbox

logger = logging.getLogger(__name__)


class BackendKind(Enum):
    """Shape a backend object was classified as."""

    REMOTE_SANDBOX = "remote_sandbox"
    VIRTUAL_SHELL = "virtual_shell"
    UNRECOGNIZED = "unrecognized"


def _is_structured(obj: Any) -> bool:
    return obj is not None and not isinstance(obj, str | bytes | bytearray | int | float | bool)


def is_remote_sandbox(obj: Any) -> bool:
    """Check whether an object looks like a remote VM-backed sandbox client.

    Requires a string ``sandbox_id`` plus ``run_command``, ``read_file`` and
    ``write_files`` methods. Partial matches are rejected.
    """
    if not _is_structured(obj):
        return False
    return (
        isinstance(getattr(obj, "sandbox_id", None), str)
        and callable(getattr(obj, "run_command", None))
        and callable(getattr(obj, "read_file", None))
        and callable(getattr(obj, "write_files", None))
    )


def is_virtual_shell(obj: Any) -> bool:
    """Check whether an object looks like a virtual shell (has ``exec``)."""
    if not _is_structured(obj):
        return False
    return callable(getattr(obj, "exec", None))


# Evaluated in order; the first matching shape wins.
DETECTION_ORDER: tuple[tuple[BackendKind, Callable[[Any], bool]], ...] = (
    (BackendKind.REMOTE_SANDBOX, is_remote_sandbox),
    (BackendKind.VIRTUAL_SHELL, is_virtual_shell),
)


def detect_backend(obj: Any) -> BackendKind:
    """Classify a backend object.

    Returns ``BackendKind.UNRECOGNIZED`` for ``None``, scalars, and objects
    matching neither known shape.
    """
    for kind, matches in DETECTION_ORDER:
        if matches(obj):
            return kind
    return BackendKind.UNRECOGNIZED


def wrap_sandbox(obj: Any) -> tuple[Sandbox, BackendKind]:
    """Normalize a backend object to the uniform ``Sandbox`` contract.

    Unrecognized objects are assumed to already implement ``Sandbox`` and
    are returned unchanged; missing methods surface when first called.

    Returns:
        A tuple of (sandbox, kind).
    """
    kind = detect_backend(obj)
    logger.debug("Detected sandbox backend %s as %s", type(obj).__name__, kind.value)

    if kind is BackendKind.REMOTE_SANDBOX:
        return RemoteSandbox(obj), kind
    if kind is BackendKind.VIRTUAL_SHELL:
        return VirtualShellSandbox(obj), kind
    return obj, kind
