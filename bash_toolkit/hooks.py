"""Bash call hooks.

Hooks are plain or async callables invoked around each bash command:

- ``on_before_bash_call(BeforeBashCallInput)`` may return a
  ``BeforeBashCallResult`` (or a dict) with a replacement ``command``.
- ``on_after_bash_call(AfterBashCallInput)`` may return an
  ``AfterBashCallResult`` (or a dict) with a replacement ``result``.

Returning ``None``, or omitting the field, leaves the value unchanged.
Exceptions raised by a hook propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Union

from pydantic import BaseModel

from .types import CommandResult
from .utils import maybe_await


class BeforeBashCallInput(BaseModel):
    """Payload passed to the before hook."""

    command: str


class BeforeBashCallResult(BaseModel):
    """Optional command replacement returned by the before hook."""

    command: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> BeforeBashCallResult:
        """Create BeforeBashCallResult from a hook return value."""
        if isinstance(data, BeforeBashCallResult):
            return data
        if isinstance(data, dict):
            return cls.model_validate(data)
        raise TypeError(f"Cannot create BeforeBashCallResult from {type(data)}")


class AfterBashCallInput(BaseModel):
    """Payload passed to the after hook."""

    command: str
    result: CommandResult


class AfterBashCallResult(BaseModel):
    """Optional result replacement returned by the after hook."""

    result: CommandResult | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AfterBashCallResult:
        """Create AfterBashCallResult from a hook return value."""
        if isinstance(data, AfterBashCallResult):
            return data
        if isinstance(data, dict):
            result = data.get("result")
            return cls(result=CommandResult.from_raw(result) if result is not None else None)
        raise TypeError(f"Cannot create AfterBashCallResult from {type(data)}")


BeforeBashCallHook = Callable[
    [BeforeBashCallInput],
    Union[BeforeBashCallResult, dict, None, Awaitable[Union[BeforeBashCallResult, dict, None]]],
]
AfterBashCallHook = Callable[
    [AfterBashCallInput],
    Union[AfterBashCallResult, dict, None, Awaitable[Union[AfterBashCallResult, dict, None]]],
]


async def run_before_hook(hook: BeforeBashCallHook | None, command: str) -> str:
    """Run the before hook and return the command to execute."""
    if hook is None:
        return command

    returned = await maybe_await(hook(BeforeBashCallInput(command=command)))
    if returned is None:
        return command

    replacement = BeforeBashCallResult.from_dict(returned).command
    return replacement if replacement is not None else command


async def run_after_hook(
    hook: AfterBashCallHook | None, command: str, result: CommandResult
) -> CommandResult:
    """Run the after hook and return the final result."""
    if hook is None:
        return result

    returned = await maybe_await(hook(AfterBashCallInput(command=command, result=result)))
    if returned is None:
        return result

    replacement = AfterBashCallResult.from_dict(returned).result
    return replacement if replacement is not None else result
