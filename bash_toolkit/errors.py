"""Exceptions raised by the bash toolkit."""


class BashToolkitError(Exception):
    """
    Base class for all bash toolkit errors.
    """


class ConstructionError(BashToolkitError):
    """
    Exception raised when the default sandbox backend cannot be created.
    """


class SandboxFileNotFoundError(BashToolkitError, FileNotFoundError):
    """
    Exception raised when a file does not exist in the sandbox.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class BackendExecutionError(BashToolkitError):
    """
    Exception raised when a shell command backing a file operation fails.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        stderr: str = "",
        exit_code: int | None = None,
    ):
        self.path = path
        self.stderr = stderr
        self.exit_code = exit_code
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
