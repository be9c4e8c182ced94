"""Tool factories for the bash toolkit."""

from .bash import BashInput, create_bash_tool, execute_bash_command
from .read_file import ReadFileInput, create_read_file_tool
from .tool import Tool
from .write_file import WriteFileInput, create_write_file_tool

__all__ = [
    "Tool",
    "BashInput",
    "ReadFileInput",
    "WriteFileInput",
    "create_bash_tool",
    "create_read_file_tool",
    "create_write_file_tool",
    "execute_bash_command",
]
