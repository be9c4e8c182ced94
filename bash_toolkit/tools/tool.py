"""Tool class for exposing toolkit operations to LLM agents."""

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ValidationError


class Tool:
    """
    A callable operation with metadata for LLM function calling.

    Tools can be:
    - Executed directly via .run() with a Pydantic model or dict payload
    - Converted to an OpenAI/Anthropic style function definition via
      .to_llm_tool_definition() and registered with any agent framework
    """

    def __init__(
        self,
        id: str,
        description: str,
        input_schema: type[BaseModel],
        func: Callable[[Any], Awaitable[Any]],
    ):
        """
        Initialize a tool.

        Args:
            id: Unique tool identifier
            description: Description for LLM (what this tool does)
            input_schema: Pydantic model describing the tool parameters
            func: Async function called with a validated input_schema instance
        """
        self.id = id
        self.description = description
        self._input_schema_class = input_schema
        self._tool_parameters = input_schema.model_json_schema()
        self._func = func

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema for the tool parameters."""
        return self._tool_parameters

    async def run(self, payload: BaseModel | dict[str, Any]) -> Any:
        """
        Validate the payload and execute the tool.

        Args:
            payload: Instance of the tool's input schema, or a dict matching it

        Returns:
            Result from tool execution

        Raises:
            ValueError: If the payload does not match the input schema

        Example:
            result = await toolkit.bash.run({"command": "ls -la"})
        """
        if isinstance(payload, BaseModel):
            if not isinstance(payload, self._input_schema_class):
                raise ValueError(
                    f"Tool '{self.id}' expects payload of type "
                    f"{self._input_schema_class.__name__}, "
                    f"got {type(payload).__name__}"
                )
            input_obj = payload
        elif isinstance(payload, dict):
            try:
                input_obj = self._input_schema_class.model_validate(payload)
            except ValidationError as e:
                raise ValueError(f"Invalid payload for tool '{self.id}': {e}") from e
        else:
            raise ValueError(
                f"Tool '{self.id}' expects payload of type "
                f"{self._input_schema_class.__name__} or dict, "
                f"got {type(payload).__name__}"
            )

        return await self._func(input_obj)

    def to_llm_tool_definition(self) -> dict[str, Any]:
        """
        Convert tool to LLM function calling format.

        Returns format compatible with OpenAI/Anthropic function calling:
        {
            "type": "function",
            "function": {
                "name": "tool_id",
                "description": "...",
                "parameters": {...}
            }
        }
        """
        return {
            "type": "function",
            "function": {
                "name": self.id,
                "description": self.description,
                "parameters": self._tool_parameters,
            },
        }
