"""Error types for the tool registry."""


class ToolError(Exception):
    """Base error for tool registration and invocation failures."""


class DuplicateToolError(ToolError):
    """Two domain modules tried to register the same tool name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate tool name: {name}")
