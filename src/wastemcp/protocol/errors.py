"""Protocol-channel error types.

Each error carries the JSON-RPC ``code`` the dispatcher reports it under.
Domain failures never use these; they travel as ``isError`` tool results.
"""

from __future__ import annotations

from typing import Any

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)


class InvalidRequestError(ProtocolError):
    """The envelope is not a well-formed JSON-RPC 2.0 request."""

    code = INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid Request" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ProtocolError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ProtocolError):
    code = INVALID_PARAMS


class PromptNotFoundError(InvalidParamsError):
    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}")


class MissingPromptArgumentError(InvalidParamsError):
    def __init__(self, prompt: str, argument: str) -> None:
        self.prompt = prompt
        self.argument = argument
        super().__init__(f"Missing required argument for prompt {prompt}: {argument}")


class UnknownResourceError(InvalidParamsError):
    """No static resource or dynamic rule matches the URI."""

    def __init__(self, uri: object) -> None:
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")


class ResourceNotFoundError(InvalidParamsError):
    """The URI matched a rule but the entity it names does not exist."""

    def __init__(self, uri: str, kind: str) -> None:
        self.uri = uri
        self.kind = kind
        super().__init__(f"{kind} not found: {uri}")


class InternalError(ProtocolError):
    code = INTERNAL_ERROR
