"""Argument validation for raw tool input.

Input shapes are pydantic models; their JSON schema doubles as the tool's
``inputSchema`` on ``tools/list``.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError


class ArgumentValidationError(ValueError):
    """Raw tool arguments did not match the declared input shape.

    The message is embedded verbatim into the tool's error text.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class ArgumentShape(BaseModel):
    """Base class for tool input shapes.

    Fields may be supplied by wire alias or attribute name; unknown keys are
    ignored.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


ShapeT = TypeVar("ShapeT", bound=BaseModel)


def validate_arguments(shape: type[ShapeT], raw: Any) -> ShapeT:
    """Return *raw* validated and coerced into *shape*.

    Raises:
        ArgumentValidationError: With a human-readable summary of every
            failing field.
    """
    try:
        return shape.model_validate({} if raw is None else raw)
    except ValidationError as exc:
        raise ArgumentValidationError(format_validation_error(exc)) from exc


def format_validation_error(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error["loc"]) or "arguments"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


def input_schema(shape: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for *shape*, keyed by wire aliases."""
    return shape.model_json_schema(by_alias=True)
