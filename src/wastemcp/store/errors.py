"""Error types raised by entity store implementations."""


class StoreError(Exception):
    """Base error for all entity store failures."""


class RecordValidationError(StoreError):
    """A record failed schema validation on create or update."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind} validation failed: {detail}")


class DuplicateRecordError(StoreError):
    """A unique field already holds the given value."""

    def __init__(self, kind: str, field: str, value: object) -> None:
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(f"Duplicate {kind} {field}: {value!r}")
