"""Bridge error types for the sampling layer.

These are raised only to internal callers (typically tool handlers), which
decide whether to surface them as domain errors or substitute a
deterministic fallback.
"""


class SamplingError(Exception):
    """Base error for all sampling bridge failures."""


class SamplingUnavailableError(SamplingError):
    """No transport is attached, so no client can answer."""

    def __init__(self) -> None:
        super().__init__("Sampling is not available - no transport registered")


class SamplingTimeoutError(SamplingError):
    """The transport did not answer within the bridge's timeout."""

    def __init__(self, request_id: str, timeout: float) -> None:
        self.request_id = request_id
        self.timeout = timeout
        super().__init__(f"Sampling request {request_id} timed out after {timeout:g}s")


class SamplingTransportError(SamplingError):
    """The transport raised while producing a reply."""

    def __init__(self, request_id: str, detail: str = "") -> None:
        self.request_id = request_id
        self.detail = detail
        super().__init__(
            f"Sampling request {request_id} failed" + (f": {detail}" if detail else "")
        )
