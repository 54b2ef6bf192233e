"""Exceptions raised by the response decorator itself.

Failures of the next stage are never wrapped in these; they propagate
to the caller exactly as raised. These only signal that a stage broke
its own contract with the decorator.
"""


class JsonErrorMiddlewareError(Exception):
    """Base class for all json_error_middleware exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingResponseError(JsonErrorMiddlewareError):
    """Raised when the next stage completes without producing a response."""

    def __init__(self, stage: object) -> None:
        self.stage = stage
        super().__init__(f"{type(stage).__name__} returned no response")
