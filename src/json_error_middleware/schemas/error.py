"""Error envelope schema.

Every response with a status above 299 leaves the pipeline with the same
body: {"error": <status>, "message": "<reason phrase>"}.
"""

from http import HTTPStatus

from pydantic import BaseModel, Field

# Status codes with no registered reason phrase (e.g. 599) get this message.
FALLBACK_MESSAGE = "error"


def reason_phrase(status_code: int) -> str:
    """Return the canonical reason phrase for a status, or FALLBACK_MESSAGE."""
    try:
        return HTTPStatus(status_code).phrase or FALLBACK_MESSAGE
    except ValueError:
        return FALLBACK_MESSAGE


class ErrorEnvelope(BaseModel):
    """Body synthesized for a non-success response.

    ``error`` is the status code being reported, so it is always above 299
    and fits in an unsigned 16-bit integer. ``message`` is never empty.
    Building one with anything else raises ``pydantic.ValidationError``.
    """

    model_config = {"frozen": True}

    error: int = Field(gt=299, le=65535)
    message: str = Field(min_length=1)

    @classmethod
    def for_status(cls, status_code: int) -> "ErrorEnvelope":
        """Build the envelope reported for ``status_code``."""
        return cls(error=status_code, message=reason_phrase(status_code))
