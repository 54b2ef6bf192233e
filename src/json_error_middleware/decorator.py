"""JSON response decorator.

``JsonMiddleware`` binds a ``JsonErrorDecorator`` around the next stage of
a pipeline. For every request the decorator awaits the next stage and
then picks exactly one of two outgoing shapes:

- status <= 299: the original response, body untouched, with its
  content-type forced to ``application/json``
- status > 299: a fresh JSON response carrying an ``ErrorEnvelope``,
  same status, original headers kept except the ones describing the
  discarded body (content-type, content-length, content-encoding,
  content-range)

Failures of the next stage are never turned into envelopes; they reach
the caller unchanged.
"""

from dataclasses import dataclass
from typing import TypeAlias

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from json_error_middleware.exceptions import MissingResponseError
from json_error_middleware.logging import get_logger
from json_error_middleware.schemas.error import ErrorEnvelope
from json_error_middleware.stage import Stage

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"

# Highest status that still passes through. Redirects (3xx) are synthesized too.
PASS_THROUGH_MAX_STATUS = 299

# Headers the synthesized response owns; the original values no longer describe the body.
_BODY_HEADERS = frozenset(
    {b"content-type", b"content-length", b"content-encoding", b"content-range"}
)


@dataclass(frozen=True)
class PassThrough:
    """Keep the next stage's response and its body as they are."""

    response: Response


@dataclass(frozen=True)
class Synthesized:
    """Replace the body with an error envelope."""

    response: Response
    envelope: ErrorEnvelope


DecoratedBody: TypeAlias = PassThrough | Synthesized


class JsonErrorDecorator:
    """Wrap a pipeline stage and normalize every response it produces.

    The next stage is fixed at construction and only ever read, so one
    decorator can serve any number of concurrent requests. The decorator
    implements ``Stage`` itself and can be wrapped by another decorator.
    """

    def __init__(self, next_stage: Stage) -> None:
        self._next_stage = next_stage

    @property
    def next_stage(self) -> Stage:
        return self._next_stage

    def ready(self) -> bool:
        """Forward the readiness query; the decorator adds no limit of its own."""
        return self._next_stage.ready()

    async def invoke(self, request: Request) -> Response:
        response = await self._next_stage.invoke(request)
        if response is None:
            raise MissingResponseError(self._next_stage)
        return self.render(self.select_body(response))

    def select_body(self, response: Response) -> DecoratedBody:
        """Choose the body variant for ``response`` from its status code."""
        if response.status_code > PASS_THROUGH_MAX_STATUS:
            return Synthesized(response, ErrorEnvelope.for_status(response.status_code))
        return PassThrough(response)

    def render(self, body: DecoratedBody) -> Response:
        """Build the outgoing response for a body variant."""
        match body:
            case Synthesized(response=original, envelope=envelope):
                logger.debug(
                    "error_envelope_synthesized",
                    status_code=envelope.error,
                    reason=envelope.message,
                )
                replacement = JSONResponse(
                    content=envelope.model_dump(),
                    status_code=original.status_code,
                    background=original.background,
                )
                replacement.raw_headers.extend(
                    (key, value)
                    for key, value in original.raw_headers
                    if key.lower() not in _BODY_HEADERS
                )
                return replacement
            case PassThrough(response=original):
                # Overwrites every existing value, leaving exactly one.
                original.headers["content-type"] = JSON_MEDIA_TYPE
                return original


class JsonMiddleware:
    """Stateless factory that binds a ``JsonErrorDecorator`` into a pipeline.

    Usage:
        decorator = JsonMiddleware().attach(next_stage)
        response = await decorator.invoke(request)
    """

    def attach(self, next_stage: Stage) -> JsonErrorDecorator:
        return JsonErrorDecorator(next_stage)
