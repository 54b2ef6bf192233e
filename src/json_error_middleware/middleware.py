"""Starlette middleware that applies the JSON response decorator to every request."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from json_error_middleware.decorator import JsonMiddleware
from json_error_middleware.logging import LoggingSettings, configure_logging
from json_error_middleware.stage import CallNext, CallNextStage


class JsonErrorMiddleware(BaseHTTPMiddleware):
    """Force JSON on every response and wrap non-success bodies in an envelope.

    - Status <= 299: body untouched, Content-Type set to application/json
    - Status > 299: body replaced by {"error": <status>, "message": "<phrase>"}
    - Exceptions from the rest of the app propagate unchanged

    Responses generated by the framework itself (unmatched routes, 405s,
    validation 422s) pass through here too.

    Usage:
        app.add_middleware(JsonErrorMiddleware)
    """

    factory = JsonMiddleware()

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        configure_logging(LoggingSettings())

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        # call_next is bound to this request, so the decorator is too
        decorator = self.factory.attach(CallNextStage(call_next))
        return await decorator.invoke(request)
