"""Pipeline stage capability.

A stage accepts a request and eventually produces a response (or raises),
and can say whether it is ready to accept work. The decorator both wraps
and implements this protocol, which is what lets decorators stack.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from starlette.requests import Request
from starlette.responses import Response

CallNext = Callable[[Request], Awaitable[Response]]


@runtime_checkable
class Stage(Protocol):
    """Anything that can sit in the request pipeline."""

    async def invoke(self, request: Request) -> Response: ...

    def ready(self) -> bool: ...


class CallNextStage:
    """Adapt Starlette's ``call_next`` to the ``Stage`` protocol.

    An ASGI app has no readiness query, so this stage is always ready and
    adds no capacity limit or buffering of its own.
    """

    def __init__(self, call_next: CallNext) -> None:
        self._call_next = call_next

    async def invoke(self, request: Request) -> Response:
        return await self._call_next(request)

    def ready(self) -> bool:
        return True
