from collections.abc import AsyncIterator

import pytest_asyncio
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from httpx import ASGITransport, AsyncClient

from json_error_middleware.middleware import JsonErrorMiddleware

STATUS_METHODS = ["GET", "POST", "PUT"]


def build_app() -> FastAPI:
    """Small service with the middleware installed, mirroring a real assembly."""
    app = FastAPI()
    app.add_middleware(JsonErrorMiddleware)

    @app.api_route("/status/{code}", methods=STATUS_METHODS)
    async def status_handler(code: int) -> Response:
        """Answer with an empty response carrying the requested status."""
        return Response(status_code=code)

    @app.get("/ok")
    async def ok() -> Response:
        return Response(content=b"ok")

    @app.get("/text")
    async def text() -> PlainTextResponse:
        return PlainTextResponse("plain body", headers={"X-Trace": "abc"})

    @app.get("/teapot")
    async def teapot() -> PlainTextResponse:
        return PlainTextResponse("short and stout", status_code=418, headers={"X-Trace": "abc"})

    @app.post("/only-post")
    async def only_post() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/boom")
    async def boom() -> Response:
        raise RuntimeError("boom")

    return app


app = build_app()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def lenient_client() -> AsyncIterator[AsyncClient]:
    """Client that returns the server's 500 instead of re-raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
