"""Shared fixtures: local aiohttp apps standing in for target sites and the render service."""

import asyncio
from typing import Optional

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from media_scout.events import EventSink, ScrapeEvent


def html_page(body: str) -> str:
    return f"<!DOCTYPE html><html><head><title>t</title></head><body>{body}</body></html>"


def make_site(
    pages: Optional[dict] = None,
    assets: Optional[dict] = None,
    slow: Optional[dict] = None,
) -> web.Application:
    """
    Build a fake site.

    Args:
        pages: path -> HTML body (served as text/html)
        assets: path -> size in bytes (GET and HEAD both answer)
        slow: path -> seconds to wait before answering
    """
    app = web.Application()

    def page_handler(html):
        async def handler(request):
            return web.Response(text=html, content_type="text/html")
        return handler

    def asset_handler(size):
        async def handler(request):
            return web.Response(body=b"x" * size, content_type="application/octet-stream")
        return handler

    def asset_head_handler(size):
        async def handler(request):
            return web.Response(headers={"Content-Length": str(size)})
        return handler

    def slow_handler(delay):
        async def handler(request):
            await asyncio.sleep(delay)
            return web.Response(body=b"late", content_type="application/octet-stream")
        return handler

    for path, html in (pages or {}).items():
        app.router.add_get(path, page_handler(html))
    for path, size in (assets or {}).items():
        app.router.add_get(path, asset_handler(size), allow_head=False)
        app.router.add_route("HEAD", path, asset_head_handler(size))
    for path, delay in (slow or {}).items():
        app.router.add_get(path, slow_handler(delay))
    return app


def make_render_service(payload=None, status=200, body=None, delay=0.0, seen=None) -> web.Application:
    """Fake render service answering every call the same way."""
    app = web.Application()

    async def handler(request):
        if seen is not None:
            seen.append({"url": request.query.get("url"), "accept": request.headers.get("Accept")})
        if delay:
            await asyncio.sleep(delay)
        if body is not None:
            return web.Response(text=body, status=status)
        return web.json_response(payload, status=status)

    app.router.add_get("/render", handler)
    return app


class RecordingSink(EventSink):
    """Keeps every event in memory."""

    def __init__(self):
        self.events: list[ScrapeEvent] = []

    async def record(self, event: ScrapeEvent) -> None:
        self.events.append(event)


class BrokenSink(EventSink):
    async def record(self, event: ScrapeEvent) -> None:
        raise RuntimeError("event log is down")


@pytest_asyncio.fixture
async def serve():
    """Start aiohttp applications on local ports; all are closed after the test."""
    servers = []

    async def _serve(app: web.Application) -> TestServer:
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield _serve

    for server in servers:
        await server.close()


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession() as s:
        yield s


@pytest.fixture
def sink():
    return RecordingSink()
