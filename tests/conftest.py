"""
Shared pytest fixtures for docbridge tests.

This module provides:
- Logging/settings reset between tests
- Paths to annotated source fixtures
- A stub RPC endpoint (FastAPI) implementing the bearer-secret contract
- A ready-made worker project directory (dist/docs.json + .dev.vars)

Usage:
    def test_something(worker_project, stub_transport):
        config = load_bridge_config("w", "http://worker.test", worker_project)
"""

from __future__ import annotations

import io
import json
import re
import traceback
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from PIL import Image

from docbridge.core.contract import Contract, MethodDoc, ParamDoc, ReturnDoc
from docbridge.core.settings import BridgeSettings, get_settings
from docbridge.core.store import write_contract_store

FIXTURES = Path(__file__).parent / "fixtures"

SECRET = "0123456789abcdef" * 4
WORKER_URL = "http://worker.test"


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_state():
    """Each test starts with default structlog config and fresh settings."""
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    get_settings.cache_clear()
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    get_settings.cache_clear()


# =============================================================================
# Source fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def calculator_source() -> str:
    return (FIXTURES / "calculator.ts").read_text(encoding="utf-8")


@pytest.fixture
def image_worker_source() -> str:
    return (FIXTURES / "image_worker.ts").read_text(encoding="utf-8")


# =============================================================================
# Contracts and worker project
# =============================================================================


@pytest.fixture
def calculator_contract() -> Contract:
    """Default-exported contract with one fully typed and one optional-param method."""
    return Contract(
        exported_as="default",
        description="Arithmetic over RPC.",
        methods=(
            MethodDoc(
                name="add",
                description="Add two numbers.",
                params=(
                    ParamDoc(name="a", type="number", description="first operand"),
                    ParamDoc(name="b", type="number", description="second operand"),
                ),
                returns=ReturnDoc(type="number", description="the sum"),
            ),
            MethodDoc(
                name="greet",
                description="Greet someone.",
                params=(
                    ParamDoc(name="name", type="string", description="who"),
                    ParamDoc(name="punctuation", type="string", optional=True),
                ),
                returns=ReturnDoc(type="string"),
            ),
            MethodDoc(name="fail", description="Always throws."),
            MethodDoc(name="image", description="Render a tiny image."),
        ),
    )


@pytest.fixture
def settings(tmp_path: Path) -> BridgeSettings:
    return BridgeSettings(_env_file=None, scratch_dir=tmp_path / "scratch")


@pytest.fixture
def worker_project(tmp_path: Path, calculator_contract: Contract) -> Path:
    """Project directory with a contract store and a shared secret."""
    project = tmp_path / "worker"
    write_contract_store({"Calculator": calculator_contract}, project / "dist" / "docs.json")
    (project / ".dev.vars").write_text(f"SHARED_SECRET={SECRET}\n", encoding="utf-8")
    return project


# =============================================================================
# Images
# =============================================================================


def make_image(fmt: str = "JPEG", mode: str = "RGB", size: tuple[int, int] = (48, 32)) -> bytes:
    color = (200, 30, 30, 255) if mode == "RGBA" else (200, 30, 30)
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    if fmt == "JPEG":
        img.save(buf, format=fmt, quality=100)
    else:
        img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image("JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG", mode="RGBA")


# =============================================================================
# Stub RPC endpoint
# =============================================================================


def create_stub_endpoint(secret: str, methods: dict[str, Callable[..., Any]]) -> FastAPI:
    """In-process endpoint with the same auth and dispatch rules as the real one."""
    app = FastAPI()

    @app.post("/rpc")
    async def rpc(request: Request):
        authorization = request.headers.get("authorization", "")
        token = authorization[len("Bearer "):] if authorization.startswith("Bearer ") else ""
        if token != secret or not re.fullmatch(r"[0-9a-fA-F]{64}", token):
            return PlainTextResponse("Unauthorized", status_code=401)

        body = await request.json()
        handler = methods.get(body["method"])
        if handler is None:
            return JSONResponse(
                {
                    "content": [{"type": "text", "text": f"No method '{body['method']}'"}],
                    "isError": True,
                }
            )
        try:
            result = handler(*body.get("args", []))
        except Exception as e:
            return JSONResponse(
                {
                    "content": [
                        {"type": "text", "text": str(e)},
                        {"type": "text", "text": json.dumps(traceback.format_exc())},
                    ],
                    "isError": True,
                }
            )
        if isinstance(result, Response):
            return result
        if isinstance(result, str):
            return PlainTextResponse(result)
        return JSONResponse(result)

    return app


def _fail() -> None:
    raise RuntimeError("kaboom")


@pytest.fixture
def stub_methods(jpeg_bytes: bytes) -> dict[str, Callable[..., Any]]:
    return {
        "add": lambda a, b: a + b,
        "greet": lambda name, punctuation: f"Hello, {name}{punctuation or '!'}",
        "fail": _fail,
        "image": lambda: Response(content=jpeg_bytes, media_type="image/jpeg"),
    }


@pytest.fixture
def stub_endpoint(stub_methods) -> FastAPI:
    return create_stub_endpoint(SECRET, stub_methods)


@pytest.fixture
def stub_transport(stub_endpoint: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=stub_endpoint)


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for an ``httpx.MockTransport`` that records every request.

    The recorded requests are available as ``transport.requests``.
    """

    def factory(
        status: int = 200,
        *,
        content: bytes = b"ok",
        headers: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if error is not None:
                raise error
            return httpx.Response(
                status,
                content=content,
                headers=headers or {"content-type": "text/plain"},
            )

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory


@pytest.fixture
def shared_secret() -> str:
    return SECRET


@pytest.fixture
def worker_url() -> str:
    return WORKER_URL


@pytest.fixture
def stub_endpoint_factory() -> Callable[..., FastAPI]:
    return create_stub_endpoint
