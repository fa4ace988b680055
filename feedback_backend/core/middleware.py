"""CORS and request/response tracing middleware."""

import json
import time
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from feedback_backend.core.config import settings
from feedback_backend.services.request_log_service import request_log_service

logger = logging.getLogger("feedback_api")


def serialize_request_body(raw: bytes) -> str:
    """JSON text of the inbound body, ``{}`` when there is none."""
    if not raw.strip():
        return "{}"
    try:
        return json.dumps(json.loads(raw), separators=(",", ":"), ensure_ascii=False)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


class ApiRequestTracer:
    """Trace every HTTP request into the ``api_requests`` table.

    Sits in front of the whole application and owns the response-writing
    step: each outbound message is forwarded to the client unchanged while
    the body bytes are kept. Once the final body chunk has been sent the
    elapsed time is taken and the trace row is written in a worker thread.
    A failing write is logged, never raised.

    Exceptions nothing else handled are answered here with the generic 500
    envelope so that they are traced like any other response.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request_chunks = []
        response_chunks = []
        state = {"status": 500, "started": False}

        async def receive_wrapper() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                state["status"] = message["status"]
                state["started"] = True
            elif message["type"] == "http.response.body":
                response_chunks.append(message.get("body", b""))
            await send(message)

        error = None
        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", scope["method"], scope["path"])
            if state["started"]:
                error = exc
            else:
                response = JSONResponse(
                    status_code=500,
                    content={"success": False, "message": "Something went wrong!"},
                )
                await response(scope, receive, send_wrapper)

        elapsed_ms = int(round((time.perf_counter() - start) * 1000))
        endpoint = scope["path"]
        query = scope.get("query_string", b"")
        if query:
            endpoint = f"{endpoint}?{query.decode('latin-1')}"

        logger.info("%s %s %s %sms", scope["method"], endpoint, state["status"], elapsed_ms)

        session_factory = scope["app"].state.session_factory
        await run_in_threadpool(
            request_log_service.record,
            session_factory,
            scope["method"],
            endpoint,
            serialize_request_body(b"".join(request_chunks)),
            b"".join(response_chunks).decode("utf-8", errors="replace"),
            state["status"],
            elapsed_ms,
        )

        if error is not None:
            raise error


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (added last, so outermost)
    app.add_middleware(ApiRequestTracer)
