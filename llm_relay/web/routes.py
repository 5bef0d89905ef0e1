"""
API routes for the LLM relay

This module contains all FastAPI routes: the LLM relay, the dog context
store and the auxiliary diagnostic/logging endpoints.
"""

from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse

from ..models.chat import ChatRequest
from ..models.log import ClientLogEntry
from ..services import ContextStore, RelayService
from ..utils.relay_logger import RelayLogger
from ..utils.timestamps import utc_now_iso

# Initialize router
router = APIRouter()

CHECK_AR_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_relay_service(request: Request) -> RelayService:
    return request.app.state.relay_service


def get_context_store(request: Request) -> ContextStore:
    return request.app.state.context_store


def get_relay_logger(request: Request) -> RelayLogger:
    return request.app.state.relay_logger


@router.get("/", include_in_schema=False)
def index(request: Request) -> FileResponse:
    """Serve the client application's index document"""
    index_file = Path(request.app.state.settings.static_dir) / "index.html"
    if not index_file.is_file():
        raise HTTPException(status_code=404)
    return FileResponse(index_file)


@router.post("/api/llm")
async def relay_llm(
    request: Request,
    chat_request: ChatRequest,
    relay_service: RelayService = Depends(get_relay_service),
) -> Dict[str, Any]:
    """
    Relay a chat completion to the configured provider

    Upstream failures raise UpstreamError, rendered as
    500 {error: "Failed to process request", details}.
    """
    request_id = getattr(request.state, "request_id", None)
    return await relay_service.relay(chat_request, request_id=request_id)


@router.api_route("/api/dog-context/{context_id}", methods=["POST", "PUT"])
def store_dog_context(
    context_id: str,
    context: Dict[str, Any] = Body(default={}),
    store: ContextStore = Depends(get_context_store),
):
    """Store (replace) the context record for a session"""
    store.upsert(context_id, context)
    return {"success": True}


@router.get("/api/dog-context/{context_id}")
def get_dog_context(context_id: str, store: ContextStore = Depends(get_context_store)):
    """Return the stored context record; 404 when the id was never written"""
    return store.get(context_id)


@router.get("/api/check-ar")
def check_ar(request: Request) -> JSONResponse:
    """Diagnostic endpoint echoing what the client sent"""
    return JSONResponse(
        content={
            "status": "ok",
            "message": "AR check endpoint reached",
            "timestamp": utc_now_iso(),
            "headers": dict(request.headers),
            "userAgent": request.headers.get("user-agent"),
        },
        headers=CHECK_AR_CORS_HEADERS,
    )


@router.post("/api/log")
def client_log(entry: ClientLogEntry, relay_logger: RelayLogger = Depends(get_relay_logger)):
    """Write a client-side log line to the server log"""
    relay_logger.log_client(
        entry.type,
        entry.message,
        user_agent=entry.user_agent,
        client_timestamp=entry.timestamp,
    )
    return {"received": True}
