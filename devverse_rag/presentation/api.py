"""Chat HTTP API.

Routes:
- POST /api/chat - answer a question from the article index
- GET /health - liveness check
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from devverse_rag.config.settings import settings
from devverse_rag.container import configure_container, container
from devverse_rag.core.exceptions import ServiceUnavailableError
from devverse_rag.core.models.chat import ChatMessage
from devverse_rag.core.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_chat_service() -> ChatService:
    """Resolve the process-wide chat service."""
    if not container.is_registered(ChatService):
        configure_container(settings)
    return container.resolve(ChatService)


def parse_history(raw: Any) -> list[ChatMessage]:
    """Keep well-formed user/assistant turns, drop everything else."""
    if not isinstance(raw, list):
        return []

    return [
        ChatMessage(role=item["role"], content=item["content"])
        for item in raw
        if isinstance(item, dict)
        and item.get("role") in ("user", "assistant")
        and isinstance(item.get("content"), str)
    ]


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/api/chat")
async def chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> JSONResponse:
    """Answer a chat message.

    Body: ``{"message": str, "history": [{"role", "content"}]?}``.

    Returns:
        200 with ``{answer, sources}``, 400 for a missing message,
        503 when the request timed out, 500 for any other failure.
    """
    try:
        body = await request.json()
        message = body.get("message") if isinstance(body, dict) else None
        message = message.strip() if isinstance(message, str) else ""

        if not message:
            return _error("Message is required.", 400)

        history = parse_history(body.get("history"))
        response = await chat_service.build_chat_response(message, history)
        return JSONResponse(response.to_dict(), status_code=200)

    except ServiceUnavailableError:
        logger.warning("Chat API timed out")
        return _error("The assistant is temporarily unavailable.", 503)
    except Exception:
        logger.exception("Chat API error")
        return _error("Failed to generate a response.", 500)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def create_app() -> FastAPI:
    app = FastAPI(title="DevVerse article assistant")
    app.include_router(router)
    return app


app = create_app()
