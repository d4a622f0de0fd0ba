"""
チャットAPIエンドポイント - 上流LLMへのリレー
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..config import settings
from ..models.chat import ChatResponse, ErrorResponse
from ..services.relay_service import relay_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

# POST以外も受け付けて自前で405を返す（FastAPI標準の {"detail": ...} にしない）
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


@router.api_route("/chat", methods=ALL_METHODS, response_model=None)
async def relay_chat(request: Request) -> JSONResponse:
    """
    会話履歴を上流LLMへ転送して返答を取得する

    - POST以外は 405 {"error": "Method not allowed"}
    - 成功時は 200 {"reply": "..."}（返答がなければ空文字）
    - 失敗時はすべて 500 {"reply": "<固定文言>"}
    """
    if request.method != "POST":
        return JSONResponse(
            status_code=405,
            content=ErrorResponse(error="Method not allowed").model_dump(),
        )

    try:
        body = await request.json()
        messages = body.get("messages")
        reply = await relay_service.complete(messages)
    except Exception as e:
        logger.error(f"チャットリレー失敗: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ChatResponse(reply=settings.FAILURE_REPLY).model_dump(),
        )

    return JSONResponse(status_code=200, content=ChatResponse(reply=reply).model_dump())
