"""
データモデルパッケージ
"""

from .chat import ChatMessage, ChatRequest, ChatResponse, CoachReply, ErrorResponse
from .gesture import GestureSignal, Landmark, ModeUpdate

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "CoachReply",
    "ErrorResponse",
    "GestureSignal",
    "Landmark",
    "ModeUpdate",
]
