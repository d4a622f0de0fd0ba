"""
チャット関連のデータモデル
"""

from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """メッセージの役割"""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """チャットメッセージ"""

    role: MessageRole
    content: str


class ChatRequest(BaseModel):
    """
    チャットリクエスト

    クライアント向けのドキュメント用。リレーはJSONとして読めれば
    中身を検証せずにそのまま上流へ転送する。
    """

    messages: list[ChatMessage] = Field(..., description="会話履歴（古い順）")


class ChatResponse(BaseModel):
    """チャットレスポンス"""

    reply: str = Field(..., description="上流の最初の候補の本文（なければ空文字）")


class ErrorResponse(BaseModel):
    """エラーレスポンス"""

    error: str


class CoachReply(BaseModel):
    """社交コーチの構造化された返答"""

    reply: str = Field("", description="返信案（改行区切りで3つ）")
    mood: str = Field("", description="3〜6文字の感情")
    insights: str = Field("", description="会話のリズムや関係性の分析")
    suggestions: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    raw: str = Field("", description="上流から届いた元のテキスト")

    def reply_options(self) -> list[str]:
        """返信案を1行ずつに分割する（空行は除外）"""
        return [line.strip() for line in self.reply.split("\n") if line.strip()]
