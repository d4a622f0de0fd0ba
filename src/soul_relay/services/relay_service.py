"""
リレーサービス - DeepSeek API（OpenAI互換）への会話転送
"""

import logging
from typing import Any, Optional

from openai import APIStatusError, AsyncOpenAI

from ..config import settings

logger = logging.getLogger(__name__)


COACH_PROMPT = """你是一个中文的 AI 社交教练「交个朋友」。
你的任务：
1）理解用户描述的聊天场景；
2）给出富有共情、具体可执行的建议；
3）必须严格输出以下 JSON（绝不能多字或少字）：

{
  "reply": "提供三种自然回复建议，用\\n分行",
  "mood": "3~6 字情绪，例如：紧张期待",
  "insights": "对聊天节奏、关系的分析",
  "suggestions": [
    "建议 1",
    "建议 2"
  ],
  "topics": [
    "话题 1",
    "话题 2"
  ]
}
"""

SYSTEM_PROMPT = {"role": "system", "content": COACH_PROMPT}


def build_messages(messages: Any) -> list:
    """
    システムプロンプトを先頭に付けた送信用メッセージを構築する

    呼び出し側のリストは並べ替え・変更・欠落なしでそのまま後ろに続く。
    messages が None など反復できない値の場合は TypeError になる。
    """
    return [dict(SYSTEM_PROMPT), *messages]


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_reply(completion: Any) -> str:
    """
    上流レスポンスから choices[0].message.content を取り出す

    途中のどこかが欠けている場合は空文字を返す（エラー扱いにしない）。
    SDKのオブジェクトと素の辞書の両方を受け付ける。
    """
    choices = _field(completion, "choices")
    if not isinstance(choices, (list, tuple)) or not choices:
        return ""

    content = _field(_field(choices[0], "message"), "content")
    if not isinstance(content, str):
        return ""
    return content


class RelayService:
    """DeepSeek API を使用したチャットリレー"""

    def __init__(self, client: Optional[AsyncOpenAI] = None) -> None:
        """リレーサービスの初期化（クライアントは初回呼び出し時に生成）"""
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """上流クライアントを取得する"""
        if self._client is None:
            settings.validate()
            options: dict[str, Any] = {
                "api_key": settings.DEEPSEEK_API_KEY,
                "base_url": settings.DEEPSEEK_BASE_URL,
                # リトライはしない
                "max_retries": 0,
            }
            if settings.RELAY_TIMEOUT_SECONDS is not None:
                options["timeout"] = settings.RELAY_TIMEOUT_SECONDS
            self._client = AsyncOpenAI(**options)
            logger.info(f"上流クライアントを初期化: base_url={settings.DEEPSEEK_BASE_URL}")
        return self._client

    async def complete(self, messages: Any) -> str:
        """
        会話を上流へ転送して返答テキストを取得する

        Args:
            messages: 呼び出し側の会話履歴（role, content を含む辞書のリスト）

        Returns:
            最初の候補の本文。存在しなければ空文字

        Raises:
            Exception: 入力不正・設定不足・通信エラー・JSONでない応答など。呼び出し側で500にまとめる
        """
        full_messages = build_messages(messages)

        try:
            completion = await self.client.chat.completions.create(
                model=settings.DEEPSEEK_MODEL,
                messages=full_messages,
                temperature=settings.TEMPERATURE,
            )
        except APIStatusError as e:
            # 非2xxでもJSON本文なら通常の応答と同じく choices を探す
            try:
                completion = e.response.json()
            except ValueError:
                raise e
            logger.warning(f"上流がエラーステータスを返却: status={e.status_code}")

        reply = extract_reply(completion)
        logger.info(f"上流応答を受信: messages={len(full_messages)}, reply_chars={len(reply)}")
        return reply


# シングルトンインスタンス
relay_service = RelayService()
