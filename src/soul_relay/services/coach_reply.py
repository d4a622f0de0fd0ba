"""
コーチ返答パーサー - 上流が返したJSONテキストを構造化する
"""

import json
import logging
from typing import Any

from ..models.chat import CoachReply

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [_as_text(v) for v in value if v is not None]
    return [_as_text(value)]


def parse_coach_reply(text: str) -> CoachReply:
    """
    返答テキストをパースする

    モデルはコードフェンスや前置きを付けてくることがあるため、最も外側の
    {...} を取り出してパースする。JSONとして読めない場合はテキスト全体を
    reply として扱う。例外は送出しない。
    """
    raw = text or ""
    fallback = CoachReply(reply=raw.strip(), raw=raw)

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end <= start:
        return fallback

    try:
        data = json.loads(raw[start : end + 1])
    except json.JSONDecodeError as e:
        logger.warning(f"コーチ返答のJSONパースに失敗: {e}")
        return fallback

    if not isinstance(data, dict):
        return fallback

    return CoachReply(
        reply=_as_text(data.get("reply")),
        mood=_as_text(data.get("mood")),
        insights=_as_text(data.get("insights")),
        suggestions=_as_list(data.get("suggestions")),
        topics=_as_list(data.get("topics")),
        raw=raw,
    )
