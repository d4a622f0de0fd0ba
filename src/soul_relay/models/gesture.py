"""
ジェスチャー関連のデータモデル
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class GestureSignal(str, Enum):
    """手の開閉シグナル"""

    OPEN = "open"
    CLOSED = "closed"


class Landmark(BaseModel):
    """手のランドマーク（正規化座標）"""

    x: float
    y: float
    z: Optional[float] = None


class ModeUpdate(BaseModel):
    """WebSocketで返すアニメーションモード"""

    type: str = "mode"
    mode: str
    is_scattered: bool
    is_collapsing: bool
    signal: Optional[GestureSignal] = None
    openness: Optional[float] = Field(None, description="判定に使った開き具合")
