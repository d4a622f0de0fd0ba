"""
ジェスチャーサービス - 手のランドマークから開閉シグナルを判定し、アニメーションモードを管理
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..config import settings
from ..models.gesture import GestureSignal, Landmark, ModeUpdate

logger = logging.getLogger(__name__)

WRIST = 0
PALM_BASE = 9
# 人差し指・中指・薬指・小指・親指の先端
FINGER_TIPS = (8, 12, 16, 20, 4)
LANDMARK_COUNT = 21
MIN_BASE_DISTANCE = 0.0001


def _distance(a: Landmark, b: Landmark) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def to_landmarks(raw: Sequence[Any]) -> list[Landmark]:
    """辞書などの生データをランドマークのリストに変換する"""
    if not isinstance(raw, (list, tuple)):
        raise ValueError("ランドマークはリストで指定してください")
    return [p if isinstance(p, Landmark) else Landmark.model_validate(p) for p in raw]


def openness(landmarks: Sequence[Landmark]) -> float:
    """
    手の開き具合を計算する

    手首から各指先までの距離の平均を、手首から手のひら基点（9番）までの
    距離で割った値。基点距離が0の場合は MIN_BASE_DISTANCE を使う。
    """
    if len(landmarks) < LANDMARK_COUNT:
        raise ValueError(
            f"ランドマークが不足しています: {len(landmarks)}/{LANDMARK_COUNT}"
        )

    wrist = landmarks[WRIST]
    base = _distance(wrist, landmarks[PALM_BASE]) or MIN_BASE_DISTANCE
    total = sum(_distance(wrist, landmarks[i]) for i in FINGER_TIPS)
    return total / len(FINGER_TIPS) / base


def classify(
    landmarks: Sequence[Landmark],
    threshold: Optional[float] = None,
) -> GestureSignal:
    """開き具合が閾値を超えたら OPEN、それ以外は CLOSED"""
    if threshold is None:
        threshold = settings.OPEN_THRESHOLD
    if openness(landmarks) > threshold:
        return GestureSignal.OPEN
    return GestureSignal.CLOSED


@dataclass
class GestureState:
    """アニメーションモードのフラグ（接続ごとに1つ）"""

    is_scattered: bool = False
    is_collapsing: bool = False

    @property
    def mode(self) -> str:
        if self.is_scattered:
            return "scatter"
        if self.is_collapsing:
            return "collapse"
        return "home"

    def trigger_open(self) -> None:
        self.is_scattered = True
        self.is_collapsing = False

    def trigger_close(self) -> None:
        self.is_scattered = False
        self.is_collapsing = True

    def toggle(self) -> None:
        """クリック操作（カメラが使えない場合の代替）。収縮フラグのみ反転する"""
        self.is_collapsing = not self.is_collapsing

    def reset(self) -> None:
        self.is_scattered = False
        self.is_collapsing = False

    def apply(self, signal: GestureSignal) -> None:
        if signal is GestureSignal.OPEN:
            self.trigger_open()
        else:
            self.trigger_close()

    def on_hands(
        self,
        hands: Sequence[Sequence[Landmark]],
        threshold: Optional[float] = None,
    ) -> Optional[GestureSignal]:
        """
        検出された手のリストを受け取り、最初の手でモードを更新する

        手が検出されていない場合は何もせず None を返す。
        """
        if not hands:
            return None
        signal = classify(hands[0], threshold)
        self.apply(signal)
        return signal

    def to_update(
        self,
        signal: Optional[GestureSignal] = None,
        value: Optional[float] = None,
    ) -> ModeUpdate:
        return ModeUpdate(
            mode=self.mode,
            is_scattered=self.is_scattered,
            is_collapsing=self.is_collapsing,
            signal=signal,
            openness=value,
        )


def process_frame(state: GestureState, frame: Any) -> ModeUpdate:
    """
    WebSocketで受信したフレームを処理してモードを返す

    フレーム形式:
        {"type": "landmarks", "hands": [[{"x": .., "y": ..}, ...], ...]}
        {"type": "toggle"}
        {"type": "reset"}

    Raises:
        ValueError: フレームの形式が不正な場合
    """
    if not isinstance(frame, dict):
        raise ValueError("フレームはJSONオブジェクトで送信してください")

    frame_type = frame.get("type")

    if frame_type == "landmarks":
        raw_hands = frame.get("hands") or []
        if not isinstance(raw_hands, list):
            raise ValueError("hands はリストで指定してください")
        hands = [to_landmarks(hand) for hand in raw_hands]
        if not hands:
            return state.to_update()
        value = openness(hands[0])
        signal = state.on_hands(hands)
        return state.to_update(signal, value)

    if frame_type == "toggle":
        state.toggle()
        return state.to_update()

    if frame_type == "reset":
        state.reset()
        return state.to_update()

    raise ValueError(f"不明なフレームタイプ: {frame_type}")
