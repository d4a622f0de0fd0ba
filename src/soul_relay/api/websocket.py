"""
WebSocketエンドポイント - ジェスチャーのランドマーク入力
"""

import json
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..services.gesture_service import GestureState, process_frame

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


class ConnectionManager:
    """接続ごとのモード状態の管理"""

    def __init__(self) -> None:
        self.states: dict[str, GestureState] = {}

    async def connect(self, websocket: WebSocket) -> str:
        """WebSocket接続を確立し、接続IDを返す"""
        await websocket.accept()
        connection_id = str(uuid.uuid4())
        self.states[connection_id] = GestureState()
        logger.info(f"WebSocket接続: {connection_id}")
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        """WebSocket接続を終了"""
        if self.states.pop(connection_id, None) is not None:
            logger.info(f"WebSocket切断: {connection_id}")

    def get_state(self, connection_id: str) -> Optional[GestureState]:
        return self.states.get(connection_id)


manager = ConnectionManager()


@router.websocket("/ws/gesture")
async def websocket_gesture_endpoint(websocket: WebSocket) -> None:
    """
    ジェスチャー入力エンドポイント

    メッセージ形式:
    - 受信（テキスト）: JSON形式のフレーム
        - {"type": "landmarks", "hands": [[{"x": .., "y": ..}, ...]]}
        - {"type": "toggle"}: クリックによる手動切り替え
        - {"type": "reset"}: 初期状態に戻す
    - 受信（バイナリ）: 非対応。エラーを返して接続は維持
    - 送信（テキスト）: JSON形式のレスポンス
        - {"type": "mode", "mode": "...", "is_scattered": bool, "is_collapsing": bool, ...}
        - {"type": "error", "message": "..."}
    """
    connection_id = await manager.connect(websocket)
    state = manager.get_state(connection_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                await websocket.send_json(
                    {"type": "error", "message": "テキスト(JSON)フレームで送信してください"}
                )
                continue

            try:
                update = process_frame(state, json.loads(raw))
            except ValueError as e:
                logger.warning(f"不正なフレーム: {e}")
                await websocket.send_json({"type": "error", "message": str(e)})
                continue

            await websocket.send_json(update.model_dump(mode="json"))
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(connection_id)
