"""
SOUL Landing - FastAPI メインアプリケーション
"""

import logging
import logging.handlers
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.chat import router as chat_router
from .api.websocket import router as websocket_router
from .config import settings

# ログディレクトリを作成
LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "server.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ファイルハンドラーとコンソールハンドラーを設定
file_handler = logging.handlers.RotatingFileHandler(
    LOG_FILE,
    maxBytes=10 * 1024 * 1024,  # 10MB
    backupCount=5,
    encoding="utf-8",
)
file_handler.setLevel(logging.INFO)
file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

# ルートロガーに設定
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(file_handler)
root_logger.addHandler(console_handler)

logger = logging.getLogger(__name__)
logger.info(f"ログファイル: {LOG_FILE}")

# パス設定
BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"

# FastAPIアプリケーション
app = FastAPI(
    title="SOUL Landing API",
    description="""
## SOUL Landing API

粒子アニメーションのランディングページを支えるバックエンドAPI

### 主な機能

- **チャットリレー**: 会話履歴に固定のシステムプロンプトを付けて DeepSeek API へ転送
- **ジェスチャー判定**: 手のランドマークから開いた手／握った手を判定しアニメーションモードを返す

### エンドポイント

- `POST /api/chat`: `{"messages": [...]}` → `{"reply": "..."}`
- `/ws/gesture`: ランドマークのストリーミング入力（WebSocket）
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORSは設定しない（ページと同一オリジン。OPTIONSもルートの405に到達させる）

# スタティックファイルのマウント（ディレクトリが存在する場合のみ）
if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# ルーター登録
app.include_router(chat_router, prefix="/api")
app.include_router(websocket_router)


@app.get("/health")
async def health_check() -> dict:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.on_event("startup")
async def startup_event() -> None:
    """アプリケーション起動時の処理"""
    logger.info("SOUL Landing API を起動しました")
    logger.info(f"上流モデル: {settings.DEEPSEEK_MODEL} ({settings.DEEPSEEK_BASE_URL})")
    if not settings.DEEPSEEK_API_KEY:
        logger.warning("DEEPSEEK_API_KEY が未設定です - /api/chat は500を返します")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """アプリケーション終了時の処理"""
    logger.info("SOUL Landing API を終了します")
