"""
設定モジュール - 環境変数からの設定読み込み
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# プロジェクトルートの.envファイルを読み込み
project_root = Path(__file__).parent.parent.parent
env_path = project_root / ".env"
load_dotenv(env_path)


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class Settings:
    """アプリケーション設定"""

    # DeepSeek API設定
    DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "")
    DEEPSEEK_BASE_URL: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1")

    # モデル設定（プロセス内で固定）
    DEEPSEEK_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
    TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))

    # 上流呼び出しのタイムアウト（未設定ならSDKのデフォルト）
    RELAY_TIMEOUT_SECONDS: Optional[float] = _optional_float("RELAY_TIMEOUT_SECONDS")

    # 失敗時にクライアントへ返す固定文言
    FAILURE_REPLY: str = os.getenv("FAILURE_REPLY", "后端处理失败")

    # ジェスチャー判定の閾値（指先距離の平均 / 手首-手のひら基点距離）
    OPEN_THRESHOLD: float = float(os.getenv("OPEN_THRESHOLD", "1.02"))

    # ログ設定
    LOG_DIR: str = os.getenv("LOG_DIR", str(project_root / "logs"))

    # CLIの接続先
    RELAY_URL: str = os.getenv("RELAY_URL", "http://localhost:8000/api/chat")

    @classmethod
    def validate(cls) -> None:
        """設定の検証"""
        if not cls.DEEPSEEK_API_KEY:
            raise ValueError("DEEPSEEK_API_KEY が設定されていません")


settings = Settings()
