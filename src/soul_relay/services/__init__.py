"""
サービスパッケージ
"""

from .gesture_service import GestureState
from .relay_service import RelayService

__all__ = ["GestureState", "RelayService"]
