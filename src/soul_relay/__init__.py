"""
SOUL Landing バックエンド
"""
