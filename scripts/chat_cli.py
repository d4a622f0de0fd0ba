#!/usr/bin/env python3
"""
社交コーチ チャット CLI

起動中のリレー（POST /api/chat）に会話を送り、構造化された返答を表示する

使用方法:
    source .venv/bin/activate
    uvicorn soul_relay.main:app &
    python scripts/chat_cli.py
"""

import requests

from soul_relay.config import settings
from soul_relay.models.chat import ChatMessage, ChatRequest, CoachReply, MessageRole
from soul_relay.services.coach_reply import parse_coach_reply


def print_header() -> None:
    """ヘッダーを表示"""
    print()
    print("╔" + "═" * 48 + "╗")
    print("║" + " 交个朋友 - AI Social Coach ".center(48) + "║")
    print("╚" + "═" * 48 + "╝")
    print()
    print(f"接続先: {settings.RELAY_URL}")
    print("終了するには 'quit' または 'exit' と入力してください。")
    print("-" * 50)


def print_coach_reply(coach: CoachReply) -> None:
    """コーチの返答を表示"""
    print()
    print("🤖 Coach:")
    for i, option in enumerate(coach.reply_options(), 1):
        print(f"   {i}. {option}")

    if coach.mood:
        print(f"\n   😶 情绪: {coach.mood}")
    if coach.insights:
        print(f"   🔍 分析: {coach.insights}")
    if coach.suggestions:
        print("   💡 建议:")
        for suggestion in coach.suggestions:
            print(f"      - {suggestion}")
    if coach.topics:
        print("   💬 话题:")
        for topic in coach.topics:
            print(f"      - {topic}")


def send_messages(messages: list[ChatMessage]) -> str:
    """リレーに会話履歴を送信して返答テキストを取得"""
    response = requests.post(
        settings.RELAY_URL,
        json=ChatRequest(messages=messages).model_dump(mode="json"),
        timeout=120,
    )
    response.raise_for_status()
    return response.json().get("reply", "")


def main() -> None:
    """メイン関数"""
    print_header()

    history: list[ChatMessage] = []

    # 会話ループ
    while True:
        print()
        user_input = input("👤 あなた: ").strip()

        if not user_input:
            continue

        if user_input.lower() in ["quit", "exit", "終了", "q"]:
            print()
            print("👋 ご利用ありがとうございました！")
            break

        history.append(ChatMessage(role=MessageRole.USER, content=user_input))

        try:
            reply = send_messages(history)
        except requests.RequestException as e:
            history.pop()
            print(f"\n❌ エラーが発生しました: {e}")
            print("もう一度お試しください。")
            continue

        history.append(ChatMessage(role=MessageRole.ASSISTANT, content=reply))
        print_coach_reply(parse_coach_reply(reply))


if __name__ == "__main__":
    main()
