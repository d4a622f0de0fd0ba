import json

from soul_relay.services.coach_reply import parse_coach_reply


SAMPLE = {
    "reply": "哈哈我也刚忙完\n周末要不要一起去看展？\n你今天过得怎么样",
    "mood": "紧张期待",
    "insights": "对方回复慢但语气积极",
    "suggestions": ["别连发消息", "抛出具体邀约"],
    "topics": ["展览", "周末计划"],
}


def test_parses_plain_json_reply():
    text = json.dumps(SAMPLE, ensure_ascii=False)
    coach = parse_coach_reply(text)

    assert coach.mood == "紧张期待"
    assert coach.insights == SAMPLE["insights"]
    assert coach.suggestions == SAMPLE["suggestions"]
    assert coach.topics == SAMPLE["topics"]
    assert coach.raw == text
    assert coach.reply_options() == [
        "哈哈我也刚忙完",
        "周末要不要一起去看展？",
        "你今天过得怎么样",
    ]


def test_ignores_code_fences_and_preamble():
    text = "好的，以下是建议：\n```json\n" + json.dumps(SAMPLE, ensure_ascii=False) + "\n```"
    coach = parse_coach_reply(text)
    assert coach.mood == "紧张期待"
    assert coach.topics == ["展览", "周末计划"]


def test_non_json_text_becomes_reply():
    coach = parse_coach_reply("  先别急，等她回复再说。 ")
    assert coach.reply == "先别急，等她回复再说。"
    assert coach.mood == ""
    assert coach.suggestions == []


def test_broken_json_falls_back_to_text():
    text = '{"reply": "你好", "mood": '
    coach = parse_coach_reply(text)
    assert coach.reply == text
    assert coach.topics == []


def test_empty_reply_from_relay():
    coach = parse_coach_reply("")
    assert coach.reply == ""
    assert coach.reply_options() == []


def test_scalar_lists_are_normalized():
    coach = parse_coach_reply('{"reply": "嗨", "suggestions": "多倾听", "topics": null, "mood": 3}')
    assert coach.suggestions == ["多倾听"]
    assert coach.topics == []
    assert coach.mood == "3"
