from chat_relay.api.chat import ensure_system_prompt

PROMPT = "You are a test assistant."


def test_prepends_when_absent():
    messages = [{"role": "user", "content": "hi"}]
    result = ensure_system_prompt(messages, PROMPT)

    assert result == [{"role": "system", "content": PROMPT}, {"role": "user", "content": "hi"}]
    # input list is not modified
    assert messages == [{"role": "user", "content": "hi"}]


def test_empty_conversation():
    assert ensure_system_prompt([], PROMPT) == [{"role": "system", "content": PROMPT}]


def test_idempotent():
    once = ensure_system_prompt([{"role": "user", "content": "hi"}], PROMPT)
    assert ensure_system_prompt(once, PROMPT) == once


def test_system_message_anywhere_is_respected():
    messages = [
        {"role": "user", "content": "hi"},
        {"role": "system", "content": "Custom rules."},
    ]
    assert ensure_system_prompt(messages, PROMPT) is messages
