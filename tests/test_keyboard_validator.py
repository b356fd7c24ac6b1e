import logging

from keyboard import validate_keyboard


def codes(warnings):
    return [warning.code for warning in warnings]


def test_clean_descriptors_have_no_warnings():
    assert validate_keyboard("inline:url:Docs|https://example.com, Ping", "help") == []
    assert validate_keyboard("yes,no|maybe", "ask") == []


def test_empty_descriptor():
    assert codes(validate_keyboard("   ", "help")) == ["empty"]


def test_too_large_suppresses_other_checks():
    descriptor = "inline:" + ",".join(["url:x"] * 1000)
    assert len(descriptor) > 4000

    warnings = validate_keyboard(descriptor, "big")

    assert codes(warnings) == ["too_large"]


def test_url_entry_without_pipe():
    assert codes(validate_keyboard("inline:url:NoPipe", "help")) == ["malformed_url"]


def test_url_without_http_scheme():
    warnings = validate_keyboard("inline:url:Docs|ftp://example.com", "help")

    assert codes(warnings) == ["invalid_url"]
    assert "ftp://example.com" in warnings[0].message


def test_long_inline_label_truncated_in_message():
    label = "L" * 100
    warnings = validate_keyboard(f"inline:url:{label}|https://example.com", "help")

    assert codes(warnings) == ["label_too_long"]
    assert "L" * 80 + "..." in warnings[0].message
    assert "L" * 81 not in warnings[0].message


def test_long_action_label_also_overflows_callback_data():
    warnings = validate_keyboard("inline:" + "A" * 65, "help")

    assert codes(warnings) == ["label_too_long", "callback_too_long"]


def test_reply_label_too_long():
    assert codes(validate_keyboard("ok," + "B" * 65, "ask")) == ["label_too_long"]


def test_reply_button_count_warned_once():
    descriptor = "|".join(",".join(str(i) for i in range(10)) for _ in range(11))

    warnings = validate_keyboard(descriptor, "grid")

    assert codes(warnings) == ["too_many_buttons"]
    assert "110 buttons" in warnings[0].message


def test_reply_without_rows():
    assert codes(validate_keyboard(", |", "ask")) == ["no_rows"]


def test_warnings_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="keyboard.validator"):
        validate_keyboard("inline:url:NoPipe", "help")

    assert "malformed url entry for /help" in caplog.text
