from keyboard import ActionButton, InlineLayout, ReplyLayout, UrlButton, parse_keyboard


def test_blank_descriptor_means_no_keyboard():
    assert parse_keyboard("") is None
    assert parse_keyboard("   ") is None
    assert parse_keyboard(None) is None


def test_inline_url_and_action_buttons():
    layout = parse_keyboard("inline: url:Go|https://example.com, Ping")

    assert layout == InlineLayout(
        buttons=(
            UrlButton(label="Go", url="https://example.com"),
            ActionButton(label="Ping", callback_data="use:Ping"),
        )
    )


def test_inline_prefix_is_case_insensitive():
    layout = parse_keyboard("INLINE:URL:Docs|https://docs.example.com,/help")

    assert layout.buttons == (
        UrlButton(label="Docs", url="https://docs.example.com"),
        ActionButton(label="/help", callback_data="use:help"),
    )


def test_malformed_url_token_dropped():
    assert parse_keyboard("inline:url:BadNoPipe") == InlineLayout(buttons=())
    assert parse_keyboard("inline:url: |https://example.com") == InlineLayout(buttons=())
    assert parse_keyboard("inline:url:Label| ") == InlineLayout(buttons=())


def test_url_split_on_first_pipe_only():
    layout = parse_keyboard("inline:url:Search|https://example.com/?q=a|b")

    assert layout.buttons == (UrlButton(label="Search", url="https://example.com/?q=a|b"),)


def test_inline_without_tokens_is_still_inline():
    assert parse_keyboard("inline:") == InlineLayout(buttons=())
    assert parse_keyboard("inline: , ,") == InlineLayout(buttons=())


def test_reply_rows_and_columns():
    assert parse_keyboard("a,b|c") == ReplyLayout(rows=(("a", "b"), ("c",)))


def test_reply_row_separators():
    layout = parse_keyboard("yes, no\r\nmaybe\nlater|never")

    assert layout.rows == (("yes", "no"), ("maybe",), ("later",), ("never",))


def test_reply_drops_empty_labels_and_rows():
    assert parse_keyboard(" , |x,,y| ") == ReplyLayout(rows=(("x", "y"),))
    assert parse_keyboard(",,|\n") is None


def test_parse_is_pure():
    descriptor = "inline:url:Go|https://example.com,Ping"
    assert parse_keyboard(descriptor) == parse_keyboard(descriptor)
