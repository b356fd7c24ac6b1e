#!/usr/bin/env python3
"""Tests for the /start row appender"""

import json

from catalog.config import CatalogConfig
from catalog.table import read_table
from sheets.append_start import append_start_row, build_start_row, format_row, run


def test_build_start_row_overrides_known_columns():
    header = ["command", "answer", "keyboard", "aliases", "help"]
    row = build_start_row(header, ["/help", "Commands", "inline:Ping", "h", "Show help"])

    assert row == ["/start", "Welcome! Use /help to see available commands.", "inline:Ping", "", "Start the bot"]


def test_build_start_row_pads_short_template():
    row = build_start_row(["command", "answer", "keyboard"], ["/help"])
    assert row == ["/start", "Welcome! Use /help to see available commands.", ""]


def test_format_row_quotes_commas():
    assert format_row(["/start", "yes,no"]) == '/start,"yes,no"'


def test_append_start_row():
    text = 'command,answer,keyboard\n/help,Commands,"yes,no"\n'

    appended = append_start_row(text)

    rows = read_table(appended)
    assert [r["command"] for r in rows] == ["/help", "/start"]
    assert rows[1]["keyboard"] == "yes,no"
    assert appended.endswith("\n")


def test_append_start_row_without_data():
    assert append_start_row("command,answer\n") is None
    assert append_start_row("") is None


def make_config(tmp_path):
    return CatalogConfig(
        source_config_path=tmp_path / "bot.json",
        local_override_path=tmp_path / "out" / "commands-with-start.csv",
        cache_path=tmp_path / "cache.json",
        cache_ttl_sec=600,
        fetch_timeout_sec=5,
    )


def test_run_writes_local_override(tmp_path):
    table = tmp_path / "table.csv"
    table.write_text("command,answer\n/help,Commands\n", encoding="utf-8")
    config = make_config(tmp_path)
    config.source_config_path.write_text(json.dumps({"csv_url": "file://" + str(table)}), encoding="utf-8")

    assert run(config) == 0

    written = config.local_override_path.read_text(encoding="utf-8")
    assert [r["command"] for r in read_table(written)] == ["/help", "/start"]


def test_run_without_source_config(tmp_path):
    assert run(make_config(tmp_path)) == 1


def test_run_with_empty_table(tmp_path):
    table = tmp_path / "table.csv"
    table.write_text("command,answer\n", encoding="utf-8")
    config = make_config(tmp_path)
    config.source_config_path.write_text(json.dumps({"csv_url": "file://" + str(table)}), encoding="utf-8")

    assert run(config) == 1
    assert not config.local_override_path.exists()
