import json
from pathlib import Path

import pytest

from catalog.config import CatalogConfig, default_config, load_config, load_source_config


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("DEMO_CSV_TTL", raising=False)
    path = tmp_path / "config.yml"
    path.write_text("cache_ttl_sec: 120", encoding="utf-8")

    cfg = load_config(path)

    assert isinstance(cfg, CatalogConfig)
    assert cfg.cache_ttl_sec == 120
    assert cfg.cache_path == Path(".cache/demo_commands.json")
    assert cfg.source_config_path == Path("DemoFromTableBot/bot.json")


def test_env_overrides(monkeypatch, tmp_path):
    source = tmp_path / "config.yml"
    source.write_text("cache_ttl_sec: 120", encoding="utf-8")

    monkeypatch.setenv("DEMO_CSV_TTL", "42")
    monkeypatch.setenv("CATALOG_FETCH_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("CATALOG_CACHE_PATH", str(tmp_path / "cache.json"))

    cfg = load_config(source)

    assert cfg.cache_ttl_sec == 42
    assert cfg.fetch_timeout_sec == 2.5
    assert cfg.cache_path == tmp_path / "cache.json"


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_default_config_uses_600_second_ttl(monkeypatch):
    monkeypatch.delenv("DEMO_CSV_TTL", raising=False)
    assert default_config().cache_ttl_sec == 600


def test_source_config_missing_file(tmp_path):
    assert load_source_config(tmp_path / "bot.json") is None


def test_source_config_reads_csv_url(tmp_path):
    path = tmp_path / "bot.json"
    path.write_text(json.dumps({"csv_url": " https://example.com/t.csv "}), encoding="utf-8")

    source = load_source_config(path)

    assert source is not None
    assert source.csv_url == "https://example.com/t.csv"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"csv_url": 123}),
        json.dumps({"csv_url": ""}),
        json.dumps({"name": "demo"}),
        json.dumps(["https://example.com/t.csv"]),
    ],
)
def test_source_config_without_usable_url(tmp_path, content):
    path = tmp_path / "bot.json"
    path.write_text(content, encoding="utf-8")

    assert load_source_config(path) is None
