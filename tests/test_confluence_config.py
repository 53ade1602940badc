import json

import pytest

from snip.confluence.config import (
    ConfluenceConfig,
    get_config_path,
    load_config,
    save_config,
)


def test_get_config_path_creates_directory(tmp_path):
    base = tmp_path / "nested" / "snip"
    path = get_config_path(base)
    assert base.is_dir()
    assert path == base / "confluence_config.json"


def test_load_missing_gives_empty_config(tmp_path):
    assert load_config(tmp_path) == ConfluenceConfig()


def test_save_and_load_round_trip(tmp_path):
    config = ConfluenceConfig(
        url="https://wiki.example.com",
        email="user@example.com",
        api_token="token",
        space="DB",
    )
    path = save_config(config, tmp_path)
    assert path == get_config_path(tmp_path)
    assert load_config(tmp_path) == config


def test_saved_file_uses_json_keys(tmp_path):
    config = ConfluenceConfig(url="https://wiki.example.com", space="DB")
    path = save_config(config, tmp_path)
    text = path.read_text(encoding="utf-8")
    assert '\n  "url"' in text
    data = json.loads(text)
    assert set(data) == {"url", "email", "api_token", "space"}
    assert data["space"] == "DB"


def test_load_ignores_unknown_keys(tmp_path):
    get_config_path(tmp_path).write_text(
        json.dumps({"url": "https://wiki.example.com", "extra": 1}), encoding="utf-8"
    )
    config = load_config(tmp_path)
    assert config.url == "https://wiki.example.com"
    assert config.email == ""


def test_load_invalid_json_raises(tmp_path):
    get_config_path(tmp_path).write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(tmp_path)