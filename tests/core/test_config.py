"""
Tests for configuration loading and environment overrides.
"""

import json

from videohub.core.config import Config


def test_missing_file_is_written_with_defaults(tmp_path):
    config_file = tmp_path / "config.json"

    config = Config(str(config_file), apply_env=False)

    assert config.database.backend == "mongodb"
    assert config.system.api_port == 8000
    saved = json.loads(config_file.read_text())
    assert saved["database"]["name"] == "videohub"
    assert set(saved) == {"database", "media", "system"}


def test_file_values_are_loaded(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "database": {"backend": "memory", "name": "catalog"},
        "media": {"bucket": "clips", "temp_dir": str(tmp_path / "spool")},
        "system": {"api_port": 9000, "log_level": "DEBUG"},
    }))

    config = Config(str(config_file), apply_env=False)

    assert config.database.backend == "memory"
    assert config.database.name == "catalog"
    assert config.database.videos_collection == "videos"
    assert config.media.bucket == "clips"
    assert config.system.api_port == 9000
    assert (tmp_path / "spool").is_dir()


def test_environment_overrides_file(tmp_path, monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017")
    monkeypatch.setenv("DB_NAME", "staging")
    monkeypatch.setenv("MEDIA_BUCKET", "staging-media")
    monkeypatch.setenv("PORT", "8080")

    config = Config(str(tmp_path / "config.json"))

    assert config.database.uri == "mongodb://db.internal:27017"
    assert config.database.name == "staging"
    assert config.media.bucket == "staging-media"
    assert config.system.api_port == 8080


def test_invalid_port_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    config = Config(str(tmp_path / "config.json"))

    assert config.system.api_port == 8000


def test_to_dict_round_trips_through_file(tmp_path):
    config_file = tmp_path / "config.json"
    config = Config(str(config_file), apply_env=False)
    config.media.public_url = "https://cdn.example.com"
    config.save_config()

    reloaded = Config(str(config_file), apply_env=False)

    assert reloaded.to_dict() == config.to_dict()


def test_user_header_trust_is_off_by_default(tmp_path):
    config = Config(str(tmp_path / "config.json"), apply_env=False)

    assert config.system.trust_user_header is False


def test_user_header_trust_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("TRUST_USER_HEADER", "true")
    assert Config(str(tmp_path / "on.json")).system.trust_user_header is True

    monkeypatch.setenv("TRUST_USER_HEADER", "maybe")
    assert Config(str(tmp_path / "invalid.json")).system.trust_user_header is False
