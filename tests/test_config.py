import pytest
import yaml

import config
from infrastructure.todoist.errors import TodoistPermissionError


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "todoist.yaml"
    monkeypatch.setenv("TODOIST_CLI_CONFIG", str(path))
    for name in config.TOKEN_ENV_VARS + ("TODOIST_API_BASE",):
        monkeypatch.delenv(name, raising=False)
    return path


def test_token_roundtrip_and_clear(config_path):
    assert config.get_user_token() == ""
    config.set_user_token("  secret  ")
    assert yaml.safe_load(config_path.read_text())["token"] == "secret"
    assert config.get_user_token() == "secret"

    config.set_user_token("")
    assert not config_path.exists()


def test_clearing_token_keeps_other_keys(config_path):
    config_path.write_text(yaml.safe_dump({"token": "t", "other": 1}))
    config.set_user_token("")
    assert yaml.safe_load(config_path.read_text()) == {"other": 1}


def test_malformed_config_reads_as_empty(config_path):
    config_path.write_text("token: [unclosed")
    assert config.get_user_token() == ""
    config_path.write_text("- just\n- a list\n")
    assert config.get_user_token() == ""


def test_env_token_wins(config_path, monkeypatch):
    config.set_user_token("stored")
    assert config.resolve_token() == "stored"
    monkeypatch.setenv("TODOIST_TOKEN", "secondary")
    assert config.resolve_token() == "secondary"
    monkeypatch.setenv("TODOIST_API_TOKEN", "primary")
    assert config.require_token() == "primary"


def test_require_token_without_any_source(config_path):
    with pytest.raises(TodoistPermissionError):
        config.require_token()


def test_api_base_override(config_path, monkeypatch):
    assert config.get_sync_url() == "https://api.todoist.com/api/v1/sync"
    monkeypatch.setenv("TODOIST_API_BASE", "http://localhost:8080/api/v1/")
    assert config.get_api_base() == "http://localhost:8080/api/v1"
    assert config.get_sync_url() == "http://localhost:8080/api/v1/sync"
