"""Unit tests for config.py"""

import pytest

from lessonmark.config import load_config


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test away from any project config.yaml."""
    monkeypatch.chdir(tmp_path)


def test_load_config_uses_env_db_url(monkeypatch):
    """LESSONMARK_DB_URL env var is picked up by load_config."""
    monkeypatch.setenv("LESSONMARK_DB_URL", "sqlite:///env.db")
    settings = load_config()
    assert settings.db_url == "sqlite:///env.db"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """LESSONMARK_DB_URL takes precedence over config.yaml db_url."""
    (tmp_path / "config.yaml").write_text("db_url: 'sqlite:///project.db'\n")
    monkeypatch.setenv("LESSONMARK_DB_URL", "sqlite:///override.db")
    settings = load_config()
    assert settings.db_url == "sqlite:///override.db"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("LESSONMARK_UNESCAPE", "never")
    assert load_config(overrides={"unescape": "always"}).unescape == "always"
    assert load_config(overrides={"unescape": None}).unescape == "never"


def test_load_config_defaults(monkeypatch):
    """Settings defaults apply when nothing else is configured."""
    for name in ("DB_URL", "UNESCAPE", "MAX_DEPTH", "HIGHLIGHT", "LOG_LEVEL", "ID_LENGTH"):
        monkeypatch.delenv(f"LESSONMARK_{name}", raising=False)
    settings = load_config()
    assert settings.db_url == "sqlite:///lessonmark.db"
    assert settings.unescape == "auto"
    assert settings.max_depth == 256
    assert settings.id_length == 9
    assert settings.highlight is True
    assert settings.log_level == "WARNING"


def test_load_config_yaml_values(tmp_path):
    """config.yaml values are applied."""
    (tmp_path / "config.yaml").write_text("max_depth: 40\nhighlight: false\n")
    settings = load_config()
    assert settings.max_depth == 40
    assert settings.highlight is False


def test_load_config_env_coerced(monkeypatch):
    """Env values are coerced to the field types."""
    monkeypatch.setenv("LESSONMARK_MAX_DEPTH", "12")
    monkeypatch.setenv("LESSONMARK_COPY_RESET_SECONDS", "0.5")
    settings = load_config()
    assert settings.max_depth == 12
    assert settings.copy_reset_seconds == 0.5


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_yaml_not_mapping(tmp_path):
    """A config.yaml that is not a mapping is rejected."""
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_bad_values(monkeypatch):
    """Out-of-range or unknown values fail validation."""
    monkeypatch.setenv("LESSONMARK_UNESCAPE", "sometimes")
    with pytest.raises(ValueError):
        load_config()
    monkeypatch.delenv("LESSONMARK_UNESCAPE")
    with pytest.raises(ValueError):
        load_config(overrides={"id_length": 2})
