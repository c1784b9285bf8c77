import pytest

from core.config import DEFAULT_PORT, config_from_env, load_config


def test_defaults_when_env_empty():
    cfg = config_from_env({})
    assert cfg.port == DEFAULT_PORT == 5000
    assert cfg.node_env == "development"
    assert cfg.is_production is False
    assert cfg.cors_origins == ("http://localhost:3000", "http://127.0.0.1:3000")
    assert cfg.log_level == "INFO"


def test_empty_port_falls_back_to_default():
    assert config_from_env({"PORT": ""}).port == 5000
    assert config_from_env({"PORT": "   "}).port == 5000


def test_port_from_env():
    assert config_from_env({"PORT": "8080"}).port == 8080


@pytest.mark.parametrize("raw", ["abc", "0", "70000"])
def test_invalid_port_rejected(raw):
    with pytest.raises(ValueError):
        config_from_env({"PORT": raw})


def test_production_requires_jwt_secret():
    with pytest.raises(ValueError):
        config_from_env({"NODE_ENV": "production"})

    cfg = config_from_env({"NODE_ENV": "production", "JWT_SECRET": "s" * 40})
    assert cfg.is_production is True
    assert cfg.jwt_secret == "s" * 40


def test_only_exact_production_marker_counts():
    assert config_from_env({"NODE_ENV": "Production"}).is_production is False
    assert config_from_env({"NODE_ENV": "staging"}).is_production is False


def test_cors_origins_parsed_and_normalized():
    cfg = config_from_env({"CORS_ORIGINS": "https://a.example.com/, https://b.example.com ,"})
    assert cfg.cors_origins == ("https://a.example.com", "https://b.example.com")


def test_load_config_reads_process_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = load_config(dotenv_path=str(tmp_path / "missing.env"))
    assert cfg.port == 5000
    assert cfg.log_level == "DEBUG"


def test_load_config_does_not_override_real_env(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6001\nJWT_EXPIRES_MINUTES=15\n")
    monkeypatch.setenv("PORT", "7001")
    monkeypatch.delenv("JWT_EXPIRES_MINUTES", raising=False)
    cfg = load_config(dotenv_path=str(env_file))
    assert cfg.port == 7001
    assert cfg.jwt_expires_minutes == 15
