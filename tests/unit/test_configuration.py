"""Unit tests for functions defined in src/configuration.py."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cache.in_memory_cache import InMemoryCache
from cache.noop_cache import NoopCache
from configuration import AppConfig, LogicError, replace_env_vars


# pylint: disable=protected-access
@pytest.fixture(autouse=True)
def _reset_app_config_between_tests():
    # ensure clean state before and after each test
    AppConfig()._configuration = None  # type: ignore[attr-defined]
    AppConfig()._cache = None  # type: ignore[attr-defined]
    yield
    AppConfig()._configuration = None  # type: ignore[attr-defined]
    AppConfig()._cache = None  # type: ignore[attr-defined]


def test_default_configuration() -> None:
    """Test that configuration attributes are not accessible for uninitialized app."""
    cfg = AppConfig()
    assert cfg.is_loaded() is False

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        _ = cfg.configuration  # pylint: disable=pointless-statement

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        _ = cfg.service_configuration  # pylint: disable=pointless-statement

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        _ = cfg.dynatrace_configuration  # pylint: disable=pointless-statement

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        _ = cfg.cache  # pylint: disable=pointless-statement


def test_configuration_is_singleton() -> None:
    """Test that configuration is singleton."""
    assert AppConfig() is AppConfig()


def test_init_from_dict() -> None:
    """Test the configuration initialization from dictionary."""
    cfg = AppConfig()
    cfg.init_from_dict(
        {
            "name": "foo",
            "service": {"host": "0.0.0.0", "port": 8080},
            "cache": {"type": "noop"},
            "session": {"ttl": 600},
            "ollama": {"model": "llama3.2"},
        }
    )

    assert cfg.is_loaded() is True
    assert cfg.configuration.name == "foo"
    assert cfg.service_configuration.port == 8080
    assert cfg.session_configuration.ttl == 600
    assert cfg.ollama_configuration.model == "llama3.2"
    assert cfg.dynatrace_configuration.configured is False
    assert cfg.classifier_configuration.live_query_keywords
    assert cfg.enterprise_configuration.systems
    assert isinstance(cfg.cache, NoopCache)


def test_cache_is_created_once() -> None:
    """The cache is built lazily and reused."""
    cfg = AppConfig()
    cfg.init_from_dict({})

    cache = cfg.cache
    assert isinstance(cache, InMemoryCache)
    assert cfg.cache is cache


def test_unknown_fields_are_rejected() -> None:
    """Typos in configuration are reported."""
    with pytest.raises(ValidationError):
        AppConfig().init_from_dict({"service": {"prot": 8080}})


def test_load_configuration(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading configuration from YAML file with placeholders."""
    monkeypatch.setenv("DT_ENV_URL", "https://abc123.apps.dynatrace.com")
    monkeypatch.setenv("DT_CLIENT_ID", "dt0s02.client")
    monkeypatch.setenv("DT_CLIENT_SECRET", "secret")
    monkeypatch.delenv("OLLAMA_MODEL", raising=False)
    monkeypatch.chdir(tmp_path)

    cfg_filename = tmp_path / "ops-assistant.yaml"
    cfg_filename.write_text(
        """
name: Ops Assistant
service:
  host: localhost
  port: 8080
cache:
  type: memory
  memory:
    max_entries: 50
dynatrace:
  environment_url: ${DT_ENV_URL}
  oauth_client_id: ${DT_CLIENT_ID}
  oauth_client_secret: ${DT_CLIENT_SECRET}
ollama:
  model: ${OLLAMA_MODEL:=llama3.2}
""",
        encoding="utf-8",
    )

    cfg = AppConfig()
    cfg.load_configuration(str(cfg_filename))

    dynatrace = cfg.dynatrace_configuration
    assert dynatrace.configured is True
    assert dynatrace.base_url == "https://abc123.apps.dynatrace.com"
    assert dynatrace.oauth_client_secret is not None
    assert dynatrace.oauth_client_secret.get_secret_value() == "secret"
    assert cfg.ollama_configuration.model == "llama3.2"
    assert cfg.cache_configuration.memory is not None
    assert cfg.cache_configuration.memory.max_entries == 50


def test_load_empty_configuration(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty file yields the default configuration."""
    monkeypatch.chdir(tmp_path)
    cfg_filename = tmp_path / "empty.yaml"
    cfg_filename.write_text("", encoding="utf-8")

    cfg = AppConfig()
    cfg.load_configuration(str(cfg_filename))
    assert cfg.configuration.cache.type == "memory"


def test_load_configuration_missing_file() -> None:
    """Test loading configuration from non-existing file."""
    with pytest.raises(FileNotFoundError):
        AppConfig().load_configuration("/tmp/this-file-does-not-exist.yaml")


def test_replace_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Placeholders are resolved in nested documents."""
    monkeypatch.setenv("REDIS_HOST", "redis.local")
    monkeypatch.delenv("REDIS_PORT", raising=False)

    document = {
        "cache": {"redis": {"host": "${REDIS_HOST}", "port": "${REDIS_PORT:=6380}"}},
        "scopes": ["a", "${REDIS_HOST}-b"],
        "workers": 2,
    }
    assert replace_env_vars(document) == {
        "cache": {"redis": {"host": "redis.local", "port": "6380"}},
        "scopes": ["a", "redis.local-b"],
        "workers": 2,
    }


def test_replace_env_vars_empty_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty default is allowed."""
    monkeypatch.delenv("UNSET_VARIABLE", raising=False)
    assert replace_env_vars("x${UNSET_VARIABLE:=}y") == "xy"


def test_replace_env_vars_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables without default are reported."""
    monkeypatch.delenv("UNSET_VARIABLE", raising=False)
    with pytest.raises(ValueError, match="UNSET_VARIABLE"):
        replace_env_vars("${UNSET_VARIABLE}")
