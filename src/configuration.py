"""Configuration loader."""

import logging
import os
import re
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from cache.cache import Cache
from cache.cache_factory import CacheFactory
from models.config import (
    CacheConfiguration,
    ClassifierConfiguration,
    Configuration,
    DynatraceConfiguration,
    EnterpriseConfiguration,
    OllamaConfiguration,
    ServiceConfiguration,
    SessionConfiguration,
)

logger = logging.getLogger(__name__)

# ${VARIABLE} or ${VARIABLE:=default}
ENV_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::=([^}]*))?\}")


class LogicError(Exception):
    """Error in application logic."""


def replace_env_vars(value: Any) -> Any:
    """Replace environment variable placeholders in a loaded YAML document.

    Raises:
        ValueError: a placeholder names an unset variable and has no default.
    """
    if isinstance(value, dict):
        return {key: replace_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [replace_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def substitute(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            return default
        raise ValueError(f"Environment variable '{name}' not set and no default value")

    return ENV_PLACEHOLDER.sub(substitute, value)


class AppConfig:
    """Singleton class to load and store the configuration."""

    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "AppConfig":
        """Create a new instance of the class."""
        if not isinstance(cls._instance, cls):
            cls._instance = super().__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the class instance."""
        self._configuration: Optional[Configuration] = None
        self._cache: Optional[Cache] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file, resolving environment placeholders."""
        load_dotenv()
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin) or {}
            config_dict = replace_env_vars(config_dict)
            logger.info("Loaded configuration from %s", filename)
            self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)
        self._cache = None

    def is_loaded(self) -> bool:
        """Check whether configuration has been loaded."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def service_configuration(self) -> ServiceConfiguration:
        """Return service configuration."""
        return self.configuration.service

    @property
    def cache_configuration(self) -> CacheConfiguration:
        """Return cache configuration."""
        return self.configuration.cache

    @property
    def session_configuration(self) -> SessionConfiguration:
        """Return session configuration."""
        return self.configuration.session

    @property
    def dynatrace_configuration(self) -> DynatraceConfiguration:
        """Return metrics/incident API configuration."""
        return self.configuration.dynatrace

    @property
    def ollama_configuration(self) -> OllamaConfiguration:
        """Return model backend configuration."""
        return self.configuration.ollama

    @property
    def classifier_configuration(self) -> ClassifierConfiguration:
        """Return request classifier configuration."""
        return self.configuration.classifier

    @property
    def enterprise_configuration(self) -> EnterpriseConfiguration:
        """Return enterprise vocabulary configuration."""
        return self.configuration.enterprise

    @property
    def cache(self) -> Cache:
        """Return the cache, creating it on first use."""
        if self._cache is None:
            self._cache = CacheFactory.cache(self.configuration.cache)
        return self._cache


configuration: AppConfig = AppConfig()
