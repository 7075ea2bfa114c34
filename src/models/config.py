"""Model with service configuration."""

from typing import Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    SecretStr,
    model_validator,
)
from typing_extensions import Self, Literal

import constants


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class CORSConfiguration(ConfigurationBase):
    """CORS configuration."""

    allow_origins: list[str] = [
        "*"
    ]  # not AnyHttpUrl: we need to support "*" that is not valid URL
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @model_validator(mode="after")
    def check_cors_configuration(self) -> Self:
        """Check CORS configuration."""
        # credentials are not allowed with wildcard origins per CORS/Fetch spec.
        # see https://fastapi.tiangolo.com/tutorial/cors/
        if self.allow_credentials and "*" in self.allow_origins:
            raise ValueError(
                "Invalid CORS configuration: allow_credentials can not be set to true when "
                "allow origins contains '*' wildcard."
                "Use explicit origins or disable credential."
            )
        return self


class ServiceConfiguration(ConfigurationBase):
    """Service configuration."""

    host: str = "localhost"
    port: PositiveInt = 3000
    workers: PositiveInt = 1
    color_log: bool = True
    access_log: bool = True
    cors: CORSConfiguration = Field(default_factory=CORSConfiguration)

    @model_validator(mode="after")
    def check_service_configuration(self) -> Self:
        """Check service configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        return self


class InMemoryCacheConfig(ConfigurationBase):
    """In-memory cache configuration."""

    max_entries: PositiveInt = constants.DEFAULT_IN_MEMORY_CACHE_ENTRIES


class RedisCacheConfig(ConfigurationBase):
    """Redis cache configuration."""

    host: str = "localhost"
    port: PositiveInt = 6379
    db: int = 0
    password: Optional[SecretStr] = None
    socket_timeout: float = 5.0

    @model_validator(mode="after")
    def check_redis_configuration(self) -> Self:
        """Check Redis configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        if self.db < 0:
            raise ValueError("Redis database index can not be negative")
        return self


class CacheConfiguration(ConfigurationBase):
    """Query result and session cache configuration."""

    type: Literal["noop", "memory", "redis"] = constants.CACHE_TYPE_MEMORY
    memory: Optional[InMemoryCacheConfig] = None
    redis: Optional[RedisCacheConfig] = None
    default_ttl: PositiveInt = constants.DEFAULT_CACHE_TTL_SECONDS
    live_query_ttl: PositiveInt = constants.DEFAULT_LIVE_QUERY_TTL_SECONDS

    @model_validator(mode="after")
    def check_cache_configuration(self) -> Self:
        """Check cache configuration."""
        match self.type:
            case constants.CACHE_TYPE_MEMORY:
                # in-memory cache works with defaults
                if self.memory is None:
                    self.memory = InMemoryCacheConfig()
                if self.redis is not None:
                    raise ValueError("Only memory cache config must be provided")
            case constants.CACHE_TYPE_REDIS:
                if self.redis is None:
                    raise ValueError("Redis cache is selected, but not configured")
                if self.memory is not None:
                    raise ValueError("Only Redis cache config must be provided")
        return self


class SessionConfiguration(ConfigurationBase):
    """Conversation session configuration."""

    ttl: PositiveInt = constants.DEFAULT_SESSION_TTL_SECONDS
    max_recent_queries: PositiveInt = constants.MAX_RECENT_QUERIES
    response_truncation: PositiveInt = constants.RESPONSE_TRUNCATION_LENGTH


class DynatraceConfiguration(ConfigurationBase):
    """Metrics/incident API configuration."""

    environment_url: Optional[AnyHttpUrl] = None
    oauth_client_id: Optional[str] = None
    oauth_client_secret: Optional[SecretStr] = None
    token_url: AnyHttpUrl = Field(
        default=constants.DEFAULT_TOKEN_URL, validate_default=True
    )
    scopes: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_TOKEN_SCOPES)
    )
    timeout: PositiveInt = constants.DEFAULT_BACKEND_TIMEOUT_SECONDS
    token_safety_margin: int = constants.TOKEN_SAFETY_MARGIN_SECONDS

    @model_validator(mode="after")
    def check_dynatrace_configuration(self) -> Self:
        """Check that OAuth credentials are provided together."""
        if (self.oauth_client_id is None) != (self.oauth_client_secret is None):
            raise ValueError(
                "oauth_client_id and oauth_client_secret must be provided together"
            )
        if self.token_safety_margin < 0:
            raise ValueError("token_safety_margin can not be negative")
        return self

    @property
    def configured(self) -> bool:
        """Return True when the live API can be called."""
        return self.environment_url is not None and self.oauth_client_id is not None

    @property
    def base_url(self) -> str:
        """Return environment URL without the trailing slash."""
        if self.environment_url is None:
            raise ValueError("environment_url is not configured")
        return str(self.environment_url).rstrip("/")


class OllamaConfiguration(ConfigurationBase):
    """Local language model backend configuration."""

    url: AnyHttpUrl = Field(
        default=constants.DEFAULT_OLLAMA_URL, validate_default=True
    )
    model: str = constants.DEFAULT_OLLAMA_MODEL
    timeout: PositiveInt = constants.DEFAULT_BACKEND_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        """Return model backend URL without the trailing slash."""
        return str(self.url).rstrip("/")


class ClassifierConfiguration(ConfigurationBase):
    """Keyword sets used by the request classifier."""

    live_query_keywords: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_LIVE_QUERY_KEYWORDS)
    )
    model_chat_keywords: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_MODEL_CHAT_KEYWORDS)
    )
    model_chat_prefixes: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_MODEL_CHAT_PREFIXES)
    )
    knowledge_keywords: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_KNOWLEDGE_KEYWORDS)
    )
    help_keywords: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_HELP_KEYWORDS)
    )


class EnterpriseConfiguration(ConfigurationBase):
    """Vocabulary of enterprise sub-systems tracked in session context."""

    keywords: list[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_ENTERPRISE_KEYWORDS)
    )
    systems: dict[str, list[str]] = Field(
        default_factory=lambda: {
            name: list(aliases)
            for name, aliases in constants.DEFAULT_ENTERPRISE_SYSTEMS.items()
        }
    )
    high_urgency_keywords: list[str] = Field(
        default_factory=lambda: list(constants.HIGH_URGENCY_KEYWORDS)
    )
    elevated_urgency_keywords: list[str] = Field(
        default_factory=lambda: list(constants.ELEVATED_URGENCY_KEYWORDS)
    )


class Configuration(ConfigurationBase):
    """Global service configuration."""

    name: str = constants.SERVICE_NAME
    service: ServiceConfiguration = Field(default_factory=ServiceConfiguration)
    cache: CacheConfiguration = Field(default_factory=CacheConfiguration)
    session: SessionConfiguration = Field(default_factory=SessionConfiguration)
    dynatrace: DynatraceConfiguration = Field(default_factory=DynatraceConfiguration)
    ollama: OllamaConfiguration = Field(default_factory=OllamaConfiguration)
    classifier: ClassifierConfiguration = Field(
        default_factory=ClassifierConfiguration
    )
    enterprise: EnterpriseConfiguration = Field(
        default_factory=EnterpriseConfiguration
    )

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
