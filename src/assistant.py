"""Message routing core retrieval."""

import logging
from typing import Optional

from auth.token_manager import TokenManager
from cache.cache import Cache
from clients.dynatrace import DynatraceClient
from clients.ollama import OllamaClient
from configuration import AppConfig
from services.classifier import RequestClassifier
from services.orchestrator import QueryOrchestrator
from services.session_store import SessionStore
from utils.types import Singleton

logger = logging.getLogger(__name__)


class AssistantHolder(metaclass=Singleton):
    """Container for the initialised query orchestrator and its collaborators."""

    _orchestrator: Optional[QueryOrchestrator] = None
    _cache: Optional[Cache] = None

    async def load(self, config: AppConfig) -> None:
        """Build the routing core according to configuration and connect the cache."""
        cache = config.cache
        if not await cache.connect():
            logger.warning("Cache is not available - continuing without cache")

        dynatrace_config = config.dynatrace_configuration
        if dynatrace_config.configured:
            logger.info("Live API configured: %s", dynatrace_config.base_url)
        else:
            logger.warning("Live API OAuth configuration incomplete - live queries limited")

        self._cache = cache
        self._orchestrator = QueryOrchestrator(
            cache=cache,
            session_store=SessionStore(
                cache,
                config.session_configuration,
                config.classifier_configuration,
                config.enterprise_configuration,
            ),
            token_manager=TokenManager(dynatrace_config),
            live_client=DynatraceClient(dynatrace_config),
            model_client=OllamaClient(config.ollama_configuration),
            classifier=RequestClassifier(config.classifier_configuration),
            live_query_ttl=config.cache_configuration.live_query_ttl,
        )
        logger.info("Message routing core initialized")

    def get_orchestrator(self) -> QueryOrchestrator:
        """Return the initialised QueryOrchestrator."""
        if not self._orchestrator:
            raise RuntimeError(
                "QueryOrchestrator has not been initialised. Ensure 'load(..)' has been called."
            )
        return self._orchestrator

    async def close(self) -> None:
        """Release the cache connection."""
        if self._cache is not None:
            await self._cache.disconnect()
            logger.info("Cache disconnected")
