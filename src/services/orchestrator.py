"""Route classified messages to backends with caching and fallback.

Every intent enters one ordered cascade at its own position:

    live query -> model chat -> knowledge base -> help

A handler that raises `BackendError` hands the message to the next step.
Partial success is a normal outcome: live data whose model analysis failed
is returned without the analysis. Only when every step has failed does the
orchestrator give up, and even then the caller gets a formatted response
tagged with the `error` provenance.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

import constants
import metrics
from auth.token_manager import TokenManager
from cache.cache import Cache
from clients.dynatrace import BACKEND_NAME as LIVE_API_BACKEND
from clients.dynatrace import DynatraceClient
from clients.ollama import OllamaClient
from errors import (
    BackendError,
    CredentialError,
    CredentialRejectedError,
    ExhaustedFallbackError,
)
from models.credential import Credential, CredentialFailure
from models.live_query import LiveQueryResponse, LiveQueryResult
from models.orchestration import Intent, OrchestrationResult, Provenance
from models.session import Session, SessionStats
from services.classifier import RequestClassifier
from services.formatter import (
    ResponseFormatter,
    render_content,
    render_error,
    render_internal_error,
)
from services.knowledge_base import KnowledgeBase
from services.session_store import SessionStore

logger = logging.getLogger(__name__)

CASCADE = (Intent.LIVE_QUERY, Intent.MODEL_CHAT, Intent.KNOWLEDGE_QUERY, Intent.HELP)

Handler = Callable[[str], Awaitable[OrchestrationResult]]


def live_query_key(message: str) -> str:
    """Cache key for a live query; the message is normalized and bounded."""
    normalized = " ".join(message.lower().split())[: constants.LIVE_QUERY_KEY_MAX_LENGTH]
    return Cache.derive_key(constants.LIVE_QUERY_CACHE_CATEGORY, {"query": normalized})


def build_analysis_context(message: str, result: LiveQueryResult) -> dict[str, object]:
    """Context record asking the model to interpret live results."""
    return {
        "current_topic": "observability",
        "expertise_area": "observability",
        "instructions": (
            "You are analyzing real monitoring API results. "
            f'The user asked: "{message}".\n\n'
            f"The API returned: {json.dumps(result.model_dump(mode='json'), indent=2)}\n\n"
            "Please provide:\n"
            "- Analysis of what the results mean\n"
            "- Any patterns or issues identified\n"
            "- Recommended next steps based on the data\n"
            "- Additional queries that might be helpful\n\n"
            "Keep the explanation practical and actionable."
        ),
    }


class QueryOrchestrator:  # pylint: disable=too-many-instance-attributes
    """Sole entry point of the message routing core."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        cache: Cache,
        session_store: SessionStore,
        token_manager: TokenManager,
        live_client: DynatraceClient,
        model_client: OllamaClient,
        knowledge_base: Optional[KnowledgeBase] = None,
        classifier: Optional[RequestClassifier] = None,
        formatter: Optional[ResponseFormatter] = None,
        live_query_ttl: int = constants.DEFAULT_LIVE_QUERY_TTL_SECONDS,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Wire the orchestrator to its collaborators."""
        self.cache = cache
        self.session_store = session_store
        self.token_manager = token_manager
        self.live_client = live_client
        self.model_client = model_client
        self.knowledge_base = knowledge_base or KnowledgeBase()
        self.classifier = classifier or RequestClassifier()
        self.formatter = formatter or ResponseFormatter()
        self.live_query_ttl = live_query_ttl
        self._clock = clock
        self._handlers: dict[Intent, Handler] = {
            Intent.LIVE_QUERY: self._handle_live_query,
            Intent.MODEL_CHAT: self._handle_model_chat,
            Intent.KNOWLEDGE_QUERY: self._handle_knowledge_query,
            Intent.HELP: self._handle_help,
        }

    async def handle_message(self, message: str, session_id: str) -> str:
        """Classify, answer and record one operator message.

        Never raises: backend failures end in a fallback answer or in a
        formatted error response.
        """
        try:
            intent = self.classifier.classify(message)
            logger.info("Request classified as: %s", intent.value)
            metrics.messages_total.labels(intent.value).inc()
            result = await self.run_cascade(intent, message)
        except ExhaustedFallbackError as e:
            logger.error("Fallback cascade exhausted: %s", e)
            result = self._result(render_error(e.diagnostics), Provenance.ERROR)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected failure while handling message")
            result = self._result(render_internal_error(), Provenance.ERROR)

        metrics.responses_total.labels(result.provenance.value).inc()
        response = self.formatter.format(result)
        try:
            await self.session_store.record_exchange(session_id, message, response)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Unable to record exchange for session %s", session_id)
        return response

    async def run_cascade(self, intent: Intent, message: str) -> OrchestrationResult:
        """Run the handlers from the intent's position in the cascade onwards.

        Raises:
            ExhaustedFallbackError: every remaining handler failed.
        """
        diagnostics: list[str] = []
        for step in CASCADE[CASCADE.index(intent) :]:
            try:
                return await self._handlers[step](message)
            except BackendError as e:
                metrics.backend_failures_total.labels(e.backend).inc()
                logger.warning("%s failed (%s), falling back", step.value, e)
                diagnostics.append(str(e))
        raise ExhaustedFallbackError(diagnostics)

    async def get_session(self, session_id: str) -> Session:
        """Return the session, creating it when unknown."""
        return await self.session_store.get(session_id)

    async def get_session_stats(self, session_id: str) -> SessionStats:
        """Return statistics of the session."""
        return await self.session_store.stats(session_id)

    async def clear_cache(self, pattern: str = constants.DEFAULT_CACHE_CLEAR_PATTERN) -> int:
        """Delete cached results matching the pattern."""
        deleted = await self.cache.remove_matching(pattern)
        logger.info("Cleared %d cache entries matching %s", deleted, pattern)
        return deleted

    def _result(self, text: str, provenance: Provenance) -> OrchestrationResult:
        return OrchestrationResult(text=text, provenance=provenance, timestamp=self._clock())

    async def _handle_live_query(self, message: str) -> OrchestrationResult:
        key = live_query_key(message)
        cached = await self.cache.read(key)
        if cached is not None:
            try:
                response = LiveQueryResponse.model_validate_json(cached)
            except ValidationError as e:
                logger.warning("Ignoring unreadable cached result %s: %s", key, e)
            else:
                metrics.cache_hits_total.inc()
                return self._result(render_content(response), Provenance.CACHE)
        metrics.cache_misses_total.inc()

        result = await self._fetch_live(message)
        response = LiveQueryResponse(
            result=result, analysis=await self._analyze(message, result)
        )
        await self.cache.write(
            key, response.model_dump_json().encode("utf-8"), self.live_query_ttl
        )
        return self._result(render_content(response), Provenance.LIVE_API)

    async def _credential(self) -> Credential:
        outcome = await self.token_manager.ensure_valid()
        if isinstance(outcome, CredentialFailure):
            raise CredentialError(
                LIVE_API_BACKEND, f"authentication failed: {outcome.reason}"
            )
        return outcome

    async def _fetch_live(self, message: str) -> LiveQueryResult:
        if not self.live_client.configured:
            raise BackendError(LIVE_API_BACKEND, "live API is not configured")
        credential = await self._credential()
        try:
            return await self.live_client.execute_query(message, credential)
        except CredentialRejectedError:
            logger.info("Live API rejected the credential, re-authenticating once")
            self.token_manager.invalidate()
            credential = await self._credential()
            return await self.live_client.execute_query(message, credential)

    async def _analyze(self, message: str, result: LiveQueryResult) -> Optional[str]:
        try:
            return await self.model_client.chat(
                f"Analyze these monitoring results: {message}",
                build_analysis_context(message, result),
            )
        except BackendError as e:
            metrics.backend_failures_total.labels(e.backend).inc()
            logger.info("Model analysis failed (%s), returning live data only", e)
            return None

    async def _handle_model_chat(self, message: str) -> OrchestrationResult:
        text = await self.model_client.chat(message)
        return self._result(text, Provenance.MODEL)

    async def _handle_knowledge_query(self, message: str) -> OrchestrationResult:
        document = self.knowledge_base.query(message)
        return self._result(render_content(document), Provenance.KNOWLEDGE_BASE)

    async def _handle_help(self, message: str) -> OrchestrationResult:
        _ = message
        return self._result(
            render_content(self.knowledge_base.capabilities()), Provenance.HELP
        )
