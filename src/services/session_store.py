"""Per-conversation session state kept in the key-value cache.

Sessions are created lazily on first reference and never deleted here;
their lifetime is the session TTL of the underlying cache. Two messages of
the same session processed concurrently may lose one update (last writer
wins); chat traffic is naturally serialized per user.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

import constants
from cache.cache import Cache
from models.config import (
    ClassifierConfiguration,
    EnterpriseConfiguration,
    SessionConfiguration,
)
from models.session import (
    DomainContext,
    LastExchange,
    Session,
    SessionContext,
    SessionStats,
    Topic,
    Urgency,
)
from services.classifier import contains_any

logger = logging.getLogger(__name__)


def truncate(text: str, limit: int) -> str:
    """Cut the text to `limit` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def extract_domain_context(
    message: str, config: EnterpriseConfiguration
) -> DomainContext:
    """Find the enterprise sub-systems and the urgency mentioned in a message.

    Urgency keywords are visited in the order they appear in the message and
    the highest level seen is kept, so "critical issue" stays high even
    though "issue" alone would only be elevated.
    """
    msg = message.lower()
    systems = [
        name
        for name, aliases in config.systems.items()
        if any(alias.lower() in msg for alias in aliases)
    ]

    signals: list[tuple[int, Urgency]] = []
    for level, keywords in (
        (Urgency.HIGH, config.high_urgency_keywords),
        (Urgency.ELEVATED, config.elevated_urgency_keywords),
    ):
        for keyword in keywords:
            position = msg.find(keyword.lower())
            if position >= 0:
                signals.append((position, level))

    urgency = Urgency.NORMAL
    for _, level in sorted(signals, key=lambda signal: signal[0]):
        if level.rank > urgency.rank:
            urgency = level
    return DomainContext(systems=systems, urgency=urgency)


class SessionStore:
    """Get-or-create, update and inspect sessions."""

    def __init__(
        self,
        cache: Cache,
        config: Optional[SessionConfiguration] = None,
        classifier_config: Optional[ClassifierConfiguration] = None,
        enterprise_config: Optional[EnterpriseConfiguration] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Create a session store on top of the cache."""
        self._cache = cache
        self._config = config or SessionConfiguration()
        self._enterprise = enterprise_config or EnterpriseConfiguration()
        self._is_live_query = contains_any(
            (classifier_config or ClassifierConfiguration()).live_query_keywords
        )
        self._is_enterprise_query = contains_any(self._enterprise.keywords)
        self._clock = clock
        self._pending: dict[str, asyncio.Task[Session]] = {}

    @staticmethod
    def session_key(session_id: str) -> str:
        """Cache key of the session record."""
        return Cache.derive_key(constants.SESSION_KEY_PREFIX, session_id)

    async def get(self, session_id: str) -> Session:
        """Return the session, creating and persisting it when unknown.

        Concurrent calls for the same unknown id share one creation, so all
        of them see the same `created_at`.
        """
        session = await self._load(session_id)
        if session is not None:
            return session

        pending = self._pending.get(session_id)
        if pending is None:
            pending = asyncio.create_task(self._create(session_id))
            self._pending[session_id] = pending
        return await asyncio.shield(pending)

    async def record_exchange(
        self, session_id: str, message: str, response: str
    ) -> Session:
        """Fold one message/response exchange into the session."""
        session = await self.get(session_id)
        now = self._clock()
        updated = session.model_copy(
            update={
                "message_count": session.message_count + 1,
                "updated_at": now,
                "context": self._update_context(session.context, message),
                "last_exchange": LastExchange(
                    message=message,
                    truncated_response=truncate(
                        response, self._config.response_truncation
                    ),
                    timestamp=now,
                ),
            }
        )
        await self._save(updated)
        return updated

    async def stats(self, session_id: str) -> SessionStats:
        """Return statistics derived from the session without modifying it."""
        session = await self.get(session_id)
        return SessionStats(
            message_count=session.message_count,
            duration_seconds=(self._clock() - session.created_at).total_seconds(),
            current_topic=session.context.current_topic,
        )

    def _update_context(self, context: SessionContext, message: str) -> SessionContext:
        msg = message.lower()
        if self._is_live_query(msg):
            recent = [*context.recent_queries, message]
            return context.model_copy(
                update={
                    "current_topic": Topic.OBSERVABILITY,
                    "recent_queries": recent[-self._config.max_recent_queries :],
                }
            )
        if self._is_enterprise_query(msg):
            return context.model_copy(
                update={
                    "current_topic": Topic.ENTERPRISE,
                    "domain_context": extract_domain_context(message, self._enterprise),
                }
            )
        return context

    async def _create(self, session_id: str) -> Session:
        try:
            now = self._clock()
            session = Session(id=session_id, created_at=now, updated_at=now)
            stored = await self._cache.write_if_absent(
                self.session_key(session_id),
                session.model_dump_json().encode("utf-8"),
                self._config.ttl,
            )
            if stored:
                logger.info("Created session: %s", session_id)
                return session
            # another process created it first, or the cache is unavailable
            existing = await self._load(session_id)
            return existing if existing is not None else session
        finally:
            self._pending.pop(session_id, None)

    async def _load(self, session_id: str) -> Optional[Session]:
        raw = await self._cache.read(self.session_key(session_id))
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable session %s: %s", session_id, e)
            return None

    async def _save(self, session: Session) -> bool:
        stored = await self._cache.write(
            self.session_key(session.id),
            session.model_dump_json().encode("utf-8"),
            self._config.ttl,
        )
        if not stored:
            logger.debug("Session %s was not persisted", session.id)
        return stored
