"""Rule-based classification of operator messages.

Rules are an ordered table of `(Intent, predicate)` pairs evaluated over the
lower-cased message; the first matching rule wins and `Intent.HELP` is the
default. Live-data rules come first, so "can you explain the problems list"
is a live query even though it also reads like a conversational request.
"""

import logging
from typing import Callable, Iterable, Optional

from models.config import ClassifierConfiguration
from models.orchestration import Intent

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]
Rule = tuple[Intent, Predicate]


def contains_any(keywords: Iterable[str]) -> Predicate:
    """Build a predicate matching text that contains any of the keywords."""
    words = tuple(keyword.lower() for keyword in keywords)
    return lambda text: any(word in text for word in words)


def starts_with_any(prefixes: Iterable[str]) -> Predicate:
    """Build a predicate matching text that begins with any of the prefixes."""
    starts = tuple(prefix.lower() for prefix in prefixes)
    return lambda text: text.startswith(starts)


def any_of(*predicates: Predicate) -> Predicate:
    """Combine predicates with logical OR."""
    return lambda text: any(predicate(text) for predicate in predicates)


def build_rules(config: ClassifierConfiguration) -> list[Rule]:
    """Build the ordered rule table from configured keyword sets."""
    return [
        (Intent.LIVE_QUERY, contains_any(config.live_query_keywords)),
        (
            Intent.MODEL_CHAT,
            any_of(
                contains_any(config.model_chat_keywords),
                starts_with_any(config.model_chat_prefixes),
            ),
        ),
        (Intent.KNOWLEDGE_QUERY, contains_any(config.knowledge_keywords)),
        (Intent.HELP, contains_any(config.help_keywords)),
    ]


class RequestClassifier:
    """Map message text to exactly one intent."""

    def __init__(self, config: Optional[ClassifierConfiguration] = None) -> None:
        """Create a classifier with the configured (or default) keyword sets."""
        self.rules = build_rules(config or ClassifierConfiguration())

    def classify(self, message: str) -> Intent:
        """Return the intent of the first matching rule, HELP when none matches."""
        text = message.lower().strip()
        for intent, predicate in self.rules:
            if predicate(text):
                logger.debug("Message classified as %s", intent.value)
                return intent
        logger.debug("Message classified as %s (default)", Intent.HELP.value)
        return Intent.HELP
