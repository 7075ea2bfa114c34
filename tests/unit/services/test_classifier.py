"""Unit tests for the rule-based request classifier."""

import pytest

from models.config import ClassifierConfiguration
from models.orchestration import Intent
from services.classifier import RequestClassifier, any_of, contains_any, starts_with_any


@pytest.mark.parametrize(
    "message,intent",
    [
        ("Are there any problems?", Intent.LIVE_QUERY),
        ("fetch logs from last hour", Intent.LIVE_QUERY),
        ("Show me VULNERABILITIES", Intent.LIVE_QUERY),
        ("can you explain the problems list", Intent.LIVE_QUERY),
        ("Explain microservices", Intent.MODEL_CHAT),
        ("What is a service mesh?", Intent.MODEL_CHAT),
        ("can you summarize kubernetes", Intent.MODEL_CHAT),
        ("help me understand tracing", Intent.MODEL_CHAT),
        ("Troubleshooting methodology", Intent.KNOWLEDGE_QUERY),
        ("how to investigate latency", Intent.KNOWLEDGE_QUERY),
        ("help", Intent.HELP),
        ("how to start", Intent.HELP),
        ("good morning", Intent.HELP),
        ("", Intent.HELP),
    ],
)
def test_classify(message: str, intent: Intent) -> None:
    """Check the intent assigned to typical messages."""
    assert RequestClassifier().classify(message) is intent


def test_classify_custom_keywords() -> None:
    """Keyword sets come from configuration."""
    classifier = RequestClassifier(
        ClassifierConfiguration(live_query_keywords=["alerts"], model_chat_keywords=[])
    )
    assert classifier.classify("list alerts") is Intent.LIVE_QUERY
    assert classifier.classify("show problems") is Intent.HELP


def test_rules_are_ordered() -> None:
    """Live data rules precede conversational rules."""
    intents = [intent for intent, _ in RequestClassifier().rules]
    assert intents == [
        Intent.LIVE_QUERY,
        Intent.MODEL_CHAT,
        Intent.KNOWLEDGE_QUERY,
        Intent.HELP,
    ]


def test_predicates() -> None:
    """Check predicate combinators."""
    predicate = any_of(contains_any(["dql"]), starts_with_any(["can you"]))
    assert predicate("run dql now")
    assert predicate("can you help")
    assert not predicate("you can help")
