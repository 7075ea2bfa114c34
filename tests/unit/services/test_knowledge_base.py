"""Unit tests for the knowledge base."""

from services.knowledge_base import (
    CAPABILITY_SUMMARY,
    GENERAL_GUIDANCE,
    QUERY_GUIDANCE,
    TROUBLESHOOTING_GUIDANCE,
    KnowledgeBase,
    KnowledgeDocument,
)


def test_troubleshooting_guidance() -> None:
    """Problem oriented messages get the troubleshooting methodology."""
    assert KnowledgeBase().query("Investigate a payment failure") is TROUBLESHOOTING_GUIDANCE


def test_query_guidance() -> None:
    """Query oriented messages get the query guidance."""
    assert KnowledgeBase().query("Which DQL should I correlate with?") is QUERY_GUIDANCE


def test_general_guidance() -> None:
    """Anything else gets the general guidance."""
    assert KnowledgeBase().query("methodology") is GENERAL_GUIDANCE


def test_capabilities() -> None:
    """The capability summary is static."""
    document = KnowledgeBase().capabilities()
    assert document is CAPABILITY_SUMMARY
    assert document.suggestions


def test_documents_do_not_share_suggestions() -> None:
    """Each document gets its own suggestion list."""
    first = KnowledgeDocument(title="a", body="b")
    second = KnowledgeDocument(title="c", body="d")
    first.suggestions.append("help")

    assert not second.suggestions
