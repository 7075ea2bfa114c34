"""Unit tests for response formatting."""

from datetime import datetime, timezone

from models.live_query import (
    EnvironmentInfo,
    LiveQueryResponse,
    LiveQueryResult,
    Problem,
)
from models.orchestration import OrchestrationResult, Provenance
from services.formatter import (
    ResponseFormatter,
    format_response,
    render_content,
    render_error,
    render_internal_error,
)
from services.knowledge_base import KnowledgeDocument

TIMESTAMP = datetime(2025, 10, 3, 9, 31, 25, tzinfo=timezone.utc)


def _problem(**overrides) -> Problem:
    record = {
        "problemId": "P-1",
        "title": "High failure rate",
        "status": "CLOSED",
        "severityLevel": "ERROR",
        "startTime": 1759483885000,
        "endTime": 1759487485000,
        "managementZones": [{"name": "payments"}],
    }
    record.update(overrides)
    return Problem.model_validate(record)


def _result(problems: list[Problem]) -> LiveQueryResult:
    return LiveQueryResult(
        query_type="problems",
        environment_url="https://abc123.apps.dynatrace.com",
        problems=problems,
        fetched_at=TIMESTAMP,
    )


def test_format_response_trailer() -> None:
    """The provenance and timestamp are appended."""
    text = format_response("Hello", Provenance.HELP, TIMESTAMP)
    assert text == "Hello\n\n_Source: help | 2025-10-03T09:31:25+00:00_"


def test_format_response_without_timestamp() -> None:
    """The timestamp is optional."""
    assert format_response("Hello", Provenance.MODEL).endswith("_Source: model_")


def test_formatter_uses_result() -> None:
    """ResponseFormatter formats orchestration results."""
    result = OrchestrationResult(
        text="No data", provenance=Provenance.CACHE, timestamp=TIMESTAMP
    )
    assert "_Source: cache |" in ResponseFormatter().format(result)


def test_render_problems() -> None:
    """Problems are listed with their details."""
    text = render_content(_result([_problem(), _problem(problemId="P-2", endTime=-1)]))

    assert text.startswith("**Problems** (2 found)")
    assert "**Problem 1: P-1**" in text
    assert "- **Ended:** 2025-10-03 10:31:25 UTC" in text
    assert "- **Management Zones:** payments" in text
    # open problems carry no end time
    assert text.count("**Ended:**") == 1


def test_render_no_problems() -> None:
    """An empty listing says the environment is healthy."""
    text = render_content(_result([]))
    assert "(0 found)" in text
    assert "**No current problems!**" in text


def test_render_environment() -> None:
    """Environment information is rendered as a status block."""
    result = LiveQueryResult(
        query_type="environment",
        environment_url="https://abc123.apps.dynatrace.com",
        environment=EnvironmentInfo(
            environment_id="abc123", state="ACTIVE", create_time="2024-01-10"
        ),
        fetched_at=TIMESTAMP,
    )
    text = render_content(result)
    assert text.startswith("**Environment Status**")
    assert "**State:** ACTIVE" in text


def test_render_live_response_with_analysis() -> None:
    """Model analysis follows the live data."""
    text = render_content(LiveQueryResponse(result=_result([]), analysis="All good."))
    assert text.endswith("**AI Analysis:**\nAll good.")


def test_render_live_response_without_analysis() -> None:
    """Live data alone is rendered when the analysis is missing."""
    assert "AI Analysis" not in render_content(LiveQueryResponse(result=_result([])))


def test_render_document() -> None:
    """Documents are rendered with suggestions."""
    document = KnowledgeDocument(title="Guide", body="Body", suggestions=["help"])
    assert render_content(document) == '**Guide**\n\nBody\n\n**Try asking:**\n- "help"'


def test_render_mappings() -> None:
    """Mappings with a message are rendered as the message, others as JSON."""
    assert render_content({"message": "hi"}) == "hi"
    assert render_content({"count": 1}) == '{\n  "count": 1\n}'


def test_render_error() -> None:
    """Diagnostics of every failed backend are listed."""
    text = render_error(["live-api: down", "model: timed out"])
    assert "All backends failed" in text
    assert "- live-api: down\n- model: timed out" in text


def test_render_internal_error() -> None:
    """Failures not caused by a backend do not blame the backends."""
    text = render_internal_error()
    assert "internal error" in text
    assert "All backends failed" not in text
