"""Render backend results into the single textual response envelope.

Everything here is pure: no I/O, no clock reads (timestamps are passed in).
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel

import constants
from models.live_query import LiveQueryResponse, LiveQueryResult, Problem
from models.orchestration import OrchestrationResult, Provenance
from services.knowledge_base import KnowledgeDocument


def _format_millis(value: int) -> str:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).strftime(
        "%Y-%m-%d %H:%M:%S UTC"
    )


def render_problem(index: int, problem: Problem) -> str:
    """Render one problem record as a markdown block."""
    zones = ", ".join(zone.name for zone in problem.management_zones) or "None"
    lines = [
        f"**Problem {index}: {problem.problem_id}**",
        f"- **Title:** {problem.title}",
        f"- **Status:** {problem.status}",
        f"- **Severity:** {problem.severity_level}",
        f"- **Started:** {_format_millis(problem.start_time)}",
    ]
    if problem.ended and problem.end_time is not None:
        lines.append(f"- **Ended:** {_format_millis(problem.end_time)}")
    lines.append(f"- **Affected Entities:** {len(problem.affected_entities)}")
    lines.append(f"- **Management Zones:** {zones}")
    return "\n".join(lines)


def render_live_result(result: LiveQueryResult) -> str:
    """Render problems or environment information fetched from the live API."""
    if result.query_type == "environment" and result.environment is not None:
        env = result.environment
        return (
            "**Environment Status**\n\n"
            f"**Environment ID:** {env.environment_id}\n"
            f"**State:** {env.state}\n"
            f"**Created:** {env.create_time}\n"
            f"**URL:** {result.environment_url}"
        )

    header = f"**Problems** ({len(result.problems)} found)"
    if not result.problems:
        return (
            f"{header}\n\n**No current problems!** The environment is healthy.\n\n"
            f"**Environment:** {result.environment_url}\n"
            "**Time Range:** Last 24 hours"
        )
    blocks = [render_problem(i, p) for i, p in enumerate(result.problems, start=1)]
    return (
        header
        + "\n\n"
        + "\n\n".join(blocks)
        + f"\n\n**Environment:** {result.environment_url}"
    )


def render_live_response(response: LiveQueryResponse) -> str:
    """Render live data followed by the model analysis, when present."""
    text = render_live_result(response.result)
    if response.analysis:
        text += f"\n\n---\n\n**AI Analysis:**\n{response.analysis}"
    return text


def render_document(document: KnowledgeDocument) -> str:
    """Render a guidance document with its suggested follow-ups."""
    text = f"**{document.title}**\n\n{document.body}"
    if document.suggestions:
        text += "\n\n**Try asking:**\n" + "\n".join(
            f'- "{suggestion}"' for suggestion in document.suggestions
        )
    return text


def render_content(content: Any) -> str:
    """Render a string or structured record into text."""
    match content:
        case str():
            return content
        case LiveQueryResponse():
            return render_live_response(content)
        case LiveQueryResult():
            return render_live_result(content)
        case KnowledgeDocument():
            return render_document(content)
        case BaseModel():
            return content.model_dump_json(indent=2)
        case {"message": str() as message}:
            return message
        case _:
            return json.dumps(content, indent=2, default=str)


def render_error(diagnostics: list[str]) -> str:
    """Human readable message for an exhausted fallback cascade."""
    details = "\n".join(f"- {line}" for line in diagnostics) or "- no backend answered"
    return (
        "**Unable to answer right now.** All backends failed:\n"
        f"{details}\n\n"
        "**Try:**\n"
        '- "Are there any problems?"\n'
        '- "Explain microservices"\n'
        '- "help"'
    )


def render_internal_error() -> str:
    """Message for a failure that is not attributable to any backend."""
    return (
        f"**{constants.UNABLE_TO_PROCESS_RESPONSE}.** An internal error occurred "
        "while handling the message, please try again.\n\n"
        "**Try:**\n"
        '- "help"'
    )


def format_response(
    content: Any, provenance: Provenance, timestamp: Optional[datetime] = None
) -> str:
    """Render content and append the provenance/timestamp trailer."""
    trailer = f"_Source: {provenance.value}"
    if timestamp is not None:
        trailer += f" | {timestamp.isoformat()}"
    return f"{render_content(content)}\n\n{trailer}_"


class ResponseFormatter:  # pylint: disable=too-few-public-methods
    """Turn orchestration results into the caller-facing string."""

    def format(self, result: OrchestrationResult) -> str:
        """Format the result with its provenance and timestamp."""
        return format_response(result.text, result.provenance, result.timestamp)
