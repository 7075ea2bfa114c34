"""Static guidance documents and the capability summary.

The knowledge base always answers: a message that matches no topic gets
the general capabilities document.
"""

from pydantic import BaseModel, Field

from services.classifier import contains_any


class KnowledgeDocument(BaseModel):
    """Canned guidance document."""

    title: str
    body: str
    suggestions: list[str] = Field(default_factory=list)


TROUBLESHOOTING_GUIDANCE = KnowledgeDocument(
    title="General Troubleshooting Methodology",
    body="""**Investigation Steps:**
1. **Scope the Issue** - Identify affected services and users
2. **Timeline Analysis** - When did it start? Any recent changes or deployments?
3. **Correlation** - Look for related events or alerts across systems
4. **Dependencies** - Check upstream and downstream services
5. **Metrics** - Analyze performance and error patterns

**Correlation Strategies:**
- Use trace IDs and correlation IDs
- Look for timing patterns across systems
- Check both infrastructure and application layers

**Key Queries:**
- `fetch dt.davis.problems` - Recent issues
- `fetch logs | filter ...` - Application logs
- `fetch dt.entity.service` - Service health""",
)

QUERY_GUIDANCE = KnowledgeDocument(
    title="Query Guidance",
    body="""**Common DQL Patterns:**
```
fetch dt.davis.problems | limit 10
fetch logs | filter timestamp >= now() - 1h
fetch dt.security_problems | filter risk.level == "CRITICAL"
fetch dt.entity.service | filter health_state == "UNHEALTHY"
```

**Investigation Tips:**
- Start with problems and events for context
- Use time filters to focus on the relevant timeframe
- Combine multiple data sources for a complete picture

**Useful Fields:**
- `correlation.id` - Track requests across services
- `timestamp` - Time-based filtering
- `entity.name` - Service identification
- `event.kind` - Event classification""",
)

GENERAL_GUIDANCE = KnowledgeDocument(
    title="Ops Assistant",
    body="""I can help with:

**Live Queries**
- "Show me recent problems"
- "fetch logs from last hour"
- "What's the environment status?"

**General Troubleshooting**
- "How to investigate performance issues"
- "Troubleshooting methodology"
- "Correlation strategies"

**General Questions**
- Ask about observability concepts
- Get help with DQL queries
- Learn about best practices""",
    suggestions=[
        "Show recent problems",
        "How do I investigate slow requests?",
        "What's the best way to correlate events?",
    ],
)

CAPABILITY_SUMMARY = KnowledgeDocument(
    title="Ops Assistant",
    body="""**Live Queries** -> monitoring API + model analysis
- "Are there any current problems?"
- "fetch dt.davis.problems"
- "Show me error logs"

**General Questions** -> local language model
- "Explain distributed systems"
- "How does Kubernetes work?"

**Troubleshooting** -> knowledge base
- "Investigation methodology"
- "Best practices"

Answers to live queries are cached for a few minutes; every answer names
the backend it came from.""",
    suggestions=[
        "Are there any current problems?",
        "What's the environment status?",
        "Show me vulnerabilities",
        "Execute fetch dt.davis.problems",
    ],
)

_is_troubleshooting = contains_any(("problem", "issue", "failure"))
_is_query_help = contains_any(("dql", "dynatrace", "query"))


class KnowledgeBase:
    """Keyword lookup of canned guidance documents."""

    def query(self, message: str) -> KnowledgeDocument:
        """Return the guidance document matching the message."""
        msg = message.lower()
        if _is_troubleshooting(msg):
            return TROUBLESHOOTING_GUIDANCE
        if _is_query_help(msg):
            return QUERY_GUIDANCE
        return GENERAL_GUIDANCE

    def capabilities(self) -> KnowledgeDocument:
        """Return the static capability summary."""
        return CAPABILITY_SUMMARY
