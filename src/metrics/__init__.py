"""Metrics module for the Ops Assistant service."""

from prometheus_client import (
    Counter,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "ops_rest_api_calls_total", "REST API calls counter", ["path", "status_code"]
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "ops_response_duration_seconds", "Response durations", ["path"]
)

# How operator messages were classified
messages_total = Counter(
    "ops_messages_total", "Classified operator messages", ["intent"]
)

# Which backend (or the cache) produced the final response
responses_total = Counter(
    "ops_responses_total", "Responses by provenance", ["provenance"]
)

# Live query cache efficiency
cache_hits_total = Counter("ops_cache_hits_total", "Live query cache hits")
cache_misses_total = Counter("ops_cache_misses_total", "Live query cache misses")

# Backend calls that failed and triggered a fallback
backend_failures_total = Counter(
    "ops_backend_failures_total", "Backend call failures", ["backend"]
)

# OAuth client-credentials exchanges by outcome
token_exchanges_total = Counter(
    "ops_token_exchanges_total", "OAuth token exchanges", ["outcome"]
)
