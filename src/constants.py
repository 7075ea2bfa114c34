"""Constants used in business logic."""

SERVICE_NAME = "Ops Assistant"

# cache constants
CACHE_TYPE_MEMORY = "memory"
CACHE_TYPE_REDIS = "redis"
CACHE_TYPE_NOOP = "noop"

# Default TTL for cached values when the caller does not provide one
DEFAULT_CACHE_TTL_SECONDS = 3600
# Live operational data ages quickly
DEFAULT_LIVE_QUERY_TTL_SECONDS = 300
DEFAULT_SESSION_TTL_SECONDS = 86400
DEFAULT_IN_MEMORY_CACHE_ENTRIES = 10000

# Cache key layout
LIVE_QUERY_CACHE_CATEGORY = "dt:query"
LIVE_QUERY_KEY_MAX_LENGTH = 100
SESSION_KEY_PREFIX = "session"
DEFAULT_CACHE_CLEAR_PATTERN = "dt:*"
# Minimum pause between reconnection attempts to an unreachable store
CACHE_RECONNECT_INTERVAL_SECONDS = 5

# Session bookkeeping
MAX_RECENT_QUERIES = 5
RESPONSE_TRUNCATION_LENGTH = 200

# OAuth client-credentials exchange
DEFAULT_TOKEN_URL = "https://sso.dynatrace.com/sso/oauth2/token"
DEFAULT_TOKEN_SCOPES = ("app-engine:apps:run", "app-engine:functions:run")
TOKEN_SAFETY_MARGIN_SECONDS = 60
DEFAULT_BACKEND_TIMEOUT_SECONDS = 30

# Live API endpoints and parameters
PROBLEMS_ENDPOINT = "/api/v2/problems"
ENVIRONMENT_ENDPOINT = "/platform/management/v1/environment"
PROBLEMS_TIME_FROM = "now-1d"
PROBLEMS_TIME_TO = "now"
PROBLEMS_PAGE_SIZE = 10

# Model backend
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama2"
OLLAMA_GENERATE_ENDPOINT = "/api/generate"
OLLAMA_TAGS_ENDPOINT = "/api/tags"

# Request classification keywords
DEFAULT_LIVE_QUERY_KEYWORDS = (
    "dql",
    "fetch",
    "problems",
    "vulnerabilities",
    "entities",
    "logs",
    "metrics",
    "dynatrace",
)
DEFAULT_MODEL_CHAT_KEYWORDS = ("explain", "how do", "what is", "help me")
DEFAULT_MODEL_CHAT_PREFIXES = ("can you",)
DEFAULT_KNOWLEDGE_KEYWORDS = ("troubleshoot", "investigate", "correlate", "methodology")
DEFAULT_HELP_KEYWORDS = ("help", "guide", "how to")

# Enterprise sub-systems tracked in session context
DEFAULT_ENTERPRISE_KEYWORDS = (
    "oms",
    "myadt",
    "mobiletech",
    "mt2",
    "iib",
    "datapower",
    "mulesoft",
    "salesforce",
)
DEFAULT_ENTERPRISE_SYSTEMS = {
    "oms": ("oms", "order management"),
    "myadt": ("myadt", "customer portal"),
    "mt2": ("mt2", "mobiletech", "mobile tech"),
    "iib": ("iib", "integration bus"),
    "datapower": ("datapower", "data power"),
    "mulesoft": ("mulesoft", "cloudhub"),
}
HIGH_URGENCY_KEYWORDS = ("critical", "down")
ELEVATED_URGENCY_KEYWORDS = ("urgent", "issue")

UNABLE_TO_PROCESS_RESPONSE = "Unable to process this request"
