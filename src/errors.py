"""Error taxonomy shared by the backends and the orchestrator."""


class BackendError(Exception):
    """A backend call failed and the request should take the next fallback."""

    def __init__(self, backend: str, message: str) -> None:
        """Remember which backend failed."""
        super().__init__(f"{backend}: {message}")
        self.backend = backend
        self.message = message


class BackendTimeoutError(BackendError):
    """A backend call exceeded its timeout."""


class CredentialError(BackendError):
    """No usable bearer credential could be obtained for the live API."""


class CredentialRejectedError(BackendError):
    """The live API refused the bearer credential that was presented."""


class CacheUnavailableError(Exception):
    """The key-value store could not be reached."""


class CacheCommandError(Exception):
    """The key-value store was reachable but rejected a command."""


class ExhaustedFallbackError(Exception):
    """Every backend in the fallback cascade has failed."""

    def __init__(self, diagnostics: list[str]) -> None:
        """Keep the per-backend diagnostics for the user-visible message."""
        super().__init__("; ".join(diagnostics) or "no backend available")
        self.diagnostics = diagnostics
