"""Models for the bearer credential used by the live API."""

from pydantic import BaseModel, SecretStr


class Credential(BaseModel):
    """Bearer credential obtained by the client-credentials exchange.

    Attributes:
        access_token: Bearer token presented to the live API
        expires_at: Absolute expiry as POSIX timestamp
        scope: Scopes granted by the authorization server
    """

    access_token: SecretStr
    expires_at: float
    scope: str = ""

    def valid_at(self, now: float, safety_margin: float = 0) -> bool:
        """Check whether the credential can still be used at the given instant."""
        return now < self.expires_at - safety_margin

    @property
    def authorization_header(self) -> str:
        """Value of the Authorization header for this credential."""
        return f"Bearer {self.access_token.get_secret_value()}"


class CredentialFailure(BaseModel):
    """Typed outcome of a failed client-credentials exchange."""

    reason: str
