"""Obtain and hold the bearer credential for the metrics/incident API.

The credential is exchanged with an OAuth2 client-credentials endpoint and
held in process memory only. Concurrent callers that find no valid
credential share one in-flight exchange instead of starting their own.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

import aiohttp

import metrics
from models.config import DynatraceConfiguration
from models.credential import Credential, CredentialFailure

logger = logging.getLogger(__name__)


class TokenManager:
    """Owner of the in-memory bearer credential."""

    def __init__(
        self,
        config: DynatraceConfiguration,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Create a token manager for the configured OAuth client."""
        self._config = config
        self._clock = clock
        self._credential: Optional[Credential] = None
        self._pending: Optional[asyncio.Task[Credential | CredentialFailure]] = None

    @property
    def credential(self) -> Optional[Credential]:
        """Return the held credential, valid or not."""
        return self._credential

    def _is_valid(self, credential: Optional[Credential]) -> bool:
        return credential is not None and credential.valid_at(
            self._clock(), self._config.token_safety_margin
        )

    async def ensure_valid(self) -> Credential | CredentialFailure:
        """Return a valid credential, exchanging a new one when needed.

        A held credential that is still inside its validity window (minus
        the safety margin) is returned without any network round-trip.
        Otherwise exactly one client-credentials exchange is attempted; when
        an exchange is already in flight, the caller waits for it.

        Returns:
            Credential: the valid credential.
            CredentialFailure: the exchange failed; the held credential is
            left untouched.
        """
        if self._is_valid(self._credential):
            return self._credential  # type: ignore[return-value]

        if self._pending is None or self._pending.done():
            self._pending = asyncio.create_task(self._exchange())
        return await asyncio.shield(self._pending)

    def invalidate(self) -> None:
        """Forget the held credential, e.g. after the API rejected it."""
        logger.info("Dropping rejected bearer credential")
        self._credential = None

    async def _exchange(self) -> Credential | CredentialFailure:
        """Perform one client-credentials exchange."""
        if self._config.oauth_client_id is None or self._config.oauth_client_secret is None:
            metrics.token_exchanges_total.labels("not_configured").inc()
            return CredentialFailure(reason="OAuth client credentials are not configured")

        form = {
            "grant_type": "client_credentials",
            "client_id": self._config.oauth_client_id,
            "client_secret": self._config.oauth_client_secret.get_secret_value(),
            "scope": " ".join(self._config.scopes),
        }
        timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        logger.info("OAuth client-credentials exchange with %s", self._config.token_url)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(str(self._config.token_url), data=form) as resp:
                    resp.raise_for_status()
                    payload = await resp.json()
            credential = Credential(
                access_token=payload["access_token"],
                expires_at=self._clock() + float(payload["expires_in"]),
                scope=payload.get("scope", ""),
            )
        except asyncio.TimeoutError:
            logger.error("OAuth exchange timed out after %ds", self._config.timeout)
            metrics.token_exchanges_total.labels("failure").inc()
            return CredentialFailure(reason="token endpoint timed out")
        except aiohttp.ClientResponseError as e:
            logger.error("OAuth exchange rejected: %s %s", e.status, e.message)
            metrics.token_exchanges_total.labels("failure").inc()
            return CredentialFailure(reason=f"token endpoint returned {e.status}")
        except aiohttp.ClientError as e:
            logger.error("OAuth exchange failed: %s", e)
            metrics.token_exchanges_total.labels("failure").inc()
            return CredentialFailure(reason=f"token endpoint unreachable: {e}")
        except (KeyError, TypeError, ValueError) as e:
            logger.error("OAuth exchange returned malformed payload: %s", e)
            metrics.token_exchanges_total.labels("failure").inc()
            return CredentialFailure(reason="token endpoint returned malformed payload")

        logger.info("OAuth exchange successful, token valid for %ss", payload["expires_in"])
        metrics.token_exchanges_total.labels("success").inc()
        self._credential = credential
        return credential
