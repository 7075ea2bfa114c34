"""Client for the metrics/incident API."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Literal, Optional

import aiohttp
from pydantic import ValidationError

import constants
from errors import BackendError, BackendTimeoutError, CredentialRejectedError
from models.config import DynatraceConfiguration
from models.credential import Credential
from models.live_query import EnvironmentInfo, LiveQueryResult, Problem

logger = logging.getLogger(__name__)

BACKEND_NAME = "live-api"

QueryType = Literal["problems", "environment"]


def detect_query_type(message: str) -> QueryType:
    """Decide which endpoint answers the message; problems is the default."""
    msg = message.lower()
    if any(word in msg for word in ("problems", "issues", "incidents")):
        return "problems"
    if any(word in msg for word in ("environment", "status")):
        return "environment"
    return "problems"


class DynatraceClient:
    """Fetch problems and environment information with a bearer credential."""

    def __init__(
        self,
        config: DynatraceConfiguration,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Create a client for the configured environment."""
        self._config = config
        self._clock = clock

    @property
    def configured(self) -> bool:
        """Return True when the environment and OAuth client are configured."""
        return self._config.configured

    async def execute_query(self, message: str, credential: Credential) -> LiveQueryResult:
        """Run the live query that best answers the message.

        Raises:
            CredentialRejectedError: the API answered 401.
            BackendTimeoutError: the API did not answer in time.
            BackendError: any other failure.
        """
        if not self.configured:
            raise BackendError(BACKEND_NAME, "live API is not configured")
        query_type = detect_query_type(message)
        logger.info("Executing live %s query", query_type)
        if query_type == "environment":
            return await self.get_environment_info(credential)
        return await self.get_problems(credential)

    async def get_problems(self, credential: Credential) -> LiveQueryResult:
        """List problems of the last day, falling back to environment info."""
        try:
            payload = await self._get_json(
                constants.PROBLEMS_ENDPOINT,
                credential,
                params={
                    "from": constants.PROBLEMS_TIME_FROM,
                    "to": constants.PROBLEMS_TIME_TO,
                    "pageSize": str(constants.PROBLEMS_PAGE_SIZE),
                },
            )
            problems = [Problem.model_validate(p) for p in payload.get("problems", [])]
        except CredentialRejectedError:
            raise
        except (BackendError, ValidationError, AttributeError) as e:
            logger.warning("Problems API failed (%s), falling back to environment info", e)
            return await self.get_environment_info(credential)

        logger.info("Found %d problems", len(problems))
        return LiveQueryResult(
            query_type="problems",
            environment_url=self._config.base_url,
            problems=problems,
            fetched_at=self._clock(),
        )

    async def get_environment_info(self, credential: Credential) -> LiveQueryResult:
        """Return the environment identity and state."""
        payload = await self._get_json(constants.ENVIRONMENT_ENDPOINT, credential)
        try:
            environment = EnvironmentInfo.model_validate(payload)
        except ValidationError as e:
            raise BackendError(BACKEND_NAME, f"malformed environment info: {e}") from e
        return LiveQueryResult(
            query_type="environment",
            environment_url=self._config.base_url,
            environment=environment,
            fetched_at=self._clock(),
        )

    async def _get_json(
        self,
        path: str,
        credential: Credential,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        """GET a JSON document from the environment."""
        url = f"{self._config.base_url}{path}"
        headers = {
            "Authorization": credential.authorization_header,
            "Accept": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers, params=params) as resp:
                    if resp.status == 401:
                        raise CredentialRejectedError(
                            BACKEND_NAME, "bearer credential was rejected"
                        )
                    resp.raise_for_status()
                    try:
                        return await resp.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise BackendError(
                            BACKEND_NAME, f"{path} returned malformed JSON: {e}"
                        ) from e
        except asyncio.TimeoutError as e:
            raise BackendTimeoutError(
                BACKEND_NAME, f"{path} timed out after {self._config.timeout}s"
            ) from e
        except aiohttp.ClientResponseError as e:
            raise BackendError(BACKEND_NAME, f"{path} returned {e.status}") from e
        except aiohttp.ClientError as e:
            raise BackendError(BACKEND_NAME, f"{path} failed: {e}") from e
