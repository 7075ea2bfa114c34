"""Client for the local language model backend (Ollama)."""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

import constants
from errors import BackendError, BackendTimeoutError
from models.config import OllamaConfiguration

logger = logging.getLogger(__name__)

BACKEND_NAME = "model"


def context_to_system_prompt(context: dict[str, Any]) -> str:
    """Render a context record into a system prompt.

    Explicit `instructions` are used as they are; other fields are appended
    as JSON so the model can refer to them.
    """
    instructions = context.get("instructions")
    extra = {key: value for key, value in context.items() if key != "instructions"}
    parts = []
    if instructions:
        parts.append(str(instructions))
    if extra:
        parts.append("Context:\n" + json.dumps(extra, indent=2, default=str))
    return "\n\n".join(parts)


class OllamaClient:
    """Chat-style access to a model served by Ollama."""

    def __init__(self, config: OllamaConfiguration) -> None:
        """Create a client for the configured model."""
        self._config = config

    @property
    def url(self) -> str:
        """Base URL of the model backend."""
        return self._config.base_url

    async def chat(self, prompt: str, context: Optional[dict[str, Any]] = None) -> str:
        """Generate a response to the prompt.

        Raises:
            BackendTimeoutError: the model did not answer in time.
            BackendError: any other failure, including an empty answer.
        """
        body: dict[str, Any] = {
            "model": self._config.model,
            "prompt": prompt,
            "stream": False,
        }
        if context:
            body["system"] = context_to_system_prompt(context)

        url = f"{self.url}{constants.OLLAMA_GENERATE_ENDPOINT}"
        timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        logger.info("Routing prompt to model %s", self._config.model)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=body) as resp:
                    resp.raise_for_status()
                    try:
                        payload = await resp.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise BackendError(
                            BACKEND_NAME, f"model returned malformed JSON: {e}"
                        ) from e
        except asyncio.TimeoutError as e:
            raise BackendTimeoutError(
                BACKEND_NAME, f"model did not answer within {self._config.timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise BackendError(BACKEND_NAME, f"model request failed: {e}") from e

        text = payload.get("response") if isinstance(payload, dict) else None
        if not text:
            raise BackendError(BACKEND_NAME, "model returned an empty response")
        return str(text).strip()

    async def check_health(self) -> bool:
        """Lightweight health check against the model listing endpoint."""
        url = f"{self.url}{constants.OLLAMA_TAGS_ENDPOINT}"
        timeout = aiohttp.ClientTimeout(total=5)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as resp:
                    return resp.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Model health check failed: %s", e)
            return False
