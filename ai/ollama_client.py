"""Async client for a local Ollama server's chat endpoint."""

import aiohttp
import structlog

from ai.models import ModelConfig

log = structlog.get_logger(__name__)


class ModelError(Exception):
    """The model call failed or returned something unusable."""


class ModelUnavailableError(ModelError):
    """The Ollama server could not be reached at all."""


class OllamaClient:
    def __init__(self, base_url: str, timeout: float = 120.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": "Stoink/0.1 (Discord bot)"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def chat(self, messages: list[dict[str, str]], config: ModelConfig) -> str:
        """Single non-streaming chat completion. Returns the reply text."""
        payload = {
            "model": config.model_id,
            "messages": messages,
            "stream": False,
            "options": config.options(),
        }
        session = await self.get_session()
        url = f"{self.base_url}/api/chat"

        try:
            async with session.post(url, json=payload) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    raise ModelError(f"Ollama returned HTTP {resp.status}: {body[:200]}")
                data = await resp.json()
        except aiohttp.ClientConnectorError as e:
            raise ModelUnavailableError(f"Could not connect to Ollama at {self.base_url}: {e}") from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise ModelError(f"Ollama request failed: {e!r}") from e

        content = (data.get("message") or {}).get("content")
        if not isinstance(content, str):
            raise ModelError("Ollama response had no message content")

        log.debug("ollama_chat_complete", model=config.model_id, chars=len(content))
        return content

    async def is_available(self) -> bool:
        """Check whether the server answers /api/tags."""
        try:
            session = await self.get_session()
            async with session.get(f"{self.base_url}/api/tags") as resp:
                return resp.status == 200
        except (aiohttp.ClientError, TimeoutError):
            return False
