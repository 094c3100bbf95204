"""
Client for the external chat-completion service.

Issues exactly one request per call and maps every failure onto the error
taxonomy in ``rewriter.errors``. No retries happen here.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from rewriter.config import Settings, get_settings
from rewriter.errors import (
    ConfigurationError,
    EmptyCompletionError,
    UnknownError,
    UpstreamAuthError,
    UpstreamRateLimitError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Text of the first returned candidate plus a little metadata."""
    text: str
    model: Optional[str] = None
    finish_reason: Optional[str] = None


def _upstream_message(response: httpx.Response) -> str:
    """Pull a readable error message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:400] or response.reason_phrase

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if error:
        return str(error)
    return response.reason_phrase


class CompletionClient:
    """
    Thin async wrapper around an OpenAI-compatible ``/chat/completions`` endpoint.

    A new ``httpx.AsyncClient`` is opened per call. Tests can pass a
    ``transport`` (e.g. ``httpx.MockTransport``) to avoid the network.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return self.settings.openai_base_url.rstrip("/") + "/chat/completions"

    async def complete(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> CompletionResult:
        """
        Request a single completion for ``prompt``.

        Args:
            prompt: Full instruction text, sent as one user message
            temperature: Sampling temperature (defaults to settings)
            max_tokens: Output token bound (defaults to settings)
            timeout: Seconds to wait before giving up (defaults to settings)

        Returns:
            CompletionResult with non-empty text

        Raises:
            ConfigurationError: No API key configured
            UpstreamAuthError: Credentials rejected (401/403)
            UpstreamRateLimitError: Throttled (429)
            UpstreamUnavailableError: 5xx, network failure or timeout
            EmptyCompletionError: No usable text in the response
            UnknownError: Any other failure
        """
        if not self.settings.openai_api_key:
            raise ConfigurationError("Completion service credential is not configured")

        timeout = self.settings.completion_timeout if timeout is None else timeout
        payload = {
            "model": self.settings.openai_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.completion_temperature if temperature is None else temperature,
            "max_tokens": self.settings.completion_max_tokens if max_tokens is None else max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.settings.openai_api_key}"}

        started = time.perf_counter()
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            try:
                response = await asyncio.wait_for(
                    client.post(self.endpoint, json=payload, headers=headers),
                    timeout=timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException):
                logger.warning("Completion request timed out after %.1fs", timeout)
                raise UpstreamUnavailableError(
                    "Completion service timed out", details=f"No response within {timeout}s"
                )
            except httpx.TransportError as e:
                logger.warning("Completion service unreachable: %s", e)
                raise UpstreamUnavailableError("Completion service unreachable", details=str(e))
            except Exception as e:
                logger.exception("Unexpected error calling completion service")
                raise UnknownError("Rewrite failed", details=str(e))

        elapsed = time.perf_counter() - started
        logger.info("Completion service answered %s in %.2fs", response.status_code, elapsed)

        self._raise_for_status(response)
        return self._extract(response)

    @staticmethod
    def _raise_for_status(response: httpx.Response):
        status = response.status_code
        if response.is_success:
            return

        message = _upstream_message(response)
        if status in (401, 403):
            raise UpstreamAuthError("Completion service rejected the credentials", details=message)
        if status == 429:
            raise UpstreamRateLimitError("Completion service is rate limiting requests", details=message)
        if status >= 500:
            raise UpstreamUnavailableError("Completion service unavailable", details=message)
        raise UnknownError("Rewrite failed", details=f"HTTP {status}: {message}")

    @staticmethod
    def _extract(response: httpx.Response) -> CompletionResult:
        try:
            data = response.json()
        except ValueError as e:
            raise UnknownError("Rewrite failed", details=f"Invalid JSON from completion service: {e}")

        if not isinstance(data, dict):
            raise UnknownError("Rewrite failed", details="Unexpected completion body: not a JSON object")

        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise UnknownError("Rewrite failed", details="Unexpected completion body: 'choices' is not a list")

        first = choices[0] if choices else {}
        if not isinstance(first, dict):
            raise UnknownError("Rewrite failed", details="Unexpected completion body: choice is not an object")

        message = first.get("message") or {}
        if not isinstance(message, dict):
            raise UnknownError("Rewrite failed", details="Unexpected completion body: 'message' is not an object")

        content = message.get("content") or ""
        if not isinstance(content, str):
            raise UnknownError(
                "Rewrite failed",
                details=f"Unexpected completion body: 'content' is {type(content).__name__}, not text",
            )

        text = content.strip()
        if not text:
            raise EmptyCompletionError("Completion service returned no text")

        return CompletionResult(
            text=text,
            model=data.get("model"),
            finish_reason=first.get("finish_reason"),
        )
