"""
Completion Service for College Advisor

Sends the counselor prompt to an OpenAI-compatible chat/completions
endpoint and returns the top choice. One outbound call per request:
no retries and no caching of repeated prompts.
"""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from college_advisor.config.settings import Settings, get_settings
from college_advisor.domain.models import CompletionResult
from college_advisor.infrastructure.ai.prompts import SYSTEM_PROMPT
from college_advisor.infrastructure.exceptions import (
    CompletionServiceError,
    ConfigurationError,
)


logger = logging.getLogger(__name__)


class CompletionService:
    """
    Client for the hosted chat-completion API.

    Args:
        settings: Application settings (defaults to the cached instance)
        transport: Optional httpx transport, used to stub the API in tests
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def model(self) -> str:
        return self._settings.openai_model

    def build_messages(self, user_message: str) -> List[Dict[str, str]]:
        """Fixed system instruction followed by the student's message."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ]

    def build_payload(self, user_message: str) -> Dict[str, Any]:
        """Request body for chat/completions."""
        s = self._settings
        return {
            "model": s.openai_model,
            "messages": self.build_messages(user_message),
            "temperature": s.completion_temperature,
            "max_tokens": s.completion_max_tokens,
            "top_p": s.completion_top_p,
            "frequency_penalty": s.completion_frequency_penalty,
            "presence_penalty": s.completion_presence_penalty,
        }

    async def complete(self, user_message: str) -> CompletionResult:
        """
        Ask the counselor model for advice.

        Args:
            user_message: Natural-language profile summary

        Returns:
            The first choice of the completion response

        Raises:
            ConfigurationError: no API key is configured
            CompletionServiceError: network, HTTP or payload failure
        """
        api_key = self._settings.openai_api_key
        if not api_key:
            raise ConfigurationError(
                "Missing OPENAI_API_KEY environment variable",
                missing_keys=["OPENAI_API_KEY"]
            )

        url = f"{self._settings.openai_base_url.rstrip('/')}/chat/completions"
        started = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.completion_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self.build_payload(user_message),
                )
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            error_body = e.response.text
            logger.error(f"Completion API error: {e.response.status_code} - {error_body}")
            raise CompletionServiceError(
                "Completion API returned an error status",
                model=self.model,
                status_code=e.response.status_code,
                original_error=e,
            )
        except httpx.HTTPError as e:
            logger.error(f"Completion API request failed: {e}")
            raise CompletionServiceError(
                f"Completion API request failed: {e}",
                model=self.model,
                original_error=e,
            )
        except ValueError as e:
            # Body was not JSON
            raise CompletionServiceError(
                "Completion API returned an unreadable response",
                model=self.model,
                original_error=e,
            )
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"Completion API request took {elapsed_ms:.0f}ms")

        try:
            return CompletionResult.model_validate(data["choices"][0])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise CompletionServiceError(
                "Completion API response had no choices",
                model=self.model,
                original_error=e,
            )
