import asyncio
import logging
from typing import Any, Protocol

import google.generativeai as genai  # type: ignore[import-untyped]
from google.api_core import exceptions as google_exceptions

from ..errors import CompletionError, RemoteFailure
from ..settings import Settings

logger = logging.getLogger(__name__)

_RATE_LIMIT_ERRORS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.TooManyRequests,
    google_exceptions.DeadlineExceeded,
    google_exceptions.ServiceUnavailable,
)


class CompletionClient(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
        json_output: bool = False,
    ) -> str: ...


def classify_remote_error(exc: BaseException) -> RemoteFailure:
    """Map whatever the remote client raised onto RATE_LIMITED or OTHER.

    Quota exhaustion, HTTP 429, timeouts and an unreachable service all count
    as RATE_LIMITED so callers can fall back locally.
    """
    if isinstance(exc, CompletionError):
        return exc.kind
    if isinstance(exc, _RATE_LIMIT_ERRORS):
        return RemoteFailure.RATE_LIMITED
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return RemoteFailure.RATE_LIMITED

    status = getattr(exc, "status", None) or getattr(exc, "status_code", None)
    code = getattr(exc, "code", None)
    if status == 429 or code == 429:
        return RemoteFailure.RATE_LIMITED
    if isinstance(code, str) and code.lower() in {"insufficient_quota", "resource_exhausted"}:
        return RemoteFailure.RATE_LIMITED
    return RemoteFailure.OTHER


def clean_json(text: str) -> str:
    cleaned = text.strip()

    # remove ```json and ```
    if cleaned.startswith("```"):
        cleaned = cleaned.replace("```json", "")
        cleaned = cleaned.replace("```", "").strip()

    return cleaned


class GeminiCompletionClient:
    def __init__(self, settings: Settings):
        self.api_key = settings.gemini_api_key
        self.model_name = settings.gemini_model
        self.timeout = settings.ai_timeout_seconds

    def _get_model(self, system_prompt: str, max_tokens: int, temperature: float, json_output: bool) -> genai.GenerativeModel:
        if not self.api_key:
            raise CompletionError(RemoteFailure.OTHER, "GEMINI_API_KEY is not configured")

        generation_config: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_output:
            generation_config["response_mime_type"] = "application/json"

        try:
            genai.configure(api_key=self.api_key)
            return genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=system_prompt,
                generation_config=generation_config,
            )
        except Exception as exc:
            logger.exception("Gemini init failed: %s", exc)
            raise CompletionError(RemoteFailure.OTHER, "Failed to initialize Gemini client") from exc

    @staticmethod
    def _extract_text(response: Any) -> str:
        try:
            return response.text or ""
        except Exception as exc:
            logger.exception("Failed to extract .text: %s", exc)
            raise CompletionError(RemoteFailure.OTHER, "Failed to parse Gemini response") from exc

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
        json_output: bool = False,
    ) -> str:
        model = self._get_model(system_prompt, max_tokens, temperature, json_output)

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    model.generate_content,
                    user_prompt,
                    request_options={"timeout": self.timeout},
                ),
                timeout=self.timeout,
            )
        except Exception as exc:
            kind = classify_remote_error(exc)
            logger.exception("Gemini request failed (%s): %s", kind.value, exc)
            raise CompletionError(kind, "Failed to contact Gemini") from exc

        return self._extract_text(response)
