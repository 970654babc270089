"""Google Gemini completion backend for career path generation."""

import asyncio
import logging
from typing import Protocol

from google import genai
from google.genai import types

from config import settings
from services.exceptions import CompletionError, CompletionTimeout
from services.prompt_builder import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


class CompletionBackend(Protocol):
    """Prompt in, raw text out. May raise CompletionError or CompletionTimeout."""

    async def complete(self, prompt: str) -> str: ...


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - career path generation disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


class GeminiBackend:
    def __init__(
        self,
        client: genai.Client,
        model: str | None = None,
        timeout_seconds: float | None = None,
        temperature: float = 0.4,
    ) -> None:
        self.client = client
        self.model = model or settings.gemini_model
        self.timeout_seconds = timeout_seconds or settings.generation_timeout_seconds
        self.temperature = temperature

    async def complete(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        system_instruction=SYSTEM_INSTRUCTION,
                        temperature=self.temperature,
                        max_output_tokens=4096,
                        response_mime_type="application/json",
                    ),
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise CompletionTimeout(
                f"Gemini did not respond within {self.timeout_seconds:.0f}s"
            ) from e
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise CompletionError(f"Gemini API error: {e}") from e

        return response.text or ""


def get_backend() -> GeminiBackend | None:
    client = get_client()
    if client is None:
        return None
    return GeminiBackend(client)
