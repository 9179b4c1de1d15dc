"""Photographic prompt enhancement using a Gemini text model.

Each call is stateless: the raw user idea is interpolated into a fixed
instruction template and sent as a single user turn. Safety filtering is
switched off for every harm category so that ordinary photographic subjects
are not blocked; callers own the moderation posture that results.
"""

import logging
import time
from typing import AsyncIterator, List, Optional

from google import genai
from google.genai import types

from services.errors import (
    ConfigurationError,
    InvalidRequestError,
    UpstreamTransportError,
    error_message,
)
from services.gemini.prompts import enhancement_prompt
from services.gemini.response_parser import extract_text
from utils.settings import DEFAULT_TEXT_MODEL

LOGGER = logging.getLogger(__name__)
FAILURE_MESSAGE = "Failed to enhance prompt."

HARM_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def build_safety_settings() -> List[types.SafetySetting]:
    return [
        types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
        for category in HARM_CATEGORIES
    ]


class PromptEnhancer:
    """Turn a terse idea into a structured photographic prompt."""

    def __init__(self, client: Optional[genai.Client], model: str = DEFAULT_TEXT_MODEL) -> None:
        self.client = client
        self.model = model

    def _request(self, prompt: str) -> dict:
        if self.client is None:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        cleaned = (prompt or "").strip()
        if not cleaned:
            raise InvalidRequestError("Prompt is required.")
        return {
            "model": self.model,
            "contents": [types.Content(role="user", parts=[types.Part(text=enhancement_prompt(cleaned))])],
            "config": types.GenerateContentConfig(safety_settings=build_safety_settings()),
        }

    async def enhance(self, prompt: str) -> str:
        """Return the enhanced prompt text for a raw user idea.

        Raises:
            ConfigurationError: If no Gemini client is configured.
            InvalidRequestError: If the prompt is blank.
            UpstreamTransportError: If the model call fails or returns no text.
        """
        request = self._request(prompt)
        start = time.time()
        try:
            response = await self.client.aio.models.generate_content(**request)
        except Exception as exc:
            LOGGER.error("Prompt enhancement request failed: %s", exc, exc_info=True)
            raise UpstreamTransportError(FAILURE_MESSAGE, details=error_message(exc)) from exc

        reply = extract_text(response).strip()
        if not reply:
            LOGGER.warning("Prompt enhancement returned no text (model=%s)", self.model)
            raise UpstreamTransportError(FAILURE_MESSAGE, details="The model returned an empty prompt.")

        LOGGER.info("Prompt enhancement latency: %.3fs", time.time() - start)
        return reply

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """Start a streaming enhancement and return an iterator of text chunks.

        The first non-empty chunk is pulled here, so configuration, transport
        and empty-reply failures are raised before anything is sent. A failure
        after that is re-raised from the iterator and aborts the transfer.
        """
        request = self._request(prompt)
        try:
            chunks = await self.client.aio.models.generate_content_stream(**request)
            texts = self._iter_text(chunks)
            first = await anext(texts)
        except StopAsyncIteration as exc:
            LOGGER.warning("Prompt enhancement stream returned no text (model=%s)", self.model)
            raise UpstreamTransportError(FAILURE_MESSAGE, details="The model returned an empty prompt.") from exc
        except Exception as exc:
            LOGGER.error("Prompt enhancement stream failed to start: %s", exc, exc_info=True)
            raise UpstreamTransportError(FAILURE_MESSAGE, details=error_message(exc)) from exc
        return self._continue(first, texts)

    async def _iter_text(self, chunks) -> AsyncIterator[str]:
        async for chunk in chunks:
            text = extract_text(chunk)
            if text:
                yield text

    async def _continue(self, first: str, texts: AsyncIterator[str]) -> AsyncIterator[str]:
        yield first
        try:
            async for text in texts:
                yield text
        except Exception as exc:
            LOGGER.error("Prompt enhancement stream interrupted: %s", exc, exc_info=True)
            raise UpstreamTransportError(FAILURE_MESSAGE, details=error_message(exc)) from exc
