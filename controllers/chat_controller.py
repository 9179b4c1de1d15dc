from typing import AsyncIterator, Dict

from fastapi import Request

from services.gemini.prompt_enhancer import PromptEnhancer


def _enhancer(request: Request) -> PromptEnhancer:
    return request.app.state.prompt_enhancer


async def enhance_prompt(request: Request, prompt: str) -> Dict[str, str]:
    """Enhance a raw user idea into a photographic prompt.

    Args:
        request: FastAPI Request (used to access the shared enhancer).
        prompt: Raw text typed by the user.

    Returns:
        A dict with the enhanced prompt under the key `reply`.

    Raises:
        StudioError subclasses for configuration, validation, or upstream failures.
    """
    reply = await _enhancer(request).enhance(prompt)
    return {"reply": reply}


async def stream_enhanced_prompt(request: Request, prompt: str) -> AsyncIterator[str]:
    """Start a streaming enhancement; errors before the first chunk are raised here."""
    return await _enhancer(request).stream(prompt)
