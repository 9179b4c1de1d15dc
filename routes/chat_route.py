"""FastAPI routes for prompt enhancement."""

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from controllers.chat_controller import enhance_prompt, stream_enhanced_prompt
from services.errors import StudioError
from utils.http_errors import error_response, unexpected_error_response

router = APIRouter(prefix="/api/chat", tags=["chat"])


class ChatPayload(BaseModel):
    prompt: str = ""


@router.post("", summary="Enhance a raw idea into a photographic prompt")
async def post_chat(request: Request, payload: ChatPayload):
    """Return `{reply}` with the enhanced prompt."""
    try:
        return await enhance_prompt(request, payload.prompt)
    except StudioError as exc:
        return error_response(exc)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return unexpected_error_response(exc, "Failed to enhance prompt.")


@router.post("/stream", summary="Stream the enhanced prompt as plain text")
async def post_chat_stream(request: Request, payload: ChatPayload):
    """Stream text chunks; failures before the first chunk are returned as JSON."""
    try:
        chunks = await stream_enhanced_prompt(request, payload.prompt)
    except StudioError as exc:
        return error_response(exc)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return unexpected_error_response(exc, "Failed to enhance prompt.")
    return StreamingResponse(chunks, media_type="text/plain; charset=utf-8")
