"""FastAPI routes for image generation."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from controllers.generate_image_controller import generate_image
from models.studio_models import DEFAULT_IMAGE_MODEL
from services.errors import StudioError
from utils.http_errors import error_response, unexpected_error_response

router = APIRouter(prefix="/api/generate-image", tags=["generate-image"])


class GenerateImagePayload(BaseModel):
    prompt: str = ""
    model: str = DEFAULT_IMAGE_MODEL


@router.post("", summary="Generate an image for a finalized prompt")
async def post_generate_image(request: Request, payload: GenerateImagePayload):
    """Return `{imageUrl}` as a data URI, or `{error, details?}` with 400/500/501."""
    try:
        return await generate_image(request, payload.prompt, payload.model)
    except StudioError as exc:
        return error_response(exc)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return unexpected_error_response(exc, "Failed to generate image.")
