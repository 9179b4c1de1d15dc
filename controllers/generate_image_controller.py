from typing import Dict

from fastapi import Request

from services.gemini.image_generator import ImageGenerationService


async def generate_image(request: Request, prompt: str, model: str) -> Dict[str, str]:
    """Generate an image for a finalized prompt with the requested model.

    Args:
        request: FastAPI Request (used to access the shared generation service).
        prompt: Final prompt text.
        model: Model identifier chosen by the client.

    Returns:
        A dict containing the image data URI under `imageUrl`.
    """
    generator: ImageGenerationService = request.app.state.image_generator
    image_url = await generator.generate_image(prompt, model)
    return {"imageUrl": image_url}
