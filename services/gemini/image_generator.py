"""Image generation through Gemini and, when configured, Imagen on Vertex AI."""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from models.studio_models import GEMINI_FLASH_IMAGE, IMAGEN_4, SUPPORTED_MODELS
from services.errors import (
    ConfigurationError,
    InvalidRequestError,
    ModelNotImplementedError,
    NoImageDataError,
    StudioError,
    UnsupportedModelError,
    UpstreamTransportError,
    error_message,
)
from services.gemini.response_parser import first_generated_image, first_inline_data
from utils.data_uri import encode_data_uri

LOGGER = logging.getLogger(__name__)
FAILURE_MESSAGE = "Failed to generate image."
NO_IMAGE_DETAILS = "No image data found in the response."


class ImageGenerationService:
    """Generate a single image for a finalized prompt and return it as a data URI.

    The service is stateless and never retries. Every provider exception is
    converted to a `StudioError` subclass before it leaves `generate_image`.

    Args:
        gemini_client: Client for the Gemini API; None when no key is configured.
        vertex_client: Vertex AI client serving Imagen; None keeps Imagen unimplemented.
    """

    def __init__(
        self,
        gemini_client: Optional[genai.Client],
        vertex_client: Optional[genai.Client] = None,
    ) -> None:
        self.gemini_client = gemini_client
        self.vertex_client = vertex_client

    @property
    def imagen_enabled(self) -> bool:
        return self.vertex_client is not None

    async def generate_image(self, prompt: str, model: str) -> str:
        """Return a `data:<mime>;base64,<data>` URI for the generated image.

        Raises:
            ConfigurationError: If the Gemini API key is missing. No network call is made.
            UnsupportedModelError: If `model` is not a known identifier.
            ModelNotImplementedError: If Imagen is requested without a Vertex AI project.
            NoImageDataError: If the response carries no inline image data.
            UpstreamTransportError: If the provider call fails.
        """
        if self.gemini_client is None:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        if model not in SUPPORTED_MODELS:
            raise UnsupportedModelError(model)
        if not prompt or not prompt.strip():
            raise InvalidRequestError("Prompt is required.")
        if model == IMAGEN_4 and not self.imagen_enabled:
            raise ModelNotImplementedError("The Imagen model is not yet implemented.")

        start = time.time()
        try:
            if model == GEMINI_FLASH_IMAGE:
                image_url = await self._generate_with_gemini(prompt, model)
            else:
                image_url = await self._generate_with_imagen(prompt, model)
        except NoImageDataError:
            LOGGER.warning("Response-shape mismatch from %s: no inline image data", model)
            raise
        except StudioError:
            raise
        except Exception as exc:
            LOGGER.error("Error generating image with %s: %s", model, exc, exc_info=True)
            raise UpstreamTransportError(FAILURE_MESSAGE, details=error_message(exc)) from exc

        LOGGER.info("Image generation latency (%s): %.3fs", model, time.time() - start)
        return image_url

    async def _generate_with_gemini(self, prompt: str, model: str) -> str:
        response = await self.gemini_client.aio.models.generate_content(model=model, contents=prompt)
        inline = first_inline_data(response)
        if inline is None:
            raise NoImageDataError(FAILURE_MESSAGE, details=NO_IMAGE_DETAILS)
        return encode_data_uri(inline.data, getattr(inline, "mime_type", None))

    async def _generate_with_imagen(self, prompt: str, model: str) -> str:
        response = await self.vertex_client.aio.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(number_of_images=1),
        )
        image = first_generated_image(response)
        if image is None:
            raise NoImageDataError(FAILURE_MESSAGE, details=NO_IMAGE_DETAILS)
        return encode_data_uri(image.image_bytes, getattr(image, "mime_type", None))
