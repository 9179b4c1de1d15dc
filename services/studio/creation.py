"""Image creation pipeline: generation status, current image, and history."""

from __future__ import annotations

import enum
import logging
from typing import List, Optional

from models.studio_models import (
	DEFAULT_IMAGE_MODEL,
	SUPPORTED_MODELS,
	GenerationRequest,
	GenerationResult,
	HistoryEntry,
)
from services.errors import SessionBusyError, StudioError, UnsupportedModelError, UpstreamTransportError, error_message
from services.gemini.image_generator import ImageGenerationService

LOGGER = logging.getLogger(__name__)
NO_PROMPT_MESSAGE = "Please generate a prompt first."


class CreationState(str, enum.Enum):
	IDLE = "idle"
	GENERATING = "generating"
	SUCCEEDED = "succeeded"
	FAILED = "failed"


class Creation:
	"""Track one session's image generations and their newest-first history."""

	def __init__(self, generator: ImageGenerationService, model: str = DEFAULT_IMAGE_MODEL) -> None:
		self.generator = generator
		self.selected_model = model
		self.state = CreationState.IDLE
		self.image_url: Optional[str] = None
		self.error: Optional[str] = None
		self.last_failure: Optional[StudioError] = None
		self.history: List[HistoryEntry] = []

	@property
	def generating(self) -> bool:
		return self.state is CreationState.GENERATING

	def select_model(self, model: str) -> str:
		if model not in SUPPORTED_MODELS:
			raise UnsupportedModelError(model)
		self.selected_model = model
		return model

	def can_generate(self, prompt: str) -> bool:
		return bool(prompt and prompt.strip()) and not self.generating

	async def generate(self, prompt: str) -> GenerationResult:
		"""Generate an image for `prompt` with the selected model.

		The prompt is captured into a request before the first await, so later
		changes to the conversation do not affect this generation.

		Raises:
			SessionBusyError: If a generation is already in flight.
		"""
		if self.generating:
			raise SessionBusyError("An image generation is already in progress.")
		if not prompt or not prompt.strip():
			self.error = NO_PROMPT_MESSAGE
			return GenerationResult(error=NO_PROMPT_MESSAGE)

		request = GenerationRequest(prompt=prompt, model=self.selected_model)
		self.state = CreationState.GENERATING
		self.error = None
		self.image_url = None
		self.last_failure = None
		try:
			image_url = await self.generator.generate_image(request.prompt, request.model)
		except StudioError as exc:
			return self._fail(exc)
		except Exception as exc:  # pylint: disable=broad-exception-caught
			LOGGER.exception("Unexpected image generation failure")
			return self._fail(UpstreamTransportError("Failed to generate image.", details=error_message(exc)))

		self.state = CreationState.SUCCEEDED
		self.image_url = image_url
		self.history.insert(0, HistoryEntry(src=image_url, prompt=request.prompt))
		return GenerationResult(image_url=image_url)

	def _fail(self, exc: StudioError) -> GenerationResult:
		self.state = CreationState.FAILED
		self.error = exc.message
		self.last_failure = exc
		return GenerationResult(error=exc.message)

	def reset(self) -> None:
		"""Clear the current image and error; history and model selection are kept."""
		if self.generating:
			raise SessionBusyError("Cannot reset while an image generation is in progress.")
		self.state = CreationState.IDLE
		self.image_url = None
		self.error = None
		self.last_failure = None
