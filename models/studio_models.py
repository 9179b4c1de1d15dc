"""Domain models for the prompt studio workflow."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from services.errors import InvalidRequestError

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"

GEMINI_FLASH_IMAGE = "gemini-2.5-flash-image-preview"
IMAGEN_4 = "imagen-4.0-generate-001"
SUPPORTED_MODELS = (GEMINI_FLASH_IMAGE, IMAGEN_4)
DEFAULT_IMAGE_MODEL = GEMINI_FLASH_IMAGE


@dataclass(frozen=True)
class ChatMessage:
	"""A single turn of the prompt refinement transcript."""

	id: int
	role: str
	content: str
	created_at: float = field(default_factory=lambda: time.time())


@dataclass(frozen=True)
class HistoryEntry:
	"""A generated image together with the prompt that produced it."""

	src: str
	prompt: str


@dataclass(frozen=True)
class GenerationRequest:
	"""Snapshot of the prompt and model captured when generation is triggered."""

	prompt: str
	model: str

	def __post_init__(self) -> None:
		if not self.prompt or not self.prompt.strip():
			raise InvalidRequestError("Prompt is required.")


@dataclass(frozen=True)
class GenerationResult:
	"""Outcome of a generation attempt: an image data URI or an error message."""

	image_url: Optional[str] = None
	error: Optional[str] = None

	def __post_init__(self) -> None:
		if (self.image_url is None) == (self.error is None):
			raise ValueError("GenerationResult needs exactly one of image_url or error.")

	@property
	def ok(self) -> bool:
		return self.image_url is not None
