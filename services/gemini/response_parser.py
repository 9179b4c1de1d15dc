"""Helpers to extract text and image payloads from google-genai responses."""

from __future__ import annotations

from typing import Any, List, Optional


def response_parts(response: Any) -> List[Any]:
	"""Return the content parts of the first candidate, or an empty list."""
	candidates = getattr(response, "candidates", None) or []
	if not candidates:
		return []
	content = getattr(candidates[0], "content", None)
	return list(getattr(content, "parts", None) or [])


def first_inline_data(response: Any) -> Optional[Any]:
	"""Return the first part's inline blob carrying data; later parts are ignored."""
	for part in response_parts(response):
		inline = getattr(part, "inline_data", None)
		if inline is not None and getattr(inline, "data", None):
			return inline
	return None


def extract_text(response: Any) -> str:
	"""Join the text parts of the first candidate."""
	texts = [part.text for part in response_parts(response) if getattr(part, "text", None)]
	return "".join(texts)


def first_generated_image(response: Any) -> Optional[Any]:
	"""Return the first Imagen result that carries image bytes."""
	for generated in getattr(response, "generated_images", None) or []:
		image = getattr(generated, "image", None)
		if image is not None and getattr(image, "image_bytes", None):
			return image
	return None
