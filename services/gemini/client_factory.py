"""Construction of the process-wide google-genai clients."""

from __future__ import annotations

import logging
from typing import Optional

from google import genai

from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


def build_gemini_client(settings: Settings) -> Optional[genai.Client]:
    """Return a Gemini API client, or None when no API key is configured.

    A missing key does not stop the service from starting; generation
    requests fail with a configuration error instead.
    """
    if not settings.gemini_configured:
        LOGGER.warning("GEMINI_API_KEY is not set; generation requests will be rejected.")
        return None
    try:
        return genai.Client(api_key=settings.gemini_api_key)
    except Exception as exc:
        raise RuntimeError("Failed to initialize Gemini client") from exc


def build_vertex_client(settings: Settings) -> Optional[genai.Client]:
    """Return a Vertex AI client for Imagen when a Cloud project is configured."""
    if not settings.imagen_configured:
        LOGGER.info("GOOGLE_CLOUD_PROJECT is not set; Imagen requests will return 501.")
        return None
    try:
        return genai.Client(
            vertexai=True,
            project=settings.google_cloud_project,
            location=settings.google_cloud_location,
        )
    except Exception as exc:
        raise RuntimeError(
            f"Failed to initialize Vertex AI client for project {settings.google_cloud_project}"
        ) from exc
