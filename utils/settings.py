"""Environment-backed settings for the prompt studio service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_LOCATION = "us-central1"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Validated configuration read once at startup.

    Attributes:
        gemini_api_key: Key for the Gemini API; every generation requires it.
        google_cloud_project: Cloud project that enables the Imagen (Vertex AI) path.
        google_cloud_location: Vertex AI region, defaults to `us-central1`.
        text_model: Gemini model used for prompt enhancement.
    """

    gemini_api_key: Optional[str] = None
    google_cloud_project: Optional[str] = None
    google_cloud_location: str = DEFAULT_LOCATION
    text_model: str = DEFAULT_TEXT_MODEL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=_env("GEMINI_API_KEY"),
            google_cloud_project=_env("GOOGLE_CLOUD_PROJECT"),
            google_cloud_location=_env("GOOGLE_CLOUD_LOCATION") or DEFAULT_LOCATION,
            text_model=_env("GEMINI_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
        )

    @property
    def gemini_configured(self) -> bool:
        return self.gemini_api_key is not None

    @property
    def imagen_configured(self) -> bool:
        return self.google_cloud_project is not None
