"""
Shared pytest fixtures for the prompt studio tests.

Provider responses are built from real `google.genai.types` objects and
served by `AsyncMock`s hanging off a `MagicMock` client, so no test touches
the network.
"""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from google.genai import types
from PIL import Image

from main import attach_services, create_app
from services.gemini.image_generator import ImageGenerationService
from services.gemini.prompt_enhancer import PromptEnhancer
from utils.settings import Settings

# ===== PROVIDER RESPONSE FIXTURES =====


@pytest.fixture
def enhanced_prompt() -> str:
    """Enhanced prompt returned by the fake text model for the windowsill idea."""
    return (
        "A photorealistic medium shot of a tabby cat, curled up and dozing, set on a sunlit "
        "windowsill. The scene is illuminated by soft morning light, creating a calm atmosphere. "
        "Captured with a 50mm lens at f/1.8, emphasizing the fur texture. The image should be in a 4:5 format."
    )


@pytest.fixture
def text_part():
    """Factory for a plain text response part."""

    def _make(text: str) -> types.Part:
        return types.Part(text=text)

    return _make


@pytest.fixture
def image_part():
    """Factory for an inline-data response part."""

    def _make(data: bytes, mime_type: str = "image/png") -> types.Part:
        return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))

    return _make


@pytest.fixture
def gemini_response():
    """Factory for a single-candidate GenerateContentResponse."""

    def _make(*parts: types.Part) -> types.GenerateContentResponse:
        return types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
        )

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    """A small real PNG image."""
    out = io.BytesIO()
    Image.new("RGB", (320, 200), (200, 30, 30)).save(out, format="PNG")
    return out.getvalue()


# ===== MOCK FIXTURES =====


@pytest.fixture
def fake_client():
    """Mock genai client with async model endpoints.

    Like the SDK, awaiting `generate_content_stream` only hands back the
    iterator; tests set `return_value` to an async generator whose own
    iteration fails when the upstream request does.
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_content_stream = AsyncMock()
    client.aio.models.generate_images = AsyncMock()
    return client


@pytest.fixture
def fake_vertex_client():
    client = MagicMock()
    client.aio.models.generate_images = AsyncMock()
    return client


# ===== APPLICATION FIXTURES =====


@pytest.fixture
def unconfigured_api():
    """Test client for an app started without any credentials."""
    app = create_app(Settings())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api(fake_client):
    """Test client whose services talk to `fake_client`."""
    app = create_app(Settings())
    with TestClient(app) as client:
        attach_services(app, PromptEnhancer(fake_client), ImageGenerationService(fake_client))
        yield client


@pytest.fixture
def imagen_api(fake_client, fake_vertex_client):
    """Test client with the Imagen path enabled through a Vertex AI client."""
    app = create_app(Settings())
    with TestClient(app) as client:
        attach_services(
            app,
            PromptEnhancer(fake_client),
            ImageGenerationService(fake_client, fake_vertex_client),
        )
        yield client
