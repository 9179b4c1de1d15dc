import inspect
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from routes.chat_route import router as chat_router
from routes.generate_image_route import router as generate_image_router
from routes.session_route import router as session_router
from services.gemini.client_factory import build_gemini_client, build_vertex_client
from services.gemini.image_generator import ImageGenerationService
from services.gemini.prompt_enhancer import PromptEnhancer
from services.studio.session_store import StudioSessionStore
from utils.settings import Settings

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def attach_services(app: FastAPI, enhancer: PromptEnhancer, generator: ImageGenerationService) -> None:
    """Attach the shared services and a fresh session store to `app.state`."""
    app.state.prompt_enhancer = enhancer
    app.state.image_generator = generator
    app.state.session_store = StudioSessionStore(enhancer, generator)


async def _close_client(client) -> None:
    """Close a genai client if it exposes a close/aclose method."""
    if client is None:
        return
    aio = getattr(client, "aio", None)
    aclose = getattr(aio, "aclose", None) or getattr(client, "close", None)
    if aclose is None:
        return
    try:
        if inspect.iscoroutinefunction(aclose):
            await aclose()
        else:
            result = aclose()
            if inspect.isawaitable(result):
                await result
    except Exception:
        # Ignore shutdown errors to avoid masking more important issues.
        LOGGER.debug("Ignoring error while closing client", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the settings (from the environment unless injected via create_app)
      - the Gemini and optional Vertex AI clients
      - the prompt enhancer, image generator and studio session store
    and attach them to `app.state`.
    """
    settings: Settings = getattr(app.state, "settings", None) or Settings.from_env()
    app.state.settings = settings

    gemini_client = build_gemini_client(settings)
    vertex_client = build_vertex_client(settings)
    app.state.gemini_client = gemini_client
    app.state.vertex_client = vertex_client

    attach_services(
        app,
        PromptEnhancer(gemini_client, model=settings.text_model),
        ImageGenerationService(gemini_client, vertex_client),
    )

    try:
        yield
    finally:
        await _close_client(getattr(app.state, "gemini_client", None))
        await _close_client(getattr(app.state, "vertex_client", None))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Report which provider paths are configured.
        """
        generator = getattr(request.app.state, "image_generator", None)
        return {
            "ok": True,
            "gemini_configured": generator is not None and generator.gemini_client is not None,
            "imagen_configured": generator is not None and generator.imagen_enabled,
        }

    # Register application routers
    app.include_router(chat_router)
    app.include_router(generate_image_router)
    app.include_router(session_router)

    return app


app = create_app()
