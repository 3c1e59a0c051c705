# product_admin/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from product_admin.core.config import get_settings

# Routers
from product_admin.routers.product_editor import router as product_editor_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Log which catalog backend the editor talks to.

    Shutdown:
      - No special cleanup needed; HTTP sessions are per request.
    """
    logger.info(f"🔄 Startup: catalog backend at {settings.BACKEND_URL}")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.warning("⚠️ Startup: SUPABASE_SERVICE_ROLE_KEY missing, image uploads will fail.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(product_editor_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "product-editor-admin"}
