# product_admin/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - BACKEND_URL (catalog REST backend base address)
      - SUPABASE_URL
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (needed for uploading product images)
    """

    PROJECT_NAME: str = "Product Editor Admin"
    API_V1_STR: str = "/api/v1"

    # Catalog backend
    BACKEND_URL: str
    BACKEND_TIMEOUT_SECONDS: float = 15.0

    # Supabase storage
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"
    PRODUCT_IMAGES_FOLDER: str = "Products"

    # JWT verification of admin sessions
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Where the admin SPA goes after a successful save or a cancel
    PRODUCT_LIST_ROUTE: str = "/products"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
