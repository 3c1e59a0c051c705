# product_admin/schemas/product.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from sqlmodel import SQLModel, Field

from product_admin.core.constants import (
    MAX_IMAGES,
    SEASONS,
    SIZES,
    TITLE_MAX_EXCLUSIVE,
    TITLE_MIN_EXCLUSIVE,
)


class ImageFile(SQLModel):
    """
    A local image picked in the dropzone, not uploaded yet.
    """

    model_config = ConfigDict(extra="forbid")

    filename: str
    content_type: str
    content: bytes


# Either an already-stored public URL (edit mode) or a fresh local file.
ImageEntry = str | ImageFile


class ProductDraft(SQLModel):
    """
    Payload sent to the catalog backend on create/update.

    `images` holds public URLs: the editor replaces local files with
    their uploaded URLs before building this model.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(
        min_length=TITLE_MIN_EXCLUSIVE + 1,
        max_length=TITLE_MAX_EXCLUSIVE - 1,
    )
    category: str
    season: str | None = None
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    price: float = Field(gt=0)
    sale: float | None = Field(default=None, ge=0, le=100)
    quantity: int = Field(default=0, ge=0)
    sku: str
    description: str
    images: list[str]

    @field_validator("category", "sku", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("field cannot be empty")
        return v

    @field_validator("season")
    @classmethod
    def known_season(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if v not in SEASONS:
            raise ValueError(f"season must be one of {SEASONS}")
        return v

    @field_validator("sizes")
    @classmethod
    def known_sizes(cls, v: list[str]) -> list[str]:
        unknown = [size for size in v if size not in SIZES]
        if unknown:
            raise ValueError(f"unknown sizes: {unknown}")
        return v

    @field_validator("images")
    @classmethod
    def image_count(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one image is required")
        if len(v) > MAX_IMAGES:
            raise ValueError(f"at most {MAX_IMAGES} images are allowed")
        return v


class CategoryRef(BaseModel):
    """Category as embedded (populated) in a product record."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = PydanticField(alias="_id")
    title: str | None = None


class ProductRecord(BaseModel):
    """
    Existing product as returned by the catalog backend.

    The backend populates `category`, so it usually arrives as an
    object; older records may still carry the bare id.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = PydanticField(alias="_id")
    title: str = ""
    category: CategoryRef | str | None = None
    season: str | None = None
    colors: list[str] = PydanticField(default_factory=list)
    sizes: list[str] = PydanticField(default_factory=list)
    price: Any = None
    sale: Any = None
    quantity: Any = 0
    sku: str = ""
    description: str = ""
    images: list[str] = PydanticField(default_factory=list)

    @property
    def category_id(self) -> str:
        if isinstance(self.category, CategoryRef):
            return self.category.id
        return self.category or ""
