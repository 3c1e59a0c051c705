# product_admin/schemas/category.py
from pydantic import BaseModel, ConfigDict, Field


class CategoryRecord(BaseModel):
    """
    Category as listed by `GET /category`.

    Read-only reference data; unknown backend fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    blocked: bool = False


class SelectOption(BaseModel):
    """{label, value} pair consumed by the category selector."""

    label: str
    value: str
