# product_admin/schemas/editor.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from product_admin.schemas.category import SelectOption
from product_admin.schemas.product import ProductRecord


class SubmissionStatus(str, Enum):
    """
    Lifecycle of one submit:

        idle -> uploading -> submitting -> success | failed
    """

    IDLE = "idle"
    UPLOADING = "uploading"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class NavigationState(BaseModel):
    """
    Inbound page parameters.

    `isUpdate` + `data` switch the editor into edit mode and seed it
    with an existing record.
    """

    model_config = ConfigDict(populate_by_name=True)

    is_update: bool = Field(default=False, alias="isUpdate")
    data: ProductRecord | None = None


class Notification(BaseModel):
    title: str
    message: str | None = None
    color: str = "green"


class SubmissionResult(BaseModel):
    """Observable outcome of a submit."""

    status: SubmissionStatus
    notification: Notification | None = None
    redirect_to: str | None = None
    errors: dict[str, str] = Field(default_factory=dict)


class FieldErrors(BaseModel):
    """Validation result for the live (per-keystroke) check."""

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


class EditorPage(BaseModel):
    """
    Everything the front-end needs to render the editor.
    """

    heading: str
    submit_label: str
    is_update: bool
    product_id: str | None = None
    categories: list[SelectOption] = Field(default_factory=list)
    seasons: list[str]
    sizes: list[str]
    colors: list[str]
    max_images: int
    cancel_to: str
    initial_values: dict[str, Any]
