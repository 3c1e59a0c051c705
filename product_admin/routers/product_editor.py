# product_admin/routers/product_editor.py
from typing import Any

from fastapi import (
    APIRouter,
    Body,
    Depends,
    File,
    Form,
    HTTPException,
    UploadFile,
    status,
)

from product_admin.core.auth import AdminSession, get_admin_session
from product_admin.core.backend_client import BackendClient, BackendRequestError
from product_admin.core.config import get_settings
from product_admin.schemas.category import SelectOption
from product_admin.schemas.editor import (
    EditorPage,
    FieldErrors,
    NavigationState,
    SubmissionResult,
    SubmissionStatus,
)
from product_admin.schemas.product import ImageEntry, ImageFile, ProductRecord
from product_admin.services.category_service import CategoryLoader
from product_admin.services.product_editor import ProductEditor
from product_admin.services.product_form import FIELDS, ProductForm

router = APIRouter(prefix="/admin/products/editor", tags=["Product Editor"])


# -------- Dependencies --------


def get_backend_client(
    session: AdminSession = Depends(get_admin_session),
) -> BackendClient:
    """
    Catalog client acting on behalf of the signed-in admin.
    """
    settings = get_settings()
    return BackendClient(
        settings.BACKEND_URL,
        token=session.access_token,
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )


def build_editor(
    client: BackendClient,
    session: AdminSession,
    navigation: NavigationState | None = None,
) -> ProductEditor:
    settings = get_settings()
    return ProductEditor(
        client,
        session,
        navigation=navigation,
        images_folder=settings.PRODUCT_IMAGES_FOLDER,
        product_list_route=settings.PRODUCT_LIST_ROUTE,
    )


# -------- Endpoints --------


@router.post("", response_model=EditorPage)
def open_editor(
    navigation: NavigationState | None = Body(default=None),
    session: AdminSession = Depends(get_admin_session),
    client: BackendClient = Depends(get_backend_client),
):
    """
    Open the editor page.

    - Without navigation state (or `isUpdate=false`): "Add Product".
    - With `isUpdate=true` and `data`: "Edit Product", seeded from `data`.
    - Loads the selectable categories; a failed load yields an empty list.
    """
    editor = build_editor(client, session, navigation)
    editor.mount()
    return editor.page()


@router.get("/categories", response_model=list[SelectOption])
def list_categories(client: BackendClient = Depends(get_backend_client)):
    """
    Selectable (non-blocked) categories as {label, value} options.
    """
    return CategoryLoader(client).load()


@router.post(
    "/validate",
    response_model=FieldErrors,
    dependencies=[Depends(get_admin_session)],
)
def validate_fields(values: dict[str, Any] = Body(...)):
    """
    Live validation of the fields the user just changed.

    Only the fields present in the body are checked; unknown keys
    are ignored.
    """
    form = ProductForm()
    for color in values.get("colors") or []:
        if isinstance(color, str) and color.strip():
            form.create_color_option(color)

    for name in FIELDS:
        if name in values:
            form.set_field(name, values[name])

    return FieldErrors(valid=not form.errors, errors=form.errors)


@router.post(
    "/submit",
    response_model=SubmissionResult,
    summary="Create or update a product from the editor form",
)
def submit_product(
    title: str = Form(""),
    category: str = Form(""),
    season: str = Form(""),
    colors: list[str] = Form(default=[]),
    sizes: list[str] = Form(default=[]),
    price: str = Form(""),
    sale: str = Form(""),
    quantity: str = Form("0"),
    sku: str = Form(""),
    description: str = Form(""),
    image_urls: list[str] = Form(default=[]),
    images: list[UploadFile] | None = File(default=None),
    product_id: str | None = Form(default=None),
    original_category: str | None = Form(default=None),
    session: AdminSession = Depends(get_admin_session),
    client: BackendClient = Depends(get_backend_client),
):
    """
    Submit the editor form.

    - `image_urls`: images already in storage (kept as-is).
    - `images`: new files, uploaded before the product is saved.
    - `product_id`: switches to update (PUT) instead of create (POST).

    Errors:
      - 422 with the field error map if the form is invalid.
      - 400/413 if an image is not an accepted type or too large.
      - 502 if storage or the catalog backend fails.
    """
    navigation = None
    if product_id:
        navigation = NavigationState(
            is_update=True,
            data=ProductRecord(id=product_id, category=original_category),
        )

    editor = build_editor(client, session, navigation)
    editor.categories.load()

    for color in colors:
        if color.strip():
            editor.form.create_color_option(color)

    entries: list[ImageEntry] = list(image_urls)
    for f in images or []:
        if not f.content_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing content-type for one of the uploaded files",
            )
        entries.append(
            ImageFile(
                filename=f.filename or "image",
                content_type=f.content_type,
                content=f.file.read(),
            )
        )

    editor.form.set_values(
        {
            "title": title,
            "category": category,
            "season": season,
            "colors": colors,
            "sizes": sizes,
            "price": price,
            "sale": sale,
            "quantity": quantity,
            "sku": sku,
            "description": description,
            "images": entries,
        }
    )

    result = editor.submit()
    if result.errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=result.errors,
        )

    if result.status == SubmissionStatus.FAILED:
        error = editor.error
        if isinstance(error, HTTPException):
            raise error
        if isinstance(error, BackendRequestError) and error.message:
            detail = error.message
        else:
            detail = "Could not save product"
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)

    return result
