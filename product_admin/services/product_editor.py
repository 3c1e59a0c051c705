# product_admin/services/product_editor.py
import logging
import threading
from typing import Callable

from product_admin.core.auth import AdminSession
from product_admin.core.backend_client import BackendClient
from product_admin.core.constants import MAX_IMAGES, SEASONS, SIZES
from product_admin.core.storage_utils import upload_multiple_images
from product_admin.schemas.category import SelectOption
from product_admin.schemas.editor import (
    EditorPage,
    NavigationState,
    Notification,
    SubmissionResult,
    SubmissionStatus,
)
from product_admin.schemas.product import ImageEntry
from product_admin.services.category_service import CategoryLoader
from product_admin.services.product_form import ProductForm

logger = logging.getLogger(__name__)

Uploader = Callable[[list[ImageEntry], str], list[str]]


class SubmissionInProgressError(RuntimeError):
    """A submit was started while another one is still running."""


class ProductEditor:
    """
    One "Add / Edit Product" page.

    Responsibilities:
      - own the form state and the category options
      - run the submit sequence: upload images, then create or update
      - expose what the page shows afterwards (notification, redirect)

    There is no rollback: if create/update fails after the upload,
    the uploaded files stay in storage.
    """

    def __init__(
        self,
        client: BackendClient,
        session: AdminSession,
        navigation: NavigationState | None = None,
        uploader: Uploader = upload_multiple_images,
        images_folder: str = "Products",
        product_list_route: str = "/products",
        form: ProductForm | None = None,
    ):
        self.client = client
        self.session = session
        self.navigation = navigation or NavigationState()
        self.uploader = uploader
        self.images_folder = images_folder
        self.product_list_route = product_list_route

        self.form = form or ProductForm()
        self.categories = CategoryLoader(client)

        self.status = SubmissionStatus.IDLE
        self.error: Exception | None = None
        self.notifications: list[Notification] = []
        self.location: str | None = None

        self._in_flight = threading.Lock()

    # ----- Mode -----

    @property
    def is_update(self) -> bool:
        return bool(self.navigation.is_update and self.navigation.data)

    @property
    def product_id(self) -> str | None:
        if not self.is_update:
            return None
        return self.navigation.data.id

    @property
    def heading(self) -> str:
        return "Edit Product" if self.is_update else "Add Product"

    @property
    def is_loading(self) -> bool:
        return self.status in (SubmissionStatus.UPLOADING, SubmissionStatus.SUBMITTING)

    # ----- Lifecycle -----

    def mount(self) -> list[SelectOption]:
        """
        Page open: seed the form in edit mode and load categories.
        """
        if self.is_update:
            self.form.init_from_record(self.navigation.data)
        return self.categories.load()

    def cancel(self) -> str:
        self.location = self.product_list_route
        return self.location

    def page(self) -> EditorPage:
        return EditorPage(
            heading=self.heading,
            submit_label=self.heading,
            is_update=self.is_update,
            product_id=self.product_id,
            categories=self.categories.options,
            seasons=SEASONS,
            sizes=SIZES,
            colors=self.form.color_options,
            max_images=MAX_IMAGES,
            cancel_to=self.product_list_route,
            initial_values=self.form.values,
        )

    # ----- Submit -----

    def submit(self) -> SubmissionResult:
        """
        Validate, upload images, then create or update the product.

        - Invalid form: nothing is sent, the error map is returned.
        - Success: notification + redirect to the product list, form reset.
        - Failure: status FAILED, the exception is kept in `self.error`.

        Raises:
            SubmissionInProgressError: if a submit is already running.
        """
        errors = self.form.validate()
        category_error = self._category_error()
        if category_error:
            errors["category"] = category_error
            self.form.errors["category"] = category_error
        if errors:
            return SubmissionResult(status=self.status, errors=errors)

        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgressError("A submission is already in progress")

        try:
            return self._run_submission()
        finally:
            self._in_flight.release()

    def _category_error(self) -> str | None:
        """
        The chosen category must be one of the loaded options.

        Skipped when categories could not be loaded, and for the
        record's own category in edit mode (it may be blocked since).
        """
        category = self.form.values["category"]
        options = self.categories.options
        if not category or not options:
            return None
        if self.is_update and category == self.navigation.data.category_id:
            return None
        if any(option.value == category for option in options):
            return None
        return "Please select product category"

    def _run_submission(self) -> SubmissionResult:
        self.error = None
        try:
            self.status = SubmissionStatus.UPLOADING
            urls = self.uploader(list(self.form.values["images"]), self.images_folder)
            # Already-uploaded images are not sent again on a later retry.
            self.form.values["images"] = urls
            payload = self.form.to_draft().model_dump()

            self.status = SubmissionStatus.SUBMITTING
            if self.is_update:
                response = self.client.update_product(self.product_id, payload)
            else:
                response = self.client.create_product(payload)
        except Exception as e:
            self.status = SubmissionStatus.FAILED
            self.error = e
            logger.exception(
                "Saving product failed (user=%s, product=%s)",
                self.session.user_id,
                self.product_id,
            )
            return SubmissionResult(status=self.status)

        self.status = SubmissionStatus.SUCCESS
        notification = Notification(
            title="Success",
            message=response.get("message") if isinstance(response, dict) else None,
            color="green",
        )
        self.notifications.append(notification)
        self.location = self.product_list_route
        self.form.reset()

        logger.info(
            "Product %s by %s",
            "updated" if self.is_update else "created",
            self.session.user_id,
        )
        return SubmissionResult(
            status=self.status,
            notification=notification,
            redirect_to=self.location,
        )
