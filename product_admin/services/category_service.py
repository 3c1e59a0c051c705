# product_admin/services/category_service.py
import logging

from pydantic import ValidationError

from product_admin.core.backend_client import BackendClient, BackendRequestError
from product_admin.schemas.category import CategoryRecord, SelectOption

logger = logging.getLogger(__name__)


class CategoryLoader:
    """
    Loads the selectable categories once per editor page.

    - One `GET /category` on mount, no retry, no pagination.
    - Blocked categories are excluded.
    - A failed fetch leaves `options` empty; it is only logged.
    """

    def __init__(self, client: BackendClient):
        self.client = client
        self.options: list[SelectOption] = []
        self.loaded = False

    @staticmethod
    def to_options(records: list[CategoryRecord]) -> list[SelectOption]:
        return [
            SelectOption(label=record.title, value=record.id)
            for record in records
            if not record.blocked
        ]

    def load(self) -> list[SelectOption]:
        if self.loaded:
            return self.options

        self.loaded = True
        try:
            raw = self.client.list_categories()
            records = [CategoryRecord.model_validate(item) for item in raw]
        except (BackendRequestError, ValidationError) as e:
            logger.warning("Could not load categories: %s", e)
            return self.options

        self.options = self.to_options(records)
        return self.options
