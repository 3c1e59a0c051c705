# product_admin/services/product_form.py
import math
from copy import deepcopy
from typing import Any, Callable, Mapping

from product_admin.core.constants import (
    DEFAULT_COLORS,
    MAX_IMAGES,
    SEASONS,
    SIZES,
    TITLE_MAX_EXCLUSIVE,
    TITLE_MIN_EXCLUSIVE,
)
from product_admin.schemas.product import ProductDraft, ProductRecord

FIELDS: tuple[str, ...] = (
    "title",
    "category",
    "season",
    "colors",
    "sizes",
    "price",
    "sale",
    "quantity",
    "sku",
    "description",
    "images",
)


def empty_values() -> dict[str, Any]:
    """Initial values of a brand-new product."""
    return {
        "title": "",
        "category": "",
        "season": "",
        "colors": [],
        "sizes": [],
        "price": "",
        "sale": "",
        "quantity": 0,
        "sku": "",
        "description": "",
        "images": [],
    }


def _as_number(value: Any) -> float | None:
    """
    Coerce form input to a number.

    Number inputs send strings; empty input means "no value".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ----- Field rules -----
# Each rule returns an error message, or None when the value passes.


def validate_title(value: Any) -> str | None:
    length = len(value) if isinstance(value, str) else 0
    if TITLE_MIN_EXCLUSIVE < length < TITLE_MAX_EXCLUSIVE:
        return None
    return "Please enter product title"


def validate_category(value: Any) -> str | None:
    return None if not _is_blank(value) else "Please select product category"


def validate_season(value: Any) -> str | None:
    if _is_blank(value) or value in SEASONS:
        return None
    return "Please select a valid season"


def validate_sizes(value: Any) -> str | None:
    if all(size in SIZES for size in value or []):
        return None
    return "Please select valid sizes"


def validate_price(value: Any) -> str | None:
    price = _as_number(value)
    return None if price is not None and price > 0 else "Please enter product price"


def validate_sale(value: Any) -> str | None:
    if _is_blank(value):
        return None
    sale = _as_number(value)
    if sale is not None and 0 <= sale <= 100:
        return None
    return "Please enter sale as a percentage between 0 and 100"


def validate_quantity(value: Any) -> str | None:
    quantity = _as_number(value)
    if quantity is not None and quantity >= 0 and quantity.is_integer():
        return None
    return "Please select product quantity"


def validate_sku(value: Any) -> str | None:
    return None if not _is_blank(value) else "Please select product sku"


def validate_description(value: Any) -> str | None:
    return None if not _is_blank(value) else "Please enter product description"


def validate_images(value: Any) -> str | None:
    images = value or []
    if len(images) == 0:
        return "Please upload product image"
    if len(images) > MAX_IMAGES:
        return f"You can upload up to {MAX_IMAGES} images"
    return None


FIELD_RULES: dict[str, Callable[[Any], str | None]] = {
    "title": validate_title,
    "category": validate_category,
    "season": validate_season,
    "sizes": validate_sizes,
    "price": validate_price,
    "sale": validate_sale,
    "quantity": validate_quantity,
    "sku": validate_sku,
    "description": validate_description,
    "images": validate_images,
}


class ProductForm:
    """
    Working value of the product editor plus its validation state.

    - Every `set_field` re-runs that field's rule.
    - A field's error is cleared only when its own rule passes.
    - `color_options` only grows: admins may create new colors while
      editing, they are never removed during the page's lifetime.
    """

    def __init__(self, color_options: list[str] | None = None):
        self.values: dict[str, Any] = empty_values()
        self.errors: dict[str, str] = {}
        self._color_options: list[str] = list(color_options or DEFAULT_COLORS)

    # ----- Options -----

    @property
    def color_options(self) -> list[str]:
        return list(self._color_options)

    def create_color_option(self, query: str) -> str:
        """
        Selector "create new option" callback.

        Returns the created item so the selector can select it.
        """
        item = query.strip()
        if not item:
            raise ValueError("color cannot be empty")
        if item not in self._color_options:
            self._color_options.append(item)
        return item

    def _validate_colors(self, value: Any) -> str | None:
        if all(color in self._color_options for color in value or []):
            return None
        return "Please select valid colors"

    def _rule_for(self, name: str) -> Callable[[Any], str | None]:
        if name == "colors":
            return self._validate_colors
        return FIELD_RULES[name]

    # ----- Get / set -----

    def get_field(self, name: str) -> Any:
        self._check_field(name)
        return self.values[name]

    def set_field(self, name: str, value: Any) -> str | None:
        """
        Update one field and re-validate it.

        Returns the field's current error (None if it passes).
        """
        self._check_field(name)
        self.values[name] = value
        return self.validate_field(name)

    def set_values(self, values: Mapping[str, Any]) -> None:
        """
        Bulk initializer. Keys that are not form fields are ignored.
        """
        for name in FIELDS:
            if name in values:
                self.values[name] = deepcopy(values[name])
        self.errors = {}

    def init_from_record(self, record: ProductRecord) -> None:
        """
        Seed the form with an existing product (edit mode).

        The record's populated category is collapsed to its id so it
        matches the value type of the category options.
        """
        data = record.model_dump(include=set(FIELDS))
        for name in ("season", "sale", "price"):
            if data.get(name) is None:
                data[name] = ""
        if data.get("quantity") is None:
            data["quantity"] = 0
        data["category"] = record.category_id
        # Colors created on an earlier visit must be selectable again.
        data["colors"] = [
            self.create_color_option(color)
            for color in data.get("colors") or []
            if color.strip()
        ]
        self.set_values(data)

    def reset(self) -> None:
        self.values = empty_values()
        self.errors = {}

    # ----- Validation -----

    def validate_field(self, name: str) -> str | None:
        self._check_field(name)
        error = self._rule_for(name)(self.values[name])
        if error is None:
            self.errors.pop(name, None)
        else:
            self.errors[name] = error
        return error

    def validate(self) -> dict[str, str]:
        """Run every rule; return (and keep) the full error map."""
        for name in FIELDS:
            self.validate_field(name)
        return dict(self.errors)

    @property
    def is_valid(self) -> bool:
        """Side-effect free check used to enable the submit control."""
        return all(self._rule_for(name)(self.values[name]) is None for name in FIELDS)

    # ----- Payload -----

    def to_draft(self, images: list[str] | None = None) -> ProductDraft:
        """
        Build the backend payload from the current values.

        `images` replaces the form's image entries (uploaded URLs).
        """
        values = self.values
        sale = _as_number(values["sale"])
        return ProductDraft(
            title=values["title"],
            category=values["category"],
            season=values["season"] or None,
            colors=list(values["colors"] or []),
            sizes=list(values["sizes"] or []),
            price=_as_number(values["price"]),
            sale=sale,
            quantity=int(_as_number(values["quantity"]) or 0),
            sku=values["sku"],
            description=values["description"],
            images=list(images if images is not None else values["images"]),
        )

    @staticmethod
    def _check_field(name: str) -> None:
        if name not in FIELDS:
            raise KeyError(f"Unknown product field: {name}")
