import pytest

from product_admin.core.constants import DEFAULT_COLORS
from product_admin.schemas.product import ProductRecord
from product_admin.services.product_form import ProductForm, empty_values

from conftest import png, valid_values


@pytest.mark.parametrize(
    "title, ok",
    [("", False), ("a", False), ("ab", True), ("x" * 29, True), ("x" * 30, False)],
)
def test_title_length_is_exclusive_between_1_and_30(title, ok):
    form = ProductForm()
    assert (form.set_field("title", title) is None) is ok


@pytest.mark.parametrize(
    "price, ok",
    [("", False), (0, False), (-1, False), ("abc", False), (0.01, True), ("25", True)],
)
def test_price_must_be_positive(price, ok):
    form = ProductForm()
    assert (form.set_field("price", price) is None) is ok


@pytest.mark.parametrize(
    "quantity, ok",
    [(0, True), ("3", True), (-1, False), ("", False), (1.5, False)],
)
def test_quantity_must_be_non_negative_integer(quantity, ok):
    form = ProductForm()
    assert (form.set_field("quantity", quantity) is None) is ok


def test_images_between_one_and_ten():
    form = ProductForm()
    assert form.set_field("images", []) == "Please upload product image"
    assert form.set_field("images", [png() for _ in range(10)]) is None
    assert form.set_field("images", [png() for _ in range(11)]) == (
        "You can upload up to 10 images"
    )


def test_optional_fields_only_checked_when_set():
    form = ProductForm()
    assert form.set_field("season", "") is None
    assert form.set_field("season", "Autumn") is not None
    assert form.set_field("sizes", ["3-6M", "2-3Y"]) is None
    assert form.set_field("sizes", ["XXL"]) is not None
    assert form.set_field("sale", "") is None
    assert form.set_field("sale", "150") is not None


def test_error_cleared_only_by_its_own_rule():
    form = ProductForm()
    form.set_field("title", "a")
    form.set_field("sku", "")
    assert set(form.errors) == {"title", "sku"}

    form.set_field("sku", "SKU-1")
    assert set(form.errors) == {"title"}

    form.set_field("title", "Valid title")
    assert form.errors == {}


def test_empty_form_fails_every_required_rule():
    form = ProductForm()
    errors = form.validate()
    assert set(errors) == {"title", "category", "price", "sku", "description", "images"}
    assert not form.is_valid


def test_valid_values_pass():
    form = ProductForm()
    form.set_values(valid_values())
    assert form.is_valid
    assert form.validate() == {}


def test_unknown_field_is_rejected():
    form = ProductForm()
    with pytest.raises(KeyError):
        form.set_field("weight", 3)


def test_set_values_ignores_non_form_keys():
    form = ProductForm()
    form.set_values({"title": "Hat", "_id": "p1", "createdAt": "yesterday"})
    assert form.get_field("title") == "Hat"
    assert "_id" not in form.values


def test_init_from_record_collapses_category_to_id():
    record = ProductRecord.model_validate(
        {
            "_id": "p-9",
            "title": "Winter Coat",
            "category": {"_id": "cat-1", "title": "Coats"},
            "season": "Winters Collection",
            "colors": ["Navy"],
            "sizes": ["2-3Y"],
            "price": 80,
            "sale": 5,
            "quantity": 2,
            "sku": "WC-1",
            "description": "Warm",
            "images": ["https://cdn.test/p/1.png"],
            "createdAt": "2024-01-01",
        }
    )
    form = ProductForm()
    form.init_from_record(record)

    expected = record.model_dump(exclude={"id"})
    expected["category"] = "cat-1"
    assert form.values == expected
    assert "Navy" in form.color_options
    assert form.is_valid


def test_init_from_record_with_bare_category_id():
    record = ProductRecord.model_validate({"_id": "p-1", "category": "cat-7"})
    form = ProductForm()
    form.init_from_record(record)
    assert form.get_field("category") == "cat-7"
    assert form.get_field("season") == ""


def test_created_colors_are_appended_and_selectable():
    form = ProductForm()
    assert form.set_field("colors", ["Teal"]) == "Please select valid colors"

    assert form.create_color_option("  Teal ") == "Teal"
    assert form.color_options == DEFAULT_COLORS + ["Teal"]
    assert form.set_field("colors", ["Teal"]) is None

    form.create_color_option("Teal")
    assert form.color_options.count("Teal") == 1


def test_blank_color_cannot_be_created():
    with pytest.raises(ValueError):
        ProductForm().create_color_option("   ")


def test_reset_restores_empty_values_but_keeps_created_colors():
    form = ProductForm()
    form.create_color_option("Teal")
    form.set_values(valid_values())
    form.set_field("title", "a")

    form.reset()

    assert form.values == empty_values()
    assert form.errors == {}
    assert "Teal" in form.color_options


def test_to_draft_normalizes_form_input():
    form = ProductForm()
    form.set_values(valid_values(season="", sale=""))
    draft = form.to_draft(images=["https://cdn.test/a.png"])

    assert draft.price == 25.0
    assert draft.quantity == 4
    assert draft.season is None
    assert draft.sale is None
    assert draft.images == ["https://cdn.test/a.png"]


def test_blank_colors_in_record_are_dropped():
    record = ProductRecord.model_validate({"_id": "p", "colors": ["Red", "", "  "]})
    form = ProductForm()
    form.init_from_record(record)

    assert form.get_field("colors") == ["Red"]
    assert "" not in form.color_options
    assert form.validate_field("colors") is None


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", float("inf")])
def test_non_finite_numbers_are_rejected(value):
    form = ProductForm()
    assert form.set_field("price", value) == "Please enter product price"
    assert form.set_field("quantity", value) == "Please select product quantity"
    assert form.set_field("sale", value) is not None


def test_draft_keeps_text_fields_as_entered():
    form = ProductForm()
    form.set_values(valid_values(sku=" SD-001 ", description="Light dress\n"))
    draft = form.to_draft(images=["https://cdn.test/a.png"])

    assert draft.sku == " SD-001 "
    assert draft.description == "Light dress\n"
