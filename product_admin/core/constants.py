# product_admin/core/constants.py

# --- Fixed option lists shown by the editor ---

SEASONS: list[str] = ["Winters Collection", "Summers Collection"]

SIZES: list[str] = ["3-6M", "6-9M", "1-2Y", "2-3Y", "3-4Y"]

# Starting point only: admins can add their own colors while editing.
DEFAULT_COLORS: list[str] = [
    "Black",
    "White",
    "Red",
    "Blue",
    "Green",
    "Yellow",
    "Pink",
    "Purple",
    "Orange",
    "Brown",
    "Grey",
    "Beige",
]

# --- Field limits ---

TITLE_MIN_EXCLUSIVE = 1
TITLE_MAX_EXCLUSIVE = 30

MAX_IMAGES = 10

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
