import os
from datetime import datetime, timedelta, timezone

# Settings are read on first use; make sure the test values win.
os.environ["BACKEND_URL"] = "http://catalog.test"
os.environ["SUPABASE_URL"] = "https://project.supabase.test"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-role-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"

import pytest
from jose import jwt

from product_admin.core.auth import AdminSession
from product_admin.schemas.product import ImageFile

JWT_SECRET = "test-jwt-secret"


class FakeBackend:
    """Stands in for BackendClient; records every call."""

    def __init__(self, categories=None, response=None, error=None):
        self.categories = categories if categories is not None else []
        self.response = response if response is not None else {"message": "Created"}
        self.error = error
        self.calls = []

    def list_categories(self):
        self.calls.append(("GET", "/category", None))
        if isinstance(self.categories, Exception):
            raise self.categories
        return self.categories

    def create_product(self, payload):
        self.calls.append(("POST", "/product", payload))
        if self.error:
            raise self.error
        return self.response

    def update_product(self, product_id, payload):
        self.calls.append(("PUT", f"/product/{product_id}", payload))
        if self.error:
            raise self.error
        return self.response


class FakeResponse:
    """Just enough of requests.Response for BackendClient."""

    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response or FakeResponse(body={})
        self.error = error
        self.requests = []

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json, timeout))
        if self.error:
            raise self.error
        return self.response


class FakeUploader:
    """Returns a deterministic URL per local file, passes URLs through."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def __call__(self, images, folder):
        self.calls.append((list(images), folder))
        if self.error:
            raise self.error
        urls = []
        for i, image in enumerate(images):
            if isinstance(image, str):
                urls.append(image)
            else:
                urls.append(f"https://cdn.test/{folder}/{i}-{image.filename}")
        return urls


CATEGORIES = [
    {"_id": "cat-1", "title": "Dresses", "blocked": False},
    {"_id": "cat-2", "title": "Old Stock", "blocked": True},
]


def make_token(role="admin", sub="admin-1", expires_in=timedelta(hours=1)):
    claims = {
        "sub": sub,
        "email": f"{sub}@shop.test",
        "app_metadata": {"role": role},
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


def png(name="front.png"):
    return ImageFile(filename=name, content_type="image/png", content=b"\x89PNG fake")


def valid_values(**overrides):
    values = {
        "title": "Summer Dress",
        "category": "cat-1",
        "season": "Summers Collection",
        "colors": ["Red"],
        "sizes": ["1-2Y"],
        "price": "25",
        "sale": "10",
        "quantity": "4",
        "sku": "SD-001",
        "description": "Light cotton dress",
        "images": [png()],
    }
    values.update(overrides)
    return values


@pytest.fixture
def admin_session():
    return AdminSession(
        user_id="admin-1",
        email="admin-1@shop.test",
        role="admin",
        access_token="token",
    )


@pytest.fixture
def backend():
    return FakeBackend(categories=list(CATEGORIES))


@pytest.fixture
def uploader():
    return FakeUploader()
