from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from config import Settings, get_settings

STORE_DOMAIN = "innotiva-test.myshopify.com"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        shopify_store_domain=STORE_DOMAIN,
        shopify_storefront_token="storefront-token",
        cloudinary_cloud_name="innotiva",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        replicate_api_token="r8_test",
    )


@pytest.fixture
def room_png() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (32, 24), (200, 180, 150)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def client(settings):
    from main import app

    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
