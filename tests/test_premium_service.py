import asyncio

import pytest

from errors import InvalidRoomImage, MissingField, UploadFailed
from schemas import PremiumRequest
from services import premium_service
from services.replicate_service import PLACEHOLDER_IMAGE_URL
from tests.conftest import STORE_DOMAIN

UPLOADED_URL = "https://res.cloudinary.com/innotiva/image/upload/innotiva/rooms/room.png"
GENERATED_URL = "https://replicate.delivery/out-0.png"


@pytest.fixture
def calls(monkeypatch):
    """Replace both vendors on the orchestrator module and record what they receive"""
    recorded = {"upload": [], "generate": []}

    async def _upload(data, settings, folder=None):
        recorded["upload"].append(data)
        return UPLOADED_URL

    async def _generate(image_url, product_name, idea, settings):
        recorded["generate"].append((image_url, product_name, idea))
        return GENERATED_URL

    monkeypatch.setattr(premium_service, "upload_room_image", _upload)
    monkeypatch.setattr(premium_service, "generate_room_visualization", _generate)
    return recorded


def _request(room_png, **overrides):
    fields = {"image": room_png, "product_id": "lampara-nordica", "product_name": "Lámpara Nórdica"}
    fields.update(overrides)
    return PremiumRequest(**fields)


def test_message_without_idea_has_no_quote():
    for idea in (None, "", "   "):
        message = premium_service.build_premium_message("Lámpara Nórdica", idea)
        assert message.startswith("La elección de Lámpara Nórdica encaja muy bien")
        assert "Tu idea de" not in message
        assert message.endswith(premium_service.CLOSING_SENTENCE)


def test_message_quotes_trimmed_idea():
    message = premium_service.build_premium_message("Lámpara Nórdica", "  junto al sofá  ")

    assert "Tu idea de “junto al sofá” aporta un toque muy personal" in message


def test_explicit_product_url_wins():
    url = "https://innotiva.co/products/lampara-nordica?variant=1"

    assert premium_service.resolve_product_url("lampara-nordica", url, STORE_DOMAIN) == url


def test_product_url_built_from_domain():
    assert (
        premium_service.resolve_product_url("lampara-nordica", None, STORE_DOMAIN)
        == "https://innotiva-test.myshopify.com/products/lampara-nordica"
    )
    assert premium_service.resolve_product_url("lampara-nordica", "  ", STORE_DOMAIN).endswith("/products/lampara-nordica")


def test_product_url_is_none_without_domain():
    assert premium_service.resolve_product_url("lampara-nordica", None, None) is None


def test_run_premium_experience_assembles_result(calls, settings, room_png):
    result = asyncio.run(premium_service.run_premium_experience(_request(room_png, idea="luz cálida"), settings))

    assert result.success is True
    assert result.userImageUrl == UPLOADED_URL
    assert result.generatedImageUrl == GENERATED_URL
    assert result.productUrl == "https://innotiva-test.myshopify.com/products/lampara-nordica"
    assert result.productName == "Lámpara Nórdica"
    assert "“luz cálida”" in result.message
    assert calls["upload"] == [room_png]
    assert calls["generate"] == [(UPLOADED_URL, "Lámpara Nórdica", "luz cálida")]


def test_missing_image_makes_no_outbound_calls(calls, settings):
    with pytest.raises(MissingField, match="roomImage"):
        asyncio.run(premium_service.run_premium_experience(_request(None), settings))

    assert calls["upload"] == []
    assert calls["generate"] == []


def test_missing_product_fields_rejected(calls, settings, room_png):
    with pytest.raises(MissingField, match="productId y productName"):
        asyncio.run(premium_service.run_premium_experience(_request(room_png, product_name=" "), settings))

    assert calls["upload"] == []


def test_unreadable_image_rejected_before_upload(calls, settings):
    with pytest.raises(InvalidRoomImage):
        asyncio.run(premium_service.run_premium_experience(_request(b"not an image"), settings))

    assert calls["upload"] == []


def test_upload_failure_skips_generation(monkeypatch, calls, settings, room_png):
    async def _failing_upload(data, settings, folder=None):
        raise UploadFailed("Invalid Signature")

    monkeypatch.setattr(premium_service, "upload_room_image", _failing_upload)

    with pytest.raises(UploadFailed):
        asyncio.run(premium_service.run_premium_experience(_request(room_png), settings))

    assert calls["generate"] == []


def test_generation_exception_degrades_to_placeholder(monkeypatch, calls, settings, room_png):
    async def _exploding_generate(image_url, product_name, idea, settings):
        raise RuntimeError("provider down")

    monkeypatch.setattr(premium_service, "generate_room_visualization", _exploding_generate)

    result = asyncio.run(premium_service.run_premium_experience(_request(room_png), settings))

    assert result.success is True
    assert result.generatedImageUrl == PLACEHOLDER_IMAGE_URL
