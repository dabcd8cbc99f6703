"""Premium experience: room photo + product + idea -> visualization"""
from typing import Optional
import logging

from config import Settings
from errors import MissingField
from schemas import PremiumRequest, PremiumResult
from services.cloudinary_service import upload_room_image
from services.image_service import inspect_room_image
from services.replicate_service import PLACEHOLDER_IMAGE_URL, generate_room_visualization

logger = logging.getLogger(__name__)

CLOSING_SENTENCE = (
    "Preparamos esta visualización para que puedas tomar una decisión con total seguridad, "
    "viendo cómo se transforma tu ambiente antes de comprar."
)


def build_premium_message(product_name: str, idea: Optional[str] = None) -> str:
    """User-facing copy for the result page"""
    message = f"La elección de {product_name} encaja muy bien con el estilo de tu espacio. "

    idea_text = (idea or "").strip()
    if idea_text:
        message += f"Tu idea de “{idea_text}” aporta un toque muy personal a la composición. "

    return message + CLOSING_SENTENCE


def resolve_product_url(product_id: str, explicit_url: Optional[str], store_domain: Optional[str]) -> Optional[str]:
    """Explicit URL from the form wins; otherwise build it from the store domain"""
    if explicit_url and explicit_url.strip():
        return explicit_url
    if store_domain:
        return f"https://{store_domain}/products/{product_id}"
    return None


def validate_premium_request(request: PremiumRequest) -> None:
    if not request.image:
        raise MissingField("roomImage es obligatorio")
    if not (request.product_id or "").strip() or not (request.product_name or "").strip():
        raise MissingField("productId y productName son obligatorios")


async def run_premium_experience(request: PremiumRequest, settings: Settings) -> PremiumResult:
    """Validate, upload the room photo, generate the visualization and assemble the response"""
    validate_premium_request(request)
    inspect_room_image(request.image)

    logger.info(f"Premium experience for product {request.product_id} ({request.product_name})")

    user_image_url = await upload_room_image(request.image, settings)

    try:
        generated_image_url = await generate_room_visualization(
            user_image_url, request.product_name, request.idea, settings
        )
    except Exception as e:
        logger.error(f"Image generation raised for product {request.product_id}: {str(e)}")
        generated_image_url = None
    generated_image_url = generated_image_url or PLACEHOLDER_IMAGE_URL

    product_url = resolve_product_url(request.product_id, request.product_url, settings.shopify_store_domain)
    message = build_premium_message(request.product_name, request.idea)

    logger.info(f"Premium experience ready for product {request.product_id}: {generated_image_url}")
    return PremiumResult(
        message=message,
        userImageUrl=user_image_url,
        generatedImageUrl=generated_image_url,
        productUrl=product_url,
        productName=request.product_name,
    )
