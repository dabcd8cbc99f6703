"""Room visualization via Replicate img2img predictions"""
from typing import Any, Dict, Optional
import logging

import httpx

from config import Settings

logger = logging.getLogger(__name__)

REPLICATE_PREDICTIONS_URL = "https://api.replicate.com/v1/predictions"

# Returned whenever generation cannot produce a real image. Callers treat it as a normal URL.
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/500x300?text=Propuesta+IA"

PROMPT_STRENGTH = 0.55
NUM_INFERENCE_STEPS = 30
GUIDANCE_SCALE = 7.5

# Replicate holds the request open up to this many seconds before answering with a pending prediction
SYNC_WAIT_SECONDS = 60
REPLICATE_TIMEOUT = SYNC_WAIT_SECONDS + 30.0

SCENE_CLAUSE = (
    "Photorealistic interior photograph of the same room, keeping the original walls, floor, "
    "windows, architecture, perspective and lighting unchanged."
)
DEFAULT_IDEA_CLAUSE = (
    "Balanced composition, minimalist, warm and welcoming style that respects the existing decor."
)
QUALITY_CLAUSE = "Soft natural lighting, editorial interior photography, high detail, realistic materials and shadows."

NEGATIVE_PROMPT = (
    "blurry, low quality, distorted, deformed furniture, warped walls, extra rooms, duplicated objects, "
    "text, watermark, logo, cartoon, illustration, oversaturated"
)


def build_prompt(product_name: str, idea: Optional[str] = None) -> str:
    """Scene preservation + product placement + user idea (or default composition) + quality"""
    placement = f'Place the decor product "{product_name}" naturally in the space, at a realistic scale.'
    idea_text = (idea or "").strip()
    idea_clause = f"The customer specifically asked for: {idea_text}." if idea_text else DEFAULT_IDEA_CLAUSE
    return " ".join([SCENE_CLAUSE, placement, idea_clause, QUALITY_CLAUSE])


def build_prediction_payload(image_url: str, product_name: str, idea: Optional[str], model_version: str) -> Dict[str, Any]:
    return {
        "version": model_version,
        "input": {
            "image": image_url,
            "prompt": build_prompt(product_name, idea),
            "negative_prompt": NEGATIVE_PROMPT,
            "prompt_strength": PROMPT_STRENGTH,
            "num_inference_steps": NUM_INFERENCE_STEPS,
            "guidance_scale": GUIDANCE_SCALE,
        },
    }


async def generate_room_visualization(
    image_url: str,
    product_name: str,
    idea: Optional[str],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Return the generated image URL, or PLACEHOLDER_IMAGE_URL on any failure. Never raises."""
    if not settings.replicate_api_token:
        logger.warning("REPLICATE_API_TOKEN not configured. Returning placeholder image.")
        return PLACEHOLDER_IMAGE_URL

    payload = build_prediction_payload(image_url, product_name, idea, settings.replicate_model_version)
    headers = {
        "Authorization": f"Bearer {settings.replicate_api_token}",
        "Content-Type": "application/json",
        "Prefer": f"wait={SYNC_WAIT_SECONDS}",
    }

    try:
        logger.info(f"Calling Replicate for product '{product_name}' with image {image_url}")
        async with httpx.AsyncClient(timeout=REPLICATE_TIMEOUT, transport=transport) as client:
            response = await client.post(REPLICATE_PREDICTIONS_URL, headers=headers, json=payload)

        if not response.is_success:
            logger.error(f"Replicate error: {response.status_code} - {response.text}")
            return PLACEHOLDER_IMAGE_URL

        prediction = response.json()
        if not isinstance(prediction, dict):
            prediction = {}
        output = prediction.get("output")
        if isinstance(output, list) and output and output[0]:
            logger.info(f"Replicate prediction {prediction.get('id')} succeeded: {output[0]}")
            return output[0]

        # Still starting/processing after the wait window, or finished without images
        logger.warning(
            f"Replicate prediction {prediction.get('id')} returned no output "
            f"(status={prediction.get('status')}). Returning placeholder image."
        )
        return PLACEHOLDER_IMAGE_URL
    except Exception as e:
        logger.error(f"Replicate call failed: {str(e)}")
        return PLACEHOLDER_IMAGE_URL
