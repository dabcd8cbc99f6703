"""Environment-backed settings"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_SHOPIFY_API_VERSION = "2024-01"
DEFAULT_CLOUDINARY_FOLDER = "innotiva/rooms"
# SDXL img2img: accepts image, prompt_strength, num_inference_steps, guidance_scale
DEFAULT_REPLICATE_MODEL_VERSION = (
    "stability-ai/sdxl:7762fd07cf82c948538e41f63f77d685e02b063e37e496e96eefd46c929f9bdc"
)


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_port(raw: Optional[str]) -> int:
    if raw and raw.isdigit():
        return int(raw)
    return DEFAULT_PORT


@dataclass(frozen=True)
class Settings:
    shopify_store_domain: Optional[str] = None
    shopify_storefront_token: Optional[str] = None
    shopify_api_version: str = DEFAULT_SHOPIFY_API_VERSION

    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = DEFAULT_CLOUDINARY_FOLDER

    replicate_api_token: Optional[str] = None
    replicate_model_version: str = DEFAULT_REPLICATE_MODEL_VERSION

    cors_origins: Tuple[str, ...] = ("*",)
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (after .env is loaded)"""
        origins = _env("CORS_ORIGINS")
        return cls(
            shopify_store_domain=_env("SHOPIFY_STORE_DOMAIN"),
            shopify_storefront_token=_env("SHOPIFY_STOREFRONT_TOKEN"),
            shopify_api_version=_env("SHOPIFY_API_VERSION") or DEFAULT_SHOPIFY_API_VERSION,
            cloudinary_cloud_name=_env("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=_env("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=_env("CLOUDINARY_API_SECRET"),
            cloudinary_folder=_env("CLOUDINARY_ROOMS_FOLDER") or DEFAULT_CLOUDINARY_FOLDER,
            replicate_api_token=_env("REPLICATE_API_TOKEN"),
            replicate_model_version=_env("REPLICATE_MODEL_VERSION") or DEFAULT_REPLICATE_MODEL_VERSION,
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) if origins else ("*",),
            port=_parse_port(_env("PORT")),
            log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shopify_store_domain and self.shopify_storefront_token)

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret)


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
