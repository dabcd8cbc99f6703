"""Shopify Storefront catalog queries"""
from typing import Any, Dict, List, Optional
import logging

import httpx

from config import Settings
from errors import CatalogUnavailable, ConfigurationError
from schemas import ProductSummary

logger = logging.getLogger(__name__)

PRODUCTS_PAGE_SIZE = 20
SHOPIFY_TIMEOUT = 30.0
# Reported when Shopify never answered (connection error, timeout)
UPSTREAM_UNREACHABLE_STATUS = 502


def build_products_query(first: int = PRODUCTS_PAGE_SIZE) -> str:
    """GraphQL document for the first N products with the fields the storefront form needs"""
    return f"""
    {{
      products(first: {first}) {{
        edges {{
          node {{
            id
            title
            handle
            description
            availableForSale
            onlineStoreUrl
            featuredImage {{
              url
            }}
          }}
        }}
      }}
    }}
    """


def to_product_summary(node: Dict[str, Any]) -> ProductSummary:
    """Flatten one product node; a product without featuredImage maps to image=None"""
    featured = node.get("featuredImage") or {}
    return ProductSummary(
        id=node["id"],
        title=node.get("title") or "",
        handle=node.get("handle") or "",
        description=node.get("description") or "",
        available=bool(node.get("availableForSale")),
        url=node.get("onlineStoreUrl"),
        image=featured.get("url"),
    )


async def fetch_products(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[ProductSummary]:
    """Query the store catalog and return flat product summaries"""
    if not settings.shopify_configured:
        raise ConfigurationError("SHOPIFY_STORE_DOMAIN or SHOPIFY_STOREFRONT_TOKEN is not configured")

    endpoint = f"https://{settings.shopify_store_domain}/api/{settings.shopify_api_version}/graphql.json"
    headers = {
        "Content-Type": "application/json",
        "X-Shopify-Storefront-Access-Token": settings.shopify_storefront_token,
    }

    logger.info(f"Querying Shopify catalog: {endpoint}")
    try:
        async with httpx.AsyncClient(timeout=SHOPIFY_TIMEOUT, transport=transport) as client:
            response = await client.post(endpoint, headers=headers, json={"query": build_products_query()})
    except httpx.HTTPError as e:
        logger.error(f"Shopify unreachable: {str(e)}")
        raise CatalogUnavailable(UPSTREAM_UNREACHABLE_STATUS, str(e)) from e

    if not response.is_success:
        logger.error(f"Shopify error: {response.status_code} - {response.text}")
        raise CatalogUnavailable(response.status_code, response.text)

    try:
        payload = response.json()
        data = payload.get("data") or {}
        if payload.get("errors") and not data.get("products"):
            logger.error(f"Shopify GraphQL errors: {payload['errors']}")
            raise CatalogUnavailable(response.status_code, str(payload["errors"]))

        edges = (data.get("products") or {}).get("edges") or []
        products = [to_product_summary(edge["node"]) for edge in edges]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error(f"Unexpected Shopify response: {str(e)} - {response.text[:500]}")
        raise CatalogUnavailable(response.status_code, response.text) from e

    logger.info(f"Fetched {len(products)} products from Shopify")
    return products
