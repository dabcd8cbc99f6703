"""Pydantic models for request/response"""
from pydantic import BaseModel, Field
from typing import List, Optional


class ProductSummary(BaseModel):
    id: str
    title: str
    handle: str
    description: str = ""
    available: bool = False
    url: Optional[str] = None  # onlineStoreUrl, null while unpublished
    image: Optional[str] = None  # featuredImage.url, null when the product has none


class ProductsResponse(BaseModel):
    success: bool = True
    products: List[ProductSummary]


class PremiumRequest(BaseModel):
    image: Optional[bytes] = Field(None, description="Raw bytes of the uploaded room photo")
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    idea: Optional[str] = None
    product_url: Optional[str] = None


class PremiumResult(BaseModel):
    success: bool = True
    message: str
    userImageUrl: str
    generatedImageUrl: str  # real output or the placeholder, never empty
    productUrl: Optional[str] = None
    productName: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
