from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from typing import Optional
import uvicorn
import logging

from config import Settings, get_settings
from errors import CatalogUnavailable, ClientInputError, ConfigurationError
from schemas import ErrorResponse, PremiumRequest, PremiumResult, ProductsResponse
from services.premium_service import run_premium_experience
from services.shopify_service import fetch_products

settings = get_settings()

# Setup logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PRODUCTS_ERROR = "No se pudieron cargar los productos"
PREMIUM_ERROR = "Error interno preparando la experiencia premium"

app = FastAPI(title="Innotiva Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.get("/", response_class=PlainTextResponse)
async def health():
    return "Innotiva Backend FULL OK"


@app.get("/productos-shopify", response_model=ProductsResponse, responses={500: {"model": ErrorResponse}})
async def productos_shopify(settings: Settings = Depends(get_settings)):
    """Product list for the storefront form"""
    try:
        products = await fetch_products(settings)
    except (ConfigurationError, CatalogUnavailable) as e:
        logger.error(f"ERR /productos-shopify: {str(e)}")
        return error_response(500, PRODUCTS_ERROR)
    except Exception as e:
        logger.exception(f"Unexpected error in /productos-shopify: {str(e)}")
        return error_response(500, PRODUCTS_ERROR)

    return ProductsResponse(products=products)


@app.post(
    "/experiencia-premium",
    response_model=PremiumResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def experiencia_premium(
    roomImage: Optional[UploadFile] = File(None),
    productId: Optional[str] = Form(None),
    productName: Optional[str] = Form(None),
    idea: Optional[str] = Form(None),
    productUrl: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
):
    """Room photo + product + idea: upload to Cloudinary, generate the proposal, answer the front-end"""
    logger.info(f"PREMIUM ENDPOINT HIT: productId={productId}, productName={productName}")

    image_bytes = await roomImage.read() if roomImage is not None else None
    request = PremiumRequest(
        image=image_bytes or None,
        product_id=productId,
        product_name=productName,
        idea=idea,
        product_url=productUrl,
    )

    try:
        return await run_premium_experience(request, settings)
    except ClientInputError as e:
        logger.info(f"Rejected premium request: {e.message}")
        return error_response(400, e.message)
    except Exception as e:
        logger.error(f"ERR /experiencia-premium: {str(e)}")
        return error_response(500, PREMIUM_ERROR)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(400, "Solicitud inválida")


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
