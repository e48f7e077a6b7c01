# storefront/shop.py
import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from . import config
from .cms import ButterClient, ContentProviderError, get_content_client

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products")
async def list_products(cms: ButterClient = Depends(get_content_client)):
    try:
        return await cms.list_pages(config.PRODUCT_PAGE_TYPE)
    except ContentProviderError as exc:
        # ошибку провайдера отдаём как есть
        logger.error("list_products_failed", status=exc.status_code)
        return JSONResponse(status_code=500, content=exc.body)
