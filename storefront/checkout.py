# storefront/checkout.py
import asyncio
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Tuple

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from . import config
from .auth import get_user_id
from .cms import ButterClient, ContentProviderError, get_content_client
from .pages import templates
from .payload import read_payload
from .schemas import CheckoutLine, CheckoutSummary, Region
from .store import CartStore, get_cart_store

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["checkout"])


class PriceUnavailableError(Exception):
    """A product has no usable price for the requested region."""


def parse_region(value) -> Region:
    if value in (None, ""):
        return Region.US
    try:
        return Region(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown region: {value}")


def unit_price(fields: dict, region: Region) -> Decimal:
    raw = fields.get(region.price_field)
    if raw is None or isinstance(raw, bool):
        raise PriceUnavailableError(f"missing {region.price_field!r}")
    try:
        price = Decimal(str(raw))
    except InvalidOperation:
        price = None
    if price is None or not price.is_finite():
        raise PriceUnavailableError(f"non-numeric {region.price_field!r}: {raw!r}")
    return price


def summarize(cart: Dict[str, int], pages: Iterable[Tuple[str, dict]], region: Region) -> CheckoutSummary:
    """Итог заказа: сумма (цена региона × количество) по всем позициям."""
    total = Decimal("0")
    lines = []
    for item_id, page in pages:
        fields = page.get("fields") or {}
        quantity = cart[item_id]
        try:
            price = unit_price(fields, region)
        except PriceUnavailableError as exc:
            raise PriceUnavailableError(f"{item_id}: {exc}") from exc
        total += price * quantity
        lines.append(CheckoutLine(title=fields.get("title") or item_id, quantity=quantity))
    return CheckoutSummary(region=region, currency=region.currency, total=total, items=lines)


async def build_summary(user_id: str, region: Region, store: CartStore, cms: ButterClient) -> CheckoutSummary:
    cart = await store.get_items(user_id)
    item_ids = list(cart)

    # все запросы к CMS параллельно; первая ошибка прерывает весь checkout
    pages = await asyncio.gather(
        *(cms.retrieve_page(config.PRODUCT_PAGE_TYPE, item_id) for item_id in item_ids)
    )
    return summarize(cart, zip(item_ids, pages), region)


def wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


@router.post("/checkout")
async def checkout(
    request: Request,
    user_id: str = Depends(get_user_id),
    store: CartStore = Depends(get_cart_store),
    cms: ButterClient = Depends(get_content_client),
):
    payload = await read_payload(request)
    region = parse_region(payload.get("region"))

    try:
        summary = await build_summary(user_id, region, store, cms)
    except ContentProviderError as exc:
        logger.error("checkout_lookup_failed", user_id=user_id, status=exc.status_code, error=str(exc))
        raise HTTPException(status_code=500, detail="Could not resolve cart items")
    except PriceUnavailableError as exc:
        logger.error("checkout_price_unavailable", user_id=user_id, region=region.value, error=str(exc))
        raise HTTPException(status_code=500, detail="Price unavailable for cart item")

    logger.info("checkout_completed", user_id=user_id, region=region.value,
                total=str(summary.total), lines=len(summary.items))

    if wants_json(request):
        return JSONResponse(summary.model_dump(mode="json"))
    return templates.TemplateResponse(
        request,
        "payment_confirmation.html",
        {"total": summary.total, "currency": summary.currency, "items": summary.items},
    )
