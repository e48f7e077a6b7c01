# storefront/cart.py
import structlog
from fastapi import APIRouter, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from .auth import get_user_id
from .payload import read_payload
from .schemas import CartAddRequest, CartOut
from .store import CartStore, get_cart_store

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
async def get_cart(
    user_id: str = Depends(get_user_id),
    store: CartStore = Depends(get_cart_store),
):
    return CartOut(items=await store.get_items(user_id))


@router.post("")
async def add_to_cart(
    request: Request,
    user_id: str = Depends(get_user_id),
    store: CartStore = Depends(get_cart_store),
):
    try:
        payload = CartAddRequest.model_validate(await read_payload(request))
    except ValidationError as exc:
        raise RequestValidationError(exc.errors())

    await store.add_item(user_id, payload.item_id)
    logger.info("cart_item_added", user_id=user_id, item_id=payload.item_id)
    # пустое тело, клиенту нужен только статус
    return Response(status_code=200)
