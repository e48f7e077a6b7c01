# storefront/main.py
from contextlib import asynccontextmanager
from typing import Optional, Tuple

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncEngine

from . import cart, checkout, config, pages, shop
from .cms import ButterClient
from .database import create_tables, make_engine, make_session_maker
from .logging_config import configure_logging
from .pages import BASE_DIR
from .store import CartStore, InMemoryCartStore, SqlCartStore

logger = structlog.get_logger(__name__)

STATIC_DIR = BASE_DIR / "static"


def build_cart_store(backend: str = config.CART_BACKEND) -> Tuple[CartStore, Optional[AsyncEngine]]:
    """Return (store, engine). engine is None for the memory backend."""
    if backend == "memory":
        return InMemoryCartStore(), None
    if backend == "sql":
        engine = make_engine(config.DATABASE_URL)
        return SqlCartStore(make_session_maker(engine)), engine
    raise ValueError(f"Unknown CART_BACKEND: {backend!r}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = None
    own_client = None
    if app.state.cart_store is None:
        app.state.cart_store, engine = build_cart_store()
        if engine is not None:
            await create_tables(engine)
    if app.state.content_client is None:
        if not config.BUTTER_API_TOKEN:
            logger.warning("butter_token_missing", hint="set BUTTER_API_TOKEN")
        own_client = app.state.content_client = ButterClient(config.BUTTER_API_TOKEN)

    logger.info("storefront_started", cart_backend=type(app.state.cart_store).__name__)
    try:
        yield
    finally:
        # injected store/client belong to the caller
        if own_client is not None:
            await own_client.aclose()
        if engine is not None:
            await engine.dispose()


def create_app(cart_store: Optional[CartStore] = None,
               content_client: Optional[ButterClient] = None) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        description="Catalog, cart and checkout on top of ButterCMS",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.cart_store = cart_store
    app.state.content_client = content_client

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ✅ Роутеры
    app.include_router(pages.router)
    app.include_router(shop.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host=config.HOST, port=config.PORT)
