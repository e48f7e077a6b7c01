"""Pytest configuration and fixtures"""
import pytest
from fastapi.testclient import TestClient

from storefront.cms import ContentProviderError
from storefront.main import create_app
from storefront.store import InMemoryCartStore


class FakeContentClient:
    """Stands in for ButterClient: serves product pages from a dict."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.fail_list = False
        self.retrieved = []

    async def list_pages(self, page_type):
        if self.fail_list:
            raise ContentProviderError("boom", status_code=401, body={"detail": "Invalid token."})
        return {
            "meta": {"previous_page": None, "next_page": None, "count": len(self.pages)},
            "data": list(self.pages.values()),
        }

    async def retrieve_page(self, page_type, slug):
        self.retrieved.append(slug)
        if slug not in self.pages:
            raise ContentProviderError("not found", status_code=404, body={"detail": "Not found."})
        return self.pages[slug]

    async def aclose(self):
        pass


def product_page(slug, title, price=None, price_euro=None, description=""):
    fields = {"title": title, "description": description}
    if price is not None:
        fields["price"] = price
    if price_euro is not None:
        fields["price-euro"] = price_euro
    return {"slug": slug, "name": slug, "page_type": "product", "fields": fields}


@pytest.fixture
def sample_pages():
    return {
        "widget": product_page("widget", "Widget", price=10, price_euro=9, description="A widget"),
        "gadget": product_page("gadget", "Gadget", price="2.50", price_euro="2.25"),
    }


@pytest.fixture
def cms(sample_pages):
    return FakeContentClient(sample_pages)


@pytest.fixture
def store():
    return InMemoryCartStore()


@pytest.fixture
def client(store, cms):
    """Test client"""
    return TestClient(create_app(cart_store=store, content_client=cms))
