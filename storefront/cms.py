# storefront/cms.py
from typing import Any, Optional

import httpx
import structlog
from fastapi import Request

from . import config

logger = structlog.get_logger(__name__)


class ContentProviderError(Exception):
    """ButterCMS call failed: transport error or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body if body is not None else message


class ButterClient:
    """Read-only client for the ButterCMS pages API.

    Calls are neither retried nor time-limited; a hanging provider blocks the
    request that made the call.
    """

    def __init__(self, token: str, base_url: str = config.BUTTER_API_URL,
                 client: Optional[httpx.AsyncClient] = None):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=None)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str) -> Any:
        url = f"{self.base_url}/{path.strip('/')}/"
        try:
            resp = await self._client.get(url, params={"auth_token": self.token})
        except httpx.HTTPError as exc:
            logger.warning("content_provider_unreachable", url=url, error=str(exc))
            raise ContentProviderError(f"content provider unreachable: {exc}") from exc

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = resp.text
            logger.warning("content_provider_error", url=url, status=resp.status_code)
            raise ContentProviderError(
                f"content provider returned {resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )
        try:
            return resp.json()
        except ValueError:
            logger.warning("content_provider_bad_body", url=url, status=resp.status_code)
            raise ContentProviderError(
                "content provider returned a non-JSON body",
                status_code=resp.status_code,
                body=resp.text,
            )

    async def list_pages(self, page_type: str) -> dict:
        # the body is handed back untouched: {"meta": {...}, "data": [...]}
        return await self._get(f"pages/{page_type}")

    async def retrieve_page(self, page_type: str, slug: str) -> dict:
        body = await self._get(f"pages/{page_type}/{slug}")
        if not isinstance(body, dict) or "data" not in body:
            logger.warning("content_provider_bad_body", page_type=page_type, slug=slug)
            raise ContentProviderError(f"no page data for {slug!r}", body=body)
        return body["data"]


def get_content_client(request: Request) -> ButterClient:
    return request.app.state.content_client
