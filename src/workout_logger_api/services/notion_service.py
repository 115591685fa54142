"""Minimal async client for the Notion pages API."""

import logging
from typing import Any, Dict, Optional

import httpx

from workout_logger_api.config import Settings

logger = logging.getLogger(__name__)


class NotionServiceError(RuntimeError):
    """Raised when the Notion API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotionService:
    """
    Thin wrapper over ``POST /pages``.

    Every call is issued once; there is no retry on failure.
    """

    def __init__(
        self,
        token: str,
        base_url: str,
        notion_version: str,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        }
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotionService":
        return cls(
            token=settings.NOTION_TOKEN or "",
            base_url=settings.NOTION_API_BASE_URL,
            notion_version=settings.NOTION_VERSION,
            timeout=settings.NOTION_TIMEOUT_SECONDS,
        )

    async def create_page(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a page in a database.

        Args:
            payload: Full request body (``parent`` and ``properties``)

        Returns:
            The created page object as returned by Notion.

        Raises:
            NotionServiceError: On any non-2xx response; ``body`` holds the raw text
        """
        url = f"{self.base_url}/pages"
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            transport=self._transport,
        ) as client:
            response = await client.post(url, json=payload)

        if not response.is_success:
            logger.warning(
                f"Notion create page failed: status={response.status_code}, body={response.text[:500]}"
            )
            raise NotionServiceError(
                f"Notion API request failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json()
