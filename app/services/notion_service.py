"""Notion API service"""
import httpx
from typing import Any, Dict, Optional
from fastapi import Depends
from app.config import Settings, get_settings
import logging

logger = logging.getLogger(__name__)


class NotionError(Exception):
    """Base class for failures talking to Notion"""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.message = message
        self.body = body


class NotionAPIError(NotionError):
    """Notion answered with a non-2xx status"""

    def __init__(self, status_code: int, code: Optional[str], message: str, body: Any = None):
        super().__init__(message, body)
        self.status_code = status_code
        self.code = code


class NotionRequestError(NotionError):
    """The request never got a response (connection error, timeout)"""


def _error_from_response(response: httpx.Response) -> NotionAPIError:
    """Build a NotionAPIError from an error response body"""
    try:
        body = response.json()
    except ValueError:
        body = response.text

    code = None
    message = None
    if isinstance(body, dict):
        code = body.get("code")
        message = body.get("message")

    if not message:
        message = f"Notion API returned {response.status_code} {response.reason_phrase}".strip()

    return NotionAPIError(response.status_code, code, message, body)


class NotionClient:
    """Minimal async client for the Notion REST API"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "NotionClient":
        return cls(
            api_key=settings.notion_api_key,
            base_url=settings.notion_api_url,
            notion_version=settings.notion_version,
            timeout=settings.notion_timeout_seconds,
            **kwargs
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json"
        }

    async def create_page(self, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a page (database row) in a Notion database

        Args:
            database_id: Target database id
            properties: Notion `properties` object keyed by column name

        Returns:
            The created page object as returned by Notion

        Raises:
            NotionAPIError: Notion rejected the request
            NotionRequestError: Notion could not be reached
        """
        payload = {
            "parent": {"database_id": database_id},
            "properties": properties
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/pages",
                    headers=self.headers,
                    json=payload
                )
        except httpx.HTTPError as e:
            raise NotionRequestError(str(e) or e.__class__.__name__) from e

        if response.status_code >= 400:
            raise _error_from_response(response)

        try:
            page = response.json()
        except ValueError:
            page = None
        if not isinstance(page, dict):
            raise NotionAPIError(
                response.status_code, None, "Notion API returned an unexpected response body", response.text
            )

        return page


def get_notion_client(settings: Settings = Depends(get_settings)) -> NotionClient:
    """FastAPI dependency returning a client configured from settings"""
    return NotionClient.from_settings(settings)
