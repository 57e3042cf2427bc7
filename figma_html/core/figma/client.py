"""
Figma API Client
================

HTTP client for the Figma REST API and helpers for reading file keys and
node ids out of Figma URLs.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import parse_qs, unquote, urlparse

import aiohttp

from figma_html.config.logging import get_logger
from figma_html.config.settings import get_settings

logger = get_logger(__name__)

FILE_KEY_PATTERN = re.compile(r"figma\.com/(?:file|design)/([a-zA-Z0-9]+)")


class FigmaAPIError(Exception):
    """Exception raised when a Figma API request fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def extract_file_key(value: str) -> str:
    """
    Extract a file key from a Figma URL.

    Args:
        value: ``https://www.figma.com/file/<key>/...``, a ``/design/`` URL or a bare key

    Returns:
        The file key; input that is not a Figma URL is returned stripped
    """
    match = FILE_KEY_PATTERN.search(value)
    if match:
        return match.group(1)
    return value.strip()


def extract_node_id(value: str) -> Optional[str]:
    """Read the ``node-id`` query parameter of a Figma URL as an API node id."""
    query = parse_qs(urlparse(value).query)
    for key in ("node-id", "node_id"):
        if query.get(key):
            node_id = unquote(query[key][0])
            # Browser URLs use 1-2 where the API uses 1:2
            if ":" not in node_id and "-" in node_id:
                node_id = node_id.replace("-", ":", 1)
            return node_id
    return None


class FigmaClient:
    """Client for the Figma REST API."""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.access_token = access_token
        self.base_url = (base_url or settings.figma_api_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.logger: Any = logger.bind(component="figma_client")  # structlog.BoundLoggerBase
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(
                timeout=timeout, headers={"X-Figma-Token": self.access_token}
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        self.logger.debug("Figma API request", url=url, params=params)

        try:
            session = await self._get_session()
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    error_text = await response.text()
                    self.logger.warning(
                        "Figma API request failed",
                        url=url,
                        status=response.status,
                        response=error_text[:200],
                    )
                    raise FigmaAPIError(
                        f"Figma API request failed: {response.status} {response.reason}",
                        status=response.status,
                    )
                return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error_msg = f"Figma API request failed: {str(e) or type(e).__name__}"
            self.logger.error("Figma API transport error", url=url, error=error_msg)
            raise FigmaAPIError(error_msg) from e

    async def get_file(self, file_key: str) -> Dict[str, Any]:
        """
        Fetch a Figma file by its key.

        Args:
            file_key: File key from the file URL

        Returns:
            Decoded file JSON

        Raises:
            FigmaAPIError: If the request fails
        """
        data = await self._get_json(f"/files/{file_key}")
        self.logger.info("Fetched Figma file", file_key=file_key, file_name=data.get("name"))
        return data

    async def get_file_nodes(self, file_key: str, node_ids: Sequence[str]) -> Dict[str, Any]:
        """Fetch selected node subtrees of a file."""
        return await self._get_json(f"/files/{file_key}/nodes", params={"ids": ",".join(node_ids)})

    async def get_images(
        self,
        file_key: str,
        node_ids: List[str],
        image_format: str = "png",
        scale: float = 1,
    ) -> Dict[str, Any]:
        """
        Get rendered image URLs for specific nodes.

        Args:
            file_key: File key
            node_ids: Nodes to render
            image_format: png, jpg, svg or pdf
            scale: Image scale between 0.01 and 4

        Returns:
            Decoded response with an ``images`` mapping of node id to URL
        """
        params = {"ids": ",".join(node_ids), "format": image_format, "scale": scale}
        return await self._get_json(f"/images/{file_key}", params=params)
