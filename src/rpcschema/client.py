import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from rpcschema.config.default import SchemaSettings
from rpcschema.errors import IO_ERROR, PARSE_ERROR
from rpcschema.schemas import ApiDefinition, BtcMethod


class SchemaClient:
    """
    Client for a running schema server.
    Fetches the served API definition, or single methods, over HTTP.
    """
    def __init__(
        self,
        base_url: str | None = None,
        settings: SchemaSettings | dict | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = SchemaSettings.resolve(settings, schema_url=base_url)
        self.base_url = self.settings.schema_url.rstrip("/")
        self.client = httpx.AsyncClient(timeout=self.settings.request_timeout, transport=transport)
        self.logger = logging.getLogger("rpcschema.client")

    async def fetch_definition(self) -> ApiDefinition:
        """
        Download the whole definition and normalize it like a file load.
        """
        resp = await self._get("/schema")
        self._raise_for_status(resp)
        return ApiDefinition.loads(resp.content, source=str(resp.url))

    async def fetch_method(self, name: str) -> Optional[BtcMethod]:
        """
        Download one method, or None if the server does not know it.
        """
        # method names are a single path segment
        resp = await self._get(f"/methods/{quote(name, safe='')}")
        if resp.status_code == 404:
            self.logger.warning(f"No method named: {name}")
            return None
        self._raise_for_status(resp)

        try:
            method = BtcMethod.model_validate_json(resp.content)
        except ValidationError as e:
            raise PARSE_ERROR(f"{resp.url}: {e}", e) from e
        method.post_process()
        return method

    async def _get(self, path: str) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            self.logger.debug(f"GET {url}")
            return await self.client.get(url)
        except httpx.RequestError as e:
            self.logger.error(f"Network error fetching {url}: {e}")
            raise IO_ERROR(f"{url}: {e}", e) from e

    def _raise_for_status(self, resp: httpx.Response) -> None:
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error(f"HTTP error fetching {resp.url}: {e}")
            raise IO_ERROR(f"{resp.url}: {e}", e) from e

    async def close(self):
        await self.client.aclose()
