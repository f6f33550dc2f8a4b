from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from galaxy_reporter import __version__
from galaxy_reporter.config import GalaxyConfig

logger = logging.getLogger("galaxy_reporter.client")

USER_AGENT = f"galaxy-reporter/{__version__}"


class ApiError(BaseModel):
    """Failure details for a single Galaxy API call."""
    status_code: Optional[int] = Field(default=None, title="Status Code")
    message: str = Field(..., title="Message")
    path: str = Field(..., title="Path")

    def __str__(self) -> str:
        if self.status_code is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}: HTTP {self.status_code} {self.message}"


class ApiSuccess(BaseModel):
    data: Any = None


class ApiFailure(BaseModel):
    error: ApiError


ApiResult = Union[ApiSuccess, ApiFailure]


class GalaxyApi:
    """
    Thin async handle over the Galaxy REST API.

    `get` never raises for API or transport failures: the outcome is always
    an ApiSuccess carrying the decoded JSON, or an ApiFailure carrying an ApiError.
    """

    def __init__(self, client: httpx.AsyncClient, authenticated: bool = False):
        self.client = client
        self.authenticated = authenticated
        self.log = logging.getLogger(self.__class__.__name__)

    @property
    def base_url(self) -> str:
        return str(self.client.base_url).rstrip("/")

    @staticmethod
    def expand_path(path: str, path_params: Optional[Dict[str, Any]] = None) -> str:
        """Substitute {name} placeholders, encoding each value as a single path segment."""
        if not path_params:
            return path
        return path.format(**{k: quote(str(v), safe="") for k, v in path_params.items()})

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("err_msg"):
            return str(body["err_msg"])
        return response.text.strip() or response.reason_phrase

    async def get(
        self,
        path: str,
        path_params: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> ApiResult:
        url = self.expand_path(path, path_params)
        self.log.debug(f"GET {url} params={query}")

        try:
            response = await self.client.get(url, params=query)
        except httpx.HTTPError as e:
            self.log.debug(f"Transport error on GET {url}: {e}")
            return ApiFailure(error=ApiError(message=str(e) or e.__class__.__name__, path=url))

        if response.is_error:
            return ApiFailure(
                error=ApiError(status_code=response.status_code, message=self._error_message(response), path=url)
            )

        try:
            return ApiSuccess(data=response.json())
        except ValueError as e:
            return ApiFailure(
                error=ApiError(status_code=response.status_code, message=f"Invalid JSON response: {e}", path=url)
            )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "GalaxyApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_galaxy_api(config: GalaxyConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> GalaxyApi:
    """Create an API handle, attaching the API key to every request when one is configured."""
    headers = {"User-Agent": USER_AGENT}
    if config.api_key:
        headers["x-api-key"] = config.api_key

    client = httpx.AsyncClient(
        base_url=config.galaxy_url,
        headers=headers,
        timeout=config.timeout,
        transport=transport,
    )
    logger.debug(f"Galaxy API handle created for {config.galaxy_url} (authenticated={config.authenticated})")
    return GalaxyApi(client, authenticated=config.authenticated)
